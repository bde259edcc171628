# ========================= input/keymap.py =========================
import json
import pygame
from types import MappingProxyType
from typing import Dict, Mapping

from lattice.location import Location

# 預設配置：三排字母鍵對應到 lattice 上的三列
_ROWS = (
    ("qwertyuiop", +1, -5),
    ("asdfghjkl", 0, -4),
    ("zxcvbnm", -1, -3),
)

DEFAULT_CELL_KEYMAP: Dict[int, Location] = {
    getattr(pygame, f"K_{ch}"): Location(q0 + i, r)
    for letters, r, q0 in _ROWS
    for i, ch in enumerate(letters)
}

PAN_KEYMAP: Dict[int, Location] = {
    pygame.K_LEFT: Location(-1, 0),
    pygame.K_UP: Location(0, +1),
    pygame.K_RIGHT: Location(+1, 0),
    pygame.K_DOWN: Location(0, -1),
}

TOGGLE_KEY: int = pygame.K_k


def pan(mapping: Mapping[int, Location], offset) -> Mapping[int, Location]:
    """Shift every mapped Location by `offset`; the set of keys stays the same."""
    off = Location.wrap(offset)
    return MappingProxyType({k: loc.add(off) for k, loc in mapping.items()})


def keycode_to_name(k: int) -> str:
    try:
        name = pygame.key.name(k)
    except Exception:
        return str(k)
    return name or str(k)


def name_to_keycode(name: str) -> int:
    """把 'q', 'left' 等名稱轉回 pygame 的 keycode。"""
    try:
        return pygame.key.key_code(name)
    except Exception:
        # 允許純數字 keycode
        try:
            return int(name)
        except ValueError:
            raise ValueError(f"Unknown key name: {name}") from None


def serialize_keymap(kmap: Mapping[int, Location]) -> dict:
    """以 key 名稱輸出，便於人看與儲存 JSON。"""
    return {keycode_to_name(k): [loc.q, loc.r] for k, loc in kmap.items()}


def deserialize_keymap(obj: dict) -> Dict[int, Location]:
    """從 名稱 -> [q, r] 的 JSON 還原為 keycode -> Location。"""
    if not isinstance(obj, dict):
        raise ValueError(f"Keymap JSON must be an object, got {type(obj).__name__}")
    out: Dict[int, Location] = {}
    for kname, pair in obj.items():
        out[name_to_keycode(str(kname))] = Location.wrap(pair)
    return out


def load_keymap(path: str) -> Dict[int, Location]:
    with open(path, "r", encoding="utf-8") as f:
        return deserialize_keymap(json.load(f))


def save_keymap(path: str, kmap: Mapping[int, Location]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_keymap(kmap), f, ensure_ascii=False, indent=2)

# ========================= input/interaction.py =========================
"""Pure mouse/keyboard state machine for the honeycomb.

Every transition takes the current InteractionState plus one input event and
returns ``(new_state, effects)``. Effects are the audio-engine calls that must
follow; the active-cell set in the new state and the effects are produced
together, so the two can never drift apart.
"""
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from input.keymap import DEFAULT_CELL_KEYMAP, PAN_KEYMAP, TOGGLE_KEY, pan
from lattice.location import Location
from lattice.presenter import CellPresenter

MOUSE = "mouse"
KEYBOARD = "keyboard"


@dataclass(frozen=True)
class KeyEvent:
    key: int
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False
    repeat: bool = False

    @property
    def has_modifier(self) -> bool:
        return self.shift or self.ctrl or self.alt or self.meta


@dataclass(frozen=True)
class Attack:
    frequency: float


@dataclass(frozen=True)
class Release:
    frequency: float


Effect = Union[Attack, Release]
Transition = Tuple["InteractionState", Tuple[Effect, ...]]


@dataclass(frozen=True)
class InteractionState:
    mode: str = MOUSE
    key_mapping: Mapping[int, Location] = field(default_factory=lambda: dict(DEFAULT_CELL_KEYMAP))
    active_cells: Mapping[str, CellPresenter] = field(default_factory=dict)
    hovered: Optional[Location] = None

    def __post_init__(self):
        if self.mode not in (MOUSE, KEYBOARD):
            raise ValueError(f"Unknown mode: {self.mode!r}")
        # 一律換成唯讀的新副本（copy-on-write）
        object.__setattr__(self, "key_mapping", MappingProxyType(
            {k: Location.wrap(v) for k, v in self.key_mapping.items()}))
        object.__setattr__(self, "active_cells", MappingProxyType(dict(self.active_cells)))
        if self.hovered is not None:
            object.__setattr__(self, "hovered", Location.wrap(self.hovered))


def initial_state(key_mapping: Optional[Mapping[int, Location]] = None) -> InteractionState:
    if key_mapping is None:
        key_mapping = DEFAULT_CELL_KEYMAP
    return InteractionState(MOUSE, key_mapping, {})


# ---------- predicates ----------
def is_enabled(state: InteractionState, cell: CellPresenter) -> bool:
    return state.mode != KEYBOARD or cell.location in state.key_mapping.values()


def is_active(state: InteractionState, cell: CellPresenter) -> bool:
    return cell.name in state.active_cells


def is_hovered(state: InteractionState, cell: CellPresenter) -> bool:
    return state.hovered is not None and cell.location == state.hovered


def z_index(state: InteractionState, cell: CellPresenter) -> int:
    return 1 if is_hovered(state, cell) or is_active(state, cell) else 0


# ---------- helpers ----------
def _attack(state: InteractionState, cell: CellPresenter) -> Transition:
    if is_active(state, cell):
        return state, ()
    active = dict(state.active_cells)
    active[cell.name] = cell
    return replace(state, active_cells=active), (Attack(cell.frequency),)


def _release(state: InteractionState, cell: CellPresenter) -> Transition:
    held = state.active_cells.get(cell.name)
    if held is None:
        return state, ()
    active = dict(state.active_cells)
    del active[cell.name]
    # 用按下時的頻率來放開
    return replace(state, active_cells=active), (Release(held.frequency),)


# ---------- transitions ----------
def key_down(state: InteractionState, event: KeyEvent, lattice,
             pan_keys: Mapping[int, Location] = PAN_KEYMAP) -> Transition:
    if state.mode != KEYBOARD or event.has_modifier or event.repeat:
        return state, ()

    if event.key in state.key_mapping:
        cell = lattice.find_cell_by(state.key_mapping[event.key])
        if cell is not None and is_enabled(state, cell):
            return _attack(state, cell)
        return state, ()

    if event.key in pan_keys:
        return replace(state, key_mapping=pan(state.key_mapping, pan_keys[event.key])), ()

    return state, ()


def key_up(state: InteractionState, event: KeyEvent, lattice,
           toggle_key: int = TOGGLE_KEY) -> Transition:
    if state.mode == KEYBOARD:
        if event.key == toggle_key and event.shift:
            return replace(state, mode=MOUSE), ()
        if event.key in state.key_mapping:
            cell = lattice.find_cell_by(state.key_mapping[event.key])
            if cell is not None and is_enabled(state, cell):
                return _release(state, cell)
        return state, ()

    if event.key == toggle_key:
        return replace(state, mode=KEYBOARD), ()
    return state, ()


def mouse_down(state: InteractionState, cell: CellPresenter) -> Transition:
    if not is_enabled(state, cell):
        return state, ()
    if is_active(state, cell):
        return _release(state, cell)
    return _attack(state, cell)


def outside_pointer_down(state: InteractionState) -> Transition:
    if not state.active_cells:
        return state, ()
    effects = tuple(Release(cell.frequency) for cell in state.active_cells.values())
    return replace(state, active_cells={}), effects


def pointer_move(state: InteractionState, cell: Optional[CellPresenter]) -> Transition:
    """Track the cell under the pointer; None when it is over no cell."""
    hovered = cell.location if cell is not None else None
    if hovered == state.hovered:
        return state, ()
    return replace(state, hovered=hovered), ()

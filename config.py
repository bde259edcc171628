# ========================= config.py =========================
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Optional

from lattice.geometry import DEFAULT_RADIUS, HexGeometry
from lattice.note import EQUAL_SEMITONE, Tempering
from lattice.tuning import TuningScheme, make_group_rule


def parse_ratio(text) -> Fraction:
    """'3/2', '1.5' 或 '81/80' -> Fraction；不接受 <= 0。"""
    try:
        value = Fraction(str(text).strip())
    except (ValueError, ZeroDivisionError):
        raise ValueError(f"Not a ratio: {text!r}") from None
    if value <= 0:
        raise ValueError(f"Ratio must be positive: {text!r}")
    return value


@dataclass
class LatticeConfig:
    window_w: int = 1280
    window_h: int = 800
    fundamental: float = 440.0
    radius: int = DEFAULT_RADIUS

    def geometry(self) -> HexGeometry:
        return HexGeometry(radius=self.radius)


@dataclass
class TuningConfig:
    q_interval: str = "3/2"   # 往右一格
    r_interval: str = "5/4"   # 往右上一格
    period: str = "2"
    semitone: Optional[str] = None   # None = 12-TET 半音
    comma: str = "81/80"
    group_rule: str = "three_colour"  # 見 lattice.tuning.GROUP_RULES

    def tempering(self) -> Tempering:
        semitone = EQUAL_SEMITONE if self.semitone is None else float(parse_ratio(self.semitone))
        return Tempering(semitone=semitone, comma=parse_ratio(self.comma))

    def scheme(self) -> TuningScheme:
        return TuningScheme(
            q_interval=parse_ratio(self.q_interval),
            r_interval=parse_ratio(self.r_interval),
            period=parse_ratio(self.period),
            group_rule=make_group_rule(self.group_rule),
            tempering=self.tempering(),
        )


@dataclass
class InputConfig:
    keymap_path: Optional[str] = None


@dataclass
class AudioConfig:
    sample_rate: int = 44100
    buffer: int = 512
    voices: int = 32
    volume: float = 0.2
    attack_ms: int = 10
    release_ms: int = 120
    loop_seconds: float = 1.0


@dataclass
class AppConfig:
    lattice: LatticeConfig = field(default_factory=LatticeConfig)
    tuning: TuningConfig = field(default_factory=TuningConfig)
    input: InputConfig = field(default_factory=InputConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)

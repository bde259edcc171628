# ========================= lattice/note.py =========================
import math
from dataclasses import dataclass, field, replace
from fractions import Fraction
from typing import Optional, Tuple, Union

from lattice.errors import InvalidNote
from lattice.location import Location

EQUAL_SEMITONE = 2.0 ** (1.0 / 12.0)
SYNTONIC_COMMA = Fraction(81, 80)


def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


@dataclass(frozen=True)
class Tempering:
    """Ratios applied once per unit of semitone / comma offset."""
    semitone: float = EQUAL_SEMITONE
    comma: Fraction = SYNTONIC_COMMA

    def __post_init__(self):
        if not float(self.semitone) > 0 or not float(self.comma) > 0:
            raise InvalidNote(f"Tempering ratios must be positive: {self.semitone!r}, {self.comma!r}")

    def factor(self, semitone_offset: int, comma_offset: int) -> float:
        # 負的 offset 會自然變成除法
        return float(self.semitone) ** semitone_offset * float(self.comma) ** comma_offset


@dataclass(frozen=True)
class Note:
    location: Location
    ratio: Tuple[int, int]
    fundamental: float = 440.0
    group: int = 0
    tone: Union[int, str] = 1
    semitone_offset: int = 0
    comma_offset: int = 0
    tempering: Tempering = field(default_factory=Tempering)

    def __post_init__(self):
        object.__setattr__(self, "location", Location.wrap(self.location))
        try:
            num, den = self.ratio
        except (TypeError, ValueError):
            raise InvalidNote(f"Ratio must be a (numerator, denominator) pair: {self.ratio!r}") from None
        if not (_is_int(num) and _is_int(den)):
            raise InvalidNote(f"Ratio parts must be integers: {self.ratio!r}")
        if den == 0:
            raise InvalidNote("Ratio denominator must not be zero")
        if num <= 0 or den <= 0:
            raise InvalidNote(f"Ratio parts must be positive: {self.ratio!r}")
        object.__setattr__(self, "ratio", (num, den))

        if isinstance(self.fundamental, bool) or not isinstance(self.fundamental, (int, float)):
            raise InvalidNote(f"Fundamental must be a number: {self.fundamental!r}")
        if not self.fundamental > 0 or math.isinf(self.fundamental):
            raise InvalidNote(f"Fundamental must be a positive frequency: {self.fundamental!r}")
        if not _is_int(self.group) or self.group < 0:
            raise InvalidNote(f"Group must be a non-negative integer: {self.group!r}")
        if not (_is_int(self.semitone_offset) and _is_int(self.comma_offset)):
            raise InvalidNote("Tuning offsets must be integers")
        # 偏移量或分數太大時頻率會溢位
        try:
            freq = self.frequency
        except OverflowError:
            raise InvalidNote(f"Frequency out of range for ratio {self.ratio!r} with offsets "
                              f"({self.semitone_offset}, {self.comma_offset})") from None
        if not (freq > 0 and math.isfinite(freq)):
            raise InvalidNote(f"Frequency must be a finite positive number, got {freq!r}")

    @property
    def ratio_numerator(self) -> int:
        return self.ratio[0]

    @property
    def ratio_denominator(self) -> int:
        return self.ratio[1]

    @property
    def ratio_size(self) -> int:
        """Digits in numerator + denominator; the separator is not counted."""
        return len(str(self.ratio[0])) + len(str(self.ratio[1]))

    @property
    def frequency(self) -> float:
        num, den = self.ratio
        return self.fundamental * (num / den) * self.tempering.factor(self.semitone_offset, self.comma_offset)

    @property
    def cents(self) -> float:
        return 1200.0 * math.log2(self.frequency / self.fundamental)

    @property
    def name(self) -> str:
        s, c = self.semitone_offset, self.comma_offset
        semis = "#" * s if s > 0 else "b" * -s
        commas = "+" * c if c > 0 else "-" * -c
        return f"{self.tone}{semis}{commas}"

    def retuned(self, semitone_offset: Optional[int] = None, comma_offset: Optional[int] = None,
                fundamental: Optional[float] = None) -> "Note":
        changes = {}
        if semitone_offset is not None:
            changes["semitone_offset"] = semitone_offset
        if comma_offset is not None:
            changes["comma_offset"] = comma_offset
        if fundamental is not None:
            changes["fundamental"] = fundamental
        return replace(self, **changes)

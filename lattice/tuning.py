# ========================= lattice/tuning.py =========================
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Callable, Union

from lattice.location import Location
from lattice.note import Note, Tempering

LETTERS_BY_FIFTH = "FCGDAEB"  # F=-1, C=0, G=1 ...


def three_colour_group(loc: Location) -> int:
    """Three groups; hex neighbours never share one."""
    return (loc.q - loc.r) % 3


def row_group(loc: Location) -> int:
    """Three groups by row, so each keyboard row gets its own skin."""
    return loc.r % 3


GROUP_RULES = {
    "three_colour": three_colour_group,
    "row": row_group,
}


def make_group_rule(name: str) -> Callable[[Location], int]:
    try:
        return GROUP_RULES[name]
    except KeyError:
        raise ValueError(f"Unknown group rule: {name!r} (choose from {', '.join(GROUP_RULES)})") from None


def five_limit_name(loc: Location) -> str:
    """Spell 3^q * 5^r on the line of fifths with syntonic comma marks.

    A major third (5/4) is a Pythagorean ditone lowered by one comma, so
    each step along r moves four fifths and one comma down.
    """
    idx = loc.q + 4 * loc.r + 1
    letter = LETTERS_BY_FIFTH[idx % 7]
    acc = idx // 7
    accidental = "#" * acc if acc > 0 else "b" * -acc
    commas = -loc.r
    comma_marks = "+" * commas if commas > 0 else "-" * -commas
    return f"{letter}{accidental}{comma_marks}"


def reduce_into_period(ratio: Fraction, period: Fraction) -> Fraction:
    while ratio >= period:
        ratio /= period
    while ratio < 1:
        ratio *= period
    return ratio


@dataclass(frozen=True)
class TuningScheme:
    """How a Location turns into a Note: which intervals the axes stand for,
    which group (skin) a cell gets and how its tone is labelled."""
    q_interval: Fraction = Fraction(3, 2)
    r_interval: Fraction = Fraction(5, 4)
    period: Fraction = Fraction(2)
    group_rule: Callable[[Location], int] = three_colour_group
    namer: Callable[[Location], Union[int, str]] = five_limit_name
    tempering: Tempering = field(default_factory=Tempering)

    def __post_init__(self):
        for name in ("q_interval", "r_interval", "period"):
            object.__setattr__(self, name, Fraction(getattr(self, name)))
        if self.period <= 1:
            raise ValueError(f"Period must be greater than 1, got {self.period}")
        if self.q_interval <= 0 or self.r_interval <= 0:
            raise ValueError("Axis intervals must be positive")

    def ratio_at(self, loc: Location) -> Fraction:
        raw = self.q_interval ** loc.q * self.r_interval ** loc.r
        return reduce_into_period(raw, self.period)

    def note_at(self, loc: Location, fundamental: float) -> Note:
        loc = Location.wrap(loc)
        ratio = self.ratio_at(loc)
        return Note(
            location=loc,
            ratio=(ratio.numerator, ratio.denominator),
            fundamental=fundamental,
            group=self.group_rule(loc),
            tone=self.namer(loc),
            tempering=self.tempering,
        )

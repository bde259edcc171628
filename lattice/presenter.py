# ========================= lattice/presenter.py =========================
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple

from lattice.geometry import HexGeometry, Point, Viewport
from lattice.location import Location
from lattice.note import Note

_CENTS = Decimal("0.01")


def format_frequency(freq: float) -> str:
    """Two fixed decimals, half away from zero on the float's shortest repr (2.675 -> '2.68')."""
    return str(Decimal(repr(float(freq))).quantize(_CENTS, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class CellPresenter:
    """Everything the renderer shows for one cell, derived from a Note and the viewport."""
    note: Note
    viewport: Viewport = Viewport(0, 0)
    geometry: HexGeometry = field(default_factory=HexGeometry)

    def __post_init__(self):
        object.__setattr__(self, "viewport", Viewport(*self.viewport))

    @property
    def location(self) -> Location:
        return self.note.location

    @property
    def position(self) -> Point:
        return self.geometry.position(self.note.location, self.viewport)

    @property
    def width(self) -> int:
        return self.geometry.cell_width

    @property
    def height(self) -> int:
        return self.geometry.cell_height

    @property
    def group(self) -> int:
        return self.note.group

    @property
    def name(self) -> str:
        return self.note.name

    @property
    def frequency(self) -> float:
        return self.note.frequency

    @property
    def ratio_numerator(self) -> int:
        return self.note.ratio_numerator

    @property
    def ratio_denominator(self) -> int:
        return self.note.ratio_denominator

    @property
    def ratio_size(self) -> int:
        return self.note.ratio_size

    @property
    def ratio_style(self) -> Tuple[str, ...]:
        # 長分數用窄字型，更長的再縮小
        styles = []
        if self.ratio_size >= 6:
            styles.append("thin")
        if self.ratio_size >= 7:
            styles.append("smaller")
        return tuple(styles)

    @property
    def formatted_frequency(self) -> str:
        return format_frequency(self.note.frequency)

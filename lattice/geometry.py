# ========================= lattice/geometry.py =========================
import math
from dataclasses import dataclass
from typing import NamedTuple

from lattice.location import Location

DEFAULT_RADIUS = 61


class Point(NamedTuple):
    x: float
    y: float


class Viewport(NamedTuple):
    width: int
    height: int


@dataclass(frozen=True)
class HexGeometry:
    """Pointy-top axial hex <-> pixel projection.

    Positions are the top-left corner of each cell's bounding box, with the
    lattice origin centred in the viewport. r grows upward on screen, so a
    row of keys r=+1 sits above r=0, shifted half a cell to the right.
    """
    radius: int = DEFAULT_RADIUS

    @property
    def cell_width(self) -> int:
        return int(round(math.sqrt(3) * self.radius))

    @property
    def cell_height(self) -> int:
        return 2 * self.radius

    @property
    def row_step(self) -> float:
        return 0.75 * self.cell_height

    def centre(self, loc: Location, viewport: Viewport) -> Point:
        w = self.cell_width
        cx = viewport.width / 2 + w * (loc.q + loc.r / 2)
        cy = viewport.height / 2 - self.row_step * loc.r
        return Point(cx, cy)

    def position(self, loc: Location, viewport: Viewport) -> Point:
        c = self.centre(loc, viewport)
        return Point(c.x - self.cell_width / 2, c.y - self.cell_height / 2)

    def locate(self, x: float, y: float, viewport: Viewport) -> Location:
        """Inverse of centre(): the Location whose hexagon contains (x, y)."""
        fr = (viewport.height / 2 - y) / self.row_step
        fq = (x - viewport.width / 2) / self.cell_width - fr / 2
        # cube rounding
        fs = -fq - fr
        q, r, s = round(fq), round(fr), round(fs)
        dq, dr, ds = abs(q - fq), abs(r - fr), abs(s - fs)
        if dq > dr and dq > ds:
            q = -r - s
        elif dr > ds:
            r = -q - s
        return Location(int(q), int(r))

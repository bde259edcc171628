# ========================= lattice/location.py =========================
from dataclasses import dataclass
from typing import Tuple

from lattice.errors import InvalidCoordinate


def _is_int(v) -> bool:
    # bool 是 int 的子類別，座標不接受 True/False
    return isinstance(v, int) and not isinstance(v, bool)


@dataclass(frozen=True)
class Location:
    """Axial hex coordinate. q runs to the right, r runs up-right."""
    q: int
    r: int

    def __post_init__(self):
        if not (_is_int(self.q) and _is_int(self.r)):
            raise InvalidCoordinate(f"Location needs two integers, got ({self.q!r}, {self.r!r})")

    @classmethod
    def wrap(cls, value) -> "Location":
        if isinstance(value, Location):
            return value
        if isinstance(value, (str, bytes)):
            raise InvalidCoordinate(f"Not a coordinate pair: {value!r}")
        try:
            items = tuple(value)
        except TypeError:
            raise InvalidCoordinate(f"Not a coordinate pair: {value!r}") from None
        if len(items) != 2:
            raise InvalidCoordinate(f"Expected exactly 2 integers, got {len(items)}: {value!r}")
        return cls(items[0], items[1])

    def add(self, other) -> "Location":
        o = Location.wrap(other)
        return Location(self.q + o.q, self.r + o.r)

    def equals(self, other) -> bool:
        return isinstance(other, Location) and self.q == other.q and self.r == other.r

    def neighbours(self) -> Tuple["Location", ...]:
        return tuple(self.add(d) for d in HEX_DIRECTIONS)

    def __iter__(self):
        yield self.q
        yield self.r

    def __repr__(self) -> str:
        return f"Location({self.q}, {self.r})"


ORIGIN = Location(0, 0)

# 六個相鄰方向（逆時針，從右邊開始）
HEX_DIRECTIONS: Tuple[Location, ...] = (
    Location(+1, 0), Location(0, +1), Location(-1, +1),
    Location(-1, 0), Location(0, -1), Location(+1, -1),
)

# ========================= lattice/lattice.py =========================
import functools
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

from lattice.geometry import HexGeometry, Viewport
from lattice.location import Location
from lattice.presenter import CellPresenter
from lattice.tuning import TuningScheme


@dataclass(frozen=True)
class CellLabelGroup:
    number: int
    cell_labels: Tuple[CellPresenter, ...]


@dataclass(frozen=True)
class Lattice:
    width: int
    height: int
    cell_label_groups: Tuple[CellLabelGroup, ...]
    geometry: HexGeometry = field(default_factory=HexGeometry)
    _index: Dict[Location, CellPresenter] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        index: Dict[Location, CellPresenter] = {}
        for g in self.cell_label_groups:
            for cell in g.cell_labels:
                if cell.location in index:
                    raise ValueError(f"Duplicate cell at {cell.location!r}")
                index[cell.location] = cell
        object.__setattr__(self, "_index", index)

    @classmethod
    def generate(cls, viewport, fundamental: float, scheme: Optional[TuningScheme] = None,
                 geometry: Optional[HexGeometry] = None) -> "Lattice":
        viewport = Viewport(*viewport)
        scheme = scheme or TuningScheme()
        geometry = geometry or HexGeometry()

        by_group: Dict[int, List[CellPresenter]] = {}
        for loc in visible_locations(viewport, geometry):
            note = scheme.note_at(loc, fundamental)
            by_group.setdefault(note.group, []).append(CellPresenter(note, viewport, geometry))

        groups = tuple(CellLabelGroup(n, tuple(by_group[n])) for n in sorted(by_group))
        lattice = cls(viewport.width, viewport.height, groups, geometry)
        logging.debug("Lattice generated: %dx%d, fundamental=%.2f, cells=%d, groups=%d",
                      viewport.width, viewport.height, fundamental, len(lattice), len(groups))
        return lattice

    def __len__(self) -> int:
        return len(self._index)

    def cells(self) -> Iterator[CellPresenter]:
        for g in self.cell_label_groups:
            yield from g.cell_labels

    @property
    def locations(self) -> FrozenSet[Location]:
        return frozenset(self._index)

    def find_cell_by(self, location) -> Optional[CellPresenter]:
        """Presenter at `location`, or None when the lattice has no such cell."""
        return self._index.get(Location.wrap(location))

    def cell_at(self, x: float, y: float) -> Optional[CellPresenter]:
        loc = self.geometry.locate(x, y, Viewport(self.width, self.height))
        return self.find_cell_by(loc)


def visible_locations(viewport: Viewport, geometry: HexGeometry) -> Iterator[Location]:
    """Every Location whose cell box overlaps the viewport; rows top to bottom, left to right."""
    w, h, step = geometry.cell_width, geometry.cell_height, geometry.row_step
    # y = H/2 - step*r - h/2，需落在 (-h, H)
    r_max = math.floor((viewport.height / 2 + h / 2) / step)
    r_min = math.ceil((-viewport.height / 2 - h / 2) / step)
    for r in range(r_max, r_min - 1, -1):
        top = geometry.position(Location(0, r), viewport).y
        if not (-h < top < viewport.height):
            continue
        # x = W/2 + w*(q + r/2) - w/2，需落在 (-w, W)
        q_min = math.ceil((-viewport.width / 2 - w / 2) / w - r / 2)
        q_max = math.floor((viewport.width / 2 + w / 2) / w - r / 2)
        for q in range(q_min, q_max + 1):
            loc = Location(q, r)
            left = geometry.position(loc, viewport).x
            if -w < left < viewport.width:
                yield loc


@functools.lru_cache(maxsize=8)
def build_lattice(width: int, height: int, fundamental: float,
                  scheme: Optional[TuningScheme] = None,
                  geometry: Optional[HexGeometry] = None) -> Lattice:
    """Memoised Lattice.generate; identical inputs give the same (value-equal) lattice."""
    return Lattice.generate(Viewport(width, height), fundamental, scheme, geometry)

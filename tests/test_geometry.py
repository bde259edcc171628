import pytest

from lattice.geometry import HexGeometry, Viewport
from lattice.location import HEX_DIRECTIONS, Location


def test_cell_box_from_radius():
    g = HexGeometry(radius=61)
    assert (g.cell_width, g.cell_height) == (106, 122)


def test_known_position():
    assert HexGeometry().position(Location(1, 2), Viewport(1000, 1000)) == (659, 256)


def test_origin_is_centred():
    g = HexGeometry()
    c = g.centre(Location(0, 0), Viewport(640, 480))
    assert c == (320, 240)


def test_upper_row_is_above():
    g = HexGeometry()
    vp = Viewport(1000, 1000)
    assert g.centre(Location(0, 1), vp).y < g.centre(Location(0, 0), vp).y


@pytest.mark.parametrize("loc", [Location(q, r) for q in range(-4, 5) for r in range(-3, 4)])
def test_locate_inverts_centre(loc):
    g = HexGeometry()
    vp = Viewport(1000, 1000)
    c = g.centre(loc, vp)
    assert g.locate(c.x, c.y, vp) == loc
    assert g.locate(c.x + 20, c.y - 20, vp) == loc


def test_locate_near_neighbour_edge():
    g = HexGeometry()
    vp = Viewport(1000, 1000)
    origin = g.centre(Location(0, 0), vp)
    for d in HEX_DIRECTIONS:
        other = g.centre(d, vp)
        # 70% of the way towards the neighbour lands on the neighbour
        x = origin.x + 0.7 * (other.x - origin.x)
        y = origin.y + 0.7 * (other.y - origin.y)
        assert g.locate(x, y, vp) == d

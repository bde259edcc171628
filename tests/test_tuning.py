from fractions import Fraction

import pytest

from lattice.location import HEX_DIRECTIONS, Location
from lattice.geometry import Viewport
from lattice.lattice import Lattice
from lattice.tuning import (GROUP_RULES, TuningScheme, five_limit_name, make_group_rule, reduce_into_period,
                            row_group, three_colour_group)


@pytest.mark.parametrize("loc,ratio", [
    ((0, 0), (1, 1)), ((1, 0), (3, 2)), ((0, 1), (5, 4)), ((-1, 0), (4, 3)),
    ((2, 0), (9, 8)), ((1, 1), (15, 8)), ((0, -1), (8, 5)), ((-1, 1), (5, 3)),
])
def test_five_limit_ratios(loc, ratio):
    note = TuningScheme().note_at(Location.wrap(loc), 440.0)
    assert note.ratio == ratio


@pytest.mark.parametrize("loc,name", [
    ((0, 0), "C"), ((1, 0), "G"), ((-1, 0), "F"), ((0, 1), "E-"), ((1, 1), "B-"),
    ((0, -1), "Ab+"), ((6, 0), "F#"), ((-2, 0), "Bb"), ((2, 1), "F#-"),
])
def test_five_limit_name(loc, name):
    assert five_limit_name(Location.wrap(loc)) == name


def test_names_unique_over_region():
    names = {five_limit_name(Location(q, r)) for q in range(-12, 13) for r in range(-6, 7)}
    assert len(names) == 25 * 13


def test_three_colour_neighbours_differ():
    for q in range(-5, 6):
        for r in range(-5, 6):
            loc = Location(q, r)
            assert all(three_colour_group(n) != three_colour_group(loc) for n in loc.neighbours())
    assert {three_colour_group(d) for d in HEX_DIRECTIONS} <= {0, 1, 2}


def test_reduce_into_period():
    assert reduce_into_period(Fraction(81, 16), Fraction(2)) == Fraction(81, 64)
    assert reduce_into_period(Fraction(1, 3), Fraction(2)) == Fraction(4, 3)


def test_custom_group_rule_and_intervals():
    scheme = TuningScheme(q_interval=Fraction(7, 4), r_interval=Fraction(3, 2),
                          group_rule=lambda loc: 4, namer=lambda loc: f"{loc.q},{loc.r}")
    note = scheme.note_at(Location(1, 1), 100.0)
    assert note.ratio == (21, 16)
    assert note.group == 4
    assert note.name == "1,1"


def test_scheme_is_hashable_and_value_equal():
    assert TuningScheme() == TuningScheme()
    assert hash(TuningScheme()) == hash(TuningScheme())


def test_period_must_exceed_one():
    with pytest.raises(ValueError):
        TuningScheme(period=Fraction(1))


def test_make_group_rule():
    assert make_group_rule("three_colour") is three_colour_group
    assert make_group_rule("row") is row_group
    assert set(GROUP_RULES) == {"three_colour", "row"}


def test_make_group_rule_unknown():
    with pytest.raises(ValueError):
        make_group_rule("hexagram")


def test_row_group_regroups_lattice():
    vp = Viewport(800, 600)
    default = Lattice.generate(vp, 440.0)
    by_row = Lattice.generate(vp, 440.0, TuningScheme(group_rule=row_group))
    for g in by_row.cell_label_groups:
        assert all(cell.location.r % 3 == g.number for cell in g.cell_labels)
    assert by_row.find_cell_by([1, 0]).group == 0
    assert default.find_cell_by([1, 0]).group == 1
    assert by_row.locations == default.locations

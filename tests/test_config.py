from fractions import Fraction

import pytest

from config import AppConfig, TuningConfig, parse_ratio
from lattice.note import EQUAL_SEMITONE
from lattice.tuning import TuningScheme, row_group, three_colour_group
from main import build_parser, config_from_args


def test_parse_ratio():
    assert parse_ratio("3/2") == Fraction(3, 2)
    assert parse_ratio("1.25") == Fraction(5, 4)
    assert parse_ratio(" 81/80 ") == Fraction(81, 80)


@pytest.mark.parametrize("bad", ["", "abc", "1/0", "-3/2", "0"])
def test_parse_ratio_rejects(bad):
    with pytest.raises(ValueError):
        parse_ratio(bad)


def test_default_tuning_config_matches_default_scheme():
    assert TuningConfig().scheme() == TuningScheme()
    assert TuningConfig().tempering().semitone == EQUAL_SEMITONE


def test_just_semitone():
    t = TuningConfig(semitone="25/24").tempering()
    assert t.semitone == pytest.approx(25 / 24)


def test_configs_do_not_share_defaults():
    a, b = AppConfig(), AppConfig()
    a.lattice.window_w = 10
    assert b.lattice.window_w != 10


def test_cli_builds_config():
    args = build_parser().parse_args(["--width", "900", "--fundamental", "261.63",
                                      "--semitone", "16/15", "--keymap", "k.json"])
    cfg = config_from_args(args)
    assert cfg.lattice.window_w == 900
    assert cfg.lattice.fundamental == 261.63
    assert cfg.tuning.tempering().semitone == pytest.approx(16 / 15)
    assert cfg.input.keymap_path == "k.json"


def test_cli_rejects_non_positive_fundamental():
    args = build_parser().parse_args(["--fundamental", "0"])
    with pytest.raises(SystemExit):
        config_from_args(args)


def test_group_rule_from_config():
    assert TuningConfig(group_rule="row").scheme().group_rule is row_group
    assert TuningConfig().scheme().group_rule is three_colour_group


def test_unknown_group_rule_in_config():
    with pytest.raises(ValueError):
        TuningConfig(group_rule="nope").scheme()


def test_cli_group_rule():
    cfg = config_from_args(build_parser().parse_args(["--group-rule", "row"]))
    assert cfg.tuning.group_rule == "row"
    assert cfg.tuning.scheme().group_rule is row_group


def test_cli_rejects_unknown_group_rule():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--group-rule", "nope"])

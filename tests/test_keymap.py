import json

import pygame
import pytest

from input.keymap import (DEFAULT_CELL_KEYMAP, PAN_KEYMAP, TOGGLE_KEY, deserialize_keymap,
                          load_keymap, pan, save_keymap)
from lattice.errors import InvalidCoordinate
from lattice.location import Location


def test_default_layout_rows():
    assert DEFAULT_CELL_KEYMAP[pygame.K_q] == Location(-5, 1)
    assert DEFAULT_CELL_KEYMAP[pygame.K_p] == Location(4, 1)
    assert DEFAULT_CELL_KEYMAP[pygame.K_a] == Location(-4, 0)
    assert DEFAULT_CELL_KEYMAP[pygame.K_g] == Location(0, 0)
    assert DEFAULT_CELL_KEYMAP[pygame.K_l] == Location(4, 0)
    assert DEFAULT_CELL_KEYMAP[pygame.K_z] == Location(-3, -1)
    assert DEFAULT_CELL_KEYMAP[pygame.K_m] == Location(3, -1)
    assert len(DEFAULT_CELL_KEYMAP) == 26
    assert len(set(DEFAULT_CELL_KEYMAP.values())) == 26


def test_pan_keys_and_toggle():
    assert PAN_KEYMAP[pygame.K_LEFT] == Location(-1, 0)
    assert PAN_KEYMAP[pygame.K_UP] == Location(0, 1)
    assert TOGGLE_KEY == pygame.K_k


def test_pan_returns_new_mapping():
    panned = pan(DEFAULT_CELL_KEYMAP, (2, -1))
    assert panned is not DEFAULT_CELL_KEYMAP
    assert panned[pygame.K_g] == Location(2, -1)
    assert DEFAULT_CELL_KEYMAP[pygame.K_g] == Location(0, 0)
    assert set(panned) == set(DEFAULT_CELL_KEYMAP)


def test_deserialize_numeric_key_codes():
    kmap = deserialize_keymap({str(pygame.K_SPACE): [1, -2]})
    assert kmap == {pygame.K_SPACE: Location(1, -2)}


def test_deserialize_rejects_bad_location():
    with pytest.raises(InvalidCoordinate):
        deserialize_keymap({str(pygame.K_SPACE): [1, 2, 3]})


def test_deserialize_rejects_non_object():
    with pytest.raises(ValueError):
        deserialize_keymap([["q", [0, 0]]])


def test_save_and_load_keymap(tmp_path):
    path = tmp_path / "keys.json"
    save_keymap(str(path), DEFAULT_CELL_KEYMAP)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert len(data) == 26
    assert all(isinstance(v, list) and len(v) == 2 for v in data.values())
    assert load_keymap(str(path)) == DEFAULT_CELL_KEYMAP

import os
import tempfile

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("HONEYCOMB_LOG_DIR", tempfile.mkdtemp(prefix="honeycomb-logs-"))

import pygame
import pytest

from lattice.geometry import Viewport
from lattice.lattice import Lattice

# key.name / key.key_code 需要先 init video
pygame.display.init()


class RecordingSynth:
    def __init__(self):
        self.calls = []

    def trigger_attack(self, freq):
        self.calls.append(("attack", freq))

    def trigger_release(self, freq):
        self.calls.append(("release", freq))


@pytest.fixture
def synth():
    return RecordingSynth()


@pytest.fixture
def lattice():
    return Lattice.generate(Viewport(1000, 1000), 440.0)

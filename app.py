# app.py
import logging
import pygame

from audio.synth import Synth
from config import AppConfig
from input.honeycomb import Honeycomb
from input.interaction import KeyEvent
from input.keymap import DEFAULT_CELL_KEYMAP, load_keymap
from lattice.lattice import Lattice, build_lattice
from render.renderer import Renderer


def key_event_from_pygame(e, repeat: bool = False) -> KeyEvent:
    mods = getattr(e, "mod", 0)
    return KeyEvent(
        key=e.key,
        shift=bool(mods & pygame.KMOD_SHIFT),
        ctrl=bool(mods & pygame.KMOD_CTRL),
        alt=bool(mods & pygame.KMOD_ALT),
        meta=bool(mods & (pygame.KMOD_META | pygame.KMOD_GUI)),
        repeat=repeat,
    )


class App:
    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self.scheme = cfg.tuning.scheme()
        self.geometry = cfg.lattice.geometry()
        self.renderer = Renderer(cfg.lattice)
        self.synth = Synth(cfg.audio)

        keymap = DEFAULT_CELL_KEYMAP
        if cfg.input.keymap_path:
            keymap = load_keymap(cfg.input.keymap_path)
            logging.info("Keymap loaded from %s (%d keys)", cfg.input.keymap_path, len(keymap))

        self.honeycomb = Honeycomb(self._build_lattice(), self.synth, key_mapping=keymap)
        # pygame 預設不重複送 KEYDOWN；自己記住按住的鍵來標記 repeat
        self._held_keys: set[int] = set()

    def _build_lattice(self) -> Lattice:
        c = self.cfg.lattice
        return build_lattice(c.window_w, c.window_h, float(c.fundamental), self.scheme, self.geometry)

    def _on_resize(self, w: int, h: int):
        self.renderer.resize(w, h)
        self.honeycomb.set_lattice(self._build_lattice())

    def _on_mouse_down(self, pos):
        # 狀態列不在任何格子上，點它等於點外面
        if self.renderer.in_status_bar(pos):
            self.honeycomb.handle_outside_pointer_down()
            return
        cell = self.honeycomb.lattice.cell_at(*pos)
        if cell is not None:
            self.honeycomb.handle_mouse_down(cell)
        else:
            self.honeycomb.handle_outside_pointer_down()

    def _on_mouse_motion(self, pos):
        cell = None if self.renderer.in_status_bar(pos) else self.honeycomb.lattice.cell_at(*pos)
        self.honeycomb.handle_pointer_move(cell)

    def _shutdown(self):
        self.honeycomb.release_all()
        self.synth.close()

    # ---------- Main loop ----------
    def run(self):
        running = True
        try:
            while running:
                self.renderer.tick(60)
                for e in pygame.event.get():
                    if e.type == pygame.QUIT:
                        running = False
                    elif e.type == pygame.VIDEORESIZE:
                        self._on_resize(e.w, e.h)
                    elif e.type == pygame.KEYDOWN:
                        if e.key == pygame.K_ESCAPE:
                            self.honeycomb.release_all(); continue
                        repeat = e.key in self._held_keys
                        self._held_keys.add(e.key)
                        self.honeycomb.handle_key_down(key_event_from_pygame(e, repeat))
                    elif e.type == pygame.KEYUP:
                        self._held_keys.discard(e.key)
                        self.honeycomb.handle_key_up(key_event_from_pygame(e))
                    elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                        self._on_mouse_down(e.pos)
                    elif e.type == pygame.MOUSEMOTION:
                        self._on_mouse_motion(e.pos)

                if not running: break

                self.renderer.begin_frame()
                self.renderer.draw_lattice(self.honeycomb.lattice, self.honeycomb)
                self.renderer.draw_status_bar(self.honeycomb.mode, float(self.cfg.lattice.fundamental),
                                              len(self.honeycomb.active_cells))
                self.renderer.end_frame()
        finally:
            self._shutdown()
            pygame.quit()

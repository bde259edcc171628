# render/renderer.py
import math, pygame, logging
from typing import Dict, Tuple

from config import LatticeConfig
from lattice.lattice import Lattice
from lattice.presenter import CellPresenter

STATUS_H = 32

# group -> (fill, border)；外觀由呼叫端決定，core 只給 group 編號
GROUP_COLOURS: Dict[int, Tuple[Tuple[int, int, int], Tuple[int, int, int]]] = {
    0: ((52, 84, 122), (96, 140, 190)),
    1: ((44, 104, 88), (90, 170, 146)),
    2: ((112, 70, 96), (178, 120, 156)),
}
DISABLED_COLOURS = ((34, 34, 38), (54, 54, 60))
ACTIVE_FILL = (255, 214, 120)
HOVER_BORDER = (240, 240, 250)


class Renderer:
    def __init__(self, cfg: LatticeConfig, group_colours=None):
        pygame.init()
        self.cfg = cfg
        self.group_colours = dict(group_colours or GROUP_COLOURS)
        self.screen = pygame.display.set_mode((cfg.window_w, cfg.window_h), pygame.RESIZABLE)
        pygame.display.set_caption("just honeycomb")
        self.font = pygame.font.SysFont("consolas", 18, bold=True)
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.font_thin = pygame.font.SysFont("consolas", 12)
        self.font_tiny = pygame.font.SysFont("consolas", 10)
        self.clock = pygame.time.Clock()
        self._hex_cache: Dict[Tuple[int, int], list] = {}

    def resize(self, w: int, h: int):
        self.cfg.window_w, self.cfg.window_h = w, h
        self.screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)

    def tick(self, fps=60) -> float:
        return self.clock.tick(fps) / 1000.0

    def begin_frame(self):
        self.screen.fill((12, 12, 14))

    def end_frame(self):
        pygame.display.flip()

    # ------- cells -------
    def _hex_points(self, w: int, h: int):
        pts = self._hex_cache.get((w, h))
        if pts is None:
            # pointy-top：頂點從正上方開始順時針
            pts = []
            for i in range(6):
                a = math.radians(-90 + 60 * i)
                pts.append((w / 2 + math.cos(a) * w / math.sqrt(3), h / 2 + math.sin(a) * h / 2))
            self._hex_cache[(w, h)] = pts
        return pts

    def draw_lattice(self, lattice: Lattice, honeycomb):
        cells = sorted(lattice.cells(), key=honeycomb.z_index)
        for cell in cells:
            try:
                self.draw_cell(cell, honeycomb.is_enabled(cell), honeycomb.is_active(cell),
                               hovered=honeycomb.is_hovered(cell))
            except Exception:
                logging.error("單一格子繪製失敗，跳過：%r", cell.location, exc_info=True)

    def draw_cell(self, cell: CellPresenter, enabled: bool, active: bool, hovered: bool = False):
        x, y = cell.position
        pts = [(x + px, y + py) for px, py in self._hex_points(cell.width, cell.height)]
        if enabled:
            fill, border = self.group_colours.get(cell.group, DISABLED_COLOURS)
        else:
            fill, border = DISABLED_COLOURS
        if active:
            fill = ACTIVE_FILL
        if hovered and enabled:
            border = HOVER_BORDER
        pygame.draw.polygon(self.screen, fill, pts)
        pygame.draw.polygon(self.screen, border, pts, 2)

        ink = (20, 20, 24) if active else ((230, 230, 236) if enabled else (90, 90, 98))
        cx = x + cell.width / 2
        cy = y + cell.height / 2
        self._blit_centered(self.font, cell.name, ink, cx, cy - 22)
        self._blit_centered(self._ratio_font(cell), f"{cell.ratio_numerator}|{cell.ratio_denominator}",
                            ink, cx, cy)
        self._blit_centered(self.font_tiny, cell.formatted_frequency, ink, cx, cy + 20)

    def _ratio_font(self, cell: CellPresenter):
        style = cell.ratio_style
        if "smaller" in style:
            return self.font_tiny
        if "thin" in style:
            return self.font_thin
        return self.font_small

    def _blit_centered(self, font, text: str, colour, cx: float, cy: float):
        surf = font.render(text, True, colour)
        rect = surf.get_rect(center=(int(cx), int(cy)))
        self.screen.blit(surf, rect)

    # ------- status -------
    def draw_status_bar(self, mode: str, fundamental: float, active_count: int):
        w = self.cfg.window_w
        pygame.draw.rect(self.screen, (24, 24, 28), (0, 0, w, STATUS_H))
        pygame.draw.line(self.screen, (60, 60, 66), (0, STATUS_H), (w, STATUS_H), 1)
        hint = "K: keyboard mode" if mode == "mouse" else "Shift+K: mouse mode  |  arrows: pan"
        text = f"MODE: {mode.upper()}  |  f0: {fundamental:.2f} Hz  |  ACTIVE: {active_count}  |  {hint}"
        surf = self.font_small.render(text, True, (200, 200, 210))
        self.screen.blit(surf, (10, (STATUS_H - surf.get_height()) // 2))

    def in_status_bar(self, pos: Tuple[int, int]) -> bool:
        return pos[1] <= STATUS_H

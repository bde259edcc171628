# ========================= input/honeycomb.py =========================
import logging
from typing import Iterable, Mapping, Optional

from input import interaction
from input.interaction import Attack, Effect, InteractionState, KeyEvent, Release
from input.keymap import PAN_KEYMAP, TOGGLE_KEY
from lattice.lattice import Lattice
from lattice.location import Location
from lattice.presenter import CellPresenter


class Honeycomb:
    """
    把輸入事件接到狀態機，再把產生的 attack/release 丟給音源：
    - 狀態先提交，再送出音源呼叫（fire-and-forget）
    - 音源出錯只記 log，不會回滾或弄亂 active cells
    The synth only needs trigger_attack(freq) / trigger_release(freq).
    """
    def __init__(self, lattice: Lattice, synth, key_mapping: Optional[Mapping[int, Location]] = None,
                 toggle_key: int = TOGGLE_KEY, pan_keys: Mapping[int, Location] = PAN_KEYMAP):
        self.lattice = lattice
        self.synth = synth
        self.toggle_key = toggle_key
        self.pan_keys = dict(pan_keys)
        self.state: InteractionState = interaction.initial_state(key_mapping)

    # ---------- 讀取 ----------
    @property
    def mode(self) -> str:
        return self.state.mode

    @property
    def active_cells(self) -> Mapping[str, CellPresenter]:
        return self.state.active_cells

    def is_enabled(self, cell: CellPresenter) -> bool:
        return interaction.is_enabled(self.state, cell)

    def is_active(self, cell: CellPresenter) -> bool:
        return interaction.is_active(self.state, cell)

    def is_hovered(self, cell: CellPresenter) -> bool:
        return interaction.is_hovered(self.state, cell)

    def z_index(self, cell: CellPresenter) -> int:
        return interaction.z_index(self.state, cell)

    # ---------- 事件入口 ----------
    def handle_key_down(self, event: KeyEvent):
        self._apply(interaction.key_down(self.state, event, self.lattice, self.pan_keys))

    def handle_key_up(self, event: KeyEvent):
        self._apply(interaction.key_up(self.state, event, self.lattice, self.toggle_key))

    def handle_mouse_down(self, cell: CellPresenter):
        self._apply(interaction.mouse_down(self.state, cell))

    def handle_outside_pointer_down(self):
        self._apply(interaction.outside_pointer_down(self.state))

    def handle_pointer_move(self, cell: Optional[CellPresenter]):
        self._apply(interaction.pointer_move(self.state, cell))

    def release_all(self):
        self.handle_outside_pointer_down()

    def set_lattice(self, lattice: Lattice):
        # 已經在響的音保持原本頻率，直到被放開
        self.lattice = lattice

    # ---------- 內部 ----------
    def _apply(self, transition):
        new_state, effects = transition
        if new_state.mode != self.state.mode:
            logging.debug("Honeycomb mode: %s -> %s", self.state.mode, new_state.mode)
        self.state = new_state
        self._dispatch(effects)

    def _dispatch(self, effects: Iterable[Effect]):
        for fx in effects:
            try:
                if isinstance(fx, Attack):
                    self.synth.trigger_attack(fx.frequency)
                elif isinstance(fx, Release):
                    self.synth.trigger_release(fx.frequency)
            except Exception:
                logging.exception("音源呼叫失敗：%r", fx)

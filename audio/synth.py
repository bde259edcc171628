# audio/synth.py
import logging
import numpy as np
import pygame

from config import AudioConfig


class Synth:
    """
    pygame.mixer 正弦波音源 + 簡易多語音分配：
    - trigger_attack(freq) 在空閒 channel 上循環播放該頻率
    - trigger_release(freq) 淡出該頻率最後一發；沒有在響就忽略
    - release_all() / close() 收尾
    """
    def __init__(self, cfg: AudioConfig):
        self.cfg = cfg
        self.enabled = False
        self._sounds = {}            # freq key -> pygame.mixer.Sound
        self._voices_by_freq = {}    # freq key -> [Channel, ...]
        self._n_channels = 2

        try:
            pygame.mixer.pre_init(cfg.sample_rate, -16, 2, cfg.buffer)
            pygame.mixer.init()
            init = pygame.mixer.get_init()
            if init is None:
                raise RuntimeError("mixer did not initialise")
            self.sample_rate, _, self._n_channels = init
            pygame.mixer.set_num_channels(cfg.voices)
            self.enabled = True
            logging.info("[Synth] mixer ready: %d Hz, %d ch, %d voices",
                         self.sample_rate, self._n_channels, cfg.voices)
        except Exception as e:
            logging.warning("[Synth] mixer init failed, running silent: %s", e)

    @staticmethod
    def _key(freq: float) -> float:
        return round(float(freq), 6)

    def _make_sound(self, freq: float):
        sr = self.sample_rate
        # 取整數個週期，循環播放時不會有爆音
        cycles = max(1, int(round(freq * self.cfg.loop_seconds)))
        n = max(1, int(round(cycles * sr / freq)))
        t = np.arange(n, dtype=np.float64) / n
        wave = np.sin(2.0 * np.pi * cycles * t) * self.cfg.volume
        mono = (np.clip(wave, -1.0, 1.0) * 32767).astype(np.int16)
        if self._n_channels == 1:
            buf = mono
        else:
            buf = np.ascontiguousarray(np.repeat(mono[:, None], self._n_channels, axis=1))
        return pygame.sndarray.make_sound(buf)

    def _sound_for(self, freq: float):
        k = self._key(freq)
        snd = self._sounds.get(k)
        if snd is None:
            snd = self._make_sound(freq)
            self._sounds[k] = snd
        return snd

    def trigger_attack(self, freq: float):
        if not self.enabled:
            return
        ch = self._sound_for(freq).play(loops=-1, fade_ms=self.cfg.attack_ms)
        if ch is None:
            logging.warning("[Synth] no free voice for %.2f Hz", freq)
            return
        self._voices_by_freq.setdefault(self._key(freq), []).append(ch)

    def trigger_release(self, freq: float):
        if not self.enabled:
            return
        k = self._key(freq)
        stack = self._voices_by_freq.get(k)
        if not stack:
            return
        stack.pop().fadeout(self.cfg.release_ms)
        if not stack:
            self._voices_by_freq.pop(k, None)

    def release_all(self):
        for stack in self._voices_by_freq.values():
            for ch in stack:
                ch.fadeout(self.cfg.release_ms)
        self._voices_by_freq.clear()

    def close(self):
        if self.enabled:
            self.release_all()
            pygame.mixer.quit()
        self._sounds.clear()
        self.enabled = False

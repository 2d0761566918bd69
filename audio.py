# Sound cues

import numpy as np
import pygame
from absl import logging

from game_logic import CueListener

SAMPLE_RATE = 22050

# (frequency Hz, seconds, volume 0..1)
CORRECT_TONE = (880.0, 0.12, 0.6)
CRASH_TONE = (110.0, 0.35, 0.8)
ENGINE_TONE = (55.0, 1.0, 0.25)


def make_tone(freq, duration, volume=0.5, sample_rate=SAMPLE_RATE):
    """Mono 16-bit sine burst with a short linear fade at both ends."""
    n = max(1, int(sample_rate * duration))
    t = np.arange(n) / sample_rate
    wave = np.sin(2 * np.pi * freq * t)

    fade = min(n // 2, int(sample_rate * 0.01))
    if fade > 0:
        ramp = np.linspace(0.0, 1.0, fade)
        wave[:fade] *= ramp
        wave[-fade:] *= ramp[::-1]

    volume = max(0.0, min(1.0, volume))
    return (wave * volume * 32767).astype(np.int16)


class SoundCues(CueListener):
    def __init__(self, muted=False):
        self.muted = muted
        self.enabled = False
        self.sounds = {}

        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        except pygame.error as e:
            logging.warning("Audio unavailable, playing without sound: %s", e)
            return

        _, _, channels = pygame.mixer.get_init()
        for name, (freq, duration, volume) in (("correct", CORRECT_TONE),
                                                ("crash", CRASH_TONE),
                                                ("engine", ENGINE_TONE)):
            samples = make_tone(freq, duration, volume)
            if channels > 1:
                samples = np.repeat(samples[:, np.newaxis], channels, axis=1)
            self.sounds[name] = pygame.sndarray.make_sound(np.ascontiguousarray(samples))
        self.enabled = True

    def toggle_mute(self):
        self.muted = not self.muted
        if self.muted:
            self.on_engine_stop()

    def _play(self, name, loops=0):
        if self.enabled and not self.muted:
            self.sounds[name].play(loops=loops)

    def on_correct(self):
        self._play("correct")

    def on_crash(self):
        self._play("crash")

    def on_engine_start(self):
        self._play("engine", loops=-1)

    def on_engine_stop(self):
        if self.enabled:
            self.sounds["engine"].stop()

    def close(self):
        if self.enabled:
            pygame.mixer.quit()
            self.enabled = False

#!/usr/bin/env python3
"""
Tests for audio.py -- tone synthesis only, no sound device needed.
"""

import unittest

import numpy as np

from audio import SAMPLE_RATE, make_tone


class TestMakeTone(unittest.TestCase):

    def test_length_and_type(self):
        tone = make_tone(440, 0.5)
        self.assertEqual(tone.dtype, np.int16)
        self.assertEqual(len(tone), SAMPLE_RATE // 2)

    def test_volume_scales_peak(self):
        loud = np.abs(make_tone(440, 0.2, 1.0)).max()
        quiet = np.abs(make_tone(440, 0.2, 0.25)).max()
        self.assertGreater(loud, 30000)
        self.assertLess(quiet, 8300)

    def test_fades_to_silence(self):
        """Both ends ramp to zero so cues do not click."""
        tone = make_tone(440, 0.2, 1.0)
        self.assertEqual(tone[0], 0)
        self.assertLess(abs(int(tone[-1])), 50)

    def test_volume_clamped(self):
        self.assertLessEqual(np.abs(make_tone(440, 0.1, 5.0)).max(), 32767)

    def test_tiny_duration(self):
        self.assertEqual(len(make_tone(440, 0)), 1)


if __name__ == "__main__":
    unittest.main()

#!/usr/bin/env python3
"""
Tests for highscore.py -- best score file.
"""

import os
import tempfile
import unittest

from highscore import HighScoreFile


class TestHighScoreFile(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "highscore.txt")

    def test_missing_file_is_zero(self):
        """No file yet means no best score."""
        self.assertEqual(HighScoreFile(self.path).get_best_score(), 0)

    def test_round_trip(self):
        """A saved score reads back from a fresh instance."""
        HighScoreFile(self.path).set_best_score(42)
        self.assertEqual(HighScoreFile(self.path).get_best_score(), 42)

    def test_saves_whole_points(self):
        HighScoreFile(self.path).set_best_score(17.8)
        with open(self.path) as f:
            self.assertEqual(f.read(), "17")

    def test_corrupt_file_is_zero(self):
        """Garbage in the file is ignored."""
        with open(self.path, "w") as f:
            f.write("lots")
        self.assertEqual(HighScoreFile(self.path).get_best_score(), 0)

    def test_unwritable_location_is_not_fatal(self):
        """Saving into a missing directory only logs."""
        store = HighScoreFile(os.path.join(self.tmp.name, "no", "such", "dir", "hs.txt"))
        store.set_best_score(5)
        self.assertEqual(store.get_best_score(), 0)


if __name__ == "__main__":
    unittest.main()

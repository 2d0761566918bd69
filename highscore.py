import os

from absl import logging

DEFAULT_HIGHSCORE_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "highscore.txt")


class HighScoreFile:
    """Best score kept as a single integer in a text file."""

    def __init__(self, path=DEFAULT_HIGHSCORE_FILE):
        self.path = path

    def get_best_score(self):
        if not os.path.isfile(self.path):
            return 0
        try:
            with open(self.path, 'r') as f:
                return int(f.read().strip())
        except (ValueError, IOError):
            logging.warning("Ignoring unreadable high score file %s", self.path)
            return 0

    def set_best_score(self, score):
        try:
            with open(self.path, 'w') as f:
                f.write(str(int(score)))
        except IOError as e:
            logging.warning("Could not save high score to %s: %s", self.path, e)

import json
import random

from absl import logging

# --- Word Bank ---
MIN_WORD_LEN = 3
MIN_FLAT_WORDS = 10
MIN_TIER_WORDS = 5
WORD_MAX_LEN = 16           # Longer labels are cut on the option cars
OPTION_RETRIES = 30         # Attempts to make the wrong options distinct

FALLBACK_WORDS = [
    "accommodate",
    "achievement",
    "beginning",
    "calendar",
    "conscience",
    "definitely",
    "embarrass",
    "environment",
    "favourite",
    "government",
    "independent",
    "necessary",
    "occasionally",
    "separate",
    "tomorrow",
]

FALLBACK_TIERS = {
    "easy": ["because", "friend", "people", "school", "little", "animal", "before"],
    "medium": ["believe", "library", "February", "different", "separate", "tomorrow", "calendar"],
    "hard": ["accommodate", "conscience", "embarrass", "occasionally", "independent",
             "millennium", "rhythm"],
}

# Keyboard-ish neighbours used for substitution typos
NEARBY_KEYS = {
    "a": "s", "e": "w", "i": "o", "o": "i", "u": "y",
    "s": "a", "w": "e", "y": "u",
    "c": "x", "x": "c",
    "m": "n", "n": "m",
    "r": "t", "t": "r",
    "p": "o", "l": "k", "k": "l",
}


def _interior_index(word, rng):
    return 1 + rng.randrange(len(word) - 2)


def make_wrong_variant(word, rng=random):
    """
    Returns a plausible misspelling of `word`.

    Words shorter than 4 characters come back unchanged. Every edit is
    anchored on an interior character, never the first or last one.
    """
    if len(word) < 4:
        return word

    variants = []

    # swap adjacent letters
    i = _interior_index(word, rng)
    variants.append(word[:i] + word[i + 1] + word[i] + word[i + 2:])

    # drop one letter
    d = _interior_index(word, rng)
    variants.append(word[:d] + word[d + 1:])

    # double one letter
    u = _interior_index(word, rng)
    variants.append(word[:u] + word[u] + word[u:])

    # nearby key, keeping the case of the replaced letter
    r = _interior_index(word, rng)
    ch = word[r].lower()
    if ch in NEARBY_KEYS:
        repl = NEARBY_KEYS[ch] if word[r] == ch else NEARBY_KEYS[ch].upper()
        variants.append(word[:r] + repl + word[r + 1:])

    for v in variants:
        if v and v != word:
            return v
    return word


def shuffle(items, rng=random):
    """Fisher-Yates on a copy; the input sequence is left alone."""
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randrange(i + 1)
        out[i], out[j] = out[j], out[i]
    return out


def build_options(target, count=3, rng=random, retries=OPTION_RETRIES):
    """
    Builds `count` shuffled (text, is_correct) pairs: the target plus
    `count - 1` wrong spellings.

    Wrong spellings that repeat the target or each other are regenerated up to
    `retries` times. After that the duplicate is kept.
    """
    wrong = [make_wrong_variant(target, rng) for _ in range(count - 1)]

    guard = 0
    while _has_clash(target, wrong) and guard < retries:
        for k in range(len(wrong)):
            if wrong[k] == target or wrong[k] in wrong[:k]:
                wrong[k] = make_wrong_variant(target, rng)
        guard += 1

    if _has_clash(target, wrong):
        logging.debug("Options for %r still clash after %d retries: %s", target, retries, wrong)

    options = [(target, True)] + [(w, False) for w in wrong]
    return shuffle(options, rng)


def _has_clash(target, wrong):
    return target in wrong or len(set(wrong)) != len(wrong)


def truncate_word(text, max_len=WORD_MAX_LEN, ellipsis="…"):
    t = str(text or "")
    if len(t) <= max_len:
        return t
    return t[:max_len - len(ellipsis)] + ellipsis


def clean_words(words):
    if not isinstance(words, (list, tuple)):
        return []
    cleaned = [str(w or "").strip() for w in words]
    return [w for w in cleaned if len(w) >= MIN_WORD_LEN]


class WordBank:
    """
    Candidate target words, either one flat list or easy/medium/hard tiers.

    Anything missing or too small is replaced by the built-in lists, so a bank
    is never empty after `load`.
    """

    def __init__(self, data=None):
        self.words = list(FALLBACK_WORDS)
        self.tiers = {name: list(pool) for name, pool in FALLBACK_TIERS.items()}
        self.tier = None
        if data is not None:
            self.load(data)

    def load(self, data):
        """
        Ingests `{"words": [...]}` or `{"easy": [...], "medium": [...], "hard": [...]}`.

        Returns True when at least one supplied list was usable.
        """
        if not isinstance(data, dict):
            logging.warning("Word bank is not an object, using the built-in lists.")
            return False

        used = False
        if "words" in data:
            words = clean_words(data["words"])
            if len(words) >= MIN_FLAT_WORDS:
                self.words = words
                used = True
            else:
                logging.warning("Word list has %d usable words (< %d), using the built-in list.",
                                len(words), MIN_FLAT_WORDS)
                self.words = list(FALLBACK_WORDS)

        for name in FALLBACK_TIERS:
            if name not in data:
                continue
            words = clean_words(data[name])
            if len(words) >= MIN_TIER_WORDS:
                self.tiers[name] = words
                used = True
            else:
                logging.warning("Tier '%s' has %d usable words (< %d), using the built-in list.",
                                name, len(words), MIN_TIER_WORDS)
                self.tiers[name] = list(FALLBACK_TIERS[name])
        return used

    def select_tier(self, tier):
        if tier is not None and tier not in self.tiers:
            raise ValueError(f"Unknown word tier: {tier!r}")
        self.tier = tier

    @property
    def pool(self):
        if self.tier is None:
            return self.words
        return self.tiers[self.tier]

    def pick(self, rng=random):
        pool = self.pool
        if not pool:
            return None
        return pool[rng.randrange(len(pool))]


def load_word_file(path):
    """Reads a JSON word bank from disk, falling back to the built-in lists."""
    bank = WordBank()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logging.warning("Could not read word file %s (%s), using the built-in lists.", path, e)
        return bank
    bank.load(data)
    return bank

import math
import random
from collections import namedtuple

from absl import logging

import words as wordlib

# --- Play Field ---
FIELD_W = 360
FIELD_H = 640
MAX_STEP = 0.033            # Longest dt a single tick may simulate

# --- Game Modes ---
MODE_PLAIN = "plain"
MODE_SPELLING = "spelling"
MODES = (MODE_PLAIN, MODE_SPELLING)

# --- Run States ---
STATE_IDLE = "idle"
STATE_RUNNING = "running"
STATE_ENDED = "ended"

MOVE_LEFT = -1
MOVE_RIGHT = 1

# --- End Reasons ---
REASON_CRASH = "Crash"
REASON_WRONG = "Wrong spelling"
REASON_TOO_SLOW = "Too slow"
REASON_NO_WORDS = "No words loaded"

# --- Plain Mode (enemy cars) ---
PLAIN_ROAD = (60, 240, 3)   # origin x, width, lanes
PLAIN_CAR_SIZE = (40, 70)
PLAIN_CAR_OFFSET = 90       # Player sits this far above the bottom edge
ENEMY_SIZE = (40, 70)
SPAWN_INTERVAL = 0.9
MIN_SPAWN_INTERVAL = 0.38
SPAWN_INTERVAL_STEP = 0.05
RAMP_INTERVAL = 5.0         # Seconds between difficulty ramps
ENEMY_SPEED_JITTER = (0.9, 1.25)
ENEMY_DESPAWN_MARGIN = 120

# --- Spelling Mode (option cars) ---
SPELLING_ROAD = (40, 280, 3)
SPELLING_CAR_SIZE = (42, 76)
SPELLING_CAR_OFFSET = 110
OPTION_CAR_SIZE = (92, 92)
OPTION_SPAWN_Y = -140
CORRECT_BONUS = 10
PASS_MARGIN = 160           # Options this far below the field count as missed


class TierSettings(namedtuple("TierSettings", "start_speed max_speed speed_step dash_factor")):
    """Speed envelope of one difficulty tier."""


TIERS = {
    "classic": TierSettings(220, 520, 25, 0.6),
    "standard": TierSettings(150, 320, 8, 0.4),
    "easy": TierSettings(120, 260, 6, 0.35),
    "medium": TierSettings(150, 320, 8, 0.4),
    "hard": TierSettings(180, 400, 10, 0.5),
}

DEFAULT_TIERS = {
    MODE_PLAIN: "classic",
    MODE_SPELLING: "standard",
}


class Road:
    def __init__(self, origin_x, width, lane_count):
        if lane_count < 1:
            raise ValueError(f"A road needs at least one lane, got {lane_count}")
        self.origin_x = origin_x
        self.width = width
        self.lane_count = lane_count

    @property
    def lane_width(self):
        return self.width / self.lane_count

    def lane_center(self, lane_index):
        lane_w = self.lane_width
        return self.origin_x + lane_w * lane_index + lane_w / 2

    def boundaries(self):
        """x of every lane edge, left road edge first."""
        return [self.origin_x + self.lane_width * i for i in range(self.lane_count + 1)]


def intersect(a, b):
    """
    Strict overlap of two (x1, y1, x2, y2) rects. Touching edges do not count.
    """
    ax1, ay1, ax2, ay2 = a
    bx1, by1, bx2, by2 = b
    return ax1 < bx2 and ax2 > bx1 and ay1 < by2 and ay2 > by1


class Car:
    def __init__(self, road, size, y):
        self.road = road
        self.w, self.h = size
        self.y = y
        self.lane = road.lane_count // 2
        self.x = 0
        self.place()

    def place(self):
        self.x = self.road.lane_center(self.lane) - self.w / 2

    def move_to(self, lane):
        if not 0 <= lane < self.road.lane_count:
            return False
        self.lane = lane
        self.place()
        return True

    @property
    def rect(self):
        return (self.x, self.y, self.x + self.w, self.y + self.h)


class Obstacle:
    def __init__(self, road, lane, size, y, speed=0.0):
        self.lane = lane
        self.w, self.h = size
        self.x = road.lane_center(lane) - self.w / 2
        self.y = y
        self.speed = speed

    def update(self, dt, speed=None):
        self.y += (self.speed if speed is None else speed) * dt

    @property
    def rect(self):
        return (self.x, self.y, self.x + self.w, self.y + self.h)


class OptionCar(Obstacle):
    def __init__(self, road, lane, text, is_correct):
        super().__init__(road, lane, OPTION_CAR_SIZE, OPTION_SPAWN_Y)
        self.text = text
        self.is_correct = is_correct


class CueListener:
    """No-op sink for game cues. Audio backends override what they play."""

    def on_correct(self):
        pass

    def on_crash(self):
        pass

    def on_engine_start(self):
        pass

    def on_engine_stop(self):
        pass


class ScoreStore:
    """In-memory best score; the file-backed store lives in highscore.py."""

    def __init__(self, best=0):
        self.best = best

    def get_best_score(self):
        return self.best

    def set_best_score(self, score):
        self.best = score


ObstacleView = namedtuple("ObstacleView", "rect lane text is_correct")

Snapshot = namedtuple("Snapshot", [
    "mode", "tier", "state", "field", "road", "lane_edges", "player", "obstacles",
    "score", "best_score", "speed", "dash_offset", "target", "end_reason",
])


class Game:
    """
    One lane racer session: player, obstacles, score, speed and run state.

    Nothing here reads a clock or a device. `tick(dt)` (or `advance(ts)`)
    moves the simulation forward, `set_pending_move` queues the next lane
    change and `snapshot()` hands a read-only view to whoever draws it.
    """

    def __init__(self, mode=MODE_SPELLING, tier=None, rng=None, words=None,
                 store=None, cues=None, field=(FIELD_W, FIELD_H), best_score=0):
        if mode not in MODES:
            raise ValueError(f"Unknown game mode: {mode!r}")
        self.mode = mode
        self.rng = rng if rng is not None else random.Random()
        self.store = store if store is not None else ScoreStore(best_score)
        self.cues = cues if cues is not None else CueListener()
        self.field_w, self.field_h = field

        if mode == MODE_PLAIN:
            self.road = Road(*PLAIN_ROAD)
            car_size, car_offset = PLAIN_CAR_SIZE, PLAIN_CAR_OFFSET
        else:
            self.road = Road(*SPELLING_ROAD)
            car_size, car_offset = SPELLING_CAR_SIZE, SPELLING_CAR_OFFSET
        self.car = Car(self.road, car_size, self.field_h - car_offset)

        self.state = STATE_IDLE
        self.end_reason = None
        self.best_score = self.store.get_best_score() or 0

        self.word_bank = words if words is not None else wordlib.WordBank()
        self.tier = None
        self.settings = None
        self.select_tier(tier or DEFAULT_TIERS[mode])

        self.last_ts = None
        self.reset()

    # --- Configuration ---
    def select_tier(self, tier):
        if tier not in TIERS:
            raise ValueError(f"Unknown difficulty tier: {tier!r}")
        self.tier = tier
        self.settings = TIERS[tier]
        if self.mode == MODE_SPELLING:
            self.word_bank.select_tier(tier if tier in self.word_bank.tiers else None)
        if self.state != STATE_RUNNING:
            self.speed = self.settings.start_speed
        else:
            self.speed = min(self.settings.max_speed, max(self.settings.start_speed, self.speed))

    def load_word_bank(self, data):
        return self.word_bank.load(data)

    # --- Lifecycle ---
    def reset(self):
        self.car.lane = self.road.lane_count // 2
        self.car.place()

        self.obstacles = []
        self.score = 0
        self.speed = self.settings.start_speed
        self.dash_offset = 0
        self.pending_move = 0

        self.spawn_timer = 0
        self.spawn_interval = SPAWN_INTERVAL
        self.difficulty_timer = 0

        self.target = ""
        self.round_active = False
        self.end_reason = None
        self.last_ts = None

    def start(self):
        """Idle or Ended -> Running with a fresh score, speed and road."""
        self.reset()
        self.state = STATE_RUNNING
        logging.info(">>> Run started: mode=%s tier=%s speed=%s", self.mode, self.tier, self.speed)
        self.cues.on_engine_start()

    restart = start

    def _end_run(self, reason):
        if self.state != STATE_RUNNING:
            return
        self.state = STATE_ENDED
        self.end_reason = reason

        previous = self.store.get_best_score() or 0
        self.best_score = max(previous, math.floor(self.score))
        self.store.set_best_score(self.best_score)

        logging.info(">>> Run ended: %s | score %d | best %d", reason, math.floor(self.score), self.best_score)
        self.cues.on_engine_stop()
        self.cues.on_crash()

    @property
    def running(self):
        return self.state == STATE_RUNNING

    # --- Input ---
    def set_pending_move(self, direction):
        """Last write wins until the next tick consumes it."""
        if direction not in (MOVE_LEFT, 0, MOVE_RIGHT):
            return
        self.pending_move = direction

    def _apply_move(self):
        if self.pending_move == 0:
            return
        self.car.move_to(self.car.lane + self.pending_move)
        self.pending_move = 0

    # --- Clock ---
    def advance(self, ts):
        """Steps by the time since the previous timestamp (seconds)."""
        if self.last_ts is None:
            self.last_ts = ts
        dt = ts - self.last_ts
        self.last_ts = ts
        return self.tick(dt)

    def tick(self, dt):
        if self.state != STATE_RUNNING:
            return self.state
        dt = min(MAX_STEP, max(0.0, dt))

        self._apply_move()
        self.dash_offset += dt * self.speed * self.settings.dash_factor

        if self.mode == MODE_PLAIN:
            self._update_plain(dt)
        else:
            self._update_spelling(dt)
        return self.state

    # --- Plain mode ---
    def _update_plain(self, dt):
        self.spawn_timer += dt
        while self.spawn_timer >= self.spawn_interval:
            self.spawn_timer -= self.spawn_interval
            self._spawn_enemy()

        self._process_enemies(dt)
        if not self.running:
            return

        self.score += dt * (self.speed / 3)

        self.difficulty_timer += dt
        if self.difficulty_timer >= RAMP_INTERVAL:
            self.difficulty_timer = 0
            self._ramp_difficulty()

    def _spawn_enemy(self):
        lane = self.rng.randrange(self.road.lane_count)
        _, h = ENEMY_SIZE
        speed = self.speed * self.rng.uniform(*ENEMY_SPEED_JITTER)
        self.obstacles.append(Obstacle(self.road, lane, ENEMY_SIZE, -h - 10, speed))

    def _process_enemies(self, dt):
        for obs in self.obstacles:
            obs.update(dt)
        limit = self.field_h + ENEMY_DESPAWN_MARGIN
        self.obstacles = [obs for obs in self.obstacles if obs.y < limit]

        for obs in self.obstacles:
            if intersect(self.car.rect, obs.rect):
                self._end_run(REASON_CRASH)
                return

    def _ramp_difficulty(self):
        old_speed, old_interval = self.speed, self.spawn_interval
        self.speed = min(self.settings.max_speed, self.speed + self.settings.speed_step)
        self.spawn_interval = max(MIN_SPAWN_INTERVAL, self.spawn_interval - SPAWN_INTERVAL_STEP)
        logging.info(">>> Ramp! Interval: %.2fs→%.2fs, Speed: %s→%s",
                     old_interval, self.spawn_interval, old_speed, self.speed)

    # --- Spelling mode ---
    def _update_spelling(self, dt):
        if not self.round_active:
            self._start_round()
            if not self.running:
                return

        for car in self.obstacles:
            car.update(dt, self.speed)

        for car in self.obstacles:
            if intersect(self.car.rect, car.rect):
                if car.is_correct:
                    self._handle_correct()
                else:
                    self._end_run(REASON_WRONG)
                return

        # Option cars move in lockstep, the first one stands for the set
        if self.obstacles and self.obstacles[0].y > self.field_h + PASS_MARGIN:
            self._end_run(REASON_TOO_SLOW)

    def _start_round(self):
        target = self.word_bank.pick(self.rng)
        if not target:
            self._end_run(REASON_NO_WORDS)
            return

        self.target = target
        options = wordlib.build_options(target, self.road.lane_count, self.rng)
        self.obstacles = [OptionCar(self.road, lane, text, is_correct)
                          for lane, (text, is_correct) in enumerate(options)]
        self.round_active = True
        logging.debug("Round: %r -> %s", target, [text for text, _ in options])

    def _handle_correct(self):
        self.score += CORRECT_BONUS
        self.speed = min(self.settings.max_speed, self.speed + self.settings.speed_step)
        self.round_active = False
        self.obstacles = []
        self.cues.on_correct()

    # --- Presentation ---
    def snapshot(self):
        views = tuple(
            ObstacleView(obs.rect, obs.lane, getattr(obs, "text", None), getattr(obs, "is_correct", None))
            for obs in self.obstacles
        )
        return Snapshot(
            mode=self.mode,
            tier=self.tier,
            state=self.state,
            field=(self.field_w, self.field_h),
            road=(self.road.origin_x, self.road.width, self.road.lane_count),
            lane_edges=tuple(self.road.boundaries()),
            player=self.car.rect,
            obstacles=views,
            score=math.floor(self.score),
            best_score=self.best_score,
            speed=self.speed,
            dash_offset=self.dash_offset,
            target=self.target,
            end_reason=self.end_reason,
        )

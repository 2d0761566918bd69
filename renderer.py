import cv2
import numpy as np

from game_logic import MODE_SPELLING, STATE_ENDED, STATE_IDLE
from words import truncate_word

# --- Colours (BGR) ---
COLOR_BG = (51, 27, 15)
COLOR_ROAD = (32, 18, 11)
COLOR_EDGE = (255, 255, 255)
COLOR_PLAYER = (255, 162, 122)
COLOR_ENEMY = (107, 107, 255)
COLOR_OPTION = (139, 116, 100)
COLOR_TEXT = (255, 255, 255)
COLOR_TARGET = (0, 255, 255)

EDGE_ALPHA = 0.12
DASH_ALPHA = 0.10
DASH_LEN = 26
DASH_GAP = 18
FONT = cv2.FONT_HERSHEY_SIMPLEX


def new_frame(field):
    w, h = field
    return np.zeros((h, w, 3), dtype=np.uint8)


def _put_centered(frame, text, cx, cy, scale, color, thickness=1):
    (tw, th), _ = cv2.getTextSize(text, FONT, scale, thickness)
    cv2.putText(frame, text, (int(cx - tw / 2), int(cy + th / 2)),
                FONT, scale, color, thickness, cv2.LINE_AA)


def _rect(frame, rect, color):
    x1, y1, x2, y2 = map(int, rect)
    cv2.rectangle(frame, (x1, y1), (x2, y2), color, -1)


def _darken(frame, alpha):
    h, w = frame.shape[:2]
    overlay = frame.copy()
    cv2.rectangle(overlay, (0, 0), (w, h), (0, 0, 0), -1)
    cv2.addWeighted(overlay, alpha, frame, 1 - alpha, 0, frame)


def draw_road(frame, snap):
    h, w = frame.shape[:2]
    edges = snap.lane_edges
    road_x, road_w = edges[0], edges[-1] - edges[0]

    cv2.rectangle(frame, (0, 0), (w, h), COLOR_BG, -1)
    cv2.rectangle(frame, (int(road_x), 0), (int(road_x + road_w), h), COLOR_ROAD, -1)

    overlay = frame.copy()
    cv2.rectangle(overlay, (int(road_x - 4), 0), (int(road_x), h), COLOR_EDGE, -1)
    cv2.rectangle(overlay, (int(road_x + road_w), 0), (int(road_x + road_w + 4), h), COLOR_EDGE, -1)
    cv2.addWeighted(overlay, EDGE_ALPHA, frame, 1 - EDGE_ALPHA, 0, frame)

    overlay = frame.copy()
    period = DASH_LEN + DASH_GAP
    for lx in edges[1:-1]:
        y0 = -DASH_LEN
        while y0 < h + DASH_LEN:
            yy = y0 + (snap.dash_offset % period)
            cv2.rectangle(overlay, (int(lx - 2), int(yy)), (int(lx + 2), int(yy + DASH_LEN)), COLOR_EDGE, -1)
            y0 += period
    cv2.addWeighted(overlay, DASH_ALPHA, frame, 1 - DASH_ALPHA, 0, frame)


def draw_cars(frame, snap):
    _rect(frame, snap.player, COLOR_PLAYER)
    for obs in snap.obstacles:
        if obs.text is None:
            _rect(frame, obs.rect, COLOR_ENEMY)
            continue
        # Every option car looks the same, no colour hints
        _rect(frame, obs.rect, COLOR_OPTION)
        x1, y1, x2, y2 = obs.rect
        # Hershey fonts have no ellipsis glyph
        _put_centered(frame, truncate_word(obs.text, ellipsis=".."), (x1 + x2) / 2, (y1 + y2) / 2, 0.4, COLOR_ROAD)


def draw_hud(frame, snap):
    cv2.putText(frame, f"SCORE: {snap.score}", (8, 22), FONT, 0.55, COLOR_TEXT, 1, cv2.LINE_AA)
    cv2.putText(frame, f"BEST: {snap.best_score}", (8, 44), FONT, 0.55, COLOR_TEXT, 1, cv2.LINE_AA)
    if snap.mode == MODE_SPELLING:
        w = frame.shape[1]
        _put_centered(frame, snap.target or "-", w / 2, 70, 0.7, COLOR_TARGET, 2)


def draw_intro(frame, snap):
    h, w = frame.shape[:2]
    _darken(frame, 0.6)
    title = "SPELLING RACER" if snap.mode == MODE_SPELLING else "LANE RACER"
    _put_centered(frame, title, w / 2, h / 2 - 60, 0.9, COLOR_TARGET, 2)
    _put_centered(frame, f"BEST: {snap.best_score}", w / 2, h / 2 - 10, 0.6, COLOR_TEXT)
    _put_centered(frame, "Enter or pinch to start", w / 2, h / 2 + 30, 0.55, COLOR_TEXT)
    _put_centered(frame, "Arrows / A D to steer", w / 2, h / 2 + 60, 0.5, COLOR_TEXT)


def draw_game_over(frame, snap):
    h, w = frame.shape[:2]
    _darken(frame, 0.6)
    _put_centered(frame, snap.end_reason or "Game Over", w / 2, h / 2 - 20, 0.9, COLOR_TEXT, 2)
    if snap.mode == MODE_SPELLING and snap.target:
        _put_centered(frame, "Correct spelling:", w / 2, h / 2 + 15, 0.5, COLOR_TEXT)
        _put_centered(frame, snap.target, w / 2, h / 2 + 42, 0.7, COLOR_TARGET, 2)
    _put_centered(frame, f"SCORE: {snap.score}  BEST: {snap.best_score}", w / 2, h / 2 + 75, 0.5, COLOR_TEXT)
    _put_centered(frame, "Press Enter to play again", w / 2, h / 2 + 105, 0.5, COLOR_TEXT)


def render(snap, frame=None):
    """Draws a snapshot. Returns the frame (a new one when none is given)."""
    if frame is None:
        frame = new_frame(snap.field)
    draw_road(frame, snap)
    draw_cars(frame, snap)
    draw_hud(frame, snap)
    if snap.state == STATE_IDLE:
        draw_intro(frame, snap)
    elif snap.state == STATE_ENDED:
        draw_game_over(frame, snap)
    return frame

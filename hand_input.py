import math
import time

import cv2
import mediapipe as mp
from absl import logging

# ── Config ────────────────────────────────────────────────────────
SWITCH_DELAY  = 0.2
PINCH_THRESH  = 0.05
PINCH_RELEASE = 0.10


def lane_from_x(x, lane_count):
    """Normalized (0..1) fingertip x to a lane index, clamped to the road."""
    return max(0, min(lane_count - 1, int(x * lane_count)))


def lane_step(current, wanted):
    """One lane toward `wanted`: -1, 0 or +1."""
    if wanted > current:
        return 1
    if wanted < current:
        return -1
    return 0


class HandSteering:
    """
    Webcam hand tracking: the index fingertip picks a lane and a thumb +
    index pinch acts as the start button.
    """

    def __init__(self, lane_count, camera=0):
        self.lane_count = lane_count
        self.cap = cv2.VideoCapture(camera)
        if not self.cap.isOpened():
            self.cap.release()
            raise IOError(f"Could not open camera {camera}")
        self.hands = mp.solutions.hands.Hands(
            max_num_hands=1,
            min_detection_confidence=0.7,
            min_tracking_confidence=0.7
        )
        self.pinch_state = "OPEN"
        self.last_switch = 0.0

    def read(self, current_lane):
        """
        Returns (pinch_event, move) where move is the lane step to queue.
        """
        ret, frame = self.cap.read()
        if not ret:
            logging.warning("Failed to grab camera frame.")
            return False, 0

        frame = cv2.flip(frame, 1)
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        res = self.hands.process(rgb)
        if not res.multi_hand_landmarks:
            return False, 0

        hlm = res.multi_hand_landmarks[0]
        pinch_event = False
        d = math.hypot(hlm.landmark[4].x - hlm.landmark[8].x,
                       hlm.landmark[4].y - hlm.landmark[8].y)
        if self.pinch_state == "OPEN" and d < PINCH_THRESH:
            self.pinch_state, pinch_event = "CLOSED", True
        elif self.pinch_state == "CLOSED" and d > PINCH_RELEASE:
            self.pinch_state = "OPEN"

        move = 0
        wanted = lane_from_x(hlm.landmark[8].x, self.lane_count)
        now = time.time()
        if wanted != current_lane and now - self.last_switch > SWITCH_DELAY:
            move = lane_step(current_lane, wanted)
            self.last_switch = now
        return pinch_event, move

    def close(self):
        self.hands.close()
        self.cap.release()

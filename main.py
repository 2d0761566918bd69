import os
os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"
import time

import cv2
from absl import app, flags, logging

import game_logic
import renderer
from audio import SoundCues
from hand_input import HandSteering
from highscore import DEFAULT_HIGHSCORE_FILE, HighScoreFile
from words import load_word_file

FLAGS = flags.FLAGS
flags.DEFINE_enum("mode", game_logic.MODE_SPELLING, list(game_logic.MODES),
                  "plain: dodge enemy cars. spelling: drive into the correct spelling.")
flags.DEFINE_enum("tier", None, list(game_logic.TIERS), "Difficulty tier; defaults per mode.")
flags.DEFINE_string("words", "words.json", "JSON word bank for spelling mode.")
flags.DEFINE_string("highscore_file", DEFAULT_HIGHSCORE_FILE, "Where the best score is kept.")
flags.DEFINE_bool("hands", False, "Steer with webcam hand tracking.")
flags.DEFINE_integer("camera", 0, "Camera index used with --hands.")
flags.DEFINE_bool("mute", False, "Start with sound off.")

# ── Config ────────────────────────────────────────────────────────
WINDOW = "Lane Racer"
FRAME_DELAY_MS = 16
KEYS_LEFT  = {ord('a'), 65361, 2424832}     # a, arrow (GTK), arrow (Win32)
KEYS_RIGHT = {ord('d'), 65363, 2555904}
KEYS_START = {13, 10}
KEYS_QUIT  = {ord('q'), 27}
KEY_MUTE   = ord('m')


def handle_key(game, key, cues):
    """Applies one key press. Returns False when the player asked to quit."""
    if key in KEYS_QUIT:
        return False
    if key in KEYS_LEFT:
        game.set_pending_move(game_logic.MOVE_LEFT)
    elif key in KEYS_RIGHT:
        game.set_pending_move(game_logic.MOVE_RIGHT)
    elif key in KEYS_START and not game.running:
        game.start()
    elif key == KEY_MUTE:
        cues.toggle_mute()
    return True


def window_open():
    return cv2.getWindowProperty(WINDOW, cv2.WND_PROP_VISIBLE) >= 1


def setup_hands(lane_count):
    try:
        return HandSteering(lane_count, FLAGS.camera)
    except IOError as e:
        logging.error("%s. Falling back to keyboard control.", e)
        return None


# ── Main Game Loop ────────────────────────────────────────────────
def run_game_loop(game, hands, cues):
    frame = renderer.new_frame((game.field_w, game.field_h))
    while True:
        if hands is not None:
            pinch_event, move = hands.read(game.car.lane)
            if pinch_event and not game.running:
                game.start()
            elif move:
                game.set_pending_move(move)

        game.advance(time.monotonic())
        renderer.render(game.snapshot(), frame)
        cv2.imshow(WINDOW, frame)

        key = cv2.waitKeyEx(FRAME_DELAY_MS)
        if key != -1 and not handle_key(game, key, cues):
            break
        if not window_open():
            break


def main(argv):
    del argv
    logging.set_verbosity(logging.INFO)

    store = HighScoreFile(FLAGS.highscore_file)
    word_bank = load_word_file(FLAGS.words) if FLAGS.mode == game_logic.MODE_SPELLING else None
    cues = SoundCues(muted=FLAGS.mute)

    game = game_logic.Game(mode=FLAGS.mode, tier=FLAGS.tier, words=word_bank,
                           store=store, cues=cues)

    hands = setup_hands(game.road.lane_count) if FLAGS.hands else None

    cv2.namedWindow(WINDOW, cv2.WINDOW_NORMAL | cv2.WINDOW_KEEPRATIO)
    cv2.resizeWindow(WINDOW, game.field_w, game.field_h)
    try:
        run_game_loop(game, hands, cues)
    finally:
        if hands is not None:
            hands.close()
        cues.close()
        cv2.destroyAllWindows()


def run():
    app.run(main)


if __name__ == "__main__":
    run()

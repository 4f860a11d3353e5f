# -----------------------------
# Defaults (override via settings yaml or launcher flags)
# -----------------------------

SCREEN_W, SCREEN_H = 1280, 720     # window size
FPS = 60                           # host frame rate (ticks per second)

# Light sequence
LIGHT_COUNT = 5                    # lights in the gantry
LIGHT_INTERVAL_MS = 1000           # one more light every interval

# Random hold before lights out: uniform in [MIN, MAX)
MIN_DELAY_MS = 1000
MAX_DELAY_MS = 5000

# Latency calibration
CALIBRATION_TRIALS = 10            # at least 10
CALIBRATION_TIMEOUT_SEC = 0.5      # per trial; a stuck host falls back to 0 ms
LATENCY_BUFFER_MS = 8.0            # render overhead added on top of the median

# Results
HISTORY_SIZE = 10
BEST_KEY = "best"
SCORES_FILE = "scores.yaml"

# Coaching thresholds (ms), slowest first
HINTS = (
    (300, "Focus on the lights. Try to anticipate the exact moment."),
    (250, "Good! Try to maintain focus for faster reactions."),
    (200, "Excellent reaction time!"),
)
HINT_FASTEST = "Outstanding! Professional level reaction time!"

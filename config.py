"""
Simulator configuration and constants.
"""

# Card labels
RANK_LABELS = {
    1: "A", 2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7",
    8: "8", 9: "9", 10: "10", 11: "J", 12: "Q", 13: "K",
}
SUIT_NAMES = {1: "SPADE", 2: "HEART", 3: "CLUB", 4: "DIAMOND"}
SUIT_SYMBOLS = {1: "♠", 2: "♥", 3: "♣", 4: "♦"}
HIDDEN_LABEL = "X"

# Board layout
NUM_COLUMNS = 7
DECK_SIZE = 52
DEALT_CARDS = NUM_COLUMNS * (NUM_COLUMNS + 1) // 2  # 28, triangular deal

# Tick timing (milliseconds)
REFRESH_INTERVAL_MS = 100
MIN_INTERVAL_MS = 10
MAX_INTERVAL_MS = 2000
INTERVAL_STEP_MS = 10

# Driver
MAX_TICKS_PER_GAME = 1000  # batch safety net, a real game gets stuck long before
CHECK_INVARIANTS = True

# Logging
LOG_LEVEL = "INFO"

# Colors for plotting
RATIO_LINE_COLOR = "#377eb8"
WIN_COLOR = "#4daf4a"
LOSS_COLOR = "#e41a1c"

# UI Settings
BATCH_SIMULATIONS = 500
HISTORY_WINDOW = 200  # games shown in the running win-ratio chart

"""
Configuration constants for the Roulette Insight dashboard.
Single source of truth for wheel tables, analysis windows and server settings.
"""

import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# ─── European Roulette Wheel Layout ──────────────────────────────────
# Physical wheel order (clockwise from 0)
WHEEL_ORDER = [
    0, 32, 15, 19, 4, 21, 2, 25, 17, 34, 6, 27, 13, 36,
    11, 30, 8, 23, 10, 5, 24, 16, 33, 1, 20, 14, 31, 9,
    22, 18, 29, 7, 28, 12, 35, 3, 26
]

TOTAL_NUMBERS = 37  # 0-36

# Number properties
RED_NUMBERS = {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}
BLACK_NUMBERS = {2, 4, 6, 8, 10, 11, 13, 15, 17, 20, 22, 24, 26, 28, 29, 31, 33, 35}
GREEN_NUMBERS = {0}

FIRST_DOZEN = set(range(1, 13))
SECOND_DOZEN = set(range(13, 25))
THIRD_DOZEN = set(range(25, 37))
DOZENS = {1: FIRST_DOZEN, 2: SECOND_DOZEN, 3: THIRD_DOZEN}

FIRST_COLUMN = {1, 4, 7, 10, 13, 16, 19, 22, 25, 28, 31, 34}
SECOND_COLUMN = {2, 5, 8, 11, 14, 17, 20, 23, 26, 29, 32, 35}
THIRD_COLUMN = {3, 6, 9, 12, 15, 18, 21, 24, 27, 30, 33, 36}
COLUMNS = {1: FIRST_COLUMN, 2: SECOND_COLUMN, 3: THIRD_COLUMN}

LOW_NUMBERS = set(range(1, 19))
HIGH_NUMBERS = set(range(19, 37))
ODD_NUMBERS = {n for n in range(1, 37) if n % 2 == 1}
EVEN_NUMBERS = {n for n in range(1, 37) if n % 2 == 0}

# Felt layout: 3 rows x 12 columns, top row is the third column
TABLE_LAYOUT = [
    [3, 6, 9, 12, 15, 18, 21, 24, 27, 30, 33, 36],
    [2, 5, 8, 11, 14, 17, 20, 23, 26, 29, 32, 35],
    [1, 4, 7, 10, 13, 16, 19, 22, 25, 28, 31, 34],
]

# Number to wheel position mapping
NUMBER_TO_POSITION = {num: idx for idx, num in enumerate(WHEEL_ORDER)}

# ─── Wheel Neighbours ────────────────────────────────────────────────
NEIGHBOR_TABLE_RADIUS = 3           # 7 numbers: the number and 3 on each side
DEFAULT_NEIGHBOR_RADIUS = 3


def get_neighbor_table():
    table = {}
    size = len(WHEEL_ORDER)
    for num, pos in NUMBER_TO_POSITION.items():
        table[num] = [WHEEL_ORDER[(pos + offset) % size]
                      for offset in range(-NEIGHBOR_TABLE_RADIUS, NEIGHBOR_TABLE_RADIUS + 1)]
    return table


NEIGHBOR_TABLE = get_neighbor_table()

# ─── Payout Table ─────────────────────────────────────────────────────
PAYOUTS = {
    'straight_up': 35,    # Single number
    'neighbors': 35,      # Each covered number is a straight-up bet
    'dozens': 2,          # 12 numbers
    'columns': 2,         # 12 numbers
    'colors': 1,          # 18 numbers
    'parity': 1,          # 18 numbers
}

# ─── Frequency Analysis ──────────────────────────────────────────────
HOT_NUMBER_THRESHOLD = 1.5          # Times above expected frequency
COLD_NUMBER_THRESHOLD = 0.5         # Times below expected frequency
MIN_SPINS_FOR_CHI_SQUARE = 10
CHI_SQUARE_SIGNIFICANCE = 0.05

# ─── Suggestions ─────────────────────────────────────────────────────
STRAIGHT_UP_COUNT = 7
STRAIGHT_UP_WINDOW = 30             # Frequency window for hot numbers
STRAIGHT_UP_HOT_COUNT = 3
STRAIGHT_UP_SLEEPING_WINDOW = 15    # Numbers absent from the last 15 spins
STRAIGHT_UP_SLEEPING_COUNT = 2
MIN_RESULTS_FOR_STRAIGHT_UP = 10
BALANCED_NUMBERS = [7, 17, 23, 32, 1, 14, 29]

NEIGHBORS_WINDOW = 20
NEIGHBORS_SUGGESTION_RADIUS = 2     # Centre + 2 each side = 5 numbers
DEFAULT_NEIGHBORS_CENTER = 17

# ─── Pattern Detection ────────────────────────────────────────────────
COLOR_SEQUENCE_LENGTH = 3
COLOR_SEQUENCE_MIN_RESULTS = 4
DOZEN_WINDOW = 10
DOZEN_HOT_MIN_COUNT = 4             # 40% or more of the window
HOT_NUMBER_WINDOW = 20
HOT_NUMBER_MIN_COUNT = 3
PARITY_WINDOW = 8
PARITY_MIN_NON_ZERO = 6
PARITY_TREND_COUNT = 5

# ─── Probabilistic Scoring ────────────────────────────────────────────
ML_MIN_SAMPLES = 20
ML_WINDOW_SIZE = 50
ML_MARKOV_ORDER = 3
ML_NEIGHBOR_RADIUS = 2
ML_NEIGHBOR_WEIGHT = 0.3
ML_NEIGHBOR_TOP_CANDIDATES = 10
ML_NEIGHBOR_MAX_GROUPS = 3
ML_NEIGHBOR_MIN_PROBABILITY = 0.065  # Just above 5 x 1/37 weighted (0.059)
ML_WEIGHT_MARKOV = 0.4
ML_WEIGHT_BAYESIAN = 0.3
ML_WEIGHT_FREQUENCY = 0.2
ML_WEIGHT_MOMENTUM = 0.1
ML_HOT_PROBABILITY = 0.035
ML_HOT_FREQUENCY = 0.03
ML_COLD_PROBABILITY = 0.020
ML_COLD_LAST_SEEN = 30

# ─── Combined Strategies ──────────────────────────────────────────────
COMBINED_MIN_RESULTS = 25
COMBINED_HOT_COUNT = 5
COMBINED_COLD_COUNT = 2
COMBINED_DOZEN_WINDOW = 15
COMBINED_COLOR_WINDOW = 10
COMBINED_ALLOCATIONS = {
    'straight_up': 50,
    'neighbors': 25,
    'dozens': 15,
    'colors': 10,
}

# ─── Session Storage ──────────────────────────────────────────────────
DATA_DIR = os.environ.get('ROULETTE_INSIGHT_DATA_DIR', os.path.join(BASE_DIR, 'data'))
SESSIONS_DIR = os.path.join(DATA_DIR, 'sessions')
AUTOSAVE_INTERVAL = 5               # Save session file every N results
RESULTS_HISTORY_LIMIT = 100         # Default page size for result listings
RESULT_SOURCES = ('manual', 'import', 'api')

DEFAULT_STRATEGIES = [
    {
        'name': 'Straight-up numbers',
        'type': 'straight_up',
        'numbers': [17, 32, 19, 4, 21, 7, 14],
        'max_attempts': 5,
        'is_active': True,
    },
    {
        'name': 'Neighbours of 17',
        'type': 'neighbors',
        'numbers': [2, 25, 4, 21, 17, 34, 6, 27, 13, 36, 11, 30, 8, 23, 10, 5, 24, 16, 33, 1, 20],
        'max_attempts': 5,
        'is_active': False,
    },
]

DEFAULT_BETTING_PREFERENCES = [
    {'name': 'Straight-up numbers', 'type': 'straight_up', 'enabled': True, 'priority': 5},
    {'name': 'Neighbours', 'type': 'neighbors', 'enabled': True, 'priority': 4},
    {'name': 'Dozens', 'type': 'dozens', 'enabled': True, 'priority': 3},
    {'name': 'Columns', 'type': 'columns', 'enabled': False, 'priority': 2},
    {'name': 'Colours', 'type': 'colors', 'enabled': False, 'priority': 2},
    {'name': 'Odd/Even', 'type': 'parity', 'enabled': False, 'priority': 1},
]

# ─── Server Settings ─────────────────────────────────────────────────
HOST = '0.0.0.0'
PORT = int(os.environ.get('ROULETTE_INSIGHT_PORT', 5050))
DEBUG = False
SECRET_KEY = os.environ.get('ROULETTE_INSIGHT_SECRET_KEY', 'roulette-insight-dev-key')
ASYNC_MODE = 'eventlet'
LOG_LEVEL = 'INFO'

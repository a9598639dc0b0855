"""
Suggestion Generator - picks the number sets shown as suggested bets.

  - straight_up: 7 single numbers (hot + sleeping + frequency fill)
  - neighbors:   the hottest number with 2 wheel neighbours on each side

Both are pure functions of the history, so the same window always yields the
same suggestion.
"""

from config import (
    STRAIGHT_UP_COUNT, STRAIGHT_UP_WINDOW, STRAIGHT_UP_HOT_COUNT,
    STRAIGHT_UP_SLEEPING_WINDOW, STRAIGHT_UP_SLEEPING_COUNT,
    MIN_RESULTS_FOR_STRAIGHT_UP, BALANCED_NUMBERS,
    NEIGHBORS_WINDOW, NEIGHBORS_SUGGESTION_RADIUS, DEFAULT_NEIGHBORS_CENTER,
)
from roulette_insight.analysis.frequency_analyzer import rank_numbers, recent_window
from roulette_insight.analysis.wheel import get_neighbors

SUGGESTION_TYPES = ('straight_up', 'neighbors')


def _add_unique(chosen, candidates, limit):
    for num in candidates:
        if len(chosen) >= limit:
            break
        if num not in chosen:
            chosen.append(num)


def generate_straight_up(history):
    """7 straight-up numbers for the current window."""
    history = list(history)
    if len(history) < MIN_RESULTS_FOR_STRAIGHT_UP:
        return {
            'type': 'straight_up',
            'numbers': list(BALANCED_NUMBERS[:STRAIGHT_UP_COUNT]),
            'window': len(history),
            'reasoning': 'Not enough results yet, showing the balanced set',
        }

    ranking = [num for num, _ in rank_numbers(history, STRAIGHT_UP_WINDOW, exclude_zero=True)]
    hot = ranking[:STRAIGHT_UP_HOT_COUNT]

    seen = set(recent_window(history, STRAIGHT_UP_SLEEPING_WINDOW))
    sleeping = [num for num in range(1, 37) if num not in seen and num not in hot]

    numbers = []
    _add_unique(numbers, hot, STRAIGHT_UP_COUNT)
    _add_unique(numbers, sleeping[:STRAIGHT_UP_SLEEPING_COUNT], STRAIGHT_UP_COUNT)
    _add_unique(numbers, ranking, STRAIGHT_UP_COUNT)
    _add_unique(numbers, BALANCED_NUMBERS, STRAIGHT_UP_COUNT)
    _add_unique(numbers, range(1, 37), STRAIGHT_UP_COUNT)

    return {
        'type': 'straight_up',
        'numbers': numbers,
        'hot': hot,
        'sleeping': sleeping[:STRAIGHT_UP_SLEEPING_COUNT],
        'window': min(len(history), STRAIGHT_UP_WINDOW),
        'reasoning': f'Top {len(hot)} of the last {STRAIGHT_UP_WINDOW} spins plus numbers '
                     f'absent from the last {STRAIGHT_UP_SLEEPING_WINDOW}',
    }


def generate_neighbors(history):
    """The most frequent recent number and its wheel neighbours (5 numbers)."""
    ranking = rank_numbers(list(history), NEIGHBORS_WINDOW, exclude_zero=True)
    center = ranking[0][0] if ranking else DEFAULT_NEIGHBORS_CENTER

    return {
        'type': 'neighbors',
        'center': center,
        'numbers': get_neighbors(center, NEIGHBORS_SUGGESTION_RADIUS),
        'window': min(len(history), NEIGHBORS_WINDOW),
        'reasoning': (f'{center} leads the last {NEIGHBORS_WINDOW} spins'
                      if ranking else f'No results yet, centred on {center}'),
    }


def generate_suggestion(history, kind):
    if kind == 'straight_up':
        return generate_straight_up(history)
    if kind == 'neighbors':
        return generate_neighbors(history)
    raise ValueError(f'Unknown suggestion type {kind!r}. Use one of {", ".join(SUGGESTION_TYPES)}.')

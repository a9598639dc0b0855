"""
Combined Strategies - a balanced betting portfolio built from the scored
predictions and short-window outside-bet trends.

Allocation (percent of the stake):
  50  straight-up on the hot numbers
  25  wheel neighbours of the cold numbers (mean-reversion play)
  15  the dozen leading the last 15 spins
  10  the colour leading the last 10 spins
"""

from config import (
    TOTAL_NUMBERS, PAYOUTS, RED_NUMBERS, BLACK_NUMBERS, DOZENS,
    COMBINED_MIN_RESULTS, COMBINED_HOT_COUNT, COMBINED_COLD_COUNT,
    COMBINED_DOZEN_WINDOW, COMBINED_COLOR_WINDOW, COMBINED_ALLOCATIONS,
    NEIGHBORS_SUGGESTION_RADIUS,
)
from roulette_insight.analysis.wheel import get_side_neighbors


def _allocation(kind, numbers, reasoning):
    return {
        'type': kind,
        'percentage': COMBINED_ALLOCATIONS[kind],
        'numbers': numbers,
        'reasoning': reasoning,
        'expected_payout': PAYOUTS[kind],
    }


def best_dozen(history):
    """Numbers of the dozen leading the recent window. Ties go to the higher dozen."""
    recent = history[-COMBINED_DOZEN_WINDOW:]
    best, best_count = 1, -1
    for dozen, members in DOZENS.items():
        count = sum(1 for n in recent if n in members)
        if count >= best_count:
            best, best_count = dozen, count
    return sorted(DOZENS[best])


def color_trend(history):
    """Numbers of the colour leading the recent window. Black wins ties."""
    recent = history[-COMBINED_COLOR_WINDOW:]
    red = sum(1 for n in recent if n in RED_NUMBERS)
    black = sum(1 for n in recent if n in BLACK_NUMBERS)
    if red > black:
        return sorted(RED_NUMBERS)
    return sorted(BLACK_NUMBERS)


def neighbors_of(numbers):
    collected = []
    for num in numbers:
        for neighbor in get_side_neighbors(num, NEIGHBORS_SUGGESTION_RADIUS):
            if neighbor not in collected:
                collected.append(neighbor)
    return collected


def calculate_expected_return(allocations):
    total = 0.0
    for allocation in allocations:
        probability = len(allocation['numbers']) / TOTAL_NUMBERS
        total += allocation['percentage'] / 100 * probability * allocation['expected_payout']
    return round(total, 4)


def calculate_overall_confidence(predictions):
    if not predictions:
        return 0.5
    top = predictions[:5]
    return round(sum(p['confidence'] for p in top) / len(top), 4)


def generate_optimal_strategy(history, predictions, enabled_types=None):
    """Balanced portfolio for the current history, or None below 25 results.

    Args:
        history: spin numbers, oldest first
        predictions: output of MLAnalyzer.analyze_predictions()
        enabled_types: bet types allowed by the betting preferences
            (None allows every type)
    """
    history = list(history)
    if len(history) < COMBINED_MIN_RESULTS:
        return None

    allocations = []

    hot = [p['number'] for p in predictions if p['category'] == 'hot'][:COMBINED_HOT_COUNT]
    if hot:
        allocations.append(_allocation(
            'straight_up', hot, 'Hot numbers with the highest blended probability'))

    cold = [p['number'] for p in predictions if p['category'] == 'cold'][:COMBINED_COLD_COUNT]
    if cold:
        allocations.append(_allocation(
            'neighbors', neighbors_of(cold), 'Wheel neighbours of cold numbers, expecting reversion'))

    allocations.append(_allocation(
        'dozens', best_dozen(history), f'Dozen leading the last {COMBINED_DOZEN_WINDOW} spins'))
    allocations.append(_allocation(
        'colors', color_trend(history), f'Colour leading the last {COMBINED_COLOR_WINDOW} spins'))

    if enabled_types is not None:
        allocations = [a for a in allocations if a['type'] in enabled_types]

    return {
        'id': f'balanced_{len(history)}',
        'name': 'Balanced combined strategy',
        'description': 'Straight-up, neighbours, dozen and colour bets weighted by recent analysis',
        'allocations': allocations,
        'expected_return': calculate_expected_return(allocations),
        'risk_level': 'medium',
        'confidence': calculate_overall_confidence(predictions),
    }

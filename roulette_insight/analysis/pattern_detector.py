"""
Pattern Detector - short-window trends on colours, dozens, single numbers
and parity. Each detector returns a pattern dict or None; analyze_all()
collects whatever fired, most probable first.
"""

from collections import Counter

from config import (
    COLOR_SEQUENCE_LENGTH, COLOR_SEQUENCE_MIN_RESULTS,
    DOZEN_WINDOW, DOZEN_HOT_MIN_COUNT,
    HOT_NUMBER_WINDOW, HOT_NUMBER_MIN_COUNT, HOT_NUMBER_THRESHOLD, TOTAL_NUMBERS,
    PARITY_WINDOW, PARITY_MIN_NON_ZERO, PARITY_TREND_COUNT,
)
from roulette_insight.analysis.frequency_analyzer import rank_numbers
from roulette_insight.analysis.wheel import get_number_color, get_number_properties

OPPOSITE = {'red': 'black', 'black': 'red', 'even': 'odd', 'odd': 'even'}


def _pattern(pattern_type, sequence, target, probability, confidence, description, suggestion):
    return {
        'type': pattern_type,
        'sequence': sequence,
        'target_outcome': target,
        'probability': round(probability, 4),
        'confidence': confidence,
        'description': description,
        'suggestion': suggestion,
    }


class PatternDetector:
    def __init__(self):
        self.spin_history = []

    def update(self, number):
        self.spin_history.append(number)

    def load_history(self, history):
        self.spin_history = list(history)

    def undo_last(self):
        return self.spin_history.pop() if self.spin_history else None

    def analyze_color_sequence(self):
        """Same colour three times in a row -> bet the other colour."""
        if len(self.spin_history) < COLOR_SEQUENCE_MIN_RESULTS:
            return None

        colors = [get_number_color(n) for n in self.spin_history[-COLOR_SEQUENCE_LENGTH:]]
        if colors[0] == 'green' or any(c != colors[0] for c in colors):
            return None

        target = OPPOSITE[colors[0]]
        return _pattern(
            'color_sequence', colors, target, 0.78, 0.85,
            f'{COLOR_SEQUENCE_LENGTH} {colors[0]} in a row',
            f'Bet on {target}',
        )

    def analyze_dozens(self):
        if len(self.spin_history) < DOZEN_WINDOW:
            return None

        recent = self.spin_history[-DOZEN_WINDOW:]
        dozens = [get_number_properties(n)['dozen'] for n in recent]
        ranked = rank_numbers([d for d in dozens if d is not None])
        if not ranked:
            return None

        dozen, count = ranked[0]
        if count < DOZEN_HOT_MIN_COUNT:
            return None

        low, high = (dozen - 1) * 12 + 1, dozen * 12
        return _pattern(
            'dozen_hot', [f'dozen_{dozen}'], f'dozen_{dozen}',
            min(count / len(recent) * 1.5, 0.85), 0.80,
            f'Dozen {dozen} is hot ({count} of the last {len(recent)})',
            f'Bet on dozen {dozen} ({low}-{high})',
        )

    def analyze_hot_numbers(self):
        if len(self.spin_history) < HOT_NUMBER_WINDOW:
            return None

        expected = HOT_NUMBER_WINDOW / TOTAL_NUMBERS
        ranked = rank_numbers(self.spin_history, HOT_NUMBER_WINDOW)
        number, count = ranked[0]
        if count <= expected * HOT_NUMBER_THRESHOLD or count < HOT_NUMBER_MIN_COUNT:
            return None

        return _pattern(
            'hot_number', [number], number,
            min(count / HOT_NUMBER_WINDOW * 3, 0.75), 0.70,
            f'Number {number} is hot ({count} of the last {HOT_NUMBER_WINDOW})',
            f'Consider a straight-up bet on {number}',
        )

    def detect_parity(self):
        if len(self.spin_history) < PARITY_WINDOW:
            return None

        recent = [n for n in self.spin_history[-PARITY_WINDOW:] if n != 0]
        if len(recent) < PARITY_MIN_NON_ZERO:
            return None

        counts = Counter('even' if n % 2 == 0 else 'odd' for n in recent)
        if counts['even'] < PARITY_TREND_COUNT and counts['odd'] < PARITY_TREND_COUNT:
            return None

        dominant = 'even' if counts['even'] > counts['odd'] else 'odd'
        target = OPPOSITE[dominant]
        return _pattern(
            'parity_trend', [dominant], target, 0.72, 0.75,
            f'{dominant.capitalize()} numbers are trending',
            f'Consider a bet on {target}',
        )

    def analyze_all(self):
        patterns = []
        for detector in (self.analyze_color_sequence, self.analyze_dozens,
                         self.analyze_hot_numbers, self.detect_parity):
            pattern = detector()
            if pattern:
                patterns.append(pattern)

        patterns.sort(key=lambda p: p['probability'], reverse=True)
        return patterns

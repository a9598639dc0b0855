"""
Frequency Analyzer - windowed occurrence counts, hot/cold/sleeping numbers,
outside-bet distributions and a chi-square check against a fair wheel.

Rankings break ties by encounter order: the window is scanned from the
newest result backwards, so between two numbers with the same count the one
seen more recently ranks first.
"""

import numpy as np
from scipy import stats
from collections import Counter

from config import (
    TOTAL_NUMBERS, HOT_NUMBER_THRESHOLD, COLD_NUMBER_THRESHOLD,
    RED_NUMBERS, BLACK_NUMBERS, DOZENS, COLUMNS,
    MIN_SPINS_FOR_CHI_SQUARE, CHI_SQUARE_SIGNIFICANCE,
)


def recent_window(history, window):
    if window is None:
        return list(history)
    if window <= 0:
        return []
    return list(history[-window:])


def rank_numbers(history, window=None, exclude_zero=False):
    """(number, count) pairs by count descending, ties in encounter order."""
    recent = recent_window(history, window)
    counts = Counter()
    first_seen = {}
    for age, num in enumerate(reversed(recent)):
        if exclude_zero and num == 0:
            continue
        counts[num] += 1
        first_seen.setdefault(num, age)

    return sorted(counts.items(), key=lambda item: (-item[1], first_seen[item[0]]))


class FrequencyAnalyzer:
    def __init__(self):
        self.spin_history = []
        self.frequency_counts = Counter()

    def update(self, number):
        self.spin_history.append(number)
        self.frequency_counts[number] += 1

    def load_history(self, history):
        self.spin_history = list(history)
        self.frequency_counts = Counter(self.spin_history)

    def undo_last(self):
        if not self.spin_history:
            return None
        number = self.spin_history.pop()
        self.frequency_counts[number] -= 1
        if self.frequency_counts[number] <= 0:
            del self.frequency_counts[number]
        return number

    def get_window_counts(self, window=None):
        return Counter(recent_window(self.spin_history, window))

    def rank_numbers(self, window=None, exclude_zero=False):
        return rank_numbers(self.spin_history, window, exclude_zero)

    def get_sleeping_numbers(self, window):
        """Numbers 1-36 that did not come up in the recent window, ascending."""
        seen = set(recent_window(self.spin_history, window))
        return [num for num in range(1, 37) if num not in seen]

    def get_chi_square_result(self):
        """Chi-square goodness-of-fit test against uniform distribution."""
        if len(self.spin_history) < MIN_SPINS_FOR_CHI_SQUARE:
            return {'statistic': 0.0, 'p_value': 1.0, 'significant': False}

        observed = np.array([self.frequency_counts.get(i, 0) for i in range(TOTAL_NUMBERS)])
        expected = np.full(TOTAL_NUMBERS, len(self.spin_history) / TOTAL_NUMBERS)

        chi2, p_value = stats.chisquare(observed, expected)
        return {
            'statistic': float(chi2),
            'p_value': float(p_value),
            'significant': bool(p_value < CHI_SQUARE_SIGNIFICANCE)
        }

    def _ratio_entries(self):
        total = len(self.spin_history)
        expected = total / TOTAL_NUMBERS
        entries = []
        for num in range(TOTAL_NUMBERS):
            count = self.frequency_counts.get(num, 0)
            entries.append({
                'number': num,
                'count': count,
                'ratio': round(count / expected, 2),
                'frequency': round(count / total, 4)
            })
        return entries

    def get_hot_numbers(self, top_n=5):
        """Numbers appearing significantly more than expected."""
        if not self.spin_history:
            return []

        hot = [e for e in self._ratio_entries() if e['ratio'] >= HOT_NUMBER_THRESHOLD]
        hot.sort(key=lambda x: x['ratio'], reverse=True)
        return hot[:top_n]

    def get_cold_numbers(self, top_n=5):
        """Numbers appearing significantly less than expected."""
        if not self.spin_history:
            return []

        cold = [e for e in self._ratio_entries() if e['ratio'] <= COLD_NUMBER_THRESHOLD]
        cold.sort(key=lambda x: x['ratio'])
        return cold[:top_n]

    def get_color_distribution(self):
        """Analyze red/black/green distribution."""
        if not self.spin_history:
            return {'red': 0, 'black': 0, 'green': 0,
                    'red_count': 0, 'black_count': 0, 'green_count': 0}

        red = sum(1 for n in self.spin_history if n in RED_NUMBERS)
        black = sum(1 for n in self.spin_history if n in BLACK_NUMBERS)
        green = sum(1 for n in self.spin_history if n == 0)
        total = len(self.spin_history)

        return {
            'red': round(red / total, 4),
            'black': round(black / total, 4),
            'green': round(green / total, 4),
            'red_count': red,
            'black_count': black,
            'green_count': green
        }

    def _group_distribution(self, groups):
        total = len(self.spin_history)
        distribution = {}
        for key, members in groups.items():
            count = sum(self.frequency_counts.get(n, 0) for n in members)
            distribution[key] = {
                'count': count,
                'share': round(count / total, 4) if total else 0,
            }
        return distribution

    def get_dozen_distribution(self):
        return self._group_distribution(DOZENS)

    def get_column_distribution(self):
        return self._group_distribution(COLUMNS)

    def get_summary(self):
        return {
            'total_spins': len(self.spin_history),
            'chi_square': self.get_chi_square_result(),
            'hot_numbers': self.get_hot_numbers(),
            'cold_numbers': self.get_cold_numbers(),
            'color_distribution': self.get_color_distribution(),
            'dozen_distribution': self.get_dozen_distribution(),
            'column_distribution': self.get_column_distribution(),
        }

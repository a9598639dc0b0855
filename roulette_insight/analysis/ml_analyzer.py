"""
Probabilistic number scoring - blends four per-number distributions into
one ranking:

  - order-3 Markov transitions over the whole history
  - Bayesian update of the uniform prior from recent-window features
  - Laplace-smoothed frequency
  - momentum (recent half vs older half of the window)

Each component is a distribution over the 37 numbers; the blend is
normalised again so probabilities compare against the uniform 1/37.
"""

import math
import numpy as np
from collections import Counter

from config import (
    TOTAL_NUMBERS, ML_MIN_SAMPLES, ML_WINDOW_SIZE, ML_MARKOV_ORDER,
    ML_NEIGHBOR_RADIUS, ML_NEIGHBOR_WEIGHT, ML_NEIGHBOR_TOP_CANDIDATES,
    ML_NEIGHBOR_MAX_GROUPS, ML_NEIGHBOR_MIN_PROBABILITY,
    ML_WEIGHT_MARKOV, ML_WEIGHT_BAYESIAN, ML_WEIGHT_FREQUENCY, ML_WEIGHT_MOMENTUM,
    ML_HOT_PROBABILITY, ML_HOT_FREQUENCY, ML_COLD_PROBABILITY, ML_COLD_LAST_SEEN,
)
from roulette_insight.analysis.wheel import get_neighbors, get_side_neighbors

UNIFORM = 1.0 / TOTAL_NUMBERS


def _normalize(values):
    total = values.sum()
    if total <= 0:
        return np.full(TOTAL_NUMBERS, UNIFORM)
    return values / total


class MLAnalyzer:
    def __init__(self):
        self.spin_history = []

    def update(self, number):
        self.spin_history.append(number)

    def load_history(self, history):
        self.spin_history = list(history)

    def undo_last(self):
        return self.spin_history.pop() if self.spin_history else None

    # ─── Features ────────────────────────────────────────────────────

    def extract_features(self):
        """Feature arrays of shape (37,) over the recent window."""
        recent = self.spin_history[-ML_WINDOW_SIZE:]
        n = len(recent)
        counts = Counter(recent)

        last_seen = np.full(TOTAL_NUMBERS, float(n))
        for idx, num in enumerate(recent):
            last_seen[num] = n - idx - 1

        frequency = np.array([counts.get(i, 0) for i in range(TOTAL_NUMBERS)], dtype=np.float64)
        if n:
            frequency /= n

        momentum = np.zeros(TOTAL_NUMBERS)
        if n >= 10:
            recent_half = recent[-math.ceil(n / 2):]
            older_half = recent[:n // 2]
            recent_counts = Counter(recent_half)
            older_counts = Counter(older_half)
            for i in range(TOTAL_NUMBERS):
                momentum[i] = (recent_counts.get(i, 0) / len(recent_half)
                               - older_counts.get(i, 0) / len(older_half))

        last_ten = set(recent[-10:])
        neighbor_activity = np.zeros(TOTAL_NUMBERS)
        for i in range(TOTAL_NUMBERS):
            sides = get_side_neighbors(i, ML_NEIGHBOR_RADIUS)
            neighbor_activity[i] = sum(1 for s in sides if s in last_ten) / len(sides)

        return {
            'last_seen': last_seen,
            'frequency': frequency,
            'momentum': momentum,
            'neighbor_activity': neighbor_activity,
            'entropy': self._entropy(counts, n),
        }

    @staticmethod
    def _entropy(counts, total):
        """Shannon entropy of the window, 1.0 = as spread as 37 pockets allow."""
        if total == 0:
            return 0.0
        probs = np.array(list(counts.values()), dtype=np.float64) / total
        return float(-(probs * np.log2(probs)).sum() / math.log2(TOTAL_NUMBERS))

    # ─── Component distributions ─────────────────────────────────────

    def markov_probabilities(self):
        history = self.spin_history
        if len(history) < ML_MARKOV_ORDER + 1:
            return np.full(TOTAL_NUMBERS, UNIFORM)

        current = history[-ML_MARKOV_ORDER:]
        transitions = np.zeros(TOTAL_NUMBERS)
        for i in range(ML_MARKOV_ORDER, len(history)):
            if history[i - ML_MARKOV_ORDER:i] == current:
                transitions[history[i]] += 1

        if transitions.sum() == 0:
            return np.full(TOTAL_NUMBERS, UNIFORM)
        return transitions / transitions.sum()

    @staticmethod
    def bayesian_probabilities(features):
        likelihood = np.ones(TOTAL_NUMBERS)
        freq = features['frequency']
        momentum = features['momentum']

        likelihood[freq > UNIFORM] *= 1.2
        likelihood[freq < 0.020] *= 0.8
        likelihood[momentum > 0.5] *= 1.15
        likelihood[momentum < -0.5] *= 0.85
        likelihood[features['neighbor_activity'] > 0.3] *= 1.1

        return _normalize(likelihood * UNIFORM)

    def frequency_probabilities(self):
        recent = self.spin_history[-ML_WINDOW_SIZE:]
        counts = Counter(recent)
        smoothed = np.array([counts.get(i, 0) + 1 for i in range(TOTAL_NUMBERS)], dtype=np.float64)
        return _normalize(smoothed)

    @staticmethod
    def momentum_probabilities(features):
        return _normalize((features['momentum'] + 1.0) / 2.0)

    # ─── Predictions ─────────────────────────────────────────────────

    def get_number_probabilities(self):
        """Blended distribution plus per-number confidence and features."""
        features = self.extract_features()
        components = np.vstack([
            self.markov_probabilities(),
            self.bayesian_probabilities(features),
            self.frequency_probabilities(),
            self.momentum_probabilities(features),
        ])
        weights = np.array([ML_WEIGHT_MARKOV, ML_WEIGHT_BAYESIAN,
                            ML_WEIGHT_FREQUENCY, ML_WEIGHT_MOMENTUM])

        probabilities = _normalize(weights @ components)

        # Agreement between components, measured relative to uniform
        relative = components * TOTAL_NUMBERS
        confidence = np.clip(1.0 - 2.0 * relative.var(axis=0), 0.0, 1.0)

        return probabilities, confidence, components, features

    def analyze_predictions(self):
        if len(self.spin_history) < ML_MIN_SAMPLES:
            return []

        probabilities, confidence, components, features = self.get_number_probabilities()
        markov = components[0]

        predictions = []
        for num in range(TOTAL_NUMBERS):
            predictions.append({
                'number': num,
                'probability': round(float(probabilities[num]), 5),
                'confidence': round(float(confidence[num]), 4),
                'category': self._classify(num, probabilities[num], features),
                'reasoning': self._reasoning(num, features, markov[num]),
            })

        predictions.sort(key=lambda p: p['probability'], reverse=True)
        return predictions

    @staticmethod
    def _classify(num, probability, features):
        if probability > ML_HOT_PROBABILITY and features['frequency'][num] > ML_HOT_FREQUENCY:
            return 'hot'
        if probability < ML_COLD_PROBABILITY and features['last_seen'][num] > ML_COLD_LAST_SEEN:
            return 'cold'
        return 'neutral'

    @staticmethod
    def _reasoning(num, features, markov_prob):
        reasoning = []
        if features['frequency'][num] > ML_HOT_FREQUENCY:
            reasoning.append(f"High frequency: {features['frequency'][num] * 100:.1f}%")
        if features['last_seen'][num] > 25:
            reasoning.append(f"Not seen for {int(features['last_seen'][num])} spins")
        if features['momentum'][num] > 0.3:
            reasoning.append('Rising recent trend')
        if features['neighbor_activity'][num] > 0.3:
            reasoning.append('Wheel neighbours active')
        if markov_prob > 0.04:
            reasoning.append('Sequence pattern detected')
        if not reasoning:
            reasoning.append('Baseline statistics')
        return reasoning

    def analyze_neighbors(self, predictions=None):
        """Up to 3 five-number wheel groups around the strongest candidates."""
        if predictions is None:
            predictions = self.analyze_predictions()
        if not predictions:
            return []

        by_number = {p['number']: p['probability'] for p in predictions}
        groups = []
        for pred in predictions[:ML_NEIGHBOR_TOP_CANDIDATES]:
            center = pred['number']
            sides = get_side_neighbors(center, ML_NEIGHBOR_RADIUS)
            total = pred['probability'] + ML_NEIGHBOR_WEIGHT * sum(by_number.get(s, 0) for s in sides)

            if total > ML_NEIGHBOR_MIN_PROBABILITY:
                groups.append({
                    'number': center,
                    'neighbors': sorted(get_neighbors(center, ML_NEIGHBOR_RADIUS)),
                    'total_probability': round(total, 5),
                    'reasoning': f"Centre {center} ({pred['probability'] * 100:.1f}%) plus wheel neighbours",
                })

        groups.sort(key=lambda g: g['total_probability'], reverse=True)
        return groups[:ML_NEIGHBOR_MAX_GROUPS]

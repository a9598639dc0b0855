"""
Analysis Engine - keeps every analyzer in step with the session history and
builds the dashboard snapshot (statistics, patterns, suggestions, scored
predictions and the combined strategy) from it.
"""

import logging

from roulette_insight.analysis.frequency_analyzer import FrequencyAnalyzer
from roulette_insight.analysis.pattern_detector import PatternDetector
from roulette_insight.analysis.ml_analyzer import MLAnalyzer
from roulette_insight.analysis.suggestions import (
    generate_straight_up, generate_neighbors, generate_suggestion,
)
from roulette_insight.analysis.combined_strategies import generate_optimal_strategy
from roulette_insight.analysis.wheel import get_number_properties

logger = logging.getLogger(__name__)

TOP_PREDICTIONS = 10


class AnalysisEngine:
    def __init__(self):
        self.spin_history = []
        self.frequency = FrequencyAnalyzer()
        self.patterns = PatternDetector()
        self.ml = MLAnalyzer()

    @property
    def _analyzers(self):
        return (self.frequency, self.patterns, self.ml)

    def update(self, number):
        self.spin_history.append(number)
        for analyzer in self._analyzers:
            analyzer.update(number)

    def load_history(self, history):
        self.spin_history = list(history)
        for analyzer in self._analyzers:
            analyzer.load_history(self.spin_history)
        logger.info('[Engine] Loaded %d spins', len(self.spin_history))

    def undo_last(self):
        if not self.spin_history:
            return None
        number = self.spin_history.pop()
        for analyzer in self._analyzers:
            analyzer.undo_last()
        return number

    def reset(self):
        self.load_history([])

    def get_suggestion(self, kind):
        return generate_suggestion(self.spin_history, kind)

    def get_patterns(self):
        return self.patterns.analyze_all()

    def get_snapshot(self, enabled_types=None):
        """Everything the dashboard panels render, computed from the current history."""
        predictions = self.ml.analyze_predictions()
        last = self.spin_history[-1] if self.spin_history else None

        return {
            'total_spins': len(self.spin_history),
            'last_numbers': list(reversed(self.spin_history[-10:])),
            'last_result': get_number_properties(last) if last is not None else None,
            'statistics': self.frequency.get_summary(),
            'patterns': self.get_patterns(),
            'suggestions': {
                'straight_up': generate_straight_up(self.spin_history),
                'neighbors': generate_neighbors(self.spin_history),
            },
            'predictions': predictions[:TOP_PREDICTIONS],
            'ml_neighbors': self.ml.analyze_neighbors(predictions),
            'combined_strategy': generate_optimal_strategy(
                self.spin_history, predictions, enabled_types),
        }

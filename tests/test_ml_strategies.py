"""
Unit tests for MLAnalyzer, the combined strategy builder and the
AnalysisEngine snapshot.
"""
import numpy as np
import pytest

from config import TOTAL_NUMBERS, COMBINED_ALLOCATIONS
from roulette_insight.analysis.ml_analyzer import MLAnalyzer
from roulette_insight.analysis.combined_strategies import (
    best_dozen, color_trend, neighbors_of, calculate_expected_return,
    calculate_overall_confidence, generate_optimal_strategy,
)
from roulette_insight.analysis.engine import AnalysisEngine

# 7 dominates the older half of the window
HOT_SEVEN = [7] * 10 + list(range(1, 37))
# 1-10 repeated, so the last three spins always led to 1 before
CYCLE = list(range(1, 11)) * 5


def _ml(history):
    ml = MLAnalyzer()
    ml.load_history(history)
    return ml


# ═══════════════════════════════════════════════════════════════
# MLAnalyzer
# ═══════════════════════════════════════════════════════════════

class TestMLAnalyzer:
    def test_needs_twenty_results(self):
        ml = _ml(list(range(19)))
        assert ml.analyze_predictions() == []
        assert ml.analyze_neighbors() == []

    def test_feature_shapes(self, sample_data):
        features = _ml(sample_data).extract_features()
        for key in ('last_seen', 'frequency', 'momentum', 'neighbor_activity'):
            assert features[key].shape == (TOTAL_NUMBERS,)
        assert abs(features['frequency'].sum() - 1.0) < 1e-9
        assert 0.0 < features['entropy'] <= 1.0

    def test_components_are_distributions(self, sample_data):
        probabilities, confidence, components, _ = _ml(sample_data).get_number_probabilities()
        assert components.shape == (4, TOTAL_NUMBERS)
        assert np.allclose(components.sum(axis=1), 1.0)
        assert abs(probabilities.sum() - 1.0) < 1e-9
        assert ((confidence >= 0) & (confidence <= 1)).all()

    def test_predictions_cover_every_number(self, sample_data):
        predictions = _ml(sample_data).analyze_predictions()
        assert len(predictions) == TOTAL_NUMBERS
        assert sorted(p['number'] for p in predictions) == list(range(37))
        assert abs(sum(p['probability'] for p in predictions) - 1.0) < 1e-3

    def test_predictions_sorted(self, sample_data):
        probs = [p['probability'] for p in _ml(sample_data).analyze_predictions()]
        assert probs == sorted(probs, reverse=True)

    def test_prediction_fields(self, sample_data):
        for pred in _ml(sample_data).analyze_predictions():
            assert pred['category'] in ('hot', 'cold', 'neutral')
            assert 0 <= pred['confidence'] <= 1
            assert pred['reasoning']

    def test_hot_number_ranks_first(self):
        top = _ml(HOT_SEVEN).analyze_predictions()[0]
        assert top['number'] == 7
        assert top['category'] == 'hot'
        assert any('High frequency' in r for r in top['reasoning'])

    def test_sequence_leads_ranking(self):
        top = _ml(CYCLE).analyze_predictions()[0]
        assert top['number'] == 1
        assert 'Sequence pattern detected' in top['reasoning']

    def test_unseen_numbers_are_cold(self):
        predictions = {p['number']: p for p in _ml(CYCLE).analyze_predictions()}
        assert predictions[20]['category'] == 'cold'
        assert predictions[0]['category'] == 'cold'

    def test_is_deterministic(self, sample_data):
        ml = _ml(sample_data)
        assert ml.analyze_predictions() == ml.analyze_predictions()

    def test_neighbor_groups(self):
        groups = _ml(HOT_SEVEN).analyze_neighbors()
        assert 1 <= len(groups) <= 3
        assert groups[0]['number'] == 7
        assert groups[0]['neighbors'] == [7, 12, 18, 28, 29]
        totals = [g['total_probability'] for g in groups]
        assert totals == sorted(totals, reverse=True)
        assert all(t > 0.065 for t in totals)

    def test_update_and_undo(self):
        ml = _ml([1, 2])
        ml.update(3)
        assert ml.spin_history == [1, 2, 3]
        assert ml.undo_last() == 3
        assert ml.spin_history == [1, 2]


# ═══════════════════════════════════════════════════════════════
# Combined strategies
# ═══════════════════════════════════════════════════════════════

class TestCombinedStrategies:
    def test_needs_25_results(self):
        history = HOT_SEVEN[:24]
        assert generate_optimal_strategy(history, _ml(history).analyze_predictions()) is None

    def test_allocations(self):
        predictions = _ml(HOT_SEVEN).analyze_predictions()
        strategy = generate_optimal_strategy(HOT_SEVEN, predictions)
        by_type = {a['type']: a for a in strategy['allocations']}

        assert by_type['straight_up']['numbers'] == [7]
        assert by_type['dozens']['numbers'] == list(range(25, 37))
        assert 28 in by_type['colors']['numbers']
        assert all(a['percentage'] == COMBINED_ALLOCATIONS[a['type']] for a in strategy['allocations'])
        assert strategy['risk_level'] == 'medium'
        assert strategy['id'] == f'balanced_{len(HOT_SEVEN)}'

    def test_cold_numbers_add_neighbors(self):
        predictions = _ml(CYCLE).analyze_predictions()
        strategy = generate_optimal_strategy(CYCLE, predictions)
        types = [a['type'] for a in strategy['allocations']]
        assert types == ['straight_up', 'neighbors', 'dozens', 'colors']

    def test_enabled_types_filter(self):
        predictions = _ml(HOT_SEVEN).analyze_predictions()
        strategy = generate_optimal_strategy(HOT_SEVEN, predictions, enabled_types={'dozens'})
        assert [a['type'] for a in strategy['allocations']] == ['dozens']
        assert strategy['expected_return'] == calculate_expected_return(strategy['allocations'])

    def test_best_dozen_tie_goes_to_higher(self):
        assert best_dozen([1, 13]) == list(range(13, 25))
        assert best_dozen([]) == list(range(25, 37))

    def test_color_trend(self):
        assert 1 in color_trend([1, 3, 2])
        assert 2 in color_trend([1, 2])

    def test_neighbors_of_skips_duplicates(self):
        collected = neighbors_of([17, 25])
        assert len(collected) == len(set(collected))
        assert 17 in collected
        assert 25 in collected

    def test_expected_return(self):
        allocations = [{'percentage': 50, 'numbers': [1], 'expected_payout': 35}]
        assert calculate_expected_return(allocations) == pytest.approx(0.473, abs=1e-4)
        assert calculate_expected_return([]) == 0.0

    def test_overall_confidence(self):
        assert calculate_overall_confidence([]) == 0.5
        preds = [{'confidence': 0.2}, {'confidence': 0.4}]
        assert calculate_overall_confidence(preds) == pytest.approx(0.3)


# ═══════════════════════════════════════════════════════════════
# AnalysisEngine
# ═══════════════════════════════════════════════════════════════

class TestAnalysisEngine:
    def test_empty_snapshot(self):
        snapshot = AnalysisEngine().get_snapshot()
        assert snapshot['total_spins'] == 0
        assert snapshot['last_result'] is None
        assert snapshot['predictions'] == []
        assert snapshot['ml_neighbors'] == []
        assert snapshot['combined_strategy'] is None
        assert snapshot['suggestions']['neighbors']['center'] == 17

    def test_snapshot_with_history(self, sample_data):
        engine = AnalysisEngine()
        engine.load_history(sample_data)
        snapshot = engine.get_snapshot()
        assert snapshot['total_spins'] == len(sample_data)
        assert snapshot['last_numbers'] == list(reversed(sample_data[-10:]))
        assert snapshot['last_result']['number'] == sample_data[-1]
        assert len(snapshot['predictions']) == 10
        assert len(snapshot['suggestions']['straight_up']['numbers']) == 7
        assert snapshot['combined_strategy'] is not None

    def test_snapshot_is_repeatable(self, sample_data):
        engine = AnalysisEngine()
        engine.load_history(sample_data)
        assert engine.get_snapshot() == engine.get_snapshot()

    def test_update_matches_load(self, sample_data):
        incremental = AnalysisEngine()
        for n in sample_data:
            incremental.update(n)
        loaded = AnalysisEngine()
        loaded.load_history(sample_data)
        assert incremental.get_snapshot() == loaded.get_snapshot()

    def test_undo_restores_previous_state(self, sample_data):
        engine = AnalysisEngine()
        engine.load_history(sample_data[:-1])
        before = engine.get_snapshot()
        engine.update(sample_data[-1])
        assert engine.undo_last() == sample_data[-1]
        assert engine.get_snapshot() == before

    def test_undo_on_empty(self):
        assert AnalysisEngine().undo_last() is None

    def test_reset(self, sample_data):
        engine = AnalysisEngine()
        engine.load_history(sample_data)
        engine.reset()
        assert engine.spin_history == []
        assert engine.ml.spin_history == []

    def test_suggestion_dispatch(self, sample_data):
        engine = AnalysisEngine()
        engine.load_history(sample_data)
        assert engine.get_suggestion('neighbors')['type'] == 'neighbors'
        with pytest.raises(ValueError):
            engine.get_suggestion('splits')

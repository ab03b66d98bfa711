"""
Tests for the service boundary.

Tests greet_engine, list_strategies, run_game, run_tournament and
run_evolution for:
- Response shapes and display names
- Defaults taken from settings.IPD_ENGINE
- Validation before any simulation work
"""
import pytest

from apps.ipd.errors import InvalidParameter, MalformedPayoff, UnknownStrategyId
from apps.ipd.services import engine
from apps.ipd.strategies import CATALOG_ORDER


class TestGreetAndCatalog:
    """Tests for greet_engine and list_strategies."""

    def test_greet(self):
        assert engine.greet_engine() == "Core Engine: v0.4.0 (Custom Payoff Ready)"

    def test_list_strategies(self):
        strategies = engine.list_strategies()
        assert [s['id'] for s in strategies] == list(CATALOG_ORDER)
        assert strategies[0] == {
            'id': 'tit_for_tat',
            'name': 'Tit-For-Tat',
            'description': strategies[0]['description'],
        }


class TestRunGame:
    """Tests for run_game."""

    def test_shape(self):
        data = engine.run_game('tit_for_tat', 'always_defect', rounds=3, seed=1)
        assert data['player_name'] == 'Tit-For-Tat'
        assert data['opponent_name'] == 'Always Defect'
        assert data['rounds'] == [
            ['Cooperate', 'Defect'],
            ['Defect', 'Defect'],
            ['Defect', 'Defect'],
        ]
        assert (data['player_score'], data['opponent_score']) == (2, 7)

    def test_defaults_from_settings(self, settings):
        settings.IPD_ENGINE = {'DEFAULT_ROUNDS': 4}
        data = engine.run_game('always_cooperate', 'always_cooperate')
        assert len(data['rounds']) == 4
        assert data['player_score'] == 12

    def test_default_payoff_from_settings(self, settings):
        settings.IPD_ENGINE = {'DEFAULT_PAYOFF': {'t': 8, 'r': 4, 'p': 2, 's': 0}}
        data = engine.run_game('always_defect', 'always_cooperate', rounds=2)
        assert data['player_score'] == 16

    def test_custom_payoff(self):
        data = engine.run_game(
            'always_defect', 'always_cooperate', rounds=5,
            payoff={'t': 6, 'r': 4, 'p': 2, 's': -1},
        )
        assert (data['player_score'], data['opponent_score']) == (30, -5)

    def test_seeded_runs_repeat(self):
        first = engine.run_game('random', 'joss', rounds=30, noise=0.2, seed=5)
        second = engine.run_game('random', 'joss', rounds=30, noise=0.2, seed=5)
        assert first == second

    def test_alias(self):
        data = engine.run_game('generous_tft', 'pavlov', rounds=2, seed=1)
        assert data['player_id'] == 'generous_tit_for_tat'

    def test_unknown_strategy(self):
        with pytest.raises(UnknownStrategyId, match='tester'):
            engine.run_game('tit_for_tat', 'tester')

    def test_invalid_rounds(self):
        with pytest.raises(InvalidParameter, match='rounds'):
            engine.run_game('tit_for_tat', 'pavlov', rounds=0)

    def test_malformed_payoff(self):
        with pytest.raises(MalformedPayoff):
            engine.run_game('tit_for_tat', 'pavlov', payoff={'t': 'lots'})

    def test_upper_case_payoff_keys(self):
        data = engine.run_game(
            'always_defect', 'always_cooperate', rounds=2,
            payoff={'T': 10, 'R': 3, 'P': 1, 'S': 0},
        )
        assert data['player_score'] == 20

    def test_no_warnings_for_default_payoff(self):
        data = engine.run_game('tit_for_tat', 'pavlov', rounds=2)
        assert data['warnings'] == []

    def test_warnings_reported_to_caller(self):
        data = engine.run_game(
            'tit_for_tat', 'pavlov', rounds=2,
            payoff={'t': 2, 'r': 3, 'p': 1, 's': 0},
        )
        assert data['warnings'] == ['T (2) should exceed R (3)']

    def test_non_dilemma_payoff_warns(self, caplog):
        with caplog.at_level('WARNING', logger='apps.ipd'):
            engine.run_game(
                'tit_for_tat', 'pavlov', rounds=2,
                payoff={'t': 1, 'r': 2, 'p': 3, 's': 4},
            )
        assert "not a prisoner's dilemma" in caplog.text


class TestRunTournament:
    """Tests for run_tournament."""

    def test_shape(self):
        data = engine.run_tournament(rounds=5, noise=0.05, seed=9)
        assert len(data['ranking']) == 8
        names = [name for name, _ in data['ranking']]
        assert 'Tit-For-Tat' in names and 'Joss' in names
        scores = [score for _, score in data['ranking']]
        assert scores == sorted(scores, reverse=True)
        assert [s['name'] for s in data['standings']] == names
        assert all(s['matches_played'] == 7 for s in data['standings'])
        assert data['warnings'] == []

    def test_warnings_reported_to_caller(self):
        data = engine.run_tournament(rounds=2, payoff={'t': 10})
        assert data['warnings'] == ['2R (6) should exceed T + S (10)']

    def test_invalid_noise(self):
        with pytest.raises(InvalidParameter, match='noise'):
            engine.run_tournament(noise=0.9)


class TestRunEvolution:
    """Tests for run_evolution."""

    def test_shape(self):
        data = engine.run_evolution(rounds=5, generations=4, seed=2)
        assert [g['gen_number'] for g in data] == [1, 2, 3, 4]
        first = data[0]['populations']
        assert [name for name, _ in first][0] == 'Tit-For-Tat'
        assert len(first) == 8
        assert all(sum(count for _, count in g['populations']) == 40 for g in data)

    def test_default_population_from_settings(self, settings):
        settings.IPD_ENGINE = {'DEFAULT_POPULATION': 2}
        data = engine.run_evolution(rounds=3, generations=1)
        assert sum(count for _, count in data[0]['populations']) == 16

    def test_mapping_population(self):
        data = engine.run_evolution(
            rounds=10,
            generations=1,
            initial_populations={'always_defect': 2, 'always_cooperate': 2},
        )
        populations = dict(data[0]['populations'])
        assert populations['Always Defect'] == 3
        assert populations['Always Cooperate'] == 1
        assert populations['Pavlov'] == 0

    def test_wrong_population_length(self):
        with pytest.raises(InvalidParameter, match='initial_populations'):
            engine.run_evolution(initial_populations=[1, 2, 3])

    def test_invalid_generations(self):
        with pytest.raises(InvalidParameter, match='generations'):
            engine.run_evolution(generations=0)


class TestPayoffWarnings:
    """Tests for payoff_warnings."""

    def test_default_matrix(self):
        assert engine.payoff_warnings() == []

    def test_violations_listed(self):
        assert engine.payoff_warnings({'t': 1, 'r': 2, 'p': 3, 's': 4}) == [
            'T (1) should exceed R (2)',
            'R (2) should exceed P (3)',
            'P (3) should exceed S (4)',
            '2R (4) should exceed T + S (5)',
        ]

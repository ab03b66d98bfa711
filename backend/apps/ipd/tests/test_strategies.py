"""
Tests for the strategy catalog.

Tests the Action type, StrategyRegistry and every built-in strategy for:
- Totality of decide() over arbitrary histories
- First-round behavior
- History-derived "state" (grim trigger latch, Pavlov win-stay/lose-shift)
- Probabilistic branches driven by an injected generator
"""
import random

import pytest

from apps.ipd.errors import UnknownStrategyId
from apps.ipd.matches.payoff import PayoffMatrix
from apps.ipd.strategies import (
    CATALOG_ORDER,
    Action,
    DecisionContext,
    StrategyRegistry,
    get_strategy,
    list_strategies,
    register_strategy,
)

C = Action.COOPERATE
D = Action.DEFECT


class TestAction:
    """Tests for the Action enum."""

    def test_exactly_two_values(self):
        assert set(Action) == {C, D}

    def test_flip(self):
        assert C.flip() is D
        assert D.flip() is C

    def test_values_are_display_strings(self):
        assert C.value == 'Cooperate'
        assert str(D) == 'Defect'


class TestStrategyRegistry:
    """Tests for StrategyRegistry."""

    def test_catalog_order(self):
        assert CATALOG_ORDER == (
            'tit_for_tat',
            'always_defect',
            'grim_trigger',
            'always_cooperate',
            'random',
            'pavlov',
            'generous_tit_for_tat',
            'joss',
        )
        assert [s.id for s in list_strategies()][:8] == list(CATALOG_ORDER)

    def test_display_names(self):
        names = [get_strategy(s).name for s in CATALOG_ORDER]
        assert names == [
            'Tit-For-Tat',
            'Always Defect',
            'Grim Trigger',
            'Always Cooperate',
            'Random',
            'Pavlov',
            'Generous TFT',
            'Joss',
        ]

    def test_alias_resolves(self):
        assert get_strategy('generous_tft').id == 'generous_tit_for_tat'

    def test_unknown_id_raises(self):
        with pytest.raises(UnknownStrategyId, match="no_such_strategy"):
            get_strategy('no_such_strategy')

    def test_non_string_id_raises(self):
        with pytest.raises(UnknownStrategyId):
            get_strategy(3)

    def test_find_returns_none_for_unknown(self):
        assert StrategyRegistry.find('nope') is None

    def test_duplicate_registration_raises(self):
        with pytest.raises(ValueError, match="already registered"):
            @register_strategy('tit_for_tat', 'Duplicate')
            def duplicate(own, opponent, context):
                return C

    def test_register_custom_strategy(self):
        @register_strategy('alternator', 'Alternator', 'Alternates C and D.')
        def alternator(own, opponent, context):
            return C if len(own) % 2 == 0 else D

        try:
            strategy = get_strategy('alternator')
            assert strategy.name == 'Alternator'
            assert strategy.decide((C,), (C,), None) is D
            assert 'alternator' not in CATALOG_ORDER
        finally:
            StrategyRegistry.unregister('alternator')

        assert StrategyRegistry.find('alternator') is None

    def test_to_dict(self):
        data = get_strategy('pavlov').to_dict()
        assert data['id'] == 'pavlov'
        assert data['name'] == 'Pavlov'
        assert data['description']


class TestDecideIsTotal:
    """Every strategy returns exactly one Action for every history pair."""

    @pytest.mark.parametrize('strategy_id', CATALOG_ORDER)
    def test_returns_action(self, strategy_id, history_pairs, default_payoff):
        strategy = get_strategy(strategy_id)
        context = DecisionContext(payoff=default_payoff, rng=random.Random(7))
        for own, opponent in history_pairs:
            assert strategy.decide(own, opponent, context) in (C, D)


class TestUnconditionalStrategies:
    """Tests for always_cooperate and always_defect."""

    def test_always_cooperate_never_defects(self, history_pairs, context):
        strategy = get_strategy('always_cooperate')
        assert all(
            strategy.decide(own, opp, context) is C for own, opp in history_pairs
        )

    def test_always_defect_never_cooperates(self, history_pairs, context):
        strategy = get_strategy('always_defect')
        assert all(
            strategy.decide(own, opp, context) is D for own, opp in history_pairs
        )


class TestTitForTat:
    """Tests for tit_for_tat."""

    @pytest.fixture
    def strategy(self):
        return get_strategy('tit_for_tat')

    def test_cooperates_first(self, strategy, context):
        assert strategy.decide((), (), context) is C

    def test_mirrors_last_opponent_action(self, strategy, history_pairs, context):
        for own, opponent in history_pairs:
            if opponent:
                assert strategy.decide(own, opponent, context) is opponent[-1]

    def test_forgives_after_opponent_returns(self, strategy, context):
        assert strategy.decide((C, D), (D, C), context) is C


class TestGrimTrigger:
    """Tests for grim_trigger."""

    @pytest.fixture
    def strategy(self):
        return get_strategy('grim_trigger')

    def test_cooperates_first(self, strategy, context):
        assert strategy.decide((), (), context) is C

    def test_latches_on_any_defection(self, strategy, history_pairs, context):
        for own, opponent in history_pairs:
            expected = D if D in opponent else C
            assert strategy.decide(own, opponent, context) is expected

    def test_never_forgives(self, strategy, context):
        opponent = (D,) + (C,) * 20
        assert strategy.decide((C,) * 21, opponent, context) is D


class TestPavlov:
    """Tests for pavlov (win-stay, lose-shift)."""

    @pytest.fixture
    def strategy(self):
        return get_strategy('pavlov')

    def test_cooperates_first(self, strategy, context):
        assert strategy.decide((), (), context) is C

    def test_stays_after_reward(self, strategy, context):
        # (C, C) pays R = 3
        assert strategy.decide((C,), (C,), context) is C

    def test_shifts_after_sucker(self, strategy, context):
        # (C, D) pays S = 0
        assert strategy.decide((C,), (D,), context) is D

    def test_stays_after_temptation(self, strategy, context):
        # (D, C) pays T = 5
        assert strategy.decide((D,), (C,), context) is D

    def test_shifts_after_punishment(self, strategy, context):
        # (D, D) pays P = 1
        assert strategy.decide((D,), (D,), context) is C

    def test_cooperates_without_opponent_history(self, strategy, context):
        assert strategy.decide((D,), (), context) is C

    def test_only_last_round_matters(self, strategy, context):
        assert strategy.decide((D, D, C), (C, D, C), context) is C

    def test_uses_active_payoff_matrix(self, strategy):
        # With P raised to R, mutual defection counts as a win.
        payoff = PayoffMatrix(t=5, r=3, p=3, s=0)
        context = DecisionContext(payoff=payoff, rng=random.Random(0))
        assert strategy.decide((D,), (D,), context) is D


class TestRandom:
    """Tests for the random strategy."""

    @pytest.fixture
    def strategy(self):
        return get_strategy('random')

    def test_low_draw_cooperates(self, strategy, scripted_context):
        assert strategy.decide((), (), scripted_context(0.3)) is C

    def test_high_draw_defects(self, strategy, scripted_context):
        assert strategy.decide((), (), scripted_context(0.7)) is D

    def test_ignores_history(self, strategy, scripted_context):
        assert strategy.decide((D,) * 5, (D,) * 5, scripted_context(0.1)) is C

    def test_seeded_reproducibility(self, strategy, default_payoff):
        def draw(seed):
            context = DecisionContext(payoff=default_payoff, rng=random.Random(seed))
            return [strategy.decide((), (), context) for _ in range(50)]

        assert draw(11) == draw(11)

    def test_roughly_fair(self, strategy, default_payoff):
        context = DecisionContext(payoff=default_payoff, rng=random.Random(5))
        draws = [strategy.decide((), (), context) for _ in range(10000)]
        assert draws.count(C) / len(draws) == pytest.approx(0.5, abs=0.03)


class TestGenerousTitForTat:
    """Tests for generous_tit_for_tat."""

    @pytest.fixture
    def strategy(self):
        return get_strategy('generous_tit_for_tat')

    def test_cooperates_first_without_drawing(self, strategy, scripted_context):
        assert strategy.decide((), (), scripted_context()) is C

    def test_mirrors_cooperation_without_drawing(self, strategy, scripted_context):
        assert strategy.decide((C,), (C,), scripted_context()) is C

    def test_forgives_on_low_draw(self, strategy, scripted_context):
        assert strategy.decide((C,), (D,), scripted_context(0.05)) is C

    def test_retaliates_on_high_draw(self, strategy, scripted_context):
        assert strategy.decide((C,), (D,), scripted_context(0.5)) is D

    def test_forgiveness_rate(self, strategy, default_payoff):
        context = DecisionContext(payoff=default_payoff, rng=random.Random(9))
        draws = [strategy.decide((C,), (D,), context) for _ in range(20000)]
        assert draws.count(C) / len(draws) == pytest.approx(0.10, abs=0.01)


class TestJoss:
    """Tests for joss."""

    @pytest.fixture
    def strategy(self):
        return get_strategy('joss')

    def test_cooperates_first_without_drawing(self, strategy, scripted_context):
        assert strategy.decide((), (), scripted_context()) is C

    def test_cooperate_branch_can_defect(self, strategy, scripted_context):
        assert strategy.decide((C,), (C,), scripted_context(0.05)) is D

    def test_cooperate_branch_usually_cooperates(self, strategy, scripted_context):
        assert strategy.decide((C,), (C,), scripted_context(0.5)) is C

    def test_retaliates_without_drawing(self, strategy, scripted_context):
        assert strategy.decide((C,), (D,), scripted_context()) is D

    def test_exploitation_rate(self, strategy, default_payoff):
        context = DecisionContext(payoff=default_payoff, rng=random.Random(13))
        draws = [strategy.decide((C,), (C,), context) for _ in range(20000)]
        assert draws.count(D) / len(draws) == pytest.approx(0.10, abs=0.01)

"""
Pytest fixtures for IPD engine tests.

Provides fixtures for:
- Payoff matrices and decision contexts
- Scripted random generators for probabilistic strategies
- Exhaustive short history pairs
"""
import itertools
import random
from typing import List, Tuple

import pytest

from apps.ipd.matches.payoff import PayoffMatrix
from apps.ipd.strategies import Action, DecisionContext

C = Action.COOPERATE
D = Action.DEFECT


class ScriptedRandom(random.Random):
    """Random generator whose random() returns a fixed script of values."""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        if not self.values:
            raise AssertionError("Strategy drew more random numbers than scripted")
        return self.values.pop(0)


@pytest.fixture
def default_payoff() -> PayoffMatrix:
    """Return the canonical T=5, R=3, P=1, S=0 matrix."""
    return PayoffMatrix()


@pytest.fixture
def context(default_payoff) -> DecisionContext:
    """Return a decision context with a seeded generator."""
    return DecisionContext(payoff=default_payoff, rng=random.Random(42))


@pytest.fixture
def scripted_context(default_payoff):
    """Return a factory for contexts whose draws follow a script."""
    def make(*values):
        return DecisionContext(payoff=default_payoff, rng=ScriptedRandom(values))
    return make


@pytest.fixture
def history_pairs() -> List[Tuple[Tuple[Action, ...], Tuple[Action, ...]]]:
    """Every (own, opponent) history pair of equal length 0 to 3."""
    pairs = []
    for length in range(4):
        sequences = list(itertools.product((C, D), repeat=length))
        for own in sequences:
            for opponent in sequences:
                pairs.append((own, opponent))
    return pairs

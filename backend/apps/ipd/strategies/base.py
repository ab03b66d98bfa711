"""
Core strategy abstractions.

A strategy is a pure decision function over the two realized histories
of the current match. It keeps no per-instance state between calls:
anything that looks stateful (a grim trigger's latch, Pavlov's
win-stay/lose-shift) is recomputed from history on every call.

The catalog is a closed set of variants keyed by a stable id. Each
variant is a `Strategy` record wrapping its decision function, rather
than a subclass, so dispatch is a dictionary lookup by id.
"""
import enum
import random
from dataclasses import dataclass
from typing import Callable, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..matches.payoff import PayoffMatrix


class Action(str, enum.Enum):
    """The atomic choice made by a participant each round."""

    COOPERATE = 'Cooperate'
    DEFECT = 'Defect'

    def flip(self) -> 'Action':
        """Return the opposite action."""
        return Action.DEFECT if self is Action.COOPERATE else Action.COOPERATE

    def __str__(self) -> str:
        return self.value


# Realized actions of one participant within one match, oldest first.
History = Sequence[Action]


@dataclass(frozen=True)
class DecisionContext:
    """
    Match-level inputs a decision function may consult.

    Attributes:
        payoff: The active payoff matrix (Pavlov scores its last round).
        rng: Generator for every probabilistic decision. One generator is
            owned by each match, never shared process-wide.
    """
    payoff: 'PayoffMatrix'
    rng: random.Random


DecideFn = Callable[[History, History, DecisionContext], Action]


@dataclass(frozen=True)
class Strategy:
    """
    One catalog variant.

    Attributes:
        id: Stable identifier used at every boundary (e.g. 'tit_for_tat').
        name: Display name used to label match output.
        description: One-line summary of the rule.
        decide_fn: Pure function (own_history, opponent_history, context) -> Action.
    """
    id: str
    name: str
    description: str
    decide_fn: DecideFn

    def decide(
        self,
        own_history: History,
        opponent_history: History,
        context: DecisionContext,
    ) -> Action:
        """
        Return the intended action for the next round.

        Args:
            own_history: This participant's realized actions so far.
            opponent_history: The opponent's realized actions so far.
            context: Payoff matrix and randomness source for this match.

        Returns:
            Action.COOPERATE or Action.DEFECT.
        """
        return self.decide_fn(own_history, opponent_history, context)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
        }

    def __str__(self) -> str:
        return self.name

"""
Selection policies for population dynamics.

A policy receives the current population counts, this generation's
fitness for each active strategy and the catalog order used for
tie-breaking, and returns the next population. Policies are looked up
by name so the evolution engine never depends on a particular rule.

Built-in policies:
- zero_sum: the fittest active strategy gains one member and the least
  fit active strategy with more than one member loses one.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Type

from ..errors import InvalidParameter
from ..matches.payoff import Number

logger = logging.getLogger(__name__)

Population = Dict[str, int]


@dataclass
class SelectionOutcome:
    """Next population plus which strategies moved, if any."""
    population: Population
    winner: Optional[str] = None
    loser: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.winner is not None


class SelectionPolicy(ABC):
    """
    Interface for selection rules.

    Implementations must never give members to a strategy whose count is
    zero, so that extinction stays absorbing.
    """

    name: str = ''

    @abstractmethod
    def select(
        self,
        population: Population,
        fitness: Dict[str, Number],
        order: Sequence[str],
    ) -> SelectionOutcome:
        """
        Compute the next population.

        Args:
            population: Current counts for every strategy in `order`.
            fitness: Fitness of each active strategy this generation.
            order: Catalog order, used to break ties.

        Returns:
            SelectionOutcome with a new population mapping.
        """


def _first_by(order: Sequence[str], candidates: Sequence[str], fitness, best) -> str:
    """First id in catalog order whose fitness equals `best(fitness)`."""
    target = best(fitness[c] for c in candidates)
    return next(c for c in order if c in candidates and fitness[c] == target)


class ZeroSumSelection(SelectionPolicy):
    """
    Move one member from the least fit to the fittest strategy.

    Winner: active strategy with maximum fitness. Loser: among active
    strategies with more than one member, the one with minimum fitness.
    Both ties resolve to the earliest strategy in catalog order. With
    fewer than two active strategies, or no eligible loser, the
    population carries forward unchanged. Total population is conserved.
    """

    name = 'zero_sum'

    def select(
        self,
        population: Population,
        fitness: Dict[str, Number],
        order: Sequence[str],
    ) -> SelectionOutcome:
        next_population = dict(population)
        active = [s for s in order if population.get(s, 0) > 0]
        if len(active) < 2:
            return SelectionOutcome(population=next_population)

        eligible_losers = [s for s in active if population[s] > 1]
        if not eligible_losers:
            return SelectionOutcome(population=next_population)

        winner = _first_by(order, active, fitness, max)
        loser = _first_by(order, eligible_losers, fitness, min)
        if winner == loser:
            return SelectionOutcome(population=next_population)

        next_population[winner] += 1
        next_population[loser] -= 1
        logger.debug(
            "Selection: %s +1 (fitness %s), %s -1 (fitness %s)",
            winner, fitness[winner], loser, fitness[loser],
        )
        return SelectionOutcome(population=next_population, winner=winner, loser=loser)


_POLICIES: Dict[str, Type[SelectionPolicy]] = {
    ZeroSumSelection.name: ZeroSumSelection,
}


def register_selection_policy(name: str, policy_class: Type[SelectionPolicy]) -> None:
    """Make a custom policy available to `get_selection_policy`."""
    if not issubclass(policy_class, SelectionPolicy):
        raise TypeError(
            f"Policy class must subclass SelectionPolicy, got {policy_class.__name__}"
        )
    _POLICIES[name] = policy_class


def get_selection_policy(name: str, **kwargs) -> SelectionPolicy:
    """
    Factory function for selection policies.

    Args:
        name: Registered policy name, e.g. 'zero_sum'.
        **kwargs: Arguments for the policy.

    Returns:
        Selection policy instance.
    """
    if name not in _POLICIES:
        raise InvalidParameter('selection_policy',f"unknown policy '{name}'")
    return _POLICIES[name](**kwargs)

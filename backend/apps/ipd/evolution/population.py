"""
Population dynamics across generations.

State carried between generations is exactly the population mapping
(strategy id -> member count). Each generation:

1. Active set: strategies with at least one member.
2. Fitness: every unordered pair of distinct active strategies plays one
   match; a strategy's fitness is the sum of its scores over its
   pairings. Member counts gate participation but do not multiply
   matches.
3. Selection: the configured policy turns counts and fitness into the
   next population.
4. Snapshot: the post-selection population is recorded for every
   catalog strategy, zero counts included.

Generation boundaries double as cooperative checkpoints: a caller may
observe progress or stop the run between generations.
"""
import logging
import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..errors import (
    InvalidParameter,
    validate_generations,
    validate_population_count,
)
from ..matches.payoff import Number, PayoffMatrix
from ..matches.runner import MatchRunner, draw_seeds, make_rng, play_pairings
from ..matches.tournament import round_robin_pairings, scores_by_strategy
from ..strategies import CATALOG_ORDER, StrategyRegistry, get_strategy
from .selection import Population, SelectionPolicy, get_selection_policy

logger = logging.getLogger(__name__)

DEFAULT_POPULATION = 5


def normalize_population(
    initial: Any,
    strategy_ids: Sequence[str],
    default_count: int = DEFAULT_POPULATION,
) -> Population:
    """
    Build a full population mapping over `strategy_ids`.

    Args:
        initial: None (every strategy gets `default_count`), a sequence of
            counts in catalog order, or a mapping of id -> count where
            missing ids count as 0.
        strategy_ids: Catalog order.
        default_count: Count used when `initial` is None.

    Raises:
        InvalidParameter: Wrong length, negative or non-integer counts, or
            two mapping keys naming the same strategy.
        UnknownStrategyId: A mapping key that is not in the catalog.
    """
    if initial is None:
        count = validate_population_count('default', default_count)
        return {strategy_id: count for strategy_id in strategy_ids}

    population = {strategy_id: 0 for strategy_id in strategy_ids}

    if isinstance(initial, Mapping):
        seen = set()
        for key, count in initial.items():
            strategy_id = StrategyRegistry.resolve_id(key)
            if strategy_id not in population:
                raise InvalidParameter(
                    'initial_populations',
                    f"'{key}' is not part of this run's catalog",
                )
            if strategy_id in seen:
                raise InvalidParameter(
                    'initial_populations',
                    f"'{key}' names '{strategy_id}', which is already given",
                )
            seen.add(strategy_id)
            population[strategy_id] = validate_population_count(strategy_id, count)
        return population

    if isinstance(initial, (str, bytes)) or not isinstance(initial, Sequence):
        raise InvalidParameter(
            'initial_populations',
            f"must be a list of counts or a mapping, got {initial!r}",
        )
    if len(initial) != len(strategy_ids):
        raise InvalidParameter(
            'initial_populations',
            f"expected {len(strategy_ids)} counts, got {len(initial)}",
        )
    for strategy_id, count in zip(strategy_ids, initial):
        population[strategy_id] = validate_population_count(strategy_id, count)
    return population


@dataclass(frozen=True)
class Generation:
    """
    Post-selection snapshot of one generation.

    Attributes:
        gen_number: 1-based generation index.
        populations: Count for every catalog strategy, in catalog order.
        fitness: Fitness of each strategy active in this generation.
    """
    gen_number: int
    populations: Dict[str, int]
    fitness: Dict[str, Number] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.populations.values())

    def population_of(self, strategy_id: str) -> int:
        return self.populations.get(strategy_id, 0)

    def as_pairs(self, labels: Optional[Dict[str, str]] = None) -> List[Tuple[str, int]]:
        """(label, count) pairs; labels default to the strategy ids."""
        labels = labels or {}
        return [
            (labels.get(strategy_id, strategy_id), count)
            for strategy_id, count in self.populations.items()
        ]


@dataclass
class EvolutionRun:
    """Ordered, append-only list of generation snapshots."""
    strategy_ids: Tuple[str, ...]
    initial_population: Population
    generations: List[Generation] = field(default_factory=list)
    stopped_early: bool = False

    def __len__(self) -> int:
        return len(self.generations)

    def __iter__(self):
        return iter(self.generations)

    @property
    def final_population(self) -> Population:
        if not self.generations:
            return dict(self.initial_population)
        return dict(self.generations[-1].populations)

    def history_of(self, strategy_id: str) -> List[int]:
        """Population of one strategy across all generations."""
        return [gen.population_of(strategy_id) for gen in self.generations]


@dataclass
class EvolutionConfig:
    """Configuration for an evolution run."""

    # Match parameters
    rounds: int = 10
    noise: float = 0.0
    payoff: Optional[PayoffMatrix] = None

    # Run length
    generations: int = 50

    # Selection
    selection_policy: str = 'zero_sum'

    # Parallel match evaluation (None = sequential)
    max_workers: Optional[int] = None


class EvolutionEngine:
    """
    Runs successive generations of fitness evaluation and selection.

    Example:
        config = EvolutionConfig(rounds=10, noise=0.01, generations=100)
        engine = EvolutionEngine(config)
        run = engine.run([5, 5, 5, 5, 5, 5, 5, 5], seed=3)
        print(run.final_population)
    """

    def __init__(
        self,
        config: EvolutionConfig,
        strategy_ids: Optional[Sequence[str]] = None,
        selection_policy: Optional[SelectionPolicy] = None,
    ):
        """
        Initialize the evolution engine.

        Args:
            config: Evolution configuration.
            strategy_ids: Catalog in tie-break order (defaults to built-ins).
            selection_policy: Policy instance; overrides the name in config.

        Raises:
            InvalidParameter: If rounds, noise or generations is invalid.
        """
        self.config = config
        self.generations = validate_generations(config.generations)
        self.runner = MatchRunner(
            rounds=config.rounds,
            noise=config.noise,
            payoff=config.payoff,
        )
        ids = strategy_ids if strategy_ids is not None else CATALOG_ORDER
        self.strategy_ids: Tuple[str, ...] = tuple(get_strategy(s).id for s in ids)
        self.selection = selection_policy or get_selection_policy(config.selection_policy)

    def active_strategies(self, population: Population) -> List[str]:
        """Strategies with at least one member, in catalog order."""
        return [s for s in self.strategy_ids if population.get(s, 0) > 0]

    def evaluate_fitness(
        self,
        population: Population,
        rng: random.Random,
    ) -> Dict[str, Number]:
        """
        Fitness of every active strategy: total score over one match
        against each other active strategy.
        """
        active = self.active_strategies(population)
        if len(active) < 2:
            return {strategy_id: 0 for strategy_id in active}

        pairings = round_robin_pairings(active)
        seeds = draw_seeds(rng, len(pairings))
        matches = play_pairings(self.runner, pairings, seeds, self.config.max_workers)

        fitness = {strategy_id: 0 for strategy_id in active}
        fitness.update(scores_by_strategy(matches))
        return fitness

    def step(
        self,
        population: Population,
        rng: random.Random,
    ) -> Tuple[Population, Dict[str, Number]]:
        """Advance one generation; returns (next population, fitness)."""
        fitness = self.evaluate_fitness(population, rng)
        outcome = self.selection.select(population, fitness, self.strategy_ids)
        return outcome.population, fitness

    def run(
        self,
        initial_populations: Any = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        progress_callback: Optional[Callable[[Generation], None]] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> EvolutionRun:
        """
        Run the configured number of generations.

        Args:
            initial_populations: Sequence (catalog order) or mapping of
                counts; None gives every strategy the default count.
            rng: Call-level generator; per-match seeds are drawn from it.
            seed: Seed for a fresh call-level generator.
            progress_callback: Called with each Generation as it is recorded.
            should_stop: Checked before each generation; returning True
                ends the run with the generations completed so far.

        Returns:
            EvolutionRun with one snapshot per generation.
        """
        population = normalize_population(initial_populations, self.strategy_ids)
        rng = make_rng(rng, seed)
        run = EvolutionRun(
            strategy_ids=self.strategy_ids,
            initial_population=dict(population),
        )

        logger.info(
            "Evolution: %d generations, %d rounds, noise=%.2f, population=%d",
            self.generations, self.runner.rounds, self.runner.noise,
            sum(population.values()),
        )

        for gen_number in range(1, self.generations + 1):
            if should_stop and should_stop():
                logger.info("Evolution stopped before generation %d", gen_number)
                run.stopped_early = True
                break

            population, fitness = self.step(population, rng)
            generation = Generation(
                gen_number=gen_number,
                populations=dict(population),
                fitness=fitness,
            )
            run.generations.append(generation)

            if progress_callback:
                progress_callback(generation)

        logger.info("Evolution finished: %s", run.final_population)
        return run


def run_evolution(
    initial_populations: Any = None,
    rounds: int = 10,
    noise: float = 0.0,
    payoff: Optional[PayoffMatrix] = None,
    generations: int = 50,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> EvolutionRun:
    """Run an evolution over the built-in catalog with the zero-sum policy."""
    config = EvolutionConfig(
        rounds=rounds,
        noise=noise,
        payoff=payoff,
        generations=generations,
        max_workers=max_workers,
    )
    return EvolutionEngine(config).run(initial_populations, rng=rng, seed=seed)

"""
Population dynamics for the strategy catalog.

Each generation every active strategy meets every other active strategy
once; the resulting fitness feeds a replaceable selection policy that
moves members between strategies.

Example usage:
    from apps.ipd.evolution import EvolutionConfig, EvolutionEngine

    config = EvolutionConfig(rounds=10, noise=0.02, generations=100)
    run = EvolutionEngine(config).run({'tit_for_tat': 10, 'always_defect': 10})
    for generation in run:
        print(generation.gen_number, generation.populations)
"""
from .selection import (
    SelectionOutcome,
    SelectionPolicy,
    ZeroSumSelection,
    get_selection_policy,
    register_selection_policy,
)
from .population import (
    DEFAULT_POPULATION,
    EvolutionConfig,
    EvolutionEngine,
    EvolutionRun,
    Generation,
    normalize_population,
    run_evolution,
)

__all__ = [
    # Selection
    'SelectionOutcome',
    'SelectionPolicy',
    'ZeroSumSelection',
    'get_selection_policy',
    'register_selection_policy',

    # Population management
    'DEFAULT_POPULATION',
    'EvolutionConfig',
    'EvolutionEngine',
    'EvolutionRun',
    'Generation',
    'normalize_population',
    'run_evolution',
]

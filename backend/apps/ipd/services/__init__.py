"""Service layer exposing the engine to the presentation layer."""
from .engine import (
    engine_settings,
    greet_engine,
    list_strategies,
    payoff_warnings,
    run_evolution,
    run_game,
    run_tournament,
)

__all__ = [
    'engine_settings',
    'greet_engine',
    'list_strategies',
    'payoff_warnings',
    'run_evolution',
    'run_game',
    'run_tournament',
]

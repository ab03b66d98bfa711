"""
Request/response boundary for the presentation layer.

Every call validates its inputs before any simulation work, runs one
engine operation to completion and returns plain JSON-ready data:

- greet_engine(): liveness banner
- list_strategies(): catalog metadata
- run_game(): one 1v1 match
- run_tournament(): round robin over the catalog
- run_evolution(): generation snapshots

Defaults come from ``settings.IPD_ENGINE``.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from django.conf import settings

from .. import __version__
from ..evolution import EvolutionConfig, EvolutionEngine
from ..matches import MatchRunner, PayoffMatrix, RoundRobinTournament
from ..strategies import CATALOG_ORDER, get_strategy

logger = logging.getLogger(__name__)

ENGINE_DEFAULTS = {
    'DEFAULT_ROUNDS': 10,
    'DEFAULT_NOISE': 0.0,
    'DEFAULT_GENERATIONS': 50,
    'DEFAULT_POPULATION': 5,
    'DEFAULT_PAYOFF': {'t': 5, 'r': 3, 'p': 1, 's': 0},
    'MAX_WORKERS': None,
    'SEED': None,
}


def engine_settings() -> Dict[str, Any]:
    """Engine defaults overlaid with ``settings.IPD_ENGINE``."""
    configured = getattr(settings, 'IPD_ENGINE', {}) or {}
    return {**ENGINE_DEFAULTS, **configured}


def _payoff(payoff: Optional[Mapping[str, Any]], config: Dict[str, Any]) -> PayoffMatrix:
    matrix = PayoffMatrix.from_mapping(
        payoff if payoff is not None else config['DEFAULT_PAYOFF']
    )
    matrix.warn_if_not_dilemma()
    return matrix


def payoff_warnings(payoff: Optional[Mapping[str, Any]] = None) -> List[str]:
    """Dilemma ordering conditions violated by the effective payoff matrix."""
    config = engine_settings()
    return PayoffMatrix.from_mapping(
        payoff if payoff is not None else config['DEFAULT_PAYOFF']
    ).ordering_violations()


def _or_default(value: Any, key: str, config: Dict[str, Any]) -> Any:
    return config[key] if value is None else value


def _display_names() -> Dict[str, str]:
    return {strategy_id: get_strategy(strategy_id).name for strategy_id in CATALOG_ORDER}


def greet_engine() -> str:
    """Liveness probe."""
    return f"Core Engine: v{__version__} (Custom Payoff Ready)"


def list_strategies() -> List[Dict[str, str]]:
    """Catalog metadata in catalog order."""
    return [get_strategy(strategy_id).to_dict() for strategy_id in CATALOG_ORDER]


def run_game(
    p1_id: str,
    p2_id: str,
    rounds: Optional[int] = None,
    noise: Optional[float] = None,
    payoff: Optional[Mapping[str, Any]] = None,
    seed: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Play one match between two catalog strategies.

    Returns:
        {player_name, opponent_name, player_id, opponent_id,
         rounds: [[Action, Action], ...], player_score, opponent_score,
         warnings: [violated payoff ordering conditions]}

    Raises:
        UnknownStrategyId, InvalidParameter, MalformedPayoff
    """
    config = engine_settings()
    matrix = _payoff(payoff, config)
    player = get_strategy(p1_id)
    opponent = get_strategy(p2_id)
    runner = MatchRunner(
        rounds=_or_default(rounds, 'DEFAULT_ROUNDS', config),
        noise=_or_default(noise, 'DEFAULT_NOISE', config),
        payoff=matrix,
    )

    result = runner.run_match(player, opponent, seed=_or_default(seed, 'SEED', config))
    logger.info(
        "Game %s vs %s finished %s-%s",
        player.id, opponent.id, result.player_score, result.opponent_score,
    )
    data = result.to_dict()
    data['warnings'] = matrix.ordering_violations()
    return data


def run_tournament(
    rounds: Optional[int] = None,
    noise: Optional[float] = None,
    payoff: Optional[Mapping[str, Any]] = None,
    seed: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Round robin over the full catalog.

    Returns:
        {ranking: [[name, score], ...] best first,
         standings: [{id, name, score, matches_played}, ...],
         warnings: [violated payoff ordering conditions]}
    """
    config = engine_settings()
    matrix = _payoff(payoff, config)
    tournament = RoundRobinTournament(
        rounds=_or_default(rounds, 'DEFAULT_ROUNDS', config),
        noise=_or_default(noise, 'DEFAULT_NOISE', config),
        payoff=matrix,
        max_workers=config['MAX_WORKERS'],
    )
    result = tournament.run(seed=_or_default(seed, 'SEED', config))

    return {
        'ranking': [[entry.name, entry.score] for entry in result.standings],
        'standings': [
            {
                'id': entry.strategy_id,
                'name': entry.name,
                'score': entry.score,
                'matches_played': entry.matches_played,
            }
            for entry in result.standings
        ],
        'warnings': matrix.ordering_violations(),
    }


def run_evolution(
    rounds: Optional[int] = None,
    noise: Optional[float] = None,
    initial_populations: Any = None,
    generations: Optional[int] = None,
    payoff: Optional[Mapping[str, Any]] = None,
    seed: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Population dynamics over the full catalog.

    Args:
        initial_populations: 8 counts in catalog order, or a mapping of
            id -> count (missing ids are 0). None gives every strategy
            ``DEFAULT_POPULATION`` members.

    Returns:
        [{gen_number, populations: [[name, count], ...]}, ...]
    """
    config = engine_settings()
    evolution_config = EvolutionConfig(
        rounds=_or_default(rounds, 'DEFAULT_ROUNDS', config),
        noise=_or_default(noise, 'DEFAULT_NOISE', config),
        payoff=_payoff(payoff, config),
        generations=_or_default(generations, 'DEFAULT_GENERATIONS', config),
        max_workers=config['MAX_WORKERS'],
    )
    engine = EvolutionEngine(evolution_config)
    if initial_populations is None:
        initial_populations = [config['DEFAULT_POPULATION']] * len(engine.strategy_ids)

    run = engine.run(initial_populations, seed=_or_default(seed, 'SEED', config))

    names = _display_names()
    return [
        {
            'gen_number': generation.gen_number,
            'populations': [list(pair) for pair in generation.as_pairs(names)],
        }
        for generation in run.generations
    ]

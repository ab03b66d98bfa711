"""
Match and tournament infrastructure for the IPD engine.

Components:
- PayoffMatrix: T/R/P/S payoffs for one round
- MatchRunner: Play one bilateral match with trembling-hand noise
- RoundRobinTournament: Every catalog strategy plays every other once

Example usage:
    from apps.ipd.matches import MatchRunner, RoundRobinTournament

    runner = MatchRunner(rounds=10, noise=0.05)
    result = runner.run_match('tit_for_tat', 'always_defect', seed=1)
    print(result.player_score, result.opponent_score)

    tournament = RoundRobinTournament(rounds=10)
    print(format_standings(tournament.run(seed=1).standings))
"""
from .payoff import DEFAULT_PAYOFF, PayoffMatrix
from .runner import (
    MatchResult,
    MatchRunner,
    draw_seeds,
    make_rng,
    play_pairings,
    run_match,
)
from .tournament import (
    RoundRobinTournament,
    TournamentEntry,
    TournamentResult,
    format_standings,
    round_robin_pairings,
    scores_by_strategy,
)

__all__ = [
    # Payoff
    'DEFAULT_PAYOFF',
    'PayoffMatrix',

    # Match runner
    'MatchResult',
    'MatchRunner',
    'draw_seeds',
    'make_rng',
    'play_pairings',
    'run_match',

    # Tournaments
    'RoundRobinTournament',
    'TournamentEntry',
    'TournamentResult',
    'format_standings',
    'round_robin_pairings',
    'scores_by_strategy',
]

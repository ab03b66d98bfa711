"""
Round-robin tournament over the strategy catalog.

Every unordered pair of distinct strategies plays one match; each side's
match score is added to its cumulative total. Self-play is excluded.
Standings are sorted by cumulative score, descending, with ties kept in
catalog order.
"""
import logging
import random
from dataclasses import dataclass, field
from itertools import combinations
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..strategies import CATALOG_ORDER, Strategy, get_strategy
from .payoff import Number, PayoffMatrix
from .runner import MatchResult, MatchRunner, draw_seeds, make_rng, play_pairings

logger = logging.getLogger(__name__)


@dataclass
class TournamentEntry:
    """A strategy's running totals in a tournament."""
    strategy: Strategy
    score: Number = 0
    matches_played: int = 0

    @property
    def strategy_id(self) -> str:
        return self.strategy.id

    @property
    def name(self) -> str:
        return self.strategy.name


@dataclass
class TournamentResult:
    """Result of a round-robin tournament."""
    rounds: int
    noise: float
    payoff: PayoffMatrix
    standings: List[TournamentEntry] = field(default_factory=list)
    match_history: List[MatchResult] = field(default_factory=list)

    @property
    def ranking(self) -> List[Tuple[str, Number]]:
        """(strategy id, cumulative score), best first."""
        return [(entry.strategy_id, entry.score) for entry in self.standings]

    def score_of(self, strategy_id: str) -> Number:
        for entry in self.standings:
            if entry.strategy_id == strategy_id:
                return entry.score
        raise KeyError(strategy_id)


def round_robin_pairings(strategy_ids: Sequence[str]) -> List[Tuple[str, str]]:
    """All unordered pairs of distinct ids, in catalog order."""
    return list(combinations(strategy_ids, 2))


class RoundRobinTournament:
    """
    Round robin tournament: every strategy plays every other once.

    Example:
        tournament = RoundRobinTournament(rounds=10, noise=0.02)
        result = tournament.run(seed=7)
        print(format_standings(result.standings))
    """

    def __init__(
        self,
        rounds: int = 10,
        noise: float = 0.0,
        payoff: Optional[PayoffMatrix] = None,
        strategy_ids: Optional[Sequence[str]] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize round robin tournament.

        Args:
            rounds: Rounds per match.
            noise: Trembling-hand probability.
            payoff: Payoff matrix (default T=5, R=3, P=1, S=0).
            strategy_ids: Entrants in tie-break order; defaults to the
                full built-in catalog.
            max_workers: Process count for playing matches in parallel.
        """
        self.runner = MatchRunner(rounds=rounds, noise=noise, payoff=payoff)
        ids = strategy_ids if strategy_ids is not None else CATALOG_ORDER
        self.strategies = [get_strategy(strategy_id) for strategy_id in ids]
        self.max_workers = max_workers

    def run(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> TournamentResult:
        """
        Run the tournament.

        Args:
            rng: Call-level generator; per-match seeds are drawn from it.
            seed: Seed for a fresh call-level generator.
            progress_callback: Called with (match_num, total) after each
                match is tallied.

        Returns:
            TournamentResult with standings and every match played.
        """
        rng = make_rng(rng, seed)
        entries = {s.id: TournamentEntry(strategy=s) for s in self.strategies}
        pairings = round_robin_pairings([s.id for s in self.strategies])
        seeds = draw_seeds(rng, len(pairings))

        logger.info(
            "Round robin: %d strategies, %d matches, %d rounds, noise=%.2f",
            len(entries), len(pairings), self.runner.rounds, self.runner.noise,
        )

        result = TournamentResult(
            rounds=self.runner.rounds,
            noise=self.runner.noise,
            payoff=self.runner.payoff,
        )
        matches = play_pairings(self.runner, pairings, seeds, self.max_workers)

        total_matches = len(matches)
        for match_num, match in enumerate(matches, 1):
            player = entries[match.player_id]
            opponent = entries[match.opponent_id]
            player.score += match.player_score
            opponent.score += match.opponent_score
            player.matches_played += 1
            opponent.matches_played += 1
            result.match_history.append(match)

            if progress_callback:
                progress_callback(match_num, total_matches)

        # Ties fall back to catalog order.
        order = {s.id: index for index, s in enumerate(self.strategies)}
        result.standings = sorted(
            entries.values(),
            key=lambda entry: (-entry.score, order[entry.strategy_id]),
        )

        logger.info(
            "Round robin finished, leader %s with %s",
            result.standings[0].strategy_id if result.standings else None,
            result.standings[0].score if result.standings else 0,
        )
        return result


def scores_by_strategy(matches: Sequence[MatchResult]) -> Dict[str, Number]:
    """Sum every participant's score across `matches`."""
    totals: Dict[str, Number] = {}
    for match in matches:
        totals[match.player_id] = totals.get(match.player_id, 0) + match.player_score
        totals[match.opponent_id] = totals.get(match.opponent_id, 0) + match.opponent_score
    return totals


def format_standings(standings: Sequence[TournamentEntry]) -> str:
    """Format tournament standings as text."""
    lines = [
        "=" * 52,
        "TOURNAMENT STANDINGS",
        "=" * 52,
        f"{'Rank':<6}{'Strategy':<24}{'Score':>10}{'Matches':>10}",
        "-" * 52,
    ]

    for i, entry in enumerate(standings, 1):
        lines.append(
            f"{i:<6}{entry.name:<24}{entry.score:>10}{entry.matches_played:>10}"
        )

    lines.append("=" * 52)
    return "\n".join(lines)

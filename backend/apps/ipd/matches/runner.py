"""
Match runner for bilateral Iterated Prisoner's Dilemma matches.

Each round:
1. Both strategies compute an intended action from the realized
   histories accumulated so far.
2. Each intended action is independently flipped with probability
   ``noise`` (trembling hand) to give the realized action.
3. The realized pair is scored, appended to both histories and to the
   round timeline.

Only realized actions are ever observed by strategies or scored; the
intended pairs are kept on the result for auditing.
"""
import logging
import random
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from ..errors import validate_noise, validate_rounds
from ..strategies import Action, DecisionContext, Strategy, get_strategy
from .payoff import Number, PayoffMatrix

logger = logging.getLogger(__name__)

Round = Tuple[Action, Action]
StrategyRef = Union[str, Strategy]
Pairing = Tuple[str, str]


def resolve_strategy(strategy: StrategyRef) -> Strategy:
    """Accept either a catalog id or a `Strategy` record."""
    if isinstance(strategy, Strategy):
        return strategy
    return get_strategy(strategy)


def make_rng(rng: Optional[random.Random] = None, seed: Optional[int] = None) -> random.Random:
    """Return `rng`, or a fresh generator seeded with `seed` (entropy if None)."""
    if rng is not None:
        return rng
    return random.Random(seed)


def draw_seeds(rng: random.Random, count: int) -> List[int]:
    """Derive independent per-match seeds from a call-level generator."""
    return [rng.getrandbits(64) for _ in range(count)]


@dataclass(frozen=True)
class MatchResult:
    """
    Immutable outcome of one match.

    `rounds` holds the realized (player, opponent) action pair for every
    round; `intended` holds what each strategy meant to play.
    """
    player_id: str
    opponent_id: str
    player_name: str
    opponent_name: str
    rounds: Tuple[Round, ...]
    intended: Tuple[Round, ...]
    player_score: Number
    opponent_score: Number

    @property
    def num_rounds(self) -> int:
        return len(self.rounds)

    @property
    def player_history(self) -> Tuple[Action, ...]:
        return tuple(pair[0] for pair in self.rounds)

    @property
    def opponent_history(self) -> Tuple[Action, ...]:
        return tuple(pair[1] for pair in self.rounds)

    def score_for(self, strategy_id: str) -> Number:
        """Score of the participant with `strategy_id`."""
        if strategy_id == self.player_id:
            return self.player_score
        if strategy_id == self.opponent_id:
            return self.opponent_score
        raise KeyError(strategy_id)

    def to_dict(self) -> dict:
        return {
            'player_id': self.player_id,
            'opponent_id': self.opponent_id,
            'player_name': self.player_name,
            'opponent_name': self.opponent_name,
            'rounds': [[a.value, b.value] for a, b in self.rounds],
            'player_score': self.player_score,
            'opponent_score': self.opponent_score,
        }


class MatchRunner:
    """
    Run matches between two strategies under fixed parameters.

    A runner holds only immutable parameters, so one instance can be
    shared by every match of a tournament or generation. Randomness is
    supplied per match.

    Example:
        runner = MatchRunner(rounds=10, noise=0.05)
        result = runner.run_match('tit_for_tat', 'always_defect', seed=42)
        print(result.player_score, result.opponent_score)
    """

    def __init__(
        self,
        rounds: int = 10,
        noise: float = 0.0,
        payoff: Optional[PayoffMatrix] = None,
    ):
        """
        Initialize the match runner.

        Args:
            rounds: Rounds per match (>= 1).
            noise: Per-participant flip probability in [0, 0.5].
            payoff: Payoff matrix; defaults to T=5, R=3, P=1, S=0.

        Raises:
            InvalidParameter: If rounds or noise is out of range.
        """
        self.rounds = validate_rounds(rounds)
        self.noise = validate_noise(noise)
        self.payoff = payoff if payoff is not None else PayoffMatrix()

    def apply_noise(self, intended: Action, rng: random.Random) -> Action:
        """Flip `intended` with probability `noise`."""
        if rng.random() < self.noise:
            return intended.flip()
        return intended

    def run_match(
        self,
        strategy_a: StrategyRef,
        strategy_b: StrategyRef,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> MatchResult:
        """
        Play one match.

        Args:
            strategy_a: Player strategy (id or record).
            strategy_b: Opponent strategy (id or record).
            rng: Generator owned by this match.
            seed: Seed for a fresh generator when `rng` is not given.

        Returns:
            MatchResult with the realized timeline and final scores.

        Raises:
            UnknownStrategyId: If either id is not in the catalog.
        """
        player = resolve_strategy(strategy_a)
        opponent = resolve_strategy(strategy_b)
        context = DecisionContext(payoff=self.payoff, rng=make_rng(rng, seed))

        player_history: List[Action] = []
        opponent_history: List[Action] = []
        rounds: List[Round] = []
        intended: List[Round] = []
        player_score: Number = 0
        opponent_score: Number = 0

        for _ in range(self.rounds):
            intent_a = player.decide(player_history, opponent_history, context)
            intent_b = opponent.decide(opponent_history, player_history, context)

            action_a = self.apply_noise(intent_a, context.rng)
            action_b = self.apply_noise(intent_b, context.rng)

            payoff_a, payoff_b = self.payoff.score(action_a, action_b)
            player_score += payoff_a
            opponent_score += payoff_b

            player_history.append(action_a)
            opponent_history.append(action_b)
            rounds.append((action_a, action_b))
            intended.append((intent_a, intent_b))

        logger.debug(
            "Match %s vs %s: %s-%s over %d rounds",
            player.id, opponent.id, player_score, opponent_score, self.rounds,
        )

        return MatchResult(
            player_id=player.id,
            opponent_id=opponent.id,
            player_name=player.name,
            opponent_name=opponent.name,
            rounds=tuple(rounds),
            intended=tuple(intended),
            player_score=player_score,
            opponent_score=opponent_score,
        )


def _play_seeded(args: Tuple[MatchRunner, str, str, int]) -> MatchResult:
    runner, strategy_a, strategy_b, seed = args
    return runner.run_match(strategy_a, strategy_b, seed=seed)


def play_pairings(
    runner: MatchRunner,
    pairings: Sequence[Pairing],
    seeds: Sequence[int],
    max_workers: Optional[int] = None,
) -> List[MatchResult]:
    """
    Play independent matches, one per pairing, each with its own seed.

    Results come back in pairing order. With `max_workers` > 1 the
    matches run in a process pool; since every match owns its seed the
    outcome is identical to sequential play.
    """
    if len(pairings) != len(seeds):
        raise ValueError("Each pairing needs exactly one seed")

    jobs = [
        (runner, strategy_a, strategy_b, seed)
        for (strategy_a, strategy_b), seed in zip(pairings, seeds)
    ]

    if not max_workers or max_workers <= 1 or len(jobs) <= 1:
        return [_play_seeded(job) for job in jobs]

    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(_play_seeded, jobs))


def run_match(
    strategy_a: StrategyRef,
    strategy_b: StrategyRef,
    rounds: int = 10,
    noise: float = 0.0,
    payoff: Optional[PayoffMatrix] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> MatchResult:
    """Play a single match without constructing a runner explicitly."""
    runner = MatchRunner(rounds=rounds, noise=noise, payoff=payoff)
    return runner.run_match(strategy_a, strategy_b, rng=rng, seed=seed)

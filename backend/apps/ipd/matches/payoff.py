"""
Payoff matrix for a single Prisoner's Dilemma round.

The four parameters are Temptation, Reward, Punishment and Sucker. A
genuine dilemma needs ``T > R > P > S`` and ``2R > T + S``; the engine
accepts any finite values and only reports violations, since the front
end allows arbitrary numeric entry.
"""
import logging
import math
import numbers
from dataclasses import asdict, dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

from ..errors import MalformedPayoff
from ..strategies.base import Action

logger = logging.getLogger(__name__)

Number = Union[int, float]

PAYOFF_KEYS = ('t', 'r', 'p', 's')


def _check_entry(key: str, value: Any) -> Number:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MalformedPayoff(f"Payoff '{key}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise MalformedPayoff(f"Payoff '{key}' must be finite, got {value}")
    # Keep integral payoffs integral so scores stay whole numbers.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class PayoffMatrix:
    """Temptation, Reward, Punishment and Sucker payoffs."""
    t: Number = 5
    r: Number = 3
    p: Number = 1
    s: Number = 0

    def __post_init__(self):
        for key in PAYOFF_KEYS:
            object.__setattr__(self, key, _check_entry(key, getattr(self, key)))

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> 'PayoffMatrix':
        """
        Build a matrix from a ``{t, r, p, s}`` mapping.

        Keys may be upper- or lower-case; missing keys keep their default.
        None yields the default matrix.

        Raises:
            MalformedPayoff: If an entry is non-numeric, non-finite or unknown.
        """
        if data is None:
            return cls()
        if isinstance(data, PayoffMatrix):
            return data
        if not isinstance(data, Mapping):
            raise MalformedPayoff(f"Payoff must be a mapping of t/r/p/s, got {data!r}")

        values = {}
        for key, value in data.items():
            normalized = str(key).lower()
            if normalized not in PAYOFF_KEYS:
                raise MalformedPayoff(f"Unknown payoff key '{key}'")
            values[normalized] = value
        return cls(**values)

    def score(self, action_a: Action, action_b: Action) -> Tuple[Number, Number]:
        """Payoffs for (a, b) given both realized actions."""
        if action_a is Action.COOPERATE:
            if action_b is Action.COOPERATE:
                return self.r, self.r
            return self.s, self.t
        if action_b is Action.COOPERATE:
            return self.t, self.s
        return self.p, self.p

    def ordering_violations(self) -> List[str]:
        """Human-readable list of violated dilemma conditions."""
        violations = []
        if not self.t > self.r:
            violations.append(f"T ({self.t}) should exceed R ({self.r})")
        if not self.r > self.p:
            violations.append(f"R ({self.r}) should exceed P ({self.p})")
        if not self.p > self.s:
            violations.append(f"P ({self.p}) should exceed S ({self.s})")
        if not 2 * self.r > self.t + self.s:
            violations.append(
                f"2R ({2 * self.r}) should exceed T + S ({self.t + self.s})"
            )
        return violations

    @property
    def is_dilemma(self) -> bool:
        return not self.ordering_violations()

    def warn_if_not_dilemma(self) -> None:
        """Log a warning when the matrix does not describe a dilemma."""
        violations = self.ordering_violations()
        if violations:
            logger.warning(
                "Payoff matrix %s is not a prisoner's dilemma: %s",
                self.to_dict(), '; '.join(violations),
            )

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_PAYOFF = PayoffMatrix()

"""
Error taxonomy for the IPD engine.

All engine errors derive from ValueError so callers that already guard
against bad input with ``except ValueError`` keep working. The HTTP and
CLI layers surface the message of these errors verbatim.
"""
import math
import numbers
from typing import Any


class EngineError(ValueError):
    """Base class for every validation failure raised by the engine."""


class UnknownStrategyId(EngineError):
    """A strategy id that is not part of the catalog."""

    def __init__(self, strategy_id: Any, available: Any = ()):
        self.strategy_id = strategy_id
        message = f"Unknown strategy '{strategy_id}'"
        if available:
            message += f". Available strategies: {', '.join(available)}"
        super().__init__(message)


class InvalidParameter(EngineError):
    """A run parameter outside its allowed range or of the wrong type."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(f"{name}: {message}")


class MalformedPayoff(EngineError):
    """A payoff matrix entry that is missing, non-numeric or non-finite."""


MAX_NOISE = 0.5


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_rounds(rounds: Any) -> int:
    """Rounds must be an integer >= 1."""
    if not _is_integer(rounds):
        raise InvalidParameter('rounds', f"must be an integer, got {rounds!r}")
    if rounds < 1:
        raise InvalidParameter('rounds', f"must be at least 1, got {rounds}")
    return int(rounds)


def validate_generations(generations: Any) -> int:
    """Generations must be an integer >= 1."""
    if not _is_integer(generations):
        raise InvalidParameter(
            'generations', f"must be an integer, got {generations!r}"
        )
    if generations < 1:
        raise InvalidParameter(
            'generations', f"must be at least 1, got {generations}"
        )
    return int(generations)


def validate_noise(noise: Any) -> float:
    """Noise must be a finite real number in [0, 0.5]."""
    if isinstance(noise, bool) or not isinstance(noise, numbers.Real):
        raise InvalidParameter('noise', f"must be a number, got {noise!r}")
    if not math.isfinite(noise) or not 0.0 <= noise <= MAX_NOISE:
        raise InvalidParameter(
            'noise', f"must be between 0 and {MAX_NOISE}, got {noise}"
        )
    return float(noise)


def validate_population_count(strategy_id: str, count: Any) -> int:
    """Population counts must be non-negative integers."""
    if not _is_integer(count):
        raise InvalidParameter(
            'initial_populations',
            f"count for '{strategy_id}' must be an integer, got {count!r}",
        )
    if count < 0:
        raise InvalidParameter(
            'initial_populations',
            f"count for '{strategy_id}' must be >= 0, got {count}",
        )
    return int(count)

"""
Strategy registry.

Maps stable strategy ids to `Strategy` records. Registration order is
the fixed catalog order used for tie-breaking in tournaments and
evolution runs, so the built-in catalog registers itself in a fixed
sequence on import.
"""
from typing import Callable, Dict, List, Optional

from ..errors import UnknownStrategyId
from .base import DecideFn, Strategy


class StrategyRegistry:
    """
    Registry for catalog strategies.

    Example:
        @register_strategy('always_cooperate', 'Always Cooperate', 'Never defects.')
        def always_cooperate(own, opponent, context):
            return Action.COOPERATE

        strategy = StrategyRegistry.get('always_cooperate')
    """

    _registry: Dict[str, Strategy] = {}
    _aliases: Dict[str, str] = {}

    @classmethod
    def register(cls, strategy: Strategy) -> None:
        """
        Register a strategy under its id.

        Raises:
            ValueError: If the id is already registered.
        """
        if strategy.id in cls._registry or strategy.id in cls._aliases:
            raise ValueError(f"Strategy '{strategy.id}' is already registered")
        cls._registry[strategy.id] = strategy

    @classmethod
    def add_alias(cls, alias: str, strategy_id: str) -> None:
        """Accept `alias` wherever `strategy_id` is accepted."""
        if strategy_id not in cls._registry:
            raise UnknownStrategyId(strategy_id, cls.list_ids())
        cls._aliases[alias] = strategy_id

    @classmethod
    def unregister(cls, strategy_id: str) -> None:
        cls._registry.pop(strategy_id, None)
        for alias, target in list(cls._aliases.items()):
            if target == strategy_id:
                del cls._aliases[alias]

    @classmethod
    def resolve_id(cls, strategy_id: str) -> str:
        """Return the canonical id for `strategy_id` or its alias."""
        if strategy_id in cls._registry:
            return strategy_id
        if strategy_id in cls._aliases:
            return cls._aliases[strategy_id]
        raise UnknownStrategyId(strategy_id, cls.list_ids())

    @classmethod
    def get(cls, strategy_id: str) -> Strategy:
        """
        Look up a strategy by id or alias.

        Raises:
            UnknownStrategyId: If the id is not in the catalog.
        """
        if not isinstance(strategy_id, str):
            raise UnknownStrategyId(strategy_id, cls.list_ids())
        return cls._registry[cls.resolve_id(strategy_id)]

    @classmethod
    def find(cls, strategy_id: str) -> Optional[Strategy]:
        """Like `get` but returns None for unknown ids."""
        try:
            return cls.get(strategy_id)
        except UnknownStrategyId:
            return None

    @classmethod
    def list_ids(cls) -> List[str]:
        """All registered ids in catalog order."""
        return list(cls._registry.keys())

    @classmethod
    def all(cls) -> List[Strategy]:
        """All registered strategies in catalog order."""
        return list(cls._registry.values())


def register_strategy(
    strategy_id: str,
    name: str,
    description: str = '',
) -> Callable[[DecideFn], DecideFn]:
    """
    Decorator registering a decision function as a catalog strategy.

    The function itself is returned unchanged so it stays importable
    (and picklable) under its own name.
    """
    def decorator(fn: DecideFn) -> DecideFn:
        StrategyRegistry.register(Strategy(
            id=strategy_id,
            name=name,
            description=description or (fn.__doc__ or '').strip(),
            decide_fn=fn,
        ))
        return fn
    return decorator


def get_strategy(strategy_id: str) -> Strategy:
    """Convenience wrapper around `StrategyRegistry.get`."""
    return StrategyRegistry.get(strategy_id)


def list_strategies() -> List[Strategy]:
    """The full catalog in fixed catalog order."""
    return StrategyRegistry.all()

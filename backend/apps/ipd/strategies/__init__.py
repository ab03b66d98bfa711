"""
Strategy catalog for the Iterated Prisoner's Dilemma.

Each strategy maps the two realized histories of a match to an intended
action. Strategies are looked up by stable id:

    from apps.ipd.strategies import get_strategy

    tft = get_strategy('tit_for_tat')
    action = tft.decide(own_history, opponent_history, context)
"""
from .base import Action, DecisionContext, History, Strategy
from .registry import (
    StrategyRegistry,
    get_strategy,
    list_strategies,
    register_strategy,
)
from .catalog import CATALOG_ORDER

__all__ = [
    'Action',
    'DecisionContext',
    'History',
    'Strategy',
    'StrategyRegistry',
    'get_strategy',
    'list_strategies',
    'register_strategy',
    'CATALOG_ORDER',
]

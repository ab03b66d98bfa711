"""
Built-in strategy catalog.

Eight decision functions, registered in the fixed catalog order:

    tit_for_tat, always_defect, grim_trigger, always_cooperate,
    random, pavlov, generous_tit_for_tat, joss

Every function receives the realized (post-noise) histories of the
current match and draws any randomness from ``context.rng``.
"""
from .base import Action, DecisionContext, History
from .registry import StrategyRegistry, register_strategy

FORGIVENESS_PROBABILITY = 0.10
EXPLOITATION_PROBABILITY = 0.10
COIN_FLIP_PROBABILITY = 0.5


def _mirror_last(opponent: History) -> Action:
    if not opponent:
        return Action.COOPERATE
    return opponent[-1]


@register_strategy(
    'tit_for_tat',
    'Tit-For-Tat',
    'Starts with cooperation, then mirrors the opponent\'s last move.',
)
def tit_for_tat(own: History, opponent: History, context: DecisionContext) -> Action:
    return _mirror_last(opponent)


@register_strategy(
    'always_defect',
    'Always Defect',
    'Never cooperates.',
)
def always_defect(own: History, opponent: History, context: DecisionContext) -> Action:
    return Action.DEFECT


@register_strategy(
    'grim_trigger',
    'Grim Trigger',
    'Cooperates until the opponent defects once, then defects forever.',
)
def grim_trigger(own: History, opponent: History, context: DecisionContext) -> Action:
    if Action.DEFECT in opponent:
        return Action.DEFECT
    return Action.COOPERATE


@register_strategy(
    'always_cooperate',
    'Always Cooperate',
    'Always cooperates.',
)
def always_cooperate(own: History, opponent: History, context: DecisionContext) -> Action:
    return Action.COOPERATE


@register_strategy(
    'random',
    'Random',
    'Flips a fair coin every round.',
)
def random_choice(own: History, opponent: History, context: DecisionContext) -> Action:
    if context.rng.random() < COIN_FLIP_PROBABILITY:
        return Action.COOPERATE
    return Action.DEFECT


@register_strategy(
    'pavlov',
    'Pavlov',
    'Win-stay, lose-shift: repeats its move after a good payoff, switches otherwise.',
)
def pavlov(own: History, opponent: History, context: DecisionContext) -> Action:
    if not own or not opponent:
        return Action.COOPERATE
    last_own, last_opponent = own[-1], opponent[-1]
    earned, _ = context.payoff.score(last_own, last_opponent)
    # A "good" round is one paying at least the mutual-cooperation reward.
    if earned >= context.payoff.r:
        return last_own
    return last_own.flip()


@register_strategy(
    'generous_tit_for_tat',
    'Generous TFT',
    'Tit-for-tat that forgives a defection 10% of the time.',
)
def generous_tit_for_tat(own: History, opponent: History, context: DecisionContext) -> Action:
    action = _mirror_last(opponent)
    if action is Action.DEFECT and context.rng.random() < FORGIVENESS_PROBABILITY:
        return Action.COOPERATE
    return action


@register_strategy(
    'joss',
    'Joss',
    'Tit-for-tat that sneaks in a defection 10% of the time it would cooperate.',
)
def joss(own: History, opponent: History, context: DecisionContext) -> Action:
    # The opening move is always an honest cooperation.
    if not opponent:
        return Action.COOPERATE
    action = _mirror_last(opponent)
    if action is Action.COOPERATE and context.rng.random() < EXPLOITATION_PROBABILITY:
        return Action.DEFECT
    return action


# Shorter id still sent by older clients.
StrategyRegistry.add_alias('generous_tft', 'generous_tit_for_tat')

CATALOG_ORDER = (
    'tit_for_tat',
    'always_defect',
    'grim_trigger',
    'always_cooperate',
    'random',
    'pavlov',
    'generous_tit_for_tat',
    'joss',
)

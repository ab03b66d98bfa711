"""
Serializers for the IPD API.

Serializers check request shape only (presence and JSON types). Range
checks such as ``rounds >= 1`` or ``noise <= 0.5`` belong to the engine,
so the same messages reach API and CLI users.
"""
from rest_framework import serializers


class PayoffSerializer(serializers.DictField):
    """
    Temptation, Reward, Punishment and Sucker payoffs.

    Keys are passed through untouched so the engine can accept upper-case
    keys and reject unknown ones.
    """

    child = serializers.FloatField()


class RunParametersSerializer(serializers.Serializer):
    """Parameters shared by every simulation request."""

    rounds = serializers.IntegerField(required=False)
    noise = serializers.FloatField(required=False)
    payoff = PayoffSerializer(required=False)
    seed = serializers.IntegerField(required=False, allow_null=True)


class GameRequestSerializer(RunParametersSerializer):
    """Request body for a single match."""

    p1_id = serializers.CharField()
    p2_id = serializers.CharField()


class TournamentRequestSerializer(RunParametersSerializer):
    """Request body for a round robin tournament."""


class EvolutionRequestSerializer(RunParametersSerializer):
    """Request body for an evolution run."""

    generations = serializers.IntegerField(required=False)
    initial_populations = serializers.JSONField(required=False, allow_null=True)


class StrategySerializer(serializers.Serializer):
    """Catalog entry."""

    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()


class MatchResultSerializer(serializers.Serializer):
    """Outcome of one match."""

    player_id = serializers.CharField()
    opponent_id = serializers.CharField()
    player_name = serializers.CharField()
    opponent_name = serializers.CharField()
    rounds = serializers.ListField(
        child=serializers.ListField(child=serializers.CharField())
    )
    player_score = serializers.FloatField()
    opponent_score = serializers.FloatField()
    warnings = serializers.ListField(child=serializers.CharField())

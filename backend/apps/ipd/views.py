"""Views for the IPD app."""
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .errors import EngineError
from .serializers import (
    EvolutionRequestSerializer,
    GameRequestSerializer,
    MatchResultSerializer,
    StrategySerializer,
    TournamentRequestSerializer,
)
from .services import engine

PAYOFF_WARNINGS_HEADER = 'X-Payoff-Warnings'


def engine_error_response(error: EngineError) -> Response:
    """Surface an engine validation error verbatim."""
    return Response(
        {'error': type(error).__name__, 'detail': str(error)},
        status=status.HTTP_400_BAD_REQUEST,
    )


class SimulationView(APIView):
    """
    Base view for simulation endpoints.

    Validates the request body with `serializer_class` and hands the
    validated data to `simulate`. Engine errors become 400 responses.
    """

    permission_classes = [permissions.AllowAny]
    serializer_class = None

    def simulate(self, data: dict):
        raise NotImplementedError

    def response_headers(self, data: dict) -> dict:
        return {}

    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            result = self.simulate(data)
        except EngineError as e:
            return engine_error_response(e)

        return Response(
            result,
            status=status.HTTP_200_OK,
            headers=self.response_headers(data),
        )


class EngineStatusView(APIView):
    """Liveness probe."""

    permission_classes = [permissions.AllowAny]

    @extend_schema(summary="Engine status", tags=['engine'])
    def get(self, request):
        return Response({'status': engine.greet_engine()})


class StrategyListView(APIView):
    """List the strategy catalog."""

    permission_classes = [permissions.AllowAny]

    @extend_schema(
        summary="List strategies",
        responses=StrategySerializer(many=True),
        tags=['strategies'],
    )
    def get(self, request):
        return Response(engine.list_strategies())


class GameView(SimulationView):
    """Play one match between two strategies."""

    serializer_class = GameRequestSerializer

    @extend_schema(
        summary="Run a match",
        request=GameRequestSerializer,
        responses=MatchResultSerializer,
        tags=['simulation'],
    )
    def post(self, request):
        return super().post(request)

    def simulate(self, data: dict):
        return engine.run_game(
            data['p1_id'],
            data['p2_id'],
            rounds=data.get('rounds'),
            noise=data.get('noise'),
            payoff=data.get('payoff'),
            seed=data.get('seed'),
        )


class TournamentView(SimulationView):
    """Run a round robin tournament over the catalog."""

    serializer_class = TournamentRequestSerializer

    @extend_schema(
        summary="Run a tournament",
        request=TournamentRequestSerializer,
        tags=['simulation'],
    )
    def post(self, request):
        return super().post(request)

    def simulate(self, data: dict):
        return engine.run_tournament(
            rounds=data.get('rounds'),
            noise=data.get('noise'),
            payoff=data.get('payoff'),
            seed=data.get('seed'),
        )


class EvolutionView(SimulationView):
    """Run population dynamics over the catalog."""

    serializer_class = EvolutionRequestSerializer

    @extend_schema(
        summary="Run an evolution",
        request=EvolutionRequestSerializer,
        tags=['simulation'],
    )
    def post(self, request):
        return super().post(request)

    def simulate(self, data: dict):
        return engine.run_evolution(
            rounds=data.get('rounds'),
            noise=data.get('noise'),
            initial_populations=data.get('initial_populations'),
            generations=data.get('generations'),
            payoff=data.get('payoff'),
            seed=data.get('seed'),
        )

    def response_headers(self, data: dict) -> dict:
        # The body is a bare list of generations, so payoff warnings travel
        # in a header instead.
        violations = engine.payoff_warnings(data.get('payoff'))
        if violations:
            return {PAYOFF_WARNINGS_HEADER: '; '.join(violations)}
        return {}

"""
Management command to run the IPD engine from the command line.

Usage:
    python manage.py simulate match tit_for_tat always_defect [--rounds 10]
    python manage.py simulate tournament [--rounds 10] [--noise 0.05]
    python manage.py simulate evolution [--generations 50] [--populations 5 5 5 5 5 5 5 5]
"""
from django.core.management.base import BaseCommand, CommandError

from apps.ipd.errors import EngineError
from apps.ipd.evolution import EvolutionConfig, EvolutionEngine
from apps.ipd.matches import (
    MatchRunner,
    PayoffMatrix,
    RoundRobinTournament,
    format_standings,
)
from apps.ipd.strategies import get_strategy


class Command(BaseCommand):
    help = "Run an Iterated Prisoner's Dilemma match, tournament or evolution"

    def add_arguments(self, parser):
        parser.add_argument(
            'mode',
            choices=['match', 'tournament', 'evolution'],
            help='What to simulate',
        )
        parser.add_argument(
            'players',
            nargs='*',
            help='Two strategy ids (match mode only)',
        )
        parser.add_argument(
            '--rounds',
            type=int,
            default=10,
            help='Rounds per match (default: 10)',
        )
        parser.add_argument(
            '--noise',
            type=float,
            default=0.0,
            help='Probability each action is flipped, 0 to 0.5 (default: 0)',
        )
        parser.add_argument(
            '--generations',
            type=int,
            default=50,
            help='Generations for evolution mode (default: 50)',
        )
        parser.add_argument(
            '--populations',
            type=int,
            nargs='+',
            default=None,
            help='Initial counts in catalog order (default: 5 each)',
        )
        parser.add_argument(
            '--payoff',
            type=float,
            nargs=4,
            metavar=('T', 'R', 'P', 'S'),
            default=None,
            help='Payoff matrix (default: 5 3 1 0)',
        )
        parser.add_argument(
            '--seed',
            type=int,
            default=None,
            help='Random seed for a reproducible run',
        )

    def handle(self, *args, **options):
        try:
            payoff = PayoffMatrix()
            if options['payoff']:
                payoff = PayoffMatrix.from_mapping(
                    dict(zip('trps', options['payoff']))
                )
            for violation in payoff.ordering_violations():
                self.stderr.write(self.style.WARNING(f"Payoff warning: {violation}"))

            mode = options['mode']
            if mode == 'match':
                self._run_match(options, payoff)
            elif mode == 'tournament':
                self._run_tournament(options, payoff)
            else:
                self._run_evolution(options, payoff)
        except EngineError as e:
            raise CommandError(str(e))

    def _run_match(self, options, payoff):
        players = options['players']
        if len(players) != 2:
            raise CommandError("Match mode needs exactly two strategy ids")

        runner = MatchRunner(
            rounds=options['rounds'],
            noise=options['noise'],
            payoff=payoff,
        )
        player, opponent = get_strategy(players[0]), get_strategy(players[1])
        result = runner.run_match(player, opponent, seed=options['seed'])

        for i, (a, b) in enumerate(result.rounds, 1):
            self.stdout.write(f"Round {i}: {result.player_name} {a} | {result.opponent_name} {b}")
        self.stdout.write("-" * 40)
        self.stdout.write(self.style.SUCCESS(
            f"RESULT: {result.player_name} ({result.player_score}) - "
            f"{result.opponent_name} ({result.opponent_score})"
        ))

    def _run_tournament(self, options, payoff):
        tournament = RoundRobinTournament(
            rounds=options['rounds'],
            noise=options['noise'],
            payoff=payoff,
        )
        result = tournament.run(seed=options['seed'])
        self.stdout.write(format_standings(result.standings))

    def _run_evolution(self, options, payoff):
        config = EvolutionConfig(
            rounds=options['rounds'],
            noise=options['noise'],
            payoff=payoff,
            generations=options['generations'],
        )
        engine = EvolutionEngine(config)
        run = engine.run(options['populations'], seed=options['seed'])

        header = ''.join(f"{strategy_id[:10]:>11}" for strategy_id in engine.strategy_ids)
        self.stdout.write(f"{'Gen':<6}{header}")
        for generation in run:
            counts = ''.join(
                f"{generation.population_of(strategy_id):>11}"
                for strategy_id in engine.strategy_ids
            )
            self.stdout.write(f"{generation.gen_number:<6}{counts}")

        self.stdout.write(self.style.SUCCESS(f"Final population: {run.final_population}"))

"""Console output formatting."""

from horsesim.analysis.montecarlo import SimulationResults
from horsesim.simulation import (
    DomainEvent,
    HorseFinished,
    Race,
    RaceFinished,
    RaceStarted,
    TurnCompleted,
)


class ConsoleOutput:
    """Formats race state and results for console display."""

    @staticmethod
    def print_leaderboard(race: Race) -> None:
        """Print the current standings of a race.

        Args:
            race: Race to display
        """
        print("\n" + "=" * 60)
        print(f"LEADERBOARD - {race.distance} ({race.distance.label}), turn {race.turn_count}")
        print("=" * 60)
        print(f"{'Rank':<5} {'Horse':<30} {'Pos':>6} {'Progress':<15}")
        print("-" * 60)

        for entry in race.get_leaderboard():
            bar = "#" * int(entry.progress / 10)
            flag = " *" if entry.horse.is_finished else ""
            print(
                f"{entry.rank:<5} "
                f"{entry.horse.name:<30} "
                f"{entry.horse.position:>5}m "
                f"{bar:<10}{flag}"
            )

        print("=" * 60)

    @staticmethod
    def print_race_results(race: Race) -> None:
        """Print the finishing order of a race.

        Args:
            race: Race to display (finished horses only are listed)
        """
        print("\n" + "=" * 60)
        print(f"RACE RESULTS - {race.distance}")
        print("=" * 60)
        print(f"{'Place':<6} {'Horse':<30} {'Condition':<18}")
        print("-" * 60)

        for place, horse in enumerate(race.results, 1):
            condition = f"{horse.condition} ({horse.horse.condition.label})"
            print(f"{place:<6} {horse.name:<30} {condition:<18}")

        if not race.is_finished:
            print(f"({len(race.horses) - len(race.results)} still running)")

        print("=" * 60)

    @staticmethod
    def print_monte_carlo_summary(results: SimulationResults) -> None:
        """Print Monte Carlo simulation summary.

        Args:
            results: Aggregated simulation results
        """
        print("\n" + "=" * 70)
        print(f"MONTE CARLO SIMULATION RESULTS - {results.distance}m")
        print(f"({results.num_simulations} simulations, {results.avg_race_turns:.1f} turns/race)")
        print("=" * 70)

        print("\nWIN PROBABILITIES:")
        print("-" * 50)
        for horse_id, prob in results.get_win_probabilities().items():
            stats = results.horse_stats[horse_id]
            bar = "#" * int(prob / 2)
            print(f"{stats.horse_name:<25} {prob:5.1f}% {bar}")

        print("\nAVERAGE FINISHING PLACE:")
        print("-" * 50)
        avg_sorted = sorted(results.horse_stats.values(), key=lambda s: s.avg_position)
        for stats in avg_sorted:
            if stats.positions:
                print(
                    f"{stats.horse_name:<25} "
                    f"Cond: {stats.condition:3d}  "
                    f"Avg: {stats.avg_position:5.2f}  "
                    f"Best: {stats.best_position:2d}  "
                    f"Worst: {stats.worst_position:2d}  "
                    f"Turns: {stats.avg_turns:5.1f}"
                )

        print("=" * 70)

    @staticmethod
    def format_event(event: DomainEvent) -> str:
        """One-line description of a race event."""
        if isinstance(event, RaceStarted):
            return f"Race started: {event.horse_count} horses over {event.distance}m"
        if isinstance(event, TurnCompleted):
            leader = max(event.positions, key=lambda p: p.position)
            return f"Turn {event.turn_number}: {leader.horse_name} leads at {leader.position}m"
        if isinstance(event, HorseFinished):
            return f"  {event.horse_name} finished in place {event.place}"
        if isinstance(event, RaceFinished):
            winner = event.results[0].horse_name if event.results else "-"
            return f"Race finished, winner: {winner}"
        return f"{event.event_type.value} ({event.aggregate_id})"

    @classmethod
    def print_event(cls, event: DomainEvent) -> None:
        """Event bus handler that prints each event."""
        print(cls.format_event(event))

"""Export race results and events to CSV and JSON."""

import csv
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from horsesim.analysis.montecarlo import SimulationResults
from horsesim.simulation import DomainEvent, Race


class Exporter:
    """Exports simulation output to various formats."""

    def __init__(self, output_dir: str | Path = "output"):
        """Initialize exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_results_csv(
        self,
        races: Sequence[Race],
        filename: str = "race_results.csv",
    ) -> Path:
        """Export the finishing order of every race to CSV.

        Args:
            races: Races in program order
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow([
                "race", "distance", "place", "horse_id", "horse_name",
                "color", "condition", "turns",
            ])

            for race_idx, race in enumerate(races, 1):
                for place, horse in enumerate(race.results, 1):
                    writer.writerow([
                        race_idx,
                        race.distance.value,
                        place,
                        str(horse.horse.id),
                        horse.name,
                        horse.color,
                        horse.condition,
                        race.turn_count,
                    ])

        return filepath

    def export_events_json(
        self,
        events: Sequence[DomainEvent],
        filename: str = "events.json",
    ) -> Path:
        """Export a domain event log to JSON.

        Args:
            events: Events in publish order
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        with open(filepath, "w") as f:
            json.dump([event.to_dict() for event in events], f, indent=2)

        return filepath

    def export_statistics_json(
        self,
        results: SimulationResults,
        filename: str = "statistics.json",
    ) -> Path:
        """Export aggregated Monte Carlo statistics to JSON.

        Args:
            results: Simulation results
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        stats_dict: dict[str, Any] = {
            "metadata": {
                "num_simulations": results.num_simulations,
                "distance": results.distance,
                "avg_race_turns": results.avg_race_turns,
            },
            "win_probabilities": results.get_win_probabilities(),
            "horse_statistics": {},
        }

        for horse_id, stats in results.horse_stats.items():
            stats_dict["horse_statistics"][horse_id] = {
                "horse_name": stats.horse_name,
                "condition": stats.condition,
                "wins": stats.wins,
                "win_rate": stats.win_rate,
                "podiums": stats.podiums,
                "podium_rate": stats.podium_rate,
                "avg_position": stats.avg_position,
                "best_position": stats.best_position,
                "worst_position": stats.worst_position,
                "avg_turns": stats.avg_turns,
                "position_distribution": results.get_position_distribution(horse_id),
            }

        with open(filepath, "w") as f:
            json.dump(stats_dict, f, indent=2)

        return filepath

"""Monte Carlo simulation runner and statistics."""

import logging
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field

import numpy as np

from horsesim.models import Distance, Horse
from horsesim.simulation import HorseFinished, PlacingResult, Race, RaceFinished

logger = logging.getLogger(__name__)


@dataclass
class HorseStatistics:
    """Aggregated statistics for a horse across simulations."""

    horse_id: str
    horse_name: str
    condition: int
    wins: int = 0
    podiums: int = 0
    avg_position: float = 0.0
    best_position: int = 0
    worst_position: int = 0
    avg_turns: float = 0.0
    positions: list[int] = field(default_factory=list)
    turns_to_finish: list[int] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        """Win percentage."""
        return self.wins / len(self.positions) * 100 if self.positions else 0

    @property
    def podium_rate(self) -> float:
        """Top-three percentage."""
        return self.podiums / len(self.positions) * 100 if self.positions else 0


@dataclass
class SimulationResults:
    """Results from Monte Carlo simulation."""

    num_simulations: int
    distance: int
    horse_stats: dict[str, HorseStatistics]
    race_results: list[list[PlacingResult]]  # Finishing order of every simulated race
    total_turns: list[int] = field(default_factory=list)

    @property
    def avg_race_turns(self) -> float:
        return float(np.mean(self.total_turns)) if self.total_turns else 0.0

    def get_win_probabilities(self) -> dict[str, float]:
        """Get win probability for each horse, most likely winner first."""
        return {
            horse_id: stats.win_rate
            for horse_id, stats in sorted(
                self.horse_stats.items(),
                key=lambda x: x[1].wins,
                reverse=True,
            )
        }

    def get_position_distribution(self, horse_id: str) -> dict[int, float]:
        """Get finishing place probability distribution for a horse."""
        if horse_id not in self.horse_stats:
            return {}

        positions = self.horse_stats[horse_id].positions
        counts: dict[int, int] = defaultdict(int)
        for pos in positions:
            counts[pos] += 1

        return {
            pos: count / len(positions) * 100
            for pos, count in sorted(counts.items())
        }


def _run_single_simulation(args: tuple) -> tuple[list[PlacingResult], dict[str, int], int]:
    """Run one race to completion (for multiprocessing).

    Args:
        args: Tuple of (horses_data, distance_meters, seed)

    Returns:
        Tuple of (finishing order, finishing turn by horse id, total turns)
    """
    horses_data, distance_meters, seed = args

    horses = [Horse.model_validate(h) for h in horses_data]
    rng = np.random.default_rng(seed)
    race = Race.create(horses, Distance.create(distance_meters), rng=rng)
    race.start()

    # Running-horse ids are per race; report by the underlying horse id
    horse_ids = {rh.id: rh.horse.id for rh in race.horses}
    finish_turns: dict[str, int] = {}
    placings: list[PlacingResult] = []

    while not race.is_finished:
        race.turn()
        for event in race.clear_domain_events():
            if isinstance(event, HorseFinished):
                finish_turns[str(horse_ids[event.horse_id])] = race.turn_count
            elif isinstance(event, RaceFinished):
                placings = [
                    r.model_copy(update={"horse_id": horse_ids[r.horse_id]})
                    for r in event.results
                ]

    return placings, finish_turns, race.turn_count


class MonteCarloRunner:
    """Runs the same lineup many times to estimate finishing odds."""

    def __init__(
        self,
        horses: list[Horse],
        distance: Distance,
        seed: int | None = None,
    ):
        """Initialize Monte Carlo runner.

        Args:
            horses: Lineup, in gate order
            distance: Race distance
            seed: Random seed for reproducibility
        """
        self.horses = horses
        self.distance = distance
        self.base_seed = seed if seed is not None else int(np.random.default_rng().integers(0, 2**31))

    def run(
        self,
        num_simulations: int = 1000,
        parallel: bool = False,
        max_workers: int | None = None,
    ) -> SimulationResults:
        """Run Monte Carlo simulations.

        Args:
            num_simulations: Number of races to simulate
            parallel: Whether to use a process pool
            max_workers: Maximum parallel workers (None = CPU count)

        Returns:
            SimulationResults with aggregated statistics
        """
        horses_data = [h.model_dump() for h in self.horses]
        args_list = [
            (horses_data, self.distance.value, self.base_seed + i)
            for i in range(num_simulations)
        ]

        if parallel and num_simulations > 1:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                outcomes = list(executor.map(_run_single_simulation, args_list))
        else:
            outcomes = [_run_single_simulation(args) for args in args_list]

        race_results = [placings for placings, _, _ in outcomes]
        horse_stats = self._aggregate_statistics(outcomes)

        logger.info(
            "Simulated %d races over %s (seed %d)",
            num_simulations,
            self.distance,
            self.base_seed,
        )

        return SimulationResults(
            num_simulations=num_simulations,
            distance=self.distance.value,
            horse_stats=horse_stats,
            race_results=race_results,
            total_turns=[turns for _, _, turns in outcomes],
        )

    def _aggregate_statistics(
        self,
        outcomes: list[tuple[list[PlacingResult], dict[str, int], int]],
    ) -> dict[str, HorseStatistics]:
        """Aggregate statistics from all simulations."""
        stats: dict[str, HorseStatistics] = {
            str(horse.id): HorseStatistics(
                horse_id=str(horse.id),
                horse_name=horse.name,
                condition=horse.condition.value,
            )
            for horse in self.horses
        }

        for placings, finish_turns, _ in outcomes:
            for result in placings:
                horse_stat = stats[str(result.horse_id)]
                horse_stat.positions.append(result.place)
                if result.place == 1:
                    horse_stat.wins += 1
                if result.place <= 3:
                    horse_stat.podiums += 1
            for horse_id, turn in finish_turns.items():
                stats[horse_id].turns_to_finish.append(turn)

        for horse_stat in stats.values():
            if horse_stat.positions:
                horse_stat.avg_position = float(np.mean(horse_stat.positions))
                horse_stat.best_position = min(horse_stat.positions)
                horse_stat.worst_position = max(horse_stat.positions)
            if horse_stat.turns_to_finish:
                horse_stat.avg_turns = float(np.mean(horse_stat.turns_to_finish))

        return stats

    def run_quick(self, num_simulations: int = 100) -> SimulationResults:
        """Run a quick simulation without parallelization."""
        return self.run(num_simulations=num_simulations, parallel=False)

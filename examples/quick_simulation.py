#!/usr/bin/env python3
"""Quick simulation example with a hand-made roster.

Runs a full race program on the asyncio timer, printing events as they
are published, then estimates win odds for the first lineup.

Usage:
    python examples/quick_simulation.py [--races N] [--interval MS] [--seed S]
"""

import argparse
import asyncio
import logging
import sys
import uuid
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from horsesim import Distance, Horse, SimulationSettings
from horsesim.adapters import AsyncioTimer, InMemoryGameStateStore
from horsesim.analysis import MonteCarloRunner
from horsesim.application import EventBus, GenerateProgramCommand, StartRaceCommand
from horsesim.output import ConsoleOutput, Exporter
from horsesim.simulation import DomainEvent, EventType, Race


def create_roster() -> list[Horse]:
    """Create a fixed roster of twelve horses."""
    horses_data = [
        ("Thunder Runner", "#8b4513", 92),
        ("Silver Arrow", "#c0c0c0", 85),
        ("Midnight Star", "#191970", 78),
        ("Golden Spirit", "#daa520", 74),
        ("Wild Legend", "#228b22", 70),
        ("Royal Dancer", "#4169e1", 66),
        ("Lucky Bolt", "#ff8c00", 61),
        ("Storm Knight", "#708090", 57),
        ("Noble Heart", "#b22222", 52),
        ("Swift Glory", "#9acd32", 47),
        ("Mystic Dream", "#9932cc", 40),
        ("Brave Flash", "#ff1493", 33),
    ]
    # uuid5 keeps ids stable across runs
    return [
        Horse.create(uuid.uuid5(uuid.NAMESPACE_DNS, name), name, color, condition)
        for name, color, condition in horses_data
    ]


async def run_program(
    settings: SimulationSettings,
    roster: list[Horse],
) -> tuple[list[DomainEvent], list[Race]]:
    store = InMemoryGameStateStore()
    bus = EventBus()
    timer = AsyncioTimer()

    event_log: list[DomainEvent] = []
    bus.subscribe_all(event_log.append)
    bus.subscribe_all(ConsoleOutput.print_event)

    all_done = asyncio.Event()

    def on_race_finished(event: DomainEvent) -> None:
        race = store.get_current_race()
        if race is not None:
            ConsoleOutput.print_race_results(race)
        if store.get_current_race_index() == len(store.get_races()) - 1:
            all_done.set()

    bus.subscribe(EventType.RACE_FINISHED, on_race_finished)

    rng = np.random.default_rng(settings.seed)
    program = GenerateProgramCommand(store, rng=rng).execute(
        roster,
        race_count=settings.race_count,
        horses_per_race=settings.horses_per_race,
    )

    command = StartRaceCommand(timer, store, bus, tick_interval_ms=settings.tick_interval_ms)
    await command.execute()
    await all_done.wait()
    command.stop()
    timer.cancel_all()

    return event_log, program.races


def main():
    parser = argparse.ArgumentParser(description="Run a horse race program")
    parser.add_argument("--races", type=int, help="Number of races (default: settings)")
    parser.add_argument("--interval", type=float, help="Tick interval in ms (default: settings)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--simulations",
        "-n",
        type=int,
        default=500,
        help="Monte Carlo simulations for the odds table (default: 500)",
    )
    parser.add_argument("--export", action="store_true", help="Export results to CSV/JSON")
    parser.add_argument("--output-dir", default="output", help="Output directory for exports")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {
        "race_count": args.races,
        "tick_interval_ms": args.interval,
        "seed": args.seed,
    }
    settings = SimulationSettings.from_env().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    print("Horse Race Simulation - Quick Example")
    print("=" * 50)

    roster = create_roster()
    events, races = asyncio.run(run_program(settings, roster))

    lineup = roster[: settings.horses_per_race]
    runner = MonteCarloRunner(lineup, distance=Distance.longest(), seed=settings.seed)
    results = runner.run_quick(num_simulations=args.simulations)
    ConsoleOutput.print_monte_carlo_summary(results)

    if args.export:
        exporter = Exporter(output_dir=args.output_dir)
        print(f"\n  results: {exporter.export_results_csv(races)}")
        print(f"  events: {exporter.export_events_json(events)}")
        print(f"  statistics: {exporter.export_statistics_json(results)}")

    print("\nDone!")
    return 0


if __name__ == "__main__":
    sys.exit(main())

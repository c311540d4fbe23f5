import asyncio
import logging

from horsesim.adapters import AsyncioTimer, InMemoryGameStateStore
from horsesim.application import EventBus, PauseRaceCommand, StartRaceCommand
from horsesim.simulation import EventType
from tests._support.helpers import make_race


def twelve_turn_race():
    return make_race([100], meters=1200, draw=0.99)


def wire(*races):
    store = InMemoryGameStateStore()
    store.set_races(list(races))
    bus = EventBus()
    timer = AsyncioTimer()
    command = StartRaceCommand(timer, store, bus, tick_interval_ms=1)
    return command, store, bus, timer


def finished_last_race(store: InMemoryGameStateStore, bus: EventBus) -> asyncio.Event:
    done = asyncio.Event()

    def on_race_finished(event):
        if store.get_current_race_index() == len(store.get_races()) - 1:
            done.set()

    bus.subscribe(EventType.RACE_FINISHED, on_race_finished)
    return done


def test_program_runs_every_race_on_the_event_loop():
    races = [twelve_turn_race() for _ in range(3)]

    async def scenario():
        command, store, bus, timer = wire(*races)
        seen = []
        bus.subscribe_all(lambda e: seen.append(e.event_type.value))
        done = finished_last_race(store, bus)

        await command.execute()
        await asyncio.wait_for(done.wait(), timeout=5)
        await asyncio.sleep(0.01)
        return command, store, timer, seen

    command, store, timer, seen = asyncio.run(scenario())

    assert all(race.is_finished and race.turn_count == 12 for race in races)
    one_race = (
        ["RaceStarted"]
        + ["TurnCompleted"] * 11
        + ["HorseFinished", "TurnCompleted", "RaceFinished"]
    )
    assert seen == one_race * 3
    assert store.get_current_race_index() == 2
    assert store.is_running() is False
    assert command.is_running() is False
    assert timer.active_count() == 0


def test_pause_while_handler_awaits_lets_the_turn_finish_publishing():
    race = twelve_turn_race()

    async def scenario():
        command, store, bus, timer = wire(race, twelve_turn_race())
        pause = PauseRaceCommand(command, store)
        entered = asyncio.Event()
        release = asyncio.Event()
        seen = []

        async def slow_display(event):
            if event.turn_number == 3:
                entered.set()
                await release.wait()

        bus.subscribe(EventType.TURN_COMPLETED, slow_display)
        bus.subscribe_all(lambda e: seen.append((e.event_type.value, getattr(e, "turn_number", None))))

        await command.execute()
        await asyncio.wait_for(entered.wait(), timeout=5)
        pause.execute()
        release.set()
        await asyncio.sleep(0.02)
        return command, store, timer, seen

    command, store, timer, seen = asyncio.run(scenario())

    assert race.turn_count == 3
    assert seen[-1] == ("TurnCompleted", 3)
    assert store.get_current_race_index() == 0
    assert store.is_running() is False
    assert command.is_running() is False
    assert timer.active_count() == 0


def test_pause_during_final_turn_still_publishes_race_finished():
    race = twelve_turn_race()

    async def scenario():
        command, store, bus, timer = wire(race)
        pause = PauseRaceCommand(command, store)
        entered = asyncio.Event()
        release = asyncio.Event()
        seen = []

        async def slow_display(event):
            seen.append(event.event_type.value)
            if event.event_type is EventType.HORSE_FINISHED:
                entered.set()
                await release.wait()

        bus.subscribe_all(slow_display)

        await command.execute()
        await asyncio.wait_for(entered.wait(), timeout=5)
        pause.execute()
        release.set()
        await asyncio.sleep(0.02)
        return store, timer, seen

    store, timer, seen = asyncio.run(scenario())

    assert race.is_finished
    assert seen[-3:] == ["HorseFinished", "TurnCompleted", "RaceFinished"]
    assert store.is_running() is False
    assert timer.active_count() == 0


def test_failing_handler_does_not_stall_the_loop(caplog):
    race = twelve_turn_race()

    async def scenario():
        command, store, bus, timer = wire(race)
        done = finished_last_race(store, bus)
        second_turn = asyncio.Event()
        states = []

        def flaky_display(event):
            if event.turn_number == 1:
                raise RuntimeError("display failed")
            if event.turn_number == 2:
                states.append((command.is_running(), store.is_running(), timer.active_count()))
                second_turn.set()

        bus.subscribe(EventType.TURN_COMPLETED, flaky_display)

        await command.execute()
        await asyncio.wait_for(second_turn.wait(), timeout=5)
        assert states == [(True, True, 1)]

        await asyncio.wait_for(done.wait(), timeout=5)
        await asyncio.sleep(0.01)
        return command, store, timer

    with caplog.at_level(logging.ERROR, logger="horsesim.adapters.timer"):
        command, store, timer = asyncio.run(scenario())

    assert race.is_finished
    assert race.turn_count == 12
    assert command.is_running() is False
    assert store.is_running() is False
    assert timer.active_count() == 0
    assert any("callback failed" in r.getMessage() for r in caplog.records)

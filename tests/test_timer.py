import asyncio
import logging

from horsesim.adapters import AsyncioTimer, ManualTimer


def test_manual_timer_fires_in_scheduling_order():
    timer = ManualTimer()
    calls = []
    timer.schedule_repeating(lambda: calls.append("a"), 100)
    timer.schedule_once(lambda: calls.append("b"), 50)
    timer.schedule_repeating(lambda: calls.append("c"), 100)

    asyncio.run(timer.fire_many(2))

    assert calls == ["a", "b", "c", "a", "c"]
    assert timer.active_count() == 2


def test_manual_timer_cancel_and_reset():
    timer = ManualTimer()
    calls = []
    handle = timer.schedule_repeating(lambda: calls.append("x"), 100)
    once = timer.schedule_once(lambda: calls.append("y"), 100)

    assert timer.is_active(handle)
    assert timer.interval_of(handle) == 100
    timer.cancel_repeating(handle)
    timer.cancel_once(once)
    timer.cancel_repeating(999)
    asyncio.run(timer.fire())

    assert calls == []
    assert not timer.is_active(handle)

    timer.schedule_repeating(lambda: None, 10)
    timer.reset()
    assert timer.active_count() == 0
    assert timer.schedule_once(lambda: None, 10) == 1


def test_manual_timer_awaits_async_callbacks_and_defers_new_timers():
    timer = ManualTimer()
    calls = []

    async def tick():
        calls.append("tick")
        timer.schedule_once(lambda: calls.append("later"), 10)

    handle = timer.schedule_once(tick, 10)

    async def scenario():
        await timer.fire()
        assert calls == ["tick"]
        await timer.fire()

    asyncio.run(scenario())

    assert calls == ["tick", "later"]
    assert not timer.is_active(handle)


def test_manual_timer_callback_can_cancel_itself():
    timer = ManualTimer()
    calls = []
    handles = []

    def tick():
        calls.append(1)
        timer.cancel_repeating(handles[0])

    handles.append(timer.schedule_repeating(tick, 10))
    asyncio.run(timer.fire_many(3))

    assert calls == [1]


def test_asyncio_timer_repeats_until_cancelled():
    async def scenario():
        timer = AsyncioTimer()
        calls = []
        handle = timer.schedule_repeating(lambda: calls.append(1), 1)
        while len(calls) < 3:
            await asyncio.sleep(0.005)
        timer.cancel_repeating(handle)
        count = len(calls)
        await asyncio.sleep(0.02)
        return timer, calls, count

    timer, calls, count = asyncio.run(scenario())

    assert len(calls) == count
    assert timer.active_count() == 0


def test_asyncio_timer_once_fires_a_single_time():
    async def scenario():
        timer = AsyncioTimer()
        calls = []
        timer.schedule_once(lambda: calls.append(1), 1)
        await asyncio.sleep(0.03)
        return timer, calls

    timer, calls = asyncio.run(scenario())

    assert calls == [1]
    assert timer.active_count() == 0


def test_asyncio_timer_cancelled_once_never_fires():
    async def scenario():
        timer = AsyncioTimer()
        calls = []
        handle = timer.schedule_once(lambda: calls.append(1), 10)
        timer.cancel_once(handle)
        timer.cancel_once(handle)
        await asyncio.sleep(0.03)
        return calls

    assert asyncio.run(scenario()) == []


def test_asyncio_timer_callback_can_cancel_its_own_handle():
    async def scenario():
        timer = AsyncioTimer()
        calls = []
        handles = []

        async def tick():
            calls.append("start")
            timer.cancel_repeating(handles[0])
            await asyncio.sleep(0)
            calls.append("end")

        handles.append(timer.schedule_repeating(tick, 1))
        await asyncio.sleep(0.03)
        return timer, calls

    timer, calls = asyncio.run(scenario())

    assert calls == ["start", "end"]
    assert timer.active_count() == 0


def test_asyncio_timer_cancel_all():
    async def scenario():
        timer = AsyncioTimer()
        calls = []
        timer.schedule_repeating(lambda: calls.append(1), 5)
        timer.schedule_once(lambda: calls.append(2), 5)
        timer.cancel_all()
        await asyncio.sleep(0.02)
        return timer, calls

    timer, calls = asyncio.run(scenario())

    assert calls == []
    assert timer.active_count() == 0


def test_asyncio_timer_cancel_from_another_task_lets_running_callback_finish():
    async def scenario():
        timer = AsyncioTimer()
        calls = []
        entered = asyncio.Event()
        release = asyncio.Event()

        async def tick():
            calls.append("start")
            entered.set()
            await release.wait()
            calls.append("end")

        handle = timer.schedule_repeating(tick, 1)
        await asyncio.wait_for(entered.wait(), timeout=5)
        timer.cancel_repeating(handle)
        release.set()
        await asyncio.sleep(0.02)
        return timer, calls

    timer, calls = asyncio.run(scenario())

    assert calls == ["start", "end"]
    assert timer.active_count() == 0


def test_asyncio_timer_keeps_firing_after_a_callback_error(caplog):
    async def scenario():
        timer = AsyncioTimer()
        calls = []

        def tick():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")

        handle = timer.schedule_repeating(tick, 1)
        while len(calls) < 3:
            await asyncio.sleep(0.005)
        timer.cancel_repeating(handle)
        return timer, calls

    with caplog.at_level(logging.ERROR, logger="horsesim.adapters.timer"):
        timer, calls = asyncio.run(scenario())

    assert len(calls) >= 3
    assert timer.active_count() == 0
    assert any("callback failed" in r.getMessage() for r in caplog.records)

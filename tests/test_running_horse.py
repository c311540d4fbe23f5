import uuid

import numpy as np
import pytest

from horsesim.errors import HorseAlreadyFinishedError
from horsesim.simulation import RunningHorse
from tests._support.helpers import FixedRandom, make_horse


def test_create_starts_at_gate():
    horse = make_horse()
    running = RunningHorse.create(horse)

    assert running.position == 0
    assert running.is_finished is False
    assert running.horse is horse
    assert running.id != horse.id


def test_create_uses_supplied_id():
    running_id = uuid.uuid4()
    assert RunningHorse.create(make_horse(), running_id).id == running_id


@pytest.mark.parametrize(
    "draw, condition, expected",
    [
        (0.0, 1, 1),
        (0.0, 100, 1),
        (0.5, 50, 26),
        (0.99, 100, 100),
        (0.999999, 37, 37),
    ],
)
def test_movement_is_floor_of_draw_times_condition_plus_one(draw, condition, expected):
    running = RunningHorse.create(make_horse(condition=condition))

    assert running.run(2200, FixedRandom(draw)) == expected
    assert running.position == expected


@pytest.mark.parametrize("condition", [1, 2, 17, 50, 99, 100])
def test_movement_stays_within_one_and_condition(condition):
    rng = np.random.default_rng(condition)
    for _ in range(200):
        running = RunningHorse.create(make_horse(condition=condition))
        movement = running.run(2200, rng)
        assert 1 <= movement <= condition


def test_crossing_the_line_clamps_position_and_finishes():
    running = RunningHorse.reconstitute(uuid.uuid4(), make_horse(condition=100), 1150, False)

    movement = running.run(1200, FixedRandom(0.99))

    assert movement == 100  # unclamped
    assert running.position == 1200
    assert running.is_finished is True


def test_landing_exactly_on_the_line_finishes():
    running = RunningHorse.reconstitute(uuid.uuid4(), make_horse(condition=50), 1174, False)

    running.run(1200, FixedRandom(0.5))

    assert running.position == 1200
    assert running.is_finished


def test_finished_horse_cannot_run_again():
    running = RunningHorse.reconstitute(uuid.uuid4(), make_horse(), 1200, True)

    with pytest.raises(HorseAlreadyFinishedError) as exc_info:
        running.run(1200, FixedRandom(0.5))

    assert exc_info.value.horse_id == running.id
    assert running.position == 1200


def test_progress_is_percentage_capped_at_100():
    running = RunningHorse.reconstitute(uuid.uuid4(), make_horse(), 600, False)
    assert running.get_progress(1200) == 50.0

    overshot = RunningHorse.reconstitute(uuid.uuid4(), make_horse(), 1500, False)
    assert overshot.get_progress(1200) == 100.0


def test_position_and_finish_flag_are_read_only():
    running = RunningHorse.create(make_horse())

    with pytest.raises(AttributeError):
        running.position = 500
    with pytest.raises(AttributeError):
        running.is_finished = True

    running.run(1200, FixedRandom(0.5))
    assert running.position == 26
    assert running.is_finished is False


def test_equality_by_running_id_and_serialization():
    horse = make_horse()
    running_id = uuid.uuid4()
    a = RunningHorse.reconstitute(running_id, horse, 10, False)
    b = RunningHorse.reconstitute(running_id, horse, 99, True)

    assert a == b
    assert a != RunningHorse.create(horse)
    assert a.to_dict() == {
        "id": str(running_id),
        "horse": horse.to_dict(),
        "position": 10,
        "is_finished": False,
    }
    assert str(b) == f"{horse.name} at 99m (finished)"

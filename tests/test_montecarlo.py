import pytest

from horsesim.analysis import MonteCarloRunner
from horsesim.models import Distance
from tests._support.helpers import make_horse


@pytest.fixture
def lineup():
    return [
        make_horse("Strong One", 100),
        make_horse("Middle One", 50),
        make_horse("Weak One", 5),
    ]


def test_every_simulation_places_every_horse(lineup):
    results = MonteCarloRunner(lineup, Distance.create(1200), seed=1).run(num_simulations=20)

    assert results.num_simulations == 20
    assert results.distance == 1200
    assert len(results.race_results) == 20
    assert len(results.total_turns) == 20
    for placings in results.race_results:
        assert [p.place for p in placings] == [1, 2, 3]
        assert {p.horse_id for p in placings} == {h.id for h in lineup}

    for horse in lineup:
        stats = results.horse_stats[str(horse.id)]
        assert len(stats.positions) == 20
        assert len(stats.turns_to_finish) == 20
        assert 1 <= stats.best_position <= stats.avg_position <= stats.worst_position <= 3


def test_condition_drives_win_probability(lineup):
    results = MonteCarloRunner(lineup, Distance.create(1600), seed=5).run(num_simulations=30)
    probabilities = results.get_win_probabilities()

    assert list(probabilities)[0] == str(lineup[0].id)
    assert probabilities[str(lineup[0].id)] > 90
    assert results.horse_stats[str(lineup[2].id)].wins == 0
    assert sum(s.wins for s in results.horse_stats.values()) == 30
    assert results.avg_race_turns > 0


def test_seed_makes_runs_reproducible(lineup):
    a = MonteCarloRunner(lineup, Distance.create(1400), seed=9).run_quick(10)
    b = MonteCarloRunner(lineup, Distance.create(1400), seed=9).run_quick(10)

    assert a.total_turns == b.total_turns
    assert [[p.horse_id for p in r] for r in a.race_results] == [
        [p.horse_id for p in r] for r in b.race_results
    ]


def test_position_distribution_sums_to_100(lineup):
    results = MonteCarloRunner(lineup, Distance.create(1200), seed=3).run(num_simulations=10)

    distribution = results.get_position_distribution(str(lineup[1].id))

    assert sum(distribution.values()) == pytest.approx(100.0)
    assert results.get_position_distribution("missing") == {}

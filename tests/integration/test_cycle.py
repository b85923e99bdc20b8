from stroom import Continue, Halted, cycle, map_, reduce, take
from tests.helpers.reducers import ResourceTracker, append_step, to_list


def test_cycle_repeats_the_source():
    assert to_list(take(cycle([1, 2, 3]), 5)) == [1, 2, 3, 1, 2]


def test_cycle_of_a_single_element():
    assert to_list(take(cycle("a"), 3)) == ["a", "a", "a"]


def test_cycle_restarts_a_pipeline_source():
    assert to_list(take(cycle(map_([1, 2], lambda x: x * 10)), 5)) == [10, 20, 10, 20, 10]


def test_cycle_does_not_restart_a_halting_source():
    outcome = reduce(cycle(take([1, 2, 3], 2)), Continue([]), append_step)
    assert outcome == Halted([1, 2])


def test_cycle_reports_downstream_halt():
    outcome = reduce(take(cycle([1, 2]), 3), Continue([]), append_step)
    assert outcome == Halted([1, 2, 1])


def test_cycle_reacquires_a_resource_on_every_pass():
    tracker = ResourceTracker([1, 2])
    assert to_list(take(cycle(tracker.producer()), 5)) == [1, 2, 1, 2, 1]
    assert tracker.acquired == 3
    assert tracker.released == 3

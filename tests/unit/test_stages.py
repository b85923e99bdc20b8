import itertools

import pytest
from typeguard import TypeCheckError

from stroom import (
    Continue,
    Halted,
    drop,
    drop_while,
    each,
    filter_,
    map_,
    reduce,
    reject,
    take,
    take_while,
    with_index,
)
from tests.helpers.reducers import CountingIterable, append_step, to_list


# --- map / each ---


def test_map_preserves_order_and_calls_once_per_element():
    calls = []

    def double(x):
        calls.append(x)
        return x * 2

    data = [3, 1, 2]
    assert to_list(map_(data, double)) == [6, 2, 4]
    assert calls == data


def test_each_runs_side_effect_and_forwards_unchanged():
    seen = []
    assert to_list(each([1, 2, 3], seen.append)) == [1, 2, 3]
    assert seen == [1, 2, 3]


def test_each_only_runs_for_pulled_elements():
    seen = []
    assert to_list(take(each([1, 2, 3, 4, 5], seen.append), 2)) == [1, 2]
    assert seen == [1, 2]


def test_map_rejects_non_callable():
    with pytest.raises(TypeCheckError):
        map_([1], 5)


# --- filter / reject ---


def test_filter_keeps_matching_elements():
    assert to_list(filter_(range(10), lambda x: x % 3 == 0)) == [0, 3, 6, 9]


def test_reject_discards_matching_elements():
    assert to_list(reject([1, 2, 3], lambda x: x % 2 == 0)) == [1, 3]


def test_filter_uses_truthiness():
    assert to_list(filter_([0, 1, "", "a", None], lambda x: x)) == [1, "a"]


# --- drop / drop_while ---


def test_drop_skips_first_elements():
    assert to_list(drop(range(1, 11), 5)) == [6, 7, 8, 9, 10]


def test_drop_more_than_available():
    assert to_list(drop([1, 2], 5)) == []


def test_drop_zero_keeps_everything():
    assert to_list(drop([1, 2], 0)) == [1, 2]


def test_drop_negative_count_raises():
    with pytest.raises(ValueError):
        drop([1, 2], -1)


def test_drop_non_integer_count_raises():
    with pytest.raises(TypeCheckError):
        drop([1, 2], "2")


def test_drop_while_never_reverts_to_dropping():
    assert to_list(drop_while([1, 2, 3, 1, 2], lambda x: x < 3)) == [3, 1, 2]


def test_drop_while_everything():
    assert to_list(drop_while([1, 2], lambda x: True)) == []


# --- take / take_while ---


def test_take_first_elements():
    assert to_list(take(range(1, 101), 5)) == [1, 2, 3, 4, 5]


def test_take_never_pulls_more_than_n():
    source = CountingIterable(itertools.count())
    assert to_list(take(source, 5)) == [0, 1, 2, 3, 4]
    assert source.pulled == 5


def test_take_halts_exactly_after_n():
    outcome = reduce(take([1, 2, 3], 3), Continue([]), append_step)
    assert outcome == Halted([1, 2, 3])


def test_take_more_than_available():
    assert to_list(take([1, 2], 5)) == [1, 2]


def test_take_zero_examines_nothing():
    source = CountingIterable(itertools.count())
    outcome = reduce(take(source, 0), Continue([]), append_step)
    assert outcome == Halted([])
    assert source.pulled == 0


def test_take_negative_count_raises():
    with pytest.raises(ValueError):
        take([1], -3)


def test_take_when_iterating_never_pulls_more_than_n():
    source = CountingIterable(itertools.count())
    assert list(take(source, 3)) == [0, 1, 2]
    assert source.pulled == 3


def test_drop_then_take_yields_a_window():
    assert to_list(take(drop(range(10), 3), 4)) == [3, 4, 5, 6]
    assert to_list(take(drop(range(5), 3), 4)) == [3, 4]


def test_take_while_stops_at_first_failure():
    source = CountingIterable([1, 2, 3, 4, 1])
    assert to_list(take_while(source, lambda x: x < 3)) == [1, 2]
    assert source.pulled == 3


def test_take_while_on_infinite_source():
    assert to_list(take_while(itertools.count(), lambda x: x < 4)) == [0, 1, 2, 3]


# --- with_index ---


def test_with_index_pairs_elements_with_position():
    assert to_list(with_index(["a", "b", "c"])) == [("a", 0), ("b", 1), ("c", 2)]


def test_with_index_counts_only_forwarded_elements():
    pipeline = with_index(filter_(range(6), lambda x: x % 2))
    assert to_list(pipeline) == [(1, 0), (3, 1), (5, 2)]


# --- Failures ---


def test_user_function_failure_propagates_through_stages():
    def boom(x):
        if x == 2:
            raise ZeroDivisionError("boom")
        return x

    pipeline = with_index(take(map_(filter_(range(10), lambda x: True), boom), 5))
    with pytest.raises(ZeroDivisionError):
        to_list(pipeline)

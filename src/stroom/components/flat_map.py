"""
This module provides `flat_map` and `concat`, which splice the elements of
many producers into one stream.

The outer source is pulled one element at a time through a `Cursor`. Every
outer element is turned into an inner producer that is reduced to the end with
the downstream step before the outer source is asked for more. When the
downstream step halts in the middle of an inner reduction, the inner reduction
has to be abandoned on the spot; that is done by raising `_FlatMapHalt`, which
only the `flat_map` reduction that raised it catches.
"""
from __future__ import annotations

from functools import partial
from typing import Any, Callable, Optional

from typeguard import typechecked

from ..core.log import get_logger
from ..core.producer import Cursor, Producer, reduce
from ..core.protocol import (
    Continuation,
    Continue,
    Done,
    Halt,
    Halted,
    Outcome,
    Signal,
    StepFunction,
    Suspend,
    Suspended,
)
from ..core.utils import SENTINEL, identity

logger = get_logger("stroom.flat_map")


class _FlatMapHalt(Exception):
    """Carries a downstream halt out of an inner reduction."""

    def __init__(self, token: object, acc: Any):
        super().__init__("flat_map halted")
        self.token = token
        self.acc = acc


class FlatMap(Producer):
    """Reduces `mapper(element)` for every element of `source`, in order."""

    def __init__(self, source: Any, mapper: Callable[[Any], Any]):
        self.source = source
        self.mapper = mapper

    def reduce(self, signal: Signal, step: StepFunction) -> Outcome:
        token = object()

        def _guarded(element: Any, acc: Any) -> Signal:
            result = step(element, acc)
            if isinstance(result, Halt):
                raise _FlatMapHalt(token, result.acc)
            return result

        return _flat_map(self.mapper, token, Cursor(self.source), None, signal, _guarded)

    def __repr__(self) -> str:
        return f"FlatMap(source={self.source!r})"


def _flat_map(
    mapper: Callable[[Any], Any],
    token: object,
    outer: Cursor,
    inner: Optional[Callable[[Signal], Outcome]],
    signal: Signal,
    step: StepFunction,
) -> Outcome:
    while True:
        if inner is None:
            if isinstance(signal, Halt):
                outer.close()
                return Halted(signal.acc)
            if isinstance(signal, Suspend):
                return Suspended(
                    signal.acc,
                    Continuation(
                        partial(_flat_map, mapper, token, outer, None, step=step),
                        name="flat_map",
                    ),
                )
            try:
                element = outer.pull()
                if element is SENTINEL:
                    if isinstance(outer.outcome, Done):
                        return Done(signal.acc)
                    return Halted(signal.acc)
                inner = partial(reduce, mapper(element), step=step)
            except BaseException:
                outer.close()
                raise

        try:
            outcome = inner(signal)
        except _FlatMapHalt as halt:
            if halt.token is not token:
                outer.close()
                raise
            logger.debug("flat_map_halted")
            outer.close()
            return Halted(halt.acc)
        except BaseException:
            outer.close()
            raise

        if isinstance(outcome, Suspended):
            return Suspended(
                outcome.acc,
                Continuation(
                    partial(_flat_map, mapper, token, outer, outcome.continuation, step=step),
                    name="flat_map",
                ),
            )
        if isinstance(signal, Halt):
            outer.close()
            return Halted(outcome.acc)
        inner = None
        signal = Continue(outcome.acc)


@typechecked
def flat_map(source: Any, mapper: Callable[[Any], Any]) -> Producer:
    """
    Lazily maps every element to a producer and splices their elements.

    Example:
        >>> flat_map([1, 2, 3], lambda x: [x, x * 2]).collect()
        [1, 2, 2, 4, 3, 6]

    Args:
        source: A producer or iterable of elements.
        mapper: Returns a producer or iterable for each element.

    Returns:
        A producer over the elements of every mapped producer, in order.
    """
    return FlatMap(source, mapper)


def concat(*sources: Any) -> Producer:
    """
    Lazily chains producers one after the other.

    Called with a single argument, that argument is itself a producer (or
    iterable) of producers: `concat([[1, 2], [3]])`. Called with two or more,
    each argument is one producer: `concat([1, 2], [3])`.
    """
    if len(sources) == 1:
        return FlatMap(sources[0], identity)
    return FlatMap(sources, identity)

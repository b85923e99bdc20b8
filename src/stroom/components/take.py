from __future__ import annotations

from functools import partial
from typing import Any, Callable

from typeguard import typechecked

from ..core.pipeline import lazy
from ..core.producer import Producer
from ..core.protocol import (
    Continuation,
    Continue,
    Halt,
    Halted,
    Outcome,
    Signal,
    StepFunction,
    Suspend,
    Suspended,
)
from ..core.stage import StageStep, stage


class _Halting(Producer):
    """A producer that stops before examining anything."""

    def reduce(self, signal: Signal, step: StepFunction) -> Outcome:
        if isinstance(signal, Suspend):
            return Suspended(
                signal.acc, Continuation(partial(self.reduce, step=step), name="take(0)")
            )
        return Halted(signal.acc)

    def __repr__(self) -> str:
        return "take(0)"


def _is_used_up(remaining: int) -> bool:
    return remaining == 0


@typechecked
def take(source: Any, n: int) -> Producer:
    """
    Lazily takes the first `n` elements of `source` and stops.

    The reduction halts right after the `n`-th element is handed on, so an
    infinite source is never asked for element `n + 1`. `take(source, 0)`
    examines nothing at all.

    Args:
        source: A producer or any iterable.
        n: How many elements to take. Must not be negative.

    Returns:
        A producer over at most `n` elements.
    """
    if n < 0:
        raise ValueError("Take count must be a non-negative integer.")
    if n == 0:
        return _Halting()

    @stage(name=f"take({n})", state=n, exhausted=_is_used_up)
    def _take(next_step: StepFunction) -> StageStep:
        def _step(element, acc, remaining):
            if remaining <= 0:
                return Halt(acc), remaining
            signal = next_step(element, acc)
            remaining -= 1
            if remaining == 0 and isinstance(signal, Continue):
                return Halt(signal.acc), remaining
            return signal, remaining

        return _step

    return lazy(source, _take)


@typechecked
def take_while(source: Any, condition: Callable[[Any], Any]) -> Producer:
    """
    Lazily takes elements while `condition` holds.

    The first element failing `condition` is not handed on; the reduction
    halts there.
    """

    @stage(name="take_while")
    def _take_while(next_step: StepFunction) -> StageStep:
        def _step(element, acc, state):
            if condition(element):
                return next_step(element, acc), state
            return Halt(acc), state

        return _step

    return lazy(source, _take_while)

from __future__ import annotations

from functools import partial
from typing import Any, Callable

from typeguard import typechecked

from ..core.producer import Producer, reduce
from ..core.protocol import (
    Continuation,
    Continue,
    Done,
    Outcome,
    Signal,
    StepFunction,
    Suspended,
)


class Cycle(Producer):
    """Repeats the elements of `source` forever.

    Whenever the source reports `Done`, a fresh reduction of it starts from
    the top with the accumulator carried over, so exhaustion is never seen by
    the consumer. Cycling an empty source therefore never produces an element
    and never ends on its own; bound it downstream with `take`, `take_while`
    or a halting step.
    """

    def __init__(self, source: Any):
        self.source = source

    def reduce(self, signal: Signal, step: StepFunction) -> Outcome:
        restart = partial(reduce, self.source, step=step)
        return _cycle(restart, restart, signal)

    def __repr__(self) -> str:
        return f"Cycle({self.source!r})"


def _cycle(
    resume: Callable[[Signal], Outcome],
    restart: Callable[[Signal], Outcome],
    signal: Signal,
) -> Outcome:
    while True:
        outcome = resume(signal)
        if isinstance(outcome, Done):
            resume = restart
            signal = Continue(outcome.acc)
            continue
        if isinstance(outcome, Suspended):
            return Suspended(
                outcome.acc,
                Continuation(partial(_cycle, outcome.continuation, restart), name="cycle"),
            )
        return outcome


@typechecked
def cycle(source: Any) -> Producer:
    """
    Lazily repeats the elements of `source` forever.

    The source must be re-iterable: lists, ranges and producers restart, but a
    generator is used up after its first pass.

    Example:
        >>> take(cycle([1, 2, 3]), 5).collect()
        [1, 2, 3, 1, 2]
    """
    return Cycle(source)

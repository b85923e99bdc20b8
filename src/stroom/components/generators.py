"""
This module provides producers that synthesize their elements from a function
instead of reading them from another producer: `unfold`, `iterate` and
`repeatedly`.
"""
from __future__ import annotations

from functools import partial
from typing import Any, Callable, Optional, Tuple

from typeguard import typechecked

from ..core.producer import Producer
from ..core.protocol import (
    Continuation,
    Done,
    Halt,
    Halted,
    Outcome,
    Signal,
    StepFunction,
    Suspend,
    Suspended,
)

NextFunction = Callable[[Any], Optional[Tuple[Any, Any]]]


def unfold_reduce(state: Any, next_fun: NextFunction, signal: Signal, step: StepFunction) -> Outcome:
    """Drives an unfold from `state`; shared with `resource`."""
    while True:
        if isinstance(signal, Halt):
            return Halted(signal.acc)
        if isinstance(signal, Suspend):
            return Suspended(
                signal.acc,
                Continuation(partial(unfold_reduce, state, next_fun, step=step), name="unfold"),
            )
        produced = next_fun(state)
        if not produced:
            return Done(signal.acc)
        value, state = produced
        signal = step(value, signal.acc)


class Unfold(Producer):
    """Emits values computed from a running state.

    `next_fun(state)` returns `None` to end the sequence, or a
    `(value, next_state)` pair to emit `value` and move on.
    """

    def __init__(self, seed: Any, next_fun: NextFunction):
        self.seed = seed
        self.next_fun = next_fun

    def reduce(self, signal: Signal, step: StepFunction) -> Outcome:
        return unfold_reduce(self.seed, self.next_fun, signal, step)

    def __repr__(self) -> str:
        return f"Unfold(seed={self.seed!r})"


class Repeatedly(Producer):
    """Emits `generator()` on every pull, forever.

    It never finishes on its own; bound it downstream with `take`,
    `take_while` or a halting step.
    """

    def __init__(self, generator: Callable[[], Any]):
        self.generator = generator

    def reduce(self, signal: Signal, step: StepFunction) -> Outcome:
        while True:
            if isinstance(signal, Halt):
                return Halted(signal.acc)
            if isinstance(signal, Suspend):
                return Suspended(
                    signal.acc,
                    Continuation(partial(self.reduce, step=step), name="repeatedly"),
                )
            signal = step(self.generator(), signal.acc)

    def __repr__(self) -> str:
        return f"Repeatedly({self.generator!r})"


@typechecked
def unfold(seed: Any, next_fun: Callable[[Any], Any]) -> Producer:
    """
    Emits a sequence of values computed from a running state.

    Example:
        >>> unfold(5, lambda n: None if n == 0 else (n, n - 1)).collect()
        [5, 4, 3, 2, 1]

    Args:
        seed: The initial state.
        next_fun: Called with the current state. Returns `None` to finish, or
            a `(value, next_state)` pair.
    """
    return Unfold(seed, next_fun)


@typechecked
def iterate(start: Any, next_fun: Callable[[Any], Any]) -> Producer:
    """
    Emits `start`, then `next_fun(start)`, then `next_fun` of that, and so on.

    Example:
        >>> take(iterate(0, lambda n: n + 1), 5).collect()
        [0, 1, 2, 3, 4]
    """

    def _next(state: Tuple[bool, Any]) -> Tuple[Any, Tuple[bool, Any]]:
        started, value = state
        if started:
            value = next_fun(value)
        return value, (True, value)

    return Unfold((False, start), _next)


@typechecked
def repeatedly(generator: Callable[[], Any]) -> Producer:
    """Emits the result of calling `generator()` on every pull, forever."""
    return Repeatedly(generator)

"""
This module provides `resource`, a producer that streams values out of an
external resource and guarantees the resource is released.

`acquire()` runs once at the start of every reduction. The reduction itself
then behaves like `unfold` over the acquired handle. `release(handle)` runs
exactly once when the reduction ends, however it ends: the source running
dry, a downstream halt, or an exception from `next_fun` or any step function.
A reduction that is merely suspended keeps the handle open; the continuation
it hands out carries the same guarantee.
"""
from __future__ import annotations

from functools import partial
from typing import Any, Callable

from typeguard import typechecked

from ..core.log import get_logger
from ..core.producer import Producer
from ..core.protocol import (
    Continuation,
    Halt,
    Halted,
    Outcome,
    Signal,
    StepFunction,
    Suspend,
    Suspended,
)
from .generators import unfold_reduce

logger = get_logger("stroom.resource")


class Resource(Producer):
    """Streams values from a handle obtained by `acquire` and freed by `release`."""

    def __init__(
        self,
        acquire: Callable[[], Any],
        next_fun: Callable[[Any], Any],
        release: Callable[[Any], Any],
    ):
        self.acquire = acquire
        self.next_fun = next_fun
        self.release = release

    def reduce(self, signal: Signal, step: StepFunction) -> Outcome:
        if isinstance(signal, Halt):
            return Halted(signal.acc)
        if isinstance(signal, Suspend):
            return Suspended(
                signal.acc, Continuation(partial(self.reduce, step=step), name="resource")
            )

        handle = self.acquire()
        logger.debug("resource_acquired", handle=repr(handle))
        return self._guarded(partial(unfold_reduce, handle, self.next_fun, step=step), handle, signal)

    def _guarded(
        self, resume: Callable[[Signal], Outcome], handle: Any, signal: Signal
    ) -> Outcome:
        suspended = False
        try:
            outcome = resume(signal)
            suspended = isinstance(outcome, Suspended)
        finally:
            if not suspended:
                self._release(handle)

        if not suspended:
            return outcome
        return Suspended(
            outcome.acc,
            Continuation(
                partial(self._guarded, outcome.continuation, handle), name="resource"
            ),
        )

    def _release(self, handle: Any) -> None:
        try:
            self.release(handle)
        except Exception:
            logger.error("resource_release_failed", handle=repr(handle), exc_info=True)
            raise
        logger.debug("resource_released", handle=repr(handle))

    def __repr__(self) -> str:
        return f"Resource(acquire={self.acquire!r})"


@typechecked
def resource(
    acquire: Callable[[], Any],
    next_fun: Callable[[Any], Any],
    release: Callable[[Any], Any],
) -> Producer:
    """
    Emits values read from a resource, releasing the resource at the end.

    Example:
        .. code-block:: python

            def read_line(f):
                line = f.readline()
                return (line, f) if line else None

            lines = resource(lambda: open("sample.txt"), read_line, lambda f: f.close())

    Args:
        acquire: Opens the resource and returns its handle.
        next_fun: Called with the handle. Returns `None` to finish, or a
            `(value, handle)` pair.
        release: Closes the handle. Called exactly once per reduction.
    """
    return Resource(acquire, next_fun, release)

"""
This module defines the vocabulary of a reduction: the signals a consumer
sends to a producer and the outcomes a producer hands back.

A reduction is driven by repeatedly feeding a `Signal` into a producer's
`reduce`. The step function the consumer supplies returns the next signal, so
every element pulled decides how the reduction goes on:

- `Continue(acc)` asks for the next element.
- `Suspend(acc)` asks the producer to pause and hand back a `Continuation`.
- `Halt(acc)` asks the producer to stop right away.

The producer answers with `Done(acc)` when it ran out of elements,
`Halted(acc)` when it honoured a halt, or `Suspended(acc, continuation)` when
it paused.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable

from .errors import ContinuationError
from .log import get_logger

logger = get_logger("stroom.protocol")


@dataclass(frozen=True)
class Signal:
    """Base class of the three consumer-to-producer signals."""

    acc: Any

    def with_acc(self, acc: Any) -> "Signal":
        """Returns a signal of the same kind carrying a different accumulator."""
        return replace(self, acc=acc)


@dataclass(frozen=True)
class Continue(Signal):
    pass


@dataclass(frozen=True)
class Suspend(Signal):
    pass


@dataclass(frozen=True)
class Halt(Signal):
    pass


@dataclass(frozen=True)
class Outcome:
    """Base class of the three producer-to-consumer outcomes."""

    acc: Any


@dataclass(frozen=True)
class Done(Outcome):
    pass


@dataclass(frozen=True)
class Halted(Outcome):
    pass


@dataclass(frozen=True)
class Suspended(Outcome):
    continuation: "Continuation"


class Continuation:
    """A one-shot handle resuming a paused reduction.

    Calling it with a signal behaves as if the paused producer's `reduce` had
    been called with that signal at the exact position it paused at. It may be
    called once; a second call raises `ContinuationError`.

    Attributes:
        name: A label used in error messages and logs.
    """

    __slots__ = ("_resume", "name")

    def __init__(self, resume: Callable[[Signal], Outcome], *, name: str = "reduce"):
        self._resume: Callable[[Signal], Outcome] | None = resume
        self.name = name

    @property
    def consumed(self) -> bool:
        return self._resume is None

    def __call__(self, signal: Signal) -> Outcome:
        resume = self._resume
        if resume is None:
            logger.warning("continuation_reused", continuation=self.name)
            raise ContinuationError(self.name)
        self._resume = None
        return resume(signal)

    def __repr__(self) -> str:
        state = "consumed" if self._resume is None else "pending"
        return f"Continuation(name='{self.name}', {state})"


StepFunction = Callable[[Any, Any], Signal]

"""
This module defines the `Producer` capability every source of elements
implements, the adapter turning plain Python iterables into producers, and the
consumer surface shared by all producers.

Anything that can answer `reduce(signal, step)` according to the reduction
contract is a producer. Pipelines and every combinator output are producers
too, so they compose with each other and with third-party producers alike.
"""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional, Union

from ..config import load_config
from .errors import InvalidSourceError
from .log import configure_logging_from, get_logger
from .protocol import (
    Continuation,
    Continue,
    Done,
    Halted,
    Halt,
    Outcome,
    Signal,
    StepFunction,
    Suspend,
    Suspended,
)
from .utils import SENTINEL, suspend_step

if TYPE_CHECKING:
    from .pipeline import Pipeline
    from .stage import Stage


class Producer(ABC):
    """A lazy source of elements driven through the reduction contract.

    Subclasses implement `reduce`. Given `Halt(acc)` it must return
    `Halted(acc)` without consuming input; given `Suspend(acc)` it must return
    `Suspended(acc, k)` where `k` resumes at the same position; given
    `Continue(acc)` it pulls one element and feeds it to `step`, or returns
    `Done(acc)` when there is nothing left.
    """

    @abstractmethod
    def reduce(self, signal: Signal, step: StepFunction) -> Outcome:
        raise NotImplementedError

    def __or__(self, other: "Stage") -> "Pipeline":
        """Declares a stage on top of this producer using the `|` operator."""
        from .pipeline import lazy

        return lazy(self, other)

    def __iter__(self) -> Iterator[Any]:
        """Pulls elements one at a time by suspending after each of them.

        Closing the iterator before it is exhausted halts the paused
        reduction, which gives resource-backed sources the chance to release
        what they hold.
        """
        cursor = Cursor(self)
        try:
            while True:
                element = cursor.pull()
                if element is SENTINEL:
                    return
                yield element
        finally:
            cursor.close()

    def run(
        self,
        initial: Any,
        func: Callable[[Any, Any], Any],
        *,
        config_path: Optional[str] = None,
    ) -> Any:
        """Folds `func(element, acc)` over every element and returns the result.

        Args:
            initial: The starting accumulator.
            func: Called with each element and the current accumulator; its
                return value becomes the next accumulator.
            config_path: An optional YAML configuration file whose `logging`
                section is applied before the reduction starts.

        Returns:
            The accumulator after the last element.
        """
        configure_logging_from(load_config(config_path))
        log = get_logger("stroom.reduction").bind(source=type(self).__name__)
        log.info("reduction_started")
        start_time = time.perf_counter()
        items = 0

        def _step(element: Any, acc: Any) -> Signal:
            nonlocal items
            items += 1
            return Continue(func(element, acc))

        outcome = self.reduce(Continue(initial), _step)
        log.info(
            "reduction_finished",
            outcome=type(outcome).__name__,
            items=items,
            duration=round(time.perf_counter() - start_time, 4),
        )
        return outcome.acc

    def collect(self, *, config_path: Optional[str] = None) -> List[Any]:
        """Runs the producer to the end and returns its elements as a list."""

        def _append(element: Any, acc: List[Any]) -> List[Any]:
            acc.append(element)
            return acc

        return self.run([], _append, config_path=config_path)


Enumerable = Union[Producer, Iterable]


class IterableProducer(Producer):
    """Adapts any Python iterable to the reduction contract.

    Every `reduce` call starts from a fresh `iter()` of the wrapped iterable,
    so lists, tuples and ranges restart from their first element each time.
    One-shot iterators such as generators or open files stay exhausted after
    their first full pass.
    """

    def __init__(self, iterable: Iterable):
        self.iterable = iterable

    def reduce(self, signal: Signal, step: StepFunction) -> Outcome:
        return _reduce_iterator(iter(self.iterable), signal, step)

    def __repr__(self) -> str:
        return f"IterableProducer({self.iterable!r})"


def _reduce_iterator(iterator: Iterator[Any], signal: Signal, step: StepFunction) -> Outcome:
    while True:
        if isinstance(signal, Halt):
            return Halted(signal.acc)
        if isinstance(signal, Suspend):
            return Suspended(
                signal.acc,
                Continuation(partial(_reduce_iterator, iterator, step=step), name="iterable"),
            )
        try:
            element = next(iterator)
        except StopIteration:
            return Done(signal.acc)
        signal = step(element, signal.acc)


def reduce(enumerable: Any, signal: Signal, step: StepFunction) -> Outcome:
    """Reduces any producer or Python iterable with the given signal and step.

    Raises:
        InvalidSourceError: If `enumerable` is neither a `Producer` nor iterable.
    """
    if isinstance(enumerable, Producer):
        return enumerable.reduce(signal, step)
    if isinstance(enumerable, Iterable):
        return _reduce_iterator(iter(enumerable), signal, step)
    raise InvalidSourceError(enumerable)


def ensure_producer(enumerable: Any) -> Producer:
    """Returns `enumerable` itself if it is a producer, else wraps it."""
    if isinstance(enumerable, Producer):
        return enumerable
    if isinstance(enumerable, Iterable):
        return IterableProducer(enumerable)
    raise InvalidSourceError(enumerable)


class Cursor:
    """Pulls elements out of a producer one at a time.

    The producer is driven in suspend mode: each `pull` resumes it with
    `Continue`, receives exactly one element through `suspend_step` and keeps
    the continuation for the next pull. `zip_` keeps two cursors alive at once
    and `flat_map` uses one for its outer source.

    Attributes:
        outcome: The terminal `Done` or `Halted` outcome once the cursor has
            finished, otherwise `None`.
    """

    def __init__(self, source: Any):
        self._resume: Optional[Callable[[Signal], Outcome]] = partial(
            reduce, source, step=suspend_step
        )
        self.outcome: Optional[Outcome] = None

    @property
    def finished(self) -> bool:
        return self._resume is None

    def pull(self) -> Any:
        """Returns the next element, or `SENTINEL` once the producer is finished."""
        resume, self._resume = self._resume, None
        if resume is None:
            return SENTINEL
        outcome = resume(Continue(None))
        if isinstance(outcome, Suspended):
            self._resume = outcome.continuation
            return outcome.acc
        self.outcome = outcome
        return SENTINEL

    def close(self) -> None:
        """Halts the paused reduction, if there is one."""
        resume, self._resume = self._resume, None
        if resume is not None:
            self.outcome = resume(Halt(None))

"""
This module provides `zip_`, which pairs up the elements of two producers.

Both sides are held open at the same time as suspended reductions, each
behind its own `Cursor`, and pulled exactly one element per output pair.
"""
from __future__ import annotations

from functools import partial
from typing import Any

from typeguard import typechecked

from ..core.log import get_logger
from ..core.producer import Cursor, Producer
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
from ..core.utils import SENTINEL

logger = get_logger("stroom.zip")


class Zip(Producer):
    """Pairs the elements of `left` and `right` until either side runs out."""

    def __init__(self, left: Any, right: Any):
        self.left = left
        self.right = right

    def reduce(self, signal: Signal, step: StepFunction) -> Outcome:
        return _zip(Cursor(self.left), Cursor(self.right), signal, step)

    def __repr__(self) -> str:
        return f"Zip(left={self.left!r}, right={self.right!r})"


def _finish(side: str, finished: Cursor, other: Cursor, acc: Any) -> Outcome:
    other.close()
    logger.debug("zip_side_finished", side=side, outcome=type(finished.outcome).__name__)
    if isinstance(finished.outcome, Done):
        return Done(acc)
    return Halted(acc)


def _zip(left: Cursor, right: Cursor, signal: Signal, step: StepFunction) -> Outcome:
    while True:
        if isinstance(signal, Halt):
            left.close()
            right.close()
            return Halted(signal.acc)
        if isinstance(signal, Suspend):
            return Suspended(
                signal.acc,
                Continuation(partial(_zip, left, right, step=step), name="zip"),
            )
        try:
            x = left.pull()
            if x is SENTINEL:
                return _finish("left", left, right, signal.acc)
            y = right.pull()
            if y is SENTINEL:
                return _finish("right", right, left, signal.acc)
            signal = step((x, y), signal.acc)
        except BaseException:
            left.close()
            right.close()
            raise


@typechecked
def zip_(left: Any, right: Any) -> Producer:
    """
    Lazily pairs the elements of two producers.

    The result is as long as the shorter side; an element already pulled from
    one side when the other side runs out is discarded.

    Example:
        >>> zip_([1, 2, 3], [1, 2, 3, 4, 5, 6]).collect()
        [(1, 1), (2, 2), (3, 3)]
    """
    return Zip(left, right)

from typing import Any

from .protocol import Suspend


SENTINEL = object()


def suspend_step(element: Any, acc: Any) -> Suspend:
    """
    A step function that pauses the reduction after every element.

    The element itself becomes the accumulator of the returned signal, so the
    `Suspended` outcome carries it back to whoever is pulling.
    """
    return Suspend(element)


def identity(value: Any) -> Any:
    return value

"""
This module provides the `map_` and `each` components, the 1-to-1 building
blocks of a pipeline: one rewrites every element, the other only looks at it.
"""
from __future__ import annotations

from typing import Any, Callable

from typeguard import typechecked

from ..core.pipeline import Pipeline, lazy
from ..core.protocol import StepFunction
from ..core.stage import StageStep, stage


@typechecked
def map_(source: Any, func: Callable[[Any], Any]) -> Pipeline:
    """
    Lazily applies a function to each element of `source`.

    Args:
        source: A producer or any iterable.
        func: The function to apply to each element.

    Returns:
        A pipeline yielding `func(element)` for every element, in order.
    """

    @stage(name="map")
    def _map(next_step: StepFunction) -> StageStep:
        def _step(element, acc, state):
            return next_step(func(element), acc), state

        return _step

    return lazy(source, _map)


@typechecked
def each(source: Any, func: Callable[[Any], Any]) -> Pipeline:
    """
    Lazily calls `func` on each element for its side effect.

    The elements themselves pass through unchanged, and `func` only runs for
    elements that are actually pulled.
    """

    @stage(name="each")
    def _each(next_step: StepFunction) -> StageStep:
        def _step(element, acc, state):
            func(element)
            return next_step(element, acc), state

        return _step

    return lazy(source, _each)

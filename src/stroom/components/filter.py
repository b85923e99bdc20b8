"""
This module provides the `filter_` and `reject` components, which selectively
keep or discard elements of a stream based on a condition.
"""
from __future__ import annotations

from typing import Any, Callable

from typeguard import typechecked

from ..core.pipeline import Pipeline, lazy
from ..core.protocol import Continue, StepFunction
from ..core.stage import StageStep, stage


def _select(source: Any, condition: Callable[[Any], Any], keep: bool, name: str) -> Pipeline:
    @stage(name=name)
    def _filter(next_step: StepFunction) -> StageStep:
        def _step(element, acc, state):
            if bool(condition(element)) is keep:
                return next_step(element, acc), state
            return Continue(acc), state

        return _step

    return lazy(source, _filter)


@typechecked
def filter_(source: Any, condition: Callable[[Any], Any]) -> Pipeline:
    """
    Lazily keeps the elements for which `condition` is truthy.

    Args:
        source: A producer or any iterable.
        condition: A callable that returns a truthy value for elements to keep.

    Returns:
        A pipeline over the kept elements.
    """
    return _select(source, condition, True, "filter")


@typechecked
def reject(source: Any, condition: Callable[[Any], Any]) -> Pipeline:
    """Lazily discards the elements for which `condition` is truthy."""
    return _select(source, condition, False, "reject")

from __future__ import annotations

from typing import Any, Callable

from typeguard import typechecked

from ..core.pipeline import Pipeline, lazy
from ..core.protocol import Continue, StepFunction
from ..core.stage import StageStep, stage


@typechecked
def drop(source: Any, n: int) -> Pipeline:
    """
    Lazily skips the first `n` elements of `source`.

    Args:
        source: A producer or any iterable.
        n: How many elements to skip. Must not be negative.

    Returns:
        A pipeline over every element after the first `n`.
    """
    if n < 0:
        raise ValueError("Drop count must be a non-negative integer.")

    @stage(name=f"drop({n})", state=n)
    def _drop(next_step: StepFunction) -> StageStep:
        def _step(element, acc, remaining):
            if remaining > 0:
                return Continue(acc), remaining - 1
            return next_step(element, acc), remaining

        return _step

    return lazy(source, _drop)


@typechecked
def drop_while(source: Any, condition: Callable[[Any], Any]) -> Pipeline:
    """
    Lazily skips elements while `condition` holds.

    The first element failing `condition` and everything after it is kept,
    even elements that would satisfy `condition` again.
    """

    @stage(name="drop_while", state=True)
    def _drop_while(next_step: StepFunction) -> StageStep:
        def _step(element, acc, dropping):
            if dropping and condition(element):
                return Continue(acc), True
            return next_step(element, acc), False

        return _step

    return lazy(source, _drop_while)

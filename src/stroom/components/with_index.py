from __future__ import annotations

from typing import Any

from typeguard import typechecked

from ..core.pipeline import Pipeline, lazy
from ..core.protocol import StepFunction
from ..core.stage import StageStep, stage


@typechecked
def with_index(source: Any) -> Pipeline:
    """
    Lazily pairs every element with its position, starting at 0.

    Example:
        >>> with_index(["a", "b"]).collect()
        [('a', 0), ('b', 1)]
    """

    @stage(name="with_index", state=0)
    def _with_index(next_step: StepFunction) -> StageStep:
        def _step(element, acc, index):
            return next_step((element, index), acc), index + 1

        return _step

    return lazy(source, _with_index)

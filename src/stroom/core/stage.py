"""
This module defines the `Stage` class and the `@stage` decorator.

A `Stage` is one declared transform of a `Pipeline`. It wraps a transform
factory together with the initial value of the stage's private state. Stages
are declared without touching any data; the pipeline executor binds them
together only when a consumer starts pulling.

A transform factory receives the step function of the next stage and returns
this stage's step function. Unlike a consumer step, a stage step also receives
its private state and returns the updated state next to the signal:

.. code-block:: python

    @stage(name="double")
    def double(next_step):
        def step(element, acc, state):
            return next_step(element * 2, acc), state
        return step
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple, Union

from .protocol import Signal, StepFunction

if TYPE_CHECKING:
    from .pipeline import Pipeline

StageStep = Callable[[Any, Any, Any], Tuple[Signal, Any]]
Transform = Callable[[StepFunction], StageStep]


class Stage:
    """A single declared transform of a pipeline.

    Attributes:
        transform: The factory building this stage's step function around the
            next step function.
        name: The name of the stage, used in `repr` and logs.
        state: The initial value of the stage's private state.
        exhausted: An optional predicate over the stage's state. Once it holds,
            the stage will not forward any further element, so a paused
            pipeline resumed with `Continue` halts instead of pulling.
    """

    def __init__(
        self,
        transform: Transform,
        *,
        name: Optional[str] = None,
        state: Any = None,
        exhausted: Optional[Callable[[Any], bool]] = None,
    ):
        self.transform = transform
        self.name = name or getattr(transform, "__name__", "Stage")
        self.state = state
        self.exhausted = exhausted

    def bind(self, next_step: StepFunction) -> StageStep:
        """Builds this stage's step function in front of `next_step`."""
        return self.transform(next_step)

    def is_exhausted(self, state: Any) -> bool:
        return self.exhausted is not None and self.exhausted(state)

    def __ror__(self, source: Any) -> "Pipeline":
        """Declares this stage on a plain iterable: `[1, 2, 3] | stage`."""
        from .pipeline import lazy

        return lazy(source, self)

    def __repr__(self) -> str:
        return f"Stage(name='{self.name}', state={self.state!r})"


def stage(
    _func: Optional[Transform] = None,
    *,
    name: Optional[str] = None,
    state: Any = None,
    exhausted: Optional[Callable[[Any], bool]] = None,
) -> Union[Stage, Callable[[Transform], Stage]]:
    """A decorator to create a `Stage` from a transform factory.

    It can be used with or without arguments.

    Example:
        .. code-block:: python

            @stage(name="count", state=0)
            def count(next_step):
                def step(element, acc, seen):
                    return next_step((seen, element), acc), seen + 1
                return step

    Args:
        name: A custom name for the stage. If not provided, the factory's
            name is used.
        state: The initial private state of the stage.
        exhausted: A predicate telling when the stage has stopped forwarding
            elements for good.

    Returns:
        A `Stage` object if used as `@stage`, or a decorator that returns a
        `Stage` object if used as `@stage(...)`.
    """

    def wrapper(func: Transform) -> Stage:
        return Stage(func, name=name, state=state, exhausted=exhausted)

    if _func is not None:
        return wrapper(_func)
    return wrapper

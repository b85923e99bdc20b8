"""
This module defines the `Pipeline` class: a source plus an ordered list of
declared stages, none of which run until a consumer pulls.

Declaring a stage never touches the source. It only returns a new `Pipeline`
whose two tuples, `stages` and `stage_states`, grew by one entry at the front.
Both tuples are stored last-declared-first. On execution they are folded so
that the first-declared stage sees every element first, and every stage's
private state rides in a stack next to the consumer's accumulator:

    (consumer_acc, state_of_stage_1, state_of_stage_2, ..., state_of_stage_n)

Each bound stage pops its own slot off the stack before calling the next stage
and pushes the updated value back afterwards, so the consumer only ever sees
its own accumulator.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Iterable, Tuple

from .log import get_logger
from .producer import Producer, ensure_producer, reduce
from .protocol import (
    Continuation,
    Continue,
    Done,
    Halt,
    Halted,
    Outcome,
    Signal,
    StepFunction,
    Suspended,
)
from .stage import Stage

logger = get_logger("stroom.pipeline")


class Pipeline(Producer):
    """A lazy sequence of stages over a source producer.

    Attributes:
        source: The producer the pipeline pulls elements from.
        stages: The declared stages, last-declared-first.
        stage_states: The initial private state of each stage, in the same
            order as `stages`.
    """

    def __init__(
        self,
        source: Any,
        stages: Iterable[Stage] = (),
        stage_states: Iterable[Any] = (),
    ):
        """Initializes a new Pipeline.

        Args:
            source: A `Producer` or any Python iterable.
            stages: Declared stages, last-declared-first.
            stage_states: Initial stage states, matching `stages`.

        Raises:
            ValueError: If `stages` and `stage_states` differ in length.
        """
        self.source: Producer = ensure_producer(source)
        self.stages: Tuple[Stage, ...] = tuple(stages)
        self.stage_states: Tuple[Any, ...] = tuple(stage_states)
        if len(self.stages) != len(self.stage_states):
            raise ValueError(
                f"Pipeline needs one state per stage, got {len(self.stages)} stages "
                f"and {len(self.stage_states)} states"
            )

    def add(self, other: Any) -> "Pipeline":
        """Declares a stage on top of this pipeline.

        Args:
            other: The `Stage` to declare.

        Returns:
            A new pipeline; this one is left unchanged.

        Raises:
            TypeError: If `other` is not a `Stage`.
        """
        if not isinstance(other, Stage):
            raise TypeError(f"Unsupported type for pipeline composition: {type(other)}")
        return Pipeline(
            self.source,
            (other,) + self.stages,
            (other.state,) + self.stage_states,
        )

    def __or__(self, other: Any) -> "Pipeline":
        """Declares a stage using the `|` operator."""
        return self.add(other)

    def reduce(self, signal: Signal, step: StepFunction) -> Outcome:
        composed = _unwrap_consumer(step)
        for stage_obj in self.stages:
            composed = _bind(stage_obj, composed)

        stages = tuple(reversed(self.stages))
        states = tuple(reversed(self.stage_states))
        resume = partial(reduce, self.source, step=composed)
        return _drive(resume, stages, states, signal)

    def __repr__(self) -> str:
        stage_names = " | ".join(s.name for s in reversed(self.stages))
        return f"Pipeline(source={self.source!r}, stages=[{stage_names}])"


def lazy(source: Any, stage_obj: Stage) -> Pipeline:
    """Declares `stage_obj` on `source`.

    A pipeline source gets the stage added to its own stage list; any other
    source is wrapped into a fresh single-stage pipeline.
    """
    if isinstance(source, Pipeline):
        return source.add(stage_obj)
    return Pipeline(source).add(stage_obj)


def _unwrap_consumer(step: StepFunction) -> StepFunction:
    # Innermost step: every stage slot has been popped, only the consumer's
    # accumulator is left on the stack.
    def _step(element: Any, stack: Tuple[Any, ...]) -> Signal:
        signal = step(element, stack[0])
        return signal.with_acc((signal.acc,))

    return _step


def _bind(stage_obj: Stage, next_step: StepFunction) -> StepFunction:
    stage_step = stage_obj.bind(next_step)

    def _step(element: Any, stack: Tuple[Any, ...]) -> Signal:
        signal, state = stage_step(element, stack[:1] + stack[2:], stack[1])
        rest = signal.acc
        return signal.with_acc(rest[:1] + (state,) + rest[1:])

    return _step


def _drive(
    resume: Callable[[Signal], Outcome],
    stages: Tuple[Stage, ...],
    states: Tuple[Any, ...],
    signal: Signal,
) -> Outcome:
    if isinstance(signal, Continue) and any(
        s.is_exhausted(state) for s, state in zip(stages, states)
    ):
        logger.debug("pipeline_exhausted_on_resume", stages=[s.name for s in stages])
        signal = Halt(signal.acc)

    outcome = resume(signal.with_acc((signal.acc,) + states))
    acc = outcome.acc[0]
    if isinstance(outcome, Suspended):
        return Suspended(
            acc,
            Continuation(
                partial(_drive, outcome.continuation, stages, outcome.acc[1:]),
                name="pipeline",
            ),
        )
    if isinstance(outcome, Done):
        return Done(acc)
    return Halted(acc)

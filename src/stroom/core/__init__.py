# stroom.core
# This package contains the reduction protocol and the classes every stream
# is built from: Producer, Stage, and Pipeline.

from .errors import ContinuationError, ContractViolationError, InvalidSourceError, StroomError
from .pipeline import Pipeline, lazy
from .producer import Cursor, IterableProducer, Producer, reduce
from .protocol import (
    Continuation,
    Continue,
    Done,
    Halt,
    Halted,
    Outcome,
    Signal,
    Suspend,
    Suspended,
)
from .stage import Stage, stage

__all__ = [
    "Continuation",
    "Continue",
    "ContinuationError",
    "ContractViolationError",
    "Cursor",
    "Done",
    "Halt",
    "Halted",
    "InvalidSourceError",
    "IterableProducer",
    "Outcome",
    "Pipeline",
    "Producer",
    "Signal",
    "Stage",
    "StroomError",
    "Suspend",
    "Suspended",
    "lazy",
    "reduce",
    "stage",
]

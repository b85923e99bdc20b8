from .core.pipeline import Pipeline, lazy
from .core.producer import Cursor, IterableProducer, Producer, reduce
from .core.protocol import (
    Continuation,
    Continue,
    Done,
    Halt,
    Halted,
    Suspend,
    Suspended,
)
from .core.stage import Stage, stage
from .core.errors import ContinuationError, ContractViolationError, InvalidSourceError, StroomError
from .core.log import configure_logging, get_logger
from .config import Config, load_config

from .components.cycle import cycle
from .components.drop import drop, drop_while
from .components.filter import filter_, reject
from .components.flat_map import concat, flat_map
from .components.generators import iterate, repeatedly, unfold
from .components.map import each, map_
from .components.resource import resource
from .components.take import take, take_while
from .components.with_index import with_index
from .components.zip import zip_

__all__ = [
    "Pipeline",
    "Producer",
    "IterableProducer",
    "Cursor",
    "Stage",
    "stage",
    "lazy",
    "reduce",
    "Continue",
    "Suspend",
    "Halt",
    "Done",
    "Halted",
    "Suspended",
    "Continuation",
    "StroomError",
    "ContractViolationError",
    "ContinuationError",
    "InvalidSourceError",
    "Config",
    "load_config",
    "configure_logging",
    "get_logger",
    "concat",
    "cycle",
    "drop",
    "drop_while",
    "each",
    "filter_",
    "flat_map",
    "iterate",
    "map_",
    "reject",
    "repeatedly",
    "resource",
    "take",
    "take_while",
    "unfold",
    "with_index",
    "zip_",
]

__version__ = "0.1.0"

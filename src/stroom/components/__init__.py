from .cycle import cycle
from .drop import drop, drop_while
from .filter import filter_, reject
from .flat_map import concat, flat_map
from .generators import iterate, repeatedly, unfold
from .map import each, map_
from .resource import resource
from .take import take, take_while
from .with_index import with_index
from .zip import zip_

__all__ = [
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
from .zip import zip_

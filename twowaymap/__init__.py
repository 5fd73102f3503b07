from .bounds import UNBOUNDED, Bound, Excluded, Included
from .cell import SharedCell
from .context import is_verifying, map_context
from .errors import InvariantError
from .index import OrderedIndex
from .two_way_map import TwoWayMap
from .types import Err, Ok
from .views import Drain, PairsView, ValuesView

__all__ = [
    "TwoWayMap",
    "map_context",
    "is_verifying",
    "Included",
    "Excluded",
    "UNBOUNDED",
    "Bound",
    "Ok",
    "Err",
    "InvariantError",
    "SharedCell",
    "OrderedIndex",
    "PairsView",
    "ValuesView",
    "Drain",
]

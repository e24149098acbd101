import math
from enum import Enum, unique

ROOT_PATH = ""
SEPARATOR = "."
WILDCARD = "*"
LOWEST_PRIORITY = -math.inf
INVOCABLE_MARKER = "()"
STORE_MARKER = "=>"


@unique
class RouteStyle(str, Enum):
    INVOCABLE = "invocable"
    ACCESSOR = "accessor"


@unique
class SchedulerStatus(str, Enum):
    IDLE = "idle"
    FLUSHING = "flushing"
    DRAINING = "draining"
    SETTLED = "settled"

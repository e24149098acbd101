"""Chainable invocation of prioritised, dependency injected steps.

Routes describe a tree of named steps. The tree is exposed as a chain
(``app("hi").to("friends")``); every step reached while the chain is
written is batched and run once, highest priority first, with values
stored by earlier steps injected into later ones.
"""

from importlib.metadata import version as get_version

from chainify._internal.chain.builder import ChainBuilder
from chainify._internal.chain.nodes import (
    AccessorLeaf,
    Branch,
    BranchView,
    ChainNode,
    ChainView,
    InvocableLeaf,
)
from chainify._internal.common.constants import (
    WILDCARD,
    RouteStyle,
    SchedulerStatus,
)
from chainify._internal.configuration import RouteOptions
from chainify._internal.route import Route
from chainify._internal.router.tree import RouteTree
from chainify._internal.scheduler.scheduler import Scheduler
from chainify._internal.session import SessionState
from chainify.chainify import Chainify

__version__ = get_version("chainify")
__all__ = (
    "WILDCARD",
    "AccessorLeaf",
    "Branch",
    "BranchView",
    "ChainBuilder",
    "ChainNode",
    "ChainView",
    "Chainify",
    "InvocableLeaf",
    "Route",
    "RouteOptions",
    "RouteStyle",
    "RouteTree",
    "Scheduler",
    "SchedulerStatus",
    "SessionState",
)

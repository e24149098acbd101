"""Chainify entrypoint."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from chainify._internal.chain.builder import ChainBuilder, build_branch
from chainify._internal.chain.nodes import BranchAccess
from chainify._internal.common.constants import ROOT_PATH
from chainify._internal.configuration import ChainifyConfiguration
from chainify._internal.exceptions import InvalidRouteError
from chainify._internal.route import Route
from chainify._internal.router.tree import RouteTree
from chainify._internal.scheduler.scheduler import Scheduler
from chainify._internal.session import SessionState

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from chainify._internal.chain.nodes import Branch, ChainView
    from chainify._internal.common.types import Invoker, LoopFactory
    from chainify._internal.configuration import RouteOptions

logger = logging.getLogger("chainify")


class Chainify(BranchAccess):
    """Chainable invocation surface over a tree of named steps.

    Each route describes one step of the chain. Calling the app (when a
    root route exists) or reaching one of its top level steps opens a new
    session; every step triggered while the chain is written in the same
    burst is collected and run once, highest priority first::

        send = Chainify(routes)
        result = await send("hi").to("friends")["except"]("john")
    """

    def __init__(
        self,
        routes: Iterable[RouteOptions | Route],
        *,
        storage: Mapping[str, Any] | None = None,
        loop_factory: LoopFactory = asyncio.get_running_loop,
    ) -> None:
        """Build the route tree and the top level of the chain.

        Args:
            routes: Route descriptors, as mappings or `Route` objects.
            storage: Values available to every session before its first
                step runs, usable as injected dependencies.
            loop_factory: Returns the event loop sessions run on.

        Raises:
            DuplicatePathError: Two routes share a path.
            InvalidRouteError: A descriptor field is malformed, the root
                route is not invocable, or a top level step is named after
                an attribute of the app (`tree`, `configs`, ...).

        """
        self.configs: ChainifyConfiguration = ChainifyConfiguration(
            getloop=loop_factory,
            defaults=dict(storage or {}),
        )
        self.tree: RouteTree = RouteTree(map(_as_route, routes))
        self.tree.resolve_wildcards()
        self._root_route: Route | None = self._find_root_route()
        self._branch: Branch = build_branch(
            self.tree,
            ROOT_PATH,
            self._session_invoker,
        )
        self._check_reserved_names()
        logger.debug(
            "Built chain with %s route(s), root %s",
            len(self.tree),
            "present" if self._root_route else "absent",
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} routes={len(self.tree)}>"

    def __call__(self, *args: Any) -> ChainView:  # noqa: ANN401
        if self._root_route is None:
            msg = (
                f"{type(self).__name__!r} object is not callable:"
                " no route is registered on the root path."
            )
            raise TypeError(msg)
        return self._session_invoker(self._root_route)(*args)

    def start_session(self) -> ChainBuilder:
        """Create the state, scheduler and builder of a new session."""
        session = SessionState(
            loop=self.configs.getloop(),
            defaults=self.configs.defaults,
        )
        scheduler = Scheduler(session, getloop=self.configs.getloop)
        return ChainBuilder(tree=self.tree, scheduler=scheduler)

    def _session_invoker(self, route: Route) -> Invoker:
        def invoke(*args: Any) -> ChainView:  # noqa: ANN401
            builder = self.start_session()
            return builder.build_route_invoker(route)(*args)

        return invoke

    def _check_reserved_names(self) -> None:
        reserved = {
            *vars(self),
            *(name for name in dir(type(self)) if not name.startswith("_")),
        }
        for name in self._branch.children:
            if name in reserved:
                msg = (
                    f"{name!r} is an attribute of {type(self).__name__!r}"
                    " and cannot name a top level step"
                )
                raise InvalidRouteError("path", msg)

    def _find_root_route(self) -> Route | None:
        closest = self.tree.find_closest_routes_to_root()
        root = next((r for r in closest if r.path == ROOT_PATH), None)
        if root is not None and not root.is_invocable():
            msg = "the root route must be invocable"
            raise InvalidRouteError("controller", msg)
        return root


def _as_route(route: RouteOptions | Route) -> Route:
    if isinstance(route, Route):
        return route
    return Route.from_options(route)

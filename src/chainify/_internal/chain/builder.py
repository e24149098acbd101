from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chainify._internal.chain.nodes import (
    AccessorLeaf,
    Branch,
    ChainNode,
    ChainView,
    InvocableLeaf,
)
from chainify._internal.route import join_path

if TYPE_CHECKING:
    from collections.abc import Callable

    from chainify._internal.common.types import Invoker
    from chainify._internal.route import Route
    from chainify._internal.router.tree import RouteTree
    from chainify._internal.scheduler.scheduler import Scheduler


def build_branch(
    tree: RouteTree,
    source_path: str,
    make_invoker: Callable[[Route], Invoker],
) -> Branch:
    branch = Branch(source_path)
    for relative_path in tree.get_level_one_paths_from(source_path):
        route = tree.get_route(join_path(source_path, relative_path))
        branch.attach(relative_path, make_leaf(route, make_invoker(route)))
    return branch


def make_leaf(route: Route, invoker: Invoker) -> ChainNode:
    if route.is_invocable():
        return InvocableLeaf(route.path, invoker)
    return AccessorLeaf(route.path, invoker)


class ChainBuilder:
    __slots__: tuple[str, ...] = ("scheduler", "tree")

    def __init__(self, *, tree: RouteTree, scheduler: Scheduler) -> None:
        self.tree: RouteTree = tree
        self.scheduler: Scheduler = scheduler

    def build_from(self, source_path: str) -> ChainView:
        branch = build_branch(self.tree, source_path, self.build_route_invoker)
        return ChainView(self.scheduler.session, branch)

    def build_route_invoker(self, route: Route) -> Invoker:
        def invoke(*args: Any) -> ChainView:  # noqa: ANN401
            self.scheduler.schedule(route, *args)
            self.scheduler.request_flush()
            return self.build_from(route.path)

        return invoke

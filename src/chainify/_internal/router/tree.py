from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chainify._internal.common.constants import ROOT_PATH, WILDCARD
from chainify._internal.exceptions import DuplicatePathError, NotFoundError
from chainify._internal.route import (
    components_of,
    components_to_path,
    join_path,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from chainify._internal.route import Route


logger = logging.getLogger("chainify.router")


class RouteTree:
    """Routes keyed by their dot separated path.

    The tree is filled once, then `resolve_wildcards` is called, and from
    then on it is only read by the chains built on top of it.
    """

    __slots__: tuple[str, ...] = ("_routes",)

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: dict[str, Route] = {}
        for route in routes:
            self.add_route(route)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} routes={len(self._routes)}>"

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        yield from self._routes.values()

    def __contains__(self, path: object) -> bool:
        return path in self._routes

    @property
    def paths(self) -> list[str]:
        return list(self._routes)

    def add_route(self, route: Route) -> None:
        if self.has_route(route.path):
            raise DuplicatePathError(route.path)
        self._routes[route.path] = route

    def remove_route(self, path: str) -> None:
        if not self.has_route(path):
            raise NotFoundError(path)
        del self._routes[path]

    def get_route(self, path: str) -> Route:
        try:
            return self._routes[path]
        except KeyError:
            raise NotFoundError(path) from None

    def has_route(self, path: str) -> bool:
        return path in self._routes

    def has_root_route(self) -> bool:
        return self.has_route(ROOT_PATH)

    def resolve_wildcards(self) -> None:
        """Replace every wildcard route by its concrete expansions.

        Must be called once, after all routes were added. A generated path
        that is already registered raises `DuplicatePathError`.
        """
        wildcard_routes = [r for r in self._routes.values() if r.has_wildcard]
        if not wildcard_routes:
            return

        concrete_paths = [p for p in self._routes if WILDCARD not in p]
        generated: dict[str, Route] = {}
        for route in wildcard_routes:
            for path in self._expand(route.path, concrete_paths):
                if path not in generated:
                    generated[path] = route.with_path(path)

        for route in generated.values():
            self.add_route(route)
        for route in wildcard_routes:
            self.remove_route(route.path)

        logger.debug(
            "Resolved %s wildcard route(s) into %s route(s)",
            len(wildcard_routes),
            len(generated),
        )

    @staticmethod
    def _expand(pattern: str, candidates: Iterable[str]) -> list[str]:
        wild = components_of(pattern)
        last_wildcard = max(i for i, c in enumerate(wild) if c == WILDCARD)
        checked = wild[: last_wildcard + 1]

        expanded: list[str] = []
        for candidate in candidates:
            components = components_of(candidate)
            if len(components) < len(checked):
                continue
            if not all(
                component not in (WILDCARD, "")
                if part == WILDCARD
                else component == part
                for part, component in zip(checked, components)
            ):
                continue
            replaced = [
                components[i] if part == WILDCARD else part
                for i, part in enumerate(wild)
            ]
            expanded.append(components_to_path(replaced))
        return expanded

    def find_closest_routes_to_root(self) -> list[Route]:
        if self.has_root_route():
            return [self.get_route(ROOT_PATH)]
        return self.get_level_one_routes_from(ROOT_PATH)

    def get_level_one_routes_from(self, source_path: str) -> list[Route]:
        return [
            self.get_route(join_path(source_path, path))
            for path in self.get_level_one_paths_from(source_path)
        ]

    def get_level_one_paths_from(self, source_path: str) -> list[str]:
        """Return the nearest descendants of `source_path`.

        A descendant is dropped when another descendant is a strict
        component prefix of it. Paths are returned relative to the source.
        """
        descendants = list(self._relative_descendants_of(source_path))
        level_one = [
            components
            for components in descendants
            if not any(
                len(other) < len(components)
                and components[: len(other)] == other
                for other in descendants
            )
        ]
        return [components_to_path(components) for components in level_one]

    def _relative_descendants_of(
        self,
        source_path: str,
    ) -> Iterator[list[str]]:
        source = [] if source_path == ROOT_PATH else components_of(source_path)
        for path in self._routes:
            if path in (source_path, ROOT_PATH):
                continue
            components = components_of(path)
            if components[: len(source)] == source:
                yield components[len(source) :]

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, final

from chainify._internal.common.constants import (
    INVOCABLE_MARKER,
    LOWEST_PRIORITY,
    ROOT_PATH,
    SEPARATOR,
    STORE_MARKER,
    WILDCARD,
    RouteStyle,
)
from chainify._internal.exceptions import InvalidRouteError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chainify._internal.common.types import Handler
    from chainify._internal.configuration import RouteOptions


OPTION_KEYS = frozenset(
    (
        "path",
        "handler",
        "controller",
        "store_result_as",
        "inject",
        "priority",
        "await_for_handler",
    )
)


def components_of(path: str) -> list[str]:
    return path.split(SEPARATOR)


def components_to_path(components: Iterable[Any]) -> str:
    parts: list[str] = []
    for component in components:
        if not isinstance(component, str):
            msg = f"{component!r} is not a valid path component"
            raise InvalidRouteError("path", msg)
        parts.append(component)
    return SEPARATOR.join(parts)


def join_path(source: str, relative: str) -> str:
    if source == ROOT_PATH:
        return relative
    return f"{source}{SEPARATOR}{relative}"


@final
@dataclass(slots=True, kw_only=True, frozen=True)
class Route:
    path: str
    handler: Handler
    style: RouteStyle = RouteStyle.INVOCABLE
    store_as: str = ""
    dependencies: tuple[str, ...] = ()
    priority: float = LOWEST_PRIORITY
    await_result: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.path, str):
            raise InvalidRouteError("path", "path must be a string")
        if not callable(self.handler):
            raise InvalidRouteError("handler", "handler must be callable")
        if not isinstance(self.style, RouteStyle):
            raise InvalidRouteError("style", "style must be a RouteStyle")
        if not isinstance(self.store_as, str):
            msg = "store_result_as must be a string"
            raise InvalidRouteError("store_result_as", msg)
        if isinstance(self.priority, bool) or not isinstance(
            self.priority,
            (int, float),
        ):
            raise InvalidRouteError("priority", "priority must be a number")
        if not isinstance(self.await_result, bool):
            msg = "await_for_handler option must be a boolean"
            raise InvalidRouteError("await_for_handler", msg)
        if not isinstance(self.dependencies, tuple) or not all(
            isinstance(name, str) for name in self.dependencies
        ):
            msg = "inject must be a string or a sequence of strings"
            raise InvalidRouteError("inject", msg)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(path={self.path!r}, "
            f"style={self.style.value}, priority={self.priority})"
        )

    @property
    def components(self) -> list[str]:
        return components_of(self.path)

    @property
    def has_wildcard(self) -> bool:
        return WILDCARD in self.components

    def is_invocable(self) -> bool:
        return self.style is RouteStyle.INVOCABLE

    def with_path(self, path: str) -> Route:
        return dataclasses.replace(self, path=path)

    @classmethod
    def from_options(cls, options: RouteOptions | Mapping[str, Any]) -> Route:
        unknown = set(options) - OPTION_KEYS
        if unknown:
            msg = f"unknown option(s) {sorted(unknown)}"
            raise InvalidRouteError(", ".join(sorted(unknown)), msg)
        if "path" not in options:
            raise InvalidRouteError("path", "path is required")
        if "handler" not in options:
            raise InvalidRouteError("handler", "handler is required")

        controller = options.get("controller", INVOCABLE_MARKER)
        if not isinstance(controller, str):
            msg = "controller must be a string"
            raise InvalidRouteError("controller", msg)

        store_as = options.get("store_result_as", "")
        if not isinstance(store_as, str):
            msg = "store_result_as must be a string"
            raise InvalidRouteError("store_result_as", msg)

        return cls(
            path=options["path"],
            handler=options["handler"],
            style=parse_style(controller),
            store_as=store_as or parse_store_as(controller),
            dependencies=parse_inject(options.get("inject", ())),
            priority=options.get("priority", LOWEST_PRIORITY),
            await_result=options.get("await_for_handler", False),
        )


def parse_style(controller: str) -> RouteStyle:
    if INVOCABLE_MARKER in controller:
        return RouteStyle.INVOCABLE
    return RouteStyle.ACCESSOR


def parse_store_as(controller: str) -> str:
    """Read the name after ``=>``, e.g. ``"() => contacts"``."""
    if STORE_MARKER not in controller:
        return ""
    return controller.split(STORE_MARKER)[1].strip()


def parse_inject(inject: object) -> tuple[str, ...]:
    if isinstance(inject, str):
        return (inject,) if inject else ()
    if isinstance(inject, Sequence):
        return tuple(inject)
    msg = "inject must be a string or a sequence of strings"
    raise InvalidRouteError("inject", msg)

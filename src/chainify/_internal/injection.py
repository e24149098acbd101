from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chainify._internal.route import Route
    from chainify._internal.session import SessionState


def resolve_dependencies(route: Route, session: SessionState) -> list[Any]:
    return [session.fetch(name) for name in route.dependencies]


def build_arguments(
    route: Route,
    session: SessionState,
    args: Sequence[Any],
) -> list[Any]:
    """Stored dependencies first, in declared order, then caller args."""
    return [*resolve_dependencies(route, session), *args]

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chainify._internal.route import Route


@dataclass(slots=True, frozen=True)
class PendingInvocation:
    route: Route
    args: tuple[Any, ...] = ()

    @property
    def priority(self) -> float:
        return self.route.priority

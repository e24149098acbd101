from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypedDict

from typing_extensions import NotRequired

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from chainify._internal.common.types import Handler, LoopFactory


@dataclass(slots=True, kw_only=True)
class ChainifyConfiguration:
    getloop: LoopFactory
    defaults: Mapping[str, Any] = field(default_factory=dict)


class RouteOptions(TypedDict):
    path: str
    handler: Handler
    controller: NotRequired[str]
    store_result_as: NotRequired[str]
    inject: NotRequired[str | Sequence[str]]
    priority: NotRequired[float]
    await_for_handler: NotRequired[bool]

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chainify._internal.exceptions import MissingDependencyError

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Mapping


class SessionState:
    """Stored values and the single completion future of one session."""

    __slots__: tuple[str, ...] = ("future", "storage")

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self.storage: dict[str, Any] = dict(defaults or {})
        self.future: asyncio.Future[Any] = loop.create_future()

    def __repr__(self) -> str:
        status = "settled" if self.is_settled() else "pending"
        stored = sorted(self.storage)
        return f"<{type(self).__name__} {status} stored={stored}>"

    def store(self, name: str, value: Any) -> None:  # noqa: ANN401
        self.storage[name] = value

    def fetch(self, name: str) -> Any:  # noqa: ANN401
        try:
            return self.storage[name]
        except KeyError:
            raise MissingDependencyError(name) from None

    def resolve(self, value: Any) -> None:  # noqa: ANN401
        self.future.set_result(value)

    def reject(self, exc: BaseException) -> None:
        self.future.set_exception(exc)

    def is_settled(self) -> bool:
        return self.future.done()

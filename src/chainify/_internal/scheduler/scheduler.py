from __future__ import annotations

import inspect
import logging
from operator import attrgetter
from typing import TYPE_CHECKING, Any

from chainify._internal.common.constants import SchedulerStatus
from chainify._internal.injection import build_arguments
from chainify._internal.scheduler.invocation import PendingInvocation

if TYPE_CHECKING:
    import asyncio

    from chainify._internal.common.types import LoopFactory
    from chainify._internal.route import Route
    from chainify._internal.session import SessionState


logger = logging.getLogger("chainify.scheduler")


class Scheduler:
    """Collects triggered steps and runs them as one batch per flush.

    All `request_flush` calls made before the flush starts collapse into a
    single run. Steps triggered while a flush is draining join the live
    queue and are ordered together with what is still pending.
    """

    __slots__: tuple[str, ...] = (
        "_armed",
        "_current",
        "_getloop",
        "_queue",
        "_status",
        "_task",
        "session",
    )

    def __init__(self, session: SessionState, *, getloop: LoopFactory) -> None:
        self.session: SessionState = session
        self._getloop: LoopFactory = getloop
        self._queue: list[PendingInvocation] = []
        self._armed: bool = False
        self._status: SchedulerStatus = SchedulerStatus.IDLE
        self._current: Route | None = None
        self._task: asyncio.Task[None] | None = None

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} status={self._status.value} "
            f"pending={len(self._queue)}>"
        )

    @property
    def status(self) -> SchedulerStatus:
        return self._status

    @property
    def pending(self) -> tuple[PendingInvocation, ...]:
        return tuple(self._queue)

    def is_armed(self) -> bool:
        return self._armed

    def schedule(self, route: Route, *args: Any) -> None:  # noqa: ANN401
        self._queue.append(PendingInvocation(route, args))

    def request_flush(self) -> None:
        if self._armed:
            return
        self._armed = True
        loop = self._getloop()
        _ = loop.call_soon(self._start_flush)

    def _start_flush(self) -> None:
        loop = self._getloop()
        self._task = loop.create_task(self.apply(), name="chainify-flush")

    async def apply(self) -> None:
        logger.debug("Flushing %s pending step(s)", len(self._queue))
        try:
            result = await self._drain()
        except Exception as exc:
            path = self._current.path if self._current else None
            logger.exception("Step %r failed, rejecting the session", path)
            self._queue.clear()
            self._settle(exc=exc)
        else:
            self._settle(result)
        finally:
            self._current = None
            self._armed = False
            self._status = SchedulerStatus.SETTLED

    async def _drain(self) -> Any:  # noqa: ANN401
        previous: Any = None
        while self._queue:
            self._status = SchedulerStatus.FLUSHING
            self._sort_by_priority()
            invocation = self._queue.pop(0)
            self._status = SchedulerStatus.DRAINING
            previous = await self._run(invocation)
            if invocation.route.store_as:
                self.session.store(invocation.route.store_as, previous)
        return previous

    async def _run(self, invocation: PendingInvocation) -> Any:  # noqa: ANN401
        route = invocation.route
        self._current = route
        arguments = build_arguments(route, self.session, invocation.args)
        logger.debug("Running step %r", route.path)
        result = route.handler(*arguments)
        if route.await_result and inspect.isawaitable(result):
            result = await result
        return result

    def _sort_by_priority(self) -> None:
        self._queue.sort(key=attrgetter("priority"), reverse=True)

    def _settle(
        self,
        value: Any = None,  # noqa: ANN401
        *,
        exc: Exception | None = None,
    ) -> None:
        if self.session.is_settled():
            logger.warning(
                "Session already settled, dropping the outcome of a late flush"
            )
            return
        if exc is not None:
            self.session.reject(exc)
        else:
            self.session.resolve(value)

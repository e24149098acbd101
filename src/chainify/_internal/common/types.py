import asyncio
from collections.abc import Callable
from typing import Any, TypeAlias

Handler: TypeAlias = Callable[..., Any]
Invoker: TypeAlias = Callable[..., Any]
LoopFactory: TypeAlias = Callable[[], asyncio.AbstractEventLoop]

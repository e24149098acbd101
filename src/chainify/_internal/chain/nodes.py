from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, final

from typing_extensions import override

from chainify._internal.route import components_of, join_path

if TYPE_CHECKING:
    from collections.abc import Generator, Iterator

    from chainify._internal.common.types import Invoker
    from chainify._internal.session import SessionState


class ChainNode(ABC):
    __slots__: tuple[str, ...] = ("path",)

    def __init__(self, path: str) -> None:
        self.path: str = path

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.path!r}>"

    @abstractmethod
    def resolve(self) -> Any:  # noqa: ANN401
        """Return what reading this node from a chain yields."""
        raise NotImplementedError


@final
class InvocableLeaf(ChainNode):
    __slots__: tuple[str, ...] = ("_invoker",)

    def __init__(self, path: str, invoker: Invoker) -> None:
        super().__init__(path)
        self._invoker: Invoker = invoker

    def __call__(self, *args: Any) -> Any:  # noqa: ANN401
        return self.trigger(*args)

    def trigger(self, *args: Any) -> Any:  # noqa: ANN401
        return self._invoker(*args)

    @override
    def resolve(self) -> InvocableLeaf:
        return self


@final
class AccessorLeaf(ChainNode):
    __slots__: tuple[str, ...] = ("_invoker",)

    def __init__(self, path: str, invoker: Invoker) -> None:
        super().__init__(path)
        self._invoker: Invoker = invoker

    def trigger(self) -> Any:  # noqa: ANN401
        return self._invoker()

    @override
    def resolve(self) -> Any:
        return self.trigger()


@final
class Branch(ChainNode):
    __slots__: tuple[str, ...] = ("children",)

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.children: dict[str, ChainNode] = {}

    def attach(self, relative_path: str, node: ChainNode) -> None:
        """Place `node` under `relative_path`, creating branches on the way."""
        *parents, name = components_of(relative_path)
        parent = self
        for part in parents:
            child = parent.children.get(part)
            if child is None:
                child = Branch(join_path(parent.path, part))
                parent.children[part] = child
            if not isinstance(child, Branch):
                msg = f"{child!r} is a step, cannot nest {relative_path!r}"
                raise TypeError(msg)
            parent = child
        parent.children[name] = node

    @override
    def resolve(self) -> BranchView:
        return BranchView(self)


class BranchAccess:
    """Name lookup over a branch by attribute or by item.

    Item access also works for names that are Python keywords, e.g.
    ``view["except"]``.
    """

    __slots__: tuple[str, ...] = ()
    _branch: Branch

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            message = (
                f"{type(self).__name__!r} object has no attribute {name!r}"
            )
            raise AttributeError(message) from None

    def __getitem__(self, name: str) -> Any:  # noqa: ANN401
        return self._branch.children[name].resolve()

    def __contains__(self, name: object) -> bool:
        return name in self._branch.children

    def __iter__(self) -> Iterator[str]:
        return iter(self._branch.children)

    def __len__(self) -> int:
        return len(self._branch.children)

    def __dir__(self) -> list[str]:
        return [*super().__dir__(), *self._branch.children]


@final
class BranchView(BranchAccess):
    __slots__: tuple[str, ...] = ("_branch",)

    def __init__(self, branch: Branch) -> None:
        self._branch = branch

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._branch.path!r} {list(self)}>"


@final
class ChainView(BranchAccess):
    """One level of a chain, awaitable for the session's completion value.

    Every level of one session wraps the same future; awaiting any of them
    waits for the whole batch.
    """

    __slots__: tuple[str, ...] = ("_branch", "_session")

    def __init__(self, session: SessionState, branch: Branch) -> None:
        self._session = session
        self._branch = branch

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._branch.path!r} {list(self)}>"

    def __await__(self) -> Generator[Any, None, Any]:
        return self._session.future.__await__()

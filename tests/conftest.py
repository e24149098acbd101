from typing import Any
from unittest.mock import Mock

import pytest

from chainify import Route, RouteTree


def noop(*_args: Any) -> None:  # noqa: ANN401
    pass


def make_route(path: str, **options: Any) -> Route:  # noqa: ANN401
    options.setdefault("handler", noop)
    return Route.from_options({"path": path, **options})


@pytest.fixture
def handler() -> Mock:
    return Mock(return_value="test")


@pytest.fixture
def tree() -> RouteTree:
    paths = (
        "",
        "do",
        "anything",
        "do.something.hard.now",
        "do.something.easy",
    )
    return RouteTree(make_route(path) for path in paths)

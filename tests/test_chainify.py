import asyncio
from typing import Any
from unittest.mock import Mock

import pytest

from chainify import Chainify, ChainView, InvocableLeaf, Route, RouteTree
from chainify.exceptions import (
    DuplicatePathError,
    InvalidRouteError,
    MissingDependencyError,
)


def message_routes() -> tuple[list[dict[str, Any]], dict[str, Mock]]:
    def exclude(contacts: str, who: str) -> str:
        return f"{contacts} without {who}"

    mocks = {
        "send": Mock(return_value="sent"),
        "select": Mock(side_effect=lambda contacts: contacts),
        "filter": Mock(side_effect=exclude),
        "log": Mock(return_value="logged"),
    }
    routes = [
        {
            "path": "",
            "handler": mocks["send"],
            "inject": ["contacts"],
            "await_for_handler": True,
            "priority": 0,
        },
        {
            "path": "to",
            "handler": mocks["select"],
            "store_result_as": "contacts",
            "priority": 2,
        },
        {
            "path": "to.except",
            "handler": mocks["filter"],
            "inject": ["contacts"],
            "store_result_as": "contacts",
            "priority": 1,
        },
        {"path": "to.except.then.log", "handler": mocks["log"]},
    ]
    return routes, mocks


async def test_store_and_inject_through_chain() -> None:
    routes, mocks = message_routes()
    send = Chainify(routes)

    chain = send("hello everyone!").to("friends")["except"]("john")
    result = await chain.then.log()

    mocks["select"].assert_called_once_with("friends")
    mocks["filter"].assert_called_once_with("friends", "john")
    mocks["send"].assert_called_once_with(
        "friends without john",
        "hello everyone!",
    )
    mocks["log"].assert_called_once_with()
    assert result == "logged"


async def test_chain_result_without_trailing_step() -> None:
    routes, mocks = message_routes()
    send = Chainify(routes)

    assert await send("hi").to("friends")["except"]("john") == "sent"
    mocks["log"].assert_not_called()


async def test_default_storage() -> None:
    handler = Mock(return_value=None)
    invoker = Chainify(
        [{"path": "", "inject": ["someDefaultValue"], "handler": handler}],
        storage={"someDefaultValue": 1},
    )

    await invoker()

    handler.assert_called_once_with(1)


async def test_each_call_opens_a_new_session() -> None:
    counter = Mock(side_effect=[1, 2])
    app = Chainify(
        [
            {"path": "", "handler": counter, "store_result_as": "seen"},
            {"path": "peek", "handler": lambda seen: seen, "inject": "seen"},
        ]
    )

    first = app()
    second = app().peek()

    assert await first == 1
    assert await second == 2


async def test_top_level_steps_without_root() -> None:
    ping = Mock(return_value="pong")
    status = Mock(return_value="ok")
    app = Chainify(
        [
            {"path": "ping", "handler": ping},
            {"path": "health.status", "handler": status, "controller": "[]"},
        ]
    )

    assert "ping" in app
    assert await app.ping() == "pong"
    assert await app.health.status == "ok"
    with pytest.raises(TypeError, match="not callable"):
        _ = app()


async def test_controller_store_name() -> None:
    app = Chainify(
        [
            {
                "path": "",
                "handler": lambda name: f"hello {name}",
                "controller": "() => greeting",
                "priority": 1,
            },
            {
                "path": "shout",
                "handler": lambda greeting: greeting.upper(),
                "inject": "greeting",
                "controller": "=>",
            },
        ]
    )

    view = app("jane")
    assert isinstance(view, ChainView)
    assert await view.shout == "HELLO JANE"


async def test_wildcard_routes_are_reachable() -> None:
    kill = Mock(side_effect=lambda target: f"killed {target}")
    app = Chainify(
        [
            {"path": "do", "handler": lambda: None},
            {
                "path": "do.something",
                "handler": lambda: "something",
                "store_result_as": "target",
                "priority": 1,
            },
            {"path": "do.nothing", "handler": lambda: None},
            {"path": "do.*.killApp", "handler": kill, "inject": "target"},
        ]
    )

    assert not app.tree.has_route("do.*.killApp")
    assert await app.do().something().killApp() == "killed something"


async def test_async_handler_result() -> None:
    async def fetch(url: str) -> str:
        await asyncio.sleep(0)
        return f"body of {url}"

    app = Chainify(
        [{"path": "", "handler": fetch, "await_for_handler": True}],
    )

    assert await app("https://example.org") == "body of https://example.org"


async def test_runtime_errors_surface_on_await() -> None:
    app = Chainify(
        [
            {"path": "", "handler": lambda x: x, "inject": "missing"},
            {"path": "fail", "handler": Mock(side_effect=ValueError("bad"))},
        ]
    )

    with pytest.raises(MissingDependencyError, match="'missing'"):
        await app(1)
    with pytest.raises(ValueError, match="bad"):
        await app.fail()


async def test_failed_chain_does_not_run_leftover_steps() -> None:
    failing = Mock(side_effect=ValueError("bad"))
    leftover = Mock()
    later = Mock()
    app = Chainify(
        [
            {"path": "", "handler": failing, "priority": 1},
            {"path": "leftover", "handler": leftover},
            {"path": "later", "handler": later},
        ]
    )

    view = app()
    _ = view.leftover()
    with pytest.raises(ValueError, match="bad"):
        await view

    _ = view.later()
    for _ in range(3):
        await asyncio.sleep(0)

    leftover.assert_not_called()
    later.assert_called_once_with()


def test_build_errors() -> None:
    with pytest.raises(DuplicatePathError):
        _ = Chainify([{"path": "a", "handler": print}] * 2)

    with pytest.raises(DuplicatePathError, match="'a.b'"):
        _ = Chainify(
            [
                {"path": "a", "handler": print},
                {"path": "a.b", "handler": print},
                {"path": "*.b", "handler": print},
            ]
        )

    with pytest.raises(InvalidRouteError, match="root route must be"):
        _ = Chainify([{"path": "", "handler": print, "controller": "[]"}])

    with pytest.raises(InvalidRouteError, match="priority must be a number"):
        _ = Chainify([{"path": "a", "handler": print, "priority": "high"}])


@pytest.mark.parametrize("name", ["tree", "configs", "start_session"])
def test_top_level_name_clashing_with_app_attribute(name: str) -> None:
    with pytest.raises(InvalidRouteError, match="cannot name a top level"):
        _ = Chainify([{"path": f"{name}.step", "handler": print}])


def test_nested_name_matching_app_attribute() -> None:
    app = Chainify([{"path": "ops.tree", "handler": print}])

    assert isinstance(app.tree, RouteTree)
    assert isinstance(app.ops.tree, InvocableLeaf)


def test_accepts_route_objects() -> None:
    route = Route(path="ready", handler=print)
    app = Chainify([route])

    assert app.tree.get_route("ready") is route
    assert repr(app) == "<Chainify routes=1>"

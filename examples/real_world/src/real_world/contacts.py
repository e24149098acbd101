"""Routes of a small messaging chain.

``send("hi").to("friends")["except"]("john").then.log`` selects the
friends group, drops john from it, sends the message and logs the outcome.
"""

import asyncio
import logging

from chainify import RouteOptions

logger = logging.getLogger(__name__)

GROUPS: dict[str, list[str]] = {
    "friends": ["john", "jane", "mark"],
    "family": ["mom", "dad"],
}


def select_contacts(group: str) -> list[str]:
    return list(GROUPS.get(group, []))


def filter_contacts(contacts: list[str], *excluded: str) -> list[str]:
    return [contact for contact in contacts if contact not in excluded]


async def send_message(contacts: list[str], text: str) -> int:
    """Simulate delivery, one network round trip per contact."""
    for contact in contacts:
        await asyncio.sleep(0.1)
        logger.info("Sent %r to %s", text, contact)
    return len(contacts)


def log_delivery(delivered: int) -> str:
    logger.info("Delivered to %s contact(s)", delivered)
    return f"{delivered} delivered"


ROUTES: list[RouteOptions] = [
    {
        "path": "",
        "handler": send_message,
        "inject": "contacts",
        "controller": "() => delivered",
        "await_for_handler": True,
        "priority": 0,
    },
    {
        "path": "to",
        "handler": select_contacts,
        "store_result_as": "contacts",
        "priority": 2,
    },
    {
        "path": "to.except",
        "handler": filter_contacts,
        "inject": "contacts",
        "store_result_as": "contacts",
        "priority": 1,
    },
    {
        "path": "to.*.then.log",
        "handler": log_delivery,
        "inject": "delivered",
        "controller": "[]",
    },
]

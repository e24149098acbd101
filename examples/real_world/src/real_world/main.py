"""A messaging application.

Sends a message to a contact group, leaving some contacts out, and logs
how many deliveries went through.
"""

import asyncio
import logging

from chainify import Chainify
from real_world.contacts import ROUTES

logger = logging.getLogger(__name__)


def create_app() -> Chainify:
    """Create the chain with an empty outbox in the default storage."""
    return Chainify(ROUTES, storage={"contacts": []})


async def _main() -> None:
    """Entry point to run the messaging chain."""
    send = create_app()

    chain = send("Dinner at 8?").to("friends")["except"]("john")
    outcome = await chain.then.log
    logger.info("Outcome: %s", outcome)

    # Without a "to" step the default (empty) contacts are used.
    delivered = await send("Nobody will read this")
    logger.info("Delivered without recipients: %s", delivered)


def main() -> None:  # noqa: D103
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    asyncio.run(_main())

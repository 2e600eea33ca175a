from __future__ import annotations

from typing import Protocol, Sequence

from ci_notifier.log import get_logger
from ci_notifier.rendering.compose import ComposedMessage
from ci_notifier.schemas.blocks import Block

logger = get_logger("dispatch")


class Dispatcher(Protocol):
    def post_message(self, channel: str, blocks: Sequence[Block], text: str = "") -> str: ...

    def post_thread_reply(self, channel: str, thread_ts: str, blocks: Sequence[Block], text: str = "") -> bool: ...


def dispatch(client: Dispatcher, channel: str, message: ComposedMessage) -> str:
    """
    Post the primary blocks, then the threaded detail (if any) under them.
    Returns the primary message ts. Failures propagate; a failed reply leaves the
    primary message in place.
    """
    ts = client.post_message(channel, message.primary, text=message.fallback_text)
    logger.info(f"Posted report to {channel} (ts={ts})")

    if message.threaded_detail is not None:
        client.post_thread_reply(channel, ts, message.threaded_detail, text=message.fallback_text)
        logger.info(f"Posted failure detail in thread {ts}")

    return ts

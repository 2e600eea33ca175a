"""Footer context blocks shared by every report message."""

from __future__ import annotations

from typing import List, Optional

from ci_notifier.schemas.blocks import Block, Context, mrkdwn

RUN_LINK_TEXT = "*Check the run execution <{url}|HERE>.*"
THREAD_NOTE_TEXT = "_See :thread: for more details._"


def _run_link(run_url: Optional[str]) -> Optional[Block]:
    if not run_url:
        return None
    return Context(elements=[mrkdwn(RUN_LINK_TEXT.format(url=run_url))])


def _thread_note(threaded: bool) -> Optional[Block]:
    if not threaded:
        return None
    return Context(elements=[mrkdwn(THREAD_NOTE_TEXT)])


def build_footer(threaded: bool = False, run_url: Optional[str] = None) -> List[Block]:
    """
    Run link (when the run URL is known) followed by the thread note (when
    detail is posted as a reply). Returns 0, 1 or 2 blocks.
    """
    candidates = [_run_link(run_url), _thread_note(threaded)]
    return [block for block in candidates if block is not None]

"""Block Kit composition for CI reports.

Turns a RunSummary or DeployOutcome into a ComposedMessage: the primary
summary blocks plus, for grouped test failures, the blocks posted as a thread reply.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ci_notifier.rendering.footer import build_footer
from ci_notifier.schemas.blocks import (
    Block,
    Context,
    Divider,
    Header,
    RichList,
    RichListItem,
    Section,
    mrkdwn,
    styled,
)
from ci_notifier.schemas.results import DeployOutcome, RunSummary

COUNT_SEPARATOR = "    "
FAILED_TESTS_HEADER = ":x: Failed tests"
DEPLOY_HEADER = "Deployment Results"
DEPLOY_SUCCESS_TEXT = "The deployment has been completed successfully! :tada:"


class ComposedMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: List[Block]
    threaded_detail: Optional[List[Block]] = None
    fallback_text: str = ""


def _platform_label(platform: str) -> str:
    return "iOS" if platform == "ios" else "Android"


def _counts_line(summary: RunSummary) -> str:
    return COUNT_SEPARATOR.join([
        f":white_check_mark: {summary.passed} Passing",
        f":x: {summary.failed} Failed",
        f":warning: {summary.skipped} Skipped",
    ])


def _failure_group(label: str, details: List[str]) -> List[Block]:
    # Suite name as the single outer bullet, failing tests nested one level below
    return [
        RichList(indent=0, items=[RichListItem(elements=[styled(label, bold=True, code=True)])]),
        RichList(indent=1, items=[RichListItem(elements=[styled(d, code=True)]) for d in details]),
    ]


def build_failure_detail(grouped_failures: Dict[str, List[str]]) -> List[Block]:
    blocks: List[Block] = [Header(text=FAILED_TESTS_HEADER), Divider()]
    for label, details in grouped_failures.items():
        blocks.extend(_failure_group(label, details))
    return blocks


class BlockComposer:
    """
    Pure composition of report messages. The run URL is injected so the
    footer never depends on ambient environment state.
    """

    def __init__(self, run_url: Optional[str] = None):
        self.run_url = run_url

    def compose_test_results(self, summary: RunSummary, platform: str) -> ComposedMessage:
        title = f"E2E Test Results - {platform.capitalize()}"
        primary: List[Block] = [
            Header(text=title),
            Divider(),
            Context(elements=[mrkdwn(_counts_line(summary))]),
            *build_footer(threaded=summary.failed > 0, run_url=self.run_url),
        ]

        threaded_detail = None
        if summary.grouped_failures is not None:
            threaded_detail = build_failure_detail(summary.grouped_failures)

        return ComposedMessage(primary=primary, threaded_detail=threaded_detail, fallback_text=title)

    def compose_deploy_result(self, outcome: DeployOutcome) -> ComposedMessage:
        primary: List[Block] = [
            Header(text=DEPLOY_HEADER),
            Divider(),
            Section(text=mrkdwn(DEPLOY_SUCCESS_TEXT)),
            Section(fields=[
                mrkdwn(f"*Platform:*\n{_platform_label(outcome.platform)}"),
                mrkdwn(f"*Version:*\n{outcome.version}"),
                mrkdwn(f"*Build:*\n{outcome.build}"),
                # Label only; no environment value is reported
                mrkdwn("*Environment:*"),
            ]),
            *build_footer(threaded=False, run_url=self.run_url),
        ]
        return ComposedMessage(primary=primary, fallback_text=DEPLOY_HEADER)

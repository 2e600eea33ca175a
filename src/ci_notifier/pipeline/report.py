"""Report orchestration: parse, compose and dispatch one CI event."""

from __future__ import annotations

from typing import Optional

from ci_notifier.config import Settings, get_settings, resolve_channel
from ci_notifier.log import get_logger
from ci_notifier.rendering.compose import BlockComposer
from ci_notifier.schemas.results import DeployOutcome, parse_run_summary
from ci_notifier.slack.client import SlackClientWrapper
from ci_notifier.slack.dispatch import Dispatcher, dispatch

logger = get_logger("report")


class Reporter:
    def __init__(self, settings: Optional[Settings] = None, client: Optional[Dispatcher] = None):
        self.settings = settings or get_settings()
        # Fails with MissingCredential before anything is composed
        self.client = client or SlackClientWrapper(self.settings.require_token())
        self.composer = BlockComposer(run_url=self.settings.run_url)

    def report_e2e_results(self, raw_results: str, platform: str) -> str:
        channel = resolve_channel(self.settings)
        summary = parse_run_summary(raw_results)
        logger.info(
            f"E2E results for {platform}: {summary.passed} passed, "
            f"{summary.failed} failed, {summary.skipped} skipped"
        )
        message = self.composer.compose_test_results(summary, platform)
        return dispatch(self.client, channel, message)

    def report_deploy_results(self, outcome: DeployOutcome) -> str:
        channel = resolve_channel(self.settings)
        logger.info(f"Deploy results for {outcome.platform}: {outcome.version} ({outcome.build})")
        message = self.composer.compose_deploy_result(outcome)
        return dispatch(self.client, channel, message)

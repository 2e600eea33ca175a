"""Command-line entry point that reports a CI event to Slack.

Posts e2e test results when --e2e-results is given, deployment results otherwise.

Usage:
    ci-notify --platform ios --e2e-results '{"numPassedTests": 5, "numFailedTests": 0, "numSkippedTests": 1}'
    ci-notify --platform android --version 2.3.0 --build 412
    ci-notify --platform ios --version 2.3.0 --build 412 --dry-run
"""

import argparse
import os
import sys
from typing import List, Optional

from rich.console import Console

from .config import get_settings
from .errors import NotifierError
from .log import setup_logging, get_logger
from .rendering.compose import BlockComposer, ComposedMessage
from .schemas.blocks import render_blocks
from .schemas.results import DeployOutcome, parse_run_summary
from .pipeline.report import Reporter

logger = get_logger("notify")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Send CI e2e or deployment results to Slack")
    p.add_argument("--platform", default=os.getenv("PLATFORM_NAME", ""),
                   help="The platform the slack message is intended for (ios/android)")
    p.add_argument("--e2e-results", dest="e2e_results",
                   help="The stringified JSON object containing the e2e test results")
    p.add_argument("--version", dest="version", default=os.getenv("VERSION_NUMBER", ""),
                   help="Version number of the deployed build")
    p.add_argument("--build", dest="build", default=os.getenv("BUILD_NUMBER", ""),
                   help="Build number of the deployed build")
    p.add_argument("--dry-run", action="store_true",
                   help="Print the Block Kit payloads instead of posting them")
    p.add_argument("--log-level", dest="log_level", type=str.upper,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Override LOG_LEVEL for this run")
    return p


def print_message(message: ComposedMessage, console: Optional[Console] = None):
    console = console or Console()
    console.rule("primary")
    console.print_json(data=render_blocks(message.primary))
    if message.threaded_detail is not None:
        console.rule("thread reply")
        console.print_json(data=render_blocks(message.threaded_detail))


def run(args: argparse.Namespace) -> Optional[str]:
    settings = get_settings()
    outcome = DeployOutcome(platform=args.platform, version=args.version, build=args.build)

    if args.dry_run:
        composer = BlockComposer(run_url=settings.run_url)
        if args.e2e_results:
            message = composer.compose_test_results(parse_run_summary(args.e2e_results), args.platform)
        else:
            message = composer.compose_deploy_result(outcome)
        print_message(message)
        return None

    reporter = Reporter(settings)
    if args.e2e_results:
        return reporter.report_e2e_results(args.e2e_results, args.platform)
    return reporter.report_deploy_results(outcome)


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        run(args)
    except NotifierError as e:
        logger.error(f"Slack report failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

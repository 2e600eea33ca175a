"""CI Notifier - posts CI e2e test and deployment results to Slack.

Composes Block Kit messages from a test-run payload or a deployment outcome
and posts them to a channel, threading grouped failure detail under the summary.

Components:
- main_notify: command-line entry point
- pipeline: parse / compose / dispatch orchestration
- rendering: block composition and footers
- schemas: run outcome and Block Kit models
- slack: Slack Web API client and dispatcher
"""

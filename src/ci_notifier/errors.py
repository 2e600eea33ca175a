"""Error taxonomy for the notifier.

Every failure surfaces to the caller as a NotifierError subclass; nothing is retried.
"""

from typing import Optional


class NotifierError(Exception):
    pass


class MalformedPayload(NotifierError):
    """The test-run payload is not a JSON object with the required counts."""


class MissingCredential(NotifierError):
    def __init__(self, name: str):
        super().__init__(f"Missing required credential: {name}")
        self.name = name


class UnknownChannel(NotifierError, KeyError):
    def __init__(self, purpose: str):
        super().__init__(f"No Slack channel configured for purpose {purpose!r}")
        self.purpose = purpose

    def __str__(self) -> str:
        return self.args[0]


class DeliveryFailure(NotifierError):
    """Slack rejected the call or the transport failed."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class InvalidChannelTable(NotifierError):
    """The channel YAML file is not a `channels:` mapping of purpose to channel id."""

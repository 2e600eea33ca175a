from typing import Any, Dict, List, Sequence

from slack_sdk import WebClient
from slack_sdk.web import SlackResponse
from slack_sdk.errors import SlackApiError, SlackClientError

from ..errors import DeliveryFailure
from ..log import get_logger
from ..schemas.blocks import Block, render_blocks

logger = get_logger("slack_client")

class SlackClientWrapper:
    """
    Thin chat.postMessage wrapper. Errors are raised as DeliveryFailure and never retried.
    """

    def __init__(self, token: str):
        self.client = WebClient(token=token)

    def _post(self, payload: Dict[str, Any]) -> SlackResponse:
        try:
            return self.client.chat_postMessage(**payload)
        except SlackApiError as e:
            error_code = e.response["error"]
            logger.error(f"Slack API error: {error_code}")
            raise DeliveryFailure(f"Slack rejected chat.postMessage: {error_code}", error_code) from e
        except (SlackClientError, OSError) as e:
            logger.error(f"Slack transport error: {e}")
            raise DeliveryFailure(f"Could not reach Slack: {e}") from e

    def _payload(self, channel: str, blocks: Sequence[Block], text: str) -> Dict[str, Any]:
        wire_blocks: List[Dict[str, Any]] = render_blocks(blocks)
        return {
            "channel": channel,
            "blocks": wire_blocks,
            "text": text,  # Fallback for notifications
            "unfurl_links": False,
            "unfurl_media": False,
        }

    def post_message(self, channel: str, blocks: Sequence[Block], text: str = "") -> str:
        """
        Posts a top-level Block Kit message and returns its ts (the message id).
        """
        response = self._post(self._payload(channel, blocks, text))
        return response["ts"]

    def post_thread_reply(self, channel: str, thread_ts: str, blocks: Sequence[Block], text: str = "") -> bool:
        """
        Posts blocks as a reply in the thread of `thread_ts`.
        """
        payload = self._payload(channel, blocks, text)
        payload["thread_ts"] = thread_ts
        response = self._post(payload)
        return bool(response["ok"])

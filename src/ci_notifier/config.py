from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
import yaml
from pathlib import Path
from typing import Dict, Optional

from .errors import InvalidChannelTable, MissingCredential, UnknownChannel

DEFAULT_SLACK_CHANNELS: Dict[str, str] = {
    "test_vibe": "C0658GLTQF7",
    "mobile_eng": "C04MU5Y554K",
    "mobile_cicd": "C04BXBCBZEJ",
    "mobile_release": "C031XU1PDPH",
}

class Settings(BaseSettings):
    SLACK_MOBILE_BOT_TOKEN: Optional[str] = Field(None, description="Slack Bot User OAuth Token")
    GITHUB_RUN_ID: Optional[str] = Field(None, description="Run id of the current workflow run")
    GITHUB_RUN_URL_BASE: str = Field(
        "https://github.com/justworkshr/clockwork_mobile/actions/runs",
        description="Base URL that GITHUB_RUN_ID is appended to",
    )
    SLACK_CHANNELS: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SLACK_CHANNELS))
    REPORT_CHANNEL: str = Field("test_vibe", description="Channel purpose used for both report kinds")
    CHANNELS_FILE: str = Field("data/slack_channels.yaml", description="Optional YAML channel table")
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def run_url(self) -> Optional[str]:
        if not self.GITHUB_RUN_ID:
            return None
        return f"{self.GITHUB_RUN_URL_BASE.rstrip('/')}/{self.GITHUB_RUN_ID}"

    def require_token(self) -> str:
        if not self.SLACK_MOBILE_BOT_TOKEN:
            raise MissingCredential("SLACK_MOBILE_BOT_TOKEN")
        return self.SLACK_MOBILE_BOT_TOKEN

@lru_cache()
def get_settings() -> Settings:
    return Settings()

def load_channel_table(settings: Settings) -> Dict[str, str]:
    """
    Channel table from settings, overlaid with CHANNELS_FILE when it exists.
    """
    table = dict(settings.SLACK_CHANNELS)
    path = Path(settings.CHANNELS_FILE)
    if not path.exists():
        return table
    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidChannelTable(f"{path} is not valid YAML: {e}") from e
    if data is not None and not isinstance(data, dict):
        raise InvalidChannelTable(f"{path} must contain a mapping, got {type(data).__name__}")
    channels = (data or {}).get("channels") or {}
    if not isinstance(channels, dict):
        raise InvalidChannelTable(f"{path}: 'channels' must be a mapping, got {type(channels).__name__}")
    table.update({str(k): str(v) for k, v in channels.items()})
    return table

def resolve_channel(settings: Settings, purpose: Optional[str] = None) -> str:
    purpose = purpose or settings.REPORT_CHANNEL
    table = load_channel_table(settings)
    if purpose not in table:
        raise UnknownChannel(purpose)
    return table[purpose]

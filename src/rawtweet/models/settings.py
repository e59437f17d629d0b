"""Process configuration.

Credentials come from the environment, or from a ``.env`` file in the working
directory. Variable names follow the Twitter credential names used by the
tool since its first version (``TWITTER_CK``, ``TWITTER_CS``, ...).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import Field, PositiveFloat, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rawtweet.core.exceptions import ConfigError
from rawtweet.oauth.params import is_utf8_text
from rawtweet.oauth.types import Credentials

DEFAULT_API_BASE_URL = "https://api.twitter.com/1.1"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    consumer_key: str = Field(validation_alias="twitter_ck")
    consumer_secret: str = Field(validation_alias="twitter_cs", repr=False)
    access_token: str = Field(validation_alias="twitter_at")
    access_token_secret: str = Field(validation_alias="twitter_ats", repr=False)

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        validation_alias="twitter_api_base_url",
        min_length=8,
    )
    timeout_seconds: PositiveFloat = Field(
        default=30.0,
        validation_alias="twitter_timeout_seconds",
    )
    signing_key_mode: Literal["rfc5849", "raw"] = Field(
        default="rfc5849",
        validation_alias="twitter_signing_key_mode",
    )

    @field_validator("consumer_key", "consumer_secret", "access_token", "access_token_secret")
    @classmethod
    def _reject_control_characters(cls, value: str) -> str:
        if any(ord(c) < 0x20 or ord(c) == 0x7F for c in value):
            raise ValueError("must not contain control characters")
        if not is_utf8_text(value):
            raise ValueError("must be valid UTF-8 text")
        return value

    def credentials(self) -> Credentials:
        return Credentials(
            consumer_key=self.consumer_key,
            consumer_secret=self.consumer_secret,
            access_token=self.access_token,
            access_token_secret=self.access_token_secret,
        )


def _failed_fields(error: ValidationError) -> str:
    names = []
    for item in error.errors():
        loc = item.get("loc") or ("?",)
        names.append(f"{str(loc[0]).upper()} ({item.get('msg')})")
    return ", ".join(names)


def load_settings(env_file: Optional[Union[str, Path]] = ".env") -> Settings:
    """
    Read settings from the environment and ``env_file``.

    Environment variables take precedence over the file. A missing file is
    not an error.

    Raises:
        ConfigError: If a credential is missing or any value is malformed.
    """
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigError(f"Failed to gather Twitter API key information: {_failed_fields(e)}") from e

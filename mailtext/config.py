"""
Configuration module
====================

Runtime settings loaded from environment variables (prefix ``MAILTEXT_``)
and an optional ``.env`` file. Every field has a default, so the decoding
functions never require a configuration object.
"""

import codecs

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """
    Settings for the decoding pipeline.

    Attributes:
        MAX_MULTIPART_DEPTH: nesting depth the multipart walker descends to
        DEFAULT_CHARSET: charset for parts that declare none (or an unknown one)
        MAX_BODY_CHARS: body length cap applied by ``read_message``
        RECENT_DAYS: width of the weekday tier of the relative time formatter
        LOG_LEVEL: level name for the ``mailtext`` logger
    """
    MAX_MULTIPART_DEPTH: int = 10
    DEFAULT_CHARSET: str = "utf-8"
    MAX_BODY_CHARS: int = 15000
    RECENT_DAYS: int = 7
    LOG_LEVEL: str = "WARNING"

    @field_validator("MAX_MULTIPART_DEPTH", "MAX_BODY_CHARS", "RECENT_DAYS")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject zero or negative limits."""
        if v <= 0:
            raise ValueError("limit settings must be positive integers")
        return v

    @field_validator("DEFAULT_CHARSET")
    @classmethod
    def validate_charset(cls, v: str) -> str:
        """Make sure the fallback charset is a text codec Python can decode with."""
        try:
            info = codecs.lookup(v)
        except LookupError:
            raise ValueError(f"DEFAULT_CHARSET {v!r} is not a known codec")
        if not getattr(info, "_is_text_encoding", True):
            raise ValueError(f"DEFAULT_CHARSET {v!r} is not a text encoding")
        return v

    class Config:
        env_prefix = "MAILTEXT_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global singleton, avoids re-reading the environment on every decode call
_settings_instance = None


def get_settings() -> Settings:
    """
    Return the settings singleton, creating it on first use.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached singleton so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None

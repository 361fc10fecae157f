"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Header decoding configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Canonical re-encoding target (always emitted as B encoding)
    target_charset: str = "UTF-8"

    # Guess text with charset-normalizer when an encoded-word names an unknown charset
    detect_unknown_charsets: bool = False

    # Emit per-token debug events through structlog
    trace_decoding: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()

"""
Decoder configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Decoder configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Input limits
    max_message_size_mb: int = 25

    # Charset transcoding
    charset_errors: Literal["strict", "replace", "ignore"] = "strict"
    detect_undeclared_charset: bool = False  # Log a charset_normalizer guess only

    # Transfer decoding
    transcode_quoted_printable: bool = True  # False keeps quoted-printable bodies raw
    decode_top_level_transfer_encoding: bool = False

    # Multipart walking
    require_close_boundary: bool = True
    skip_attachment_parts: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @property
    def max_message_size_bytes(self) -> int:
        return self.max_message_size_mb * 1024 * 1024


# Global settings instance
settings = Settings()

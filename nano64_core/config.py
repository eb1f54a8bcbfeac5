"""
nano64_core/config.py - Runtime settings.

Settings are a frozen pydantic-settings model. Instantiating it reads
the environment:

    NANO64_LOG_LEVEL     DEBUG | INFO | WARNING | ERROR | CRITICAL
    NANO64_JSON_LOGS     boolean (true/false, 1/0, yes/no, on/off)
    NANO64_AES_KEY_BITS  128 | 192 | 256 (size for generated keys)

The library core takes no configuration; generators, codecs and the
encrypted factory receive everything as arguments.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .log import configure_logging


class Nano64Settings(BaseSettings):
    """Logging and key-generation settings for tools built on Nano64."""

    model_config = SettingsConfigDict(env_prefix="NANO64_", frozen=True, extra="forbid")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    json_logs: bool = False
    aes_key_bits: int = Field(default=256)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("aes_key_bits")
    @classmethod
    def validate_aes_key_bits(cls, v: int) -> int:
        if v not in (128, 192, 256):
            raise ValueError(f"aes_key_bits must be 128, 192 or 256, got {v}")
        return v

    def apply_logging(self) -> None:
        """Configure structlog according to these settings."""
        configure_logging(json_output=self.json_logs, log_level=self.log_level)

"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for TypeMap.

Usage:
    from typemap.config import TypeMapSettings

    # Load from environment variables (TYPEMAP_*)
    settings = TypeMapSettings()

    # Or override with explicit values
    settings = TypeMapSettings(validate_inserts=False)
"""

from __future__ import annotations

from functools import cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TypeMapSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for TypeMap boundary checks.

    Attributes:
        validate_inserts: Reject values that do not match the tag's declared
            value type when they are inserted.
        warn_on_mismatch: Emit a RuntimeWarning when a lookup finds a value of
            the wrong type and reports it as absent.

    Environment Variables:
        TYPEMAP_VALIDATE_INSERTS
        TYPEMAP_WARN_ON_MISMATCH
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPEMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    validate_inserts: bool = Field(
        default=True, description="Raise AssociationError on mistyped inserts."
    )
    warn_on_mismatch: bool = Field(
        default=True, description="Warn when a failed downcast is reported as absence."
    )


@cache
def get_settings() -> TypeMapSettings:
    """Load the default settings once per process.

    Call ``get_settings.cache_clear()`` to pick up environment changes.

    Returns:
        The shared TypeMapSettings instance.
    """
    return TypeMapSettings()

"""Configuration module using Pydantic Settings.

Usage:
    from typemap.config import TypeMapSettings

    settings = TypeMapSettings(validate_inserts=False)
"""

from typemap.config.settings import TypeMapSettings, get_settings

__all__ = [
    "TypeMapSettings",
    "get_settings",
]

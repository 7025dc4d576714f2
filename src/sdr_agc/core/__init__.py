"""
Core module - Configuration and error types.
"""

from .config import (
    DEFAULT_BANDWIDTH,
    DEFAULT_TARGET_LEVEL,
    PRESETS,
    AGCConfig,
    get_preset,
    list_presets,
)
from .errors import InvalidHandleError, InvalidParameterError

__all__ = [
    "AGCConfig",
    "PRESETS",
    "get_preset",
    "list_presets",
    "DEFAULT_BANDWIDTH",
    "DEFAULT_TARGET_LEVEL",
    # Errors
    "InvalidParameterError",
    "InvalidHandleError",
]

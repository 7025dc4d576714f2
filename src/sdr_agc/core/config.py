"""
Configuration management for the AGC core.

Handles parameter validation, named presets, and JSON persistence of
AGC settings. Runtime loop state (gain, signal level, squelch phase) is
never written out; only the configuration that recreates an instance.
"""

import json
import logging
import math
import numbers
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

DEFAULT_TARGET_LEVEL = 1.0
DEFAULT_BANDWIDTH = 0.01
DEFAULT_SQUELCH_THRESHOLD_DB = -100.0
DEFAULT_SQUELCH_TIMEOUT = 100


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(
            f"{name} must be a number, got {value!r}"
        ) from e


def validate_target_level(level: Any) -> float:
    """
    Validate an AGC target output level.

    Args:
        level: Desired steady-state output amplitude

    Returns:
        The level as a float

    Raises:
        InvalidParameterError: If the level is not a finite positive number
    """
    value = _as_float("target_level", level)
    if not (math.isfinite(value) and value > 0):
        raise InvalidParameterError(
            f"target_level must be positive and finite, got {level!r}"
        )
    return value


def validate_bandwidth(bandwidth: Any) -> float:
    """
    Validate a loop bandwidth.

    Args:
        bandwidth: Normalized loop bandwidth

    Returns:
        The bandwidth as a float

    Raises:
        InvalidParameterError: If the bandwidth is not in the open interval (0, 1)
    """
    value = _as_float("bandwidth", bandwidth)
    if not (0.0 < value < 1.0):
        raise InvalidParameterError(
            f"bandwidth must be between 0 and 1 (exclusive), got {bandwidth!r}"
        )
    return value


def validate_threshold_db(threshold_db: Any) -> float:
    """Validate a squelch threshold in dB (any finite value)."""
    value = _as_float("squelch threshold", threshold_db)
    if not math.isfinite(value):
        raise InvalidParameterError(
            f"squelch threshold must be finite, got {threshold_db!r}"
        )
    return value


def validate_timeout(timeout: Any) -> int:
    """
    Validate a squelch timeout expressed in samples.

    Integral floats such as ``16.0`` are accepted; booleans are not.

    Raises:
        InvalidParameterError: If the timeout is not a non-negative whole number
    """
    if isinstance(timeout, bool):
        raise InvalidParameterError(f"squelch timeout must be an integer, got {timeout!r}")
    if isinstance(timeout, numbers.Integral):
        value = int(timeout)
    elif isinstance(timeout, float) and timeout.is_integer():
        value = int(timeout)
    else:
        raise InvalidParameterError(f"squelch timeout must be an integer, got {timeout!r}")
    if value < 0:
        raise InvalidParameterError(
            f"squelch timeout must be non-negative, got {timeout!r}"
        )
    return value


@dataclass
class AGCConfig:
    """AGC configuration parameters."""

    target_level: float = DEFAULT_TARGET_LEVEL  # Target output amplitude
    bandwidth: float = DEFAULT_BANDWIDTH  # Loop bandwidth, (0, 1)
    squelch_enabled: bool = False
    squelch_threshold_db: float = DEFAULT_SQUELCH_THRESHOLD_DB  # Signal level threshold (dB)
    squelch_timeout: int = DEFAULT_SQUELCH_TIMEOUT  # Debounce length in samples

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate and normalize all configuration fields."""
        self.target_level = validate_target_level(self.target_level)
        self.bandwidth = validate_bandwidth(self.bandwidth)
        if not isinstance(self.squelch_enabled, bool):
            raise InvalidParameterError(
                f"squelch_enabled must be a bool, got {self.squelch_enabled!r}"
            )
        self.squelch_threshold_db = validate_threshold_db(self.squelch_threshold_db)
        self.squelch_timeout = validate_timeout(self.squelch_timeout)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AGCConfig":
        """
        Create configuration from dictionary.

        Missing keys keep their defaults.

        Raises:
            InvalidParameterError: On unknown keys or invalid values
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise InvalidParameterError(
                f"Unknown AGC configuration keys: {', '.join(sorted(unknown))}"
            )
        return cls(**data)

    def save(self, path: str) -> bool:
        """Save configuration to JSON file.

        Args:
            path: File path to save configuration to

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            with open(path, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            logger.info(f"AGC configuration saved to {path}")
            return True
        except OSError as e:
            logger.error(f"Failed to save AGC configuration to {path}: {e}")
            return False

    @classmethod
    def load(cls, path: str) -> Optional["AGCConfig"]:
        """Load configuration from JSON file.

        Args:
            path: File path to load configuration from

        Returns:
            AGCConfig instance or None if loading failed
        """
        try:
            with open(path, "r") as f:
                data = json.load(f)
            config = cls.from_dict(data)
            logger.info(f"AGC configuration loaded from {path}")
            return config
        except FileNotFoundError:
            logger.warning(f"AGC configuration file not found: {path}")
            return None
        except OSError as e:
            logger.error(f"Failed to read AGC configuration from {path}: {e}")
            return None
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in AGC configuration file {path}: {e}")
            return None
        except (InvalidParameterError, TypeError, AttributeError) as e:
            logger.error(f"Invalid AGC configuration in {path}: {e}")
            return None


# Preset configurations for common use cases
PRESETS: Dict[str, AGCConfig] = {
    "default": AGCConfig(),
    # Tracks fast fades at the cost of a noisier gain
    "fast": AGCConfig(bandwidth=0.1),
    # Slow, low-noise loop for steady carriers
    "narrowband": AGCConfig(bandwidth=0.001),
    # Burst reception with debounced signal detection
    "squelched": AGCConfig(
        bandwidth=0.1,
        squelch_enabled=True,
        squelch_threshold_db=-20.0,
        squelch_timeout=16,
    ),
}


def get_preset(name: str) -> Optional[AGCConfig]:
    """Get a copy of a preset configuration by name."""
    preset = PRESETS.get(name)
    if preset is None:
        return None
    return AGCConfig(**preset.to_dict())


def list_presets() -> List[str]:
    """List available preset names."""
    return list(PRESETS.keys())

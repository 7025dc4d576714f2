"""
Gain loop filter.

Converts a signal power estimate into a multiplicative gain that drives
the output toward a target amplitude. The ideal gain for the current
estimate is blended into the running gain with the same single-pole
coefficient the level estimator uses, so the whole loop has one time
constant.
"""

import math

from ..core.config import DEFAULT_BANDWIDTH, DEFAULT_TARGET_LEVEL, validate_target_level
from ..core.errors import InvalidParameterError
from ..utils.conversions import amplitude_to_db
from .level_estimator import smoothing_coefficient

# Smallest power estimate used for the gain computation.
# Caps the ideal gain at 1e6 * target_level.
LEVEL_FLOOR = 1e-12

INITIAL_GAIN = 1.0


class GainLoopFilter:
    """
    Single-pole adaptive gain filter.

    In steady state with a constant-amplitude input of magnitude A,
    ``gain * A`` converges to ``target_level``. Because each update is a
    convex blend of the previous gain and a positive ideal gain, the gain
    stays strictly positive for any finite input.
    """

    def __init__(
        self,
        target_level: float = DEFAULT_TARGET_LEVEL,
        coefficient: float = smoothing_coefficient(DEFAULT_BANDWIDTH),
    ):
        """
        Initialize loop filter.

        Args:
            target_level: Desired output amplitude (> 0)
            coefficient: Smoothing coefficient in (0, 1)
        """
        self._target = validate_target_level(target_level)
        self._alpha = self._check_coefficient(coefficient)
        self._gain = INITIAL_GAIN

    @staticmethod
    def _check_coefficient(coefficient: float) -> float:
        coefficient = float(coefficient)
        if not (0.0 < coefficient < 1.0):
            raise InvalidParameterError(
                f"coefficient must be between 0 and 1 (exclusive), got {coefficient}"
            )
        return coefficient

    @property
    def target_level(self) -> float:
        """Get target output amplitude."""
        return self._target

    @property
    def coefficient(self) -> float:
        """Get smoothing coefficient."""
        return self._alpha

    @property
    def gain(self) -> float:
        """Get current gain value."""
        return self._gain

    @property
    def gain_db(self) -> float:
        """Get current gain in dB."""
        return float(amplitude_to_db(self._gain))

    def set_target(self, level: float) -> None:
        """Set target output amplitude."""
        self._target = validate_target_level(level)

    def set_coefficient(self, coefficient: float) -> None:
        """Set the smoothing coefficient (derived from the loop bandwidth)."""
        self._alpha = self._check_coefficient(coefficient)

    def ideal_gain(self, level: float) -> float:
        """Gain that would map a signal of power ``level`` onto the target."""
        return self._target / math.sqrt(max(level, LEVEL_FLOOR))

    def update(self, level: float) -> float:
        """
        Move the gain toward the ideal gain for ``level``.

        Args:
            level: Smoothed signal power estimate

        Returns:
            Updated gain
        """
        self._gain += self._alpha * (self.ideal_gain(level) - self._gain)
        return self._gain

    def reset(self) -> None:
        """Reset gain to unity."""
        self._gain = INITIAL_GAIN

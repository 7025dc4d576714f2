"""
Signal level estimation for gain control.

Tracks a smoothed estimate of signal power (|x|^2) with a single-pole
exponential average whose time constant is set by the loop bandwidth.
"""

import math
import sys
from typing import Union

import numpy as np

from ..core.config import DEFAULT_BANDWIDTH, validate_bandwidth
from ..utils.conversions import linear_to_db

Sample = Union[float, complex]


def smoothing_coefficient(bandwidth: float) -> float:
    """
    Convert a normalized loop bandwidth to a single-pole coefficient.

    The averager has a time constant of 1/bandwidth samples.

    Args:
        bandwidth: Loop bandwidth in (0, 1)

    Returns:
        Smoothing coefficient in (0, 1)
    """
    return float(1.0 - np.exp(-bandwidth))


def settling_samples(bandwidth: float, ratio: float) -> int:
    """
    Number of samples for a first-order loop error to shrink by ``ratio``.

    Args:
        bandwidth: Loop bandwidth in (0, 1)
        ratio: Remaining fraction of the initial error, in (0, 1)

    Returns:
        Sample count n such that (1 - alpha)^n <= ratio
    """
    if not (0.0 < ratio < 1.0):
        raise ValueError(f"ratio must be between 0 and 1 (exclusive), got {ratio}")
    alpha = smoothing_coefficient(bandwidth)
    return int(math.ceil(math.log(ratio) / math.log(1.0 - alpha)))


def power_of(sample: Sample) -> float:
    """
    Instantaneous power |x|^2 of a real or complex sample.

    A finite sample whose squared magnitude overflows is clamped to the
    largest finite float. Only inf or NaN components give a non-finite power.
    """
    power = float(sample.real * sample.real + sample.imag * sample.imag)
    if math.isinf(power) and math.isfinite(sample.real) and math.isfinite(sample.imag):
        return sys.float_info.max
    return power


class SignalLevelEstimator:
    """
    Smoothed signal power estimator.

    The first sample seeds the estimate directly so the level does not
    ramp up from zero. The smoothing coefficient is cached and only
    recomputed when the bandwidth changes.
    """

    def __init__(self, bandwidth: float = DEFAULT_BANDWIDTH):
        """
        Initialize estimator.

        Args:
            bandwidth: Loop bandwidth in (0, 1)
        """
        self._bandwidth = validate_bandwidth(bandwidth)
        self._alpha = smoothing_coefficient(self._bandwidth)
        self._level = 0.0
        self._initialized = False

    @property
    def bandwidth(self) -> float:
        """Get loop bandwidth."""
        return self._bandwidth

    @property
    def coefficient(self) -> float:
        """Get cached smoothing coefficient."""
        return self._alpha

    @property
    def level(self) -> float:
        """Get smoothed signal power (linear)."""
        return self._level

    @property
    def level_db(self) -> float:
        """Get smoothed signal power in dB."""
        return float(linear_to_db(self._level))

    @property
    def initialized(self) -> bool:
        """True once at least one sample has been seen."""
        return self._initialized

    def set_bandwidth(self, bandwidth: float) -> None:
        """Set loop bandwidth and recompute the smoothing coefficient."""
        bandwidth = validate_bandwidth(bandwidth)
        self._bandwidth = bandwidth
        self._alpha = smoothing_coefficient(bandwidth)

    def update(self, power: float) -> float:
        """
        Fold one power measurement into the estimate.

        Args:
            power: Instantaneous sample power |x|^2

        Returns:
            Updated level estimate
        """
        if self._initialized:
            self._level += self._alpha * (power - self._level)
        else:
            self._level = power
            self._initialized = True
        return self._level

    def reset(self) -> None:
        """Forget the estimate; the next sample seeds it again."""
        self._level = 0.0
        self._initialized = False

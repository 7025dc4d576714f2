"""
Automatic Gain Control with integrated squelch.

Each sample flows estimator -> loop filter -> squelch -> output:

1. The signal level estimator folds |x|^2 into a smoothed power estimate.
2. The gain loop filter moves the gain toward target / sqrt(level).
3. If squelch is active, the level (dB) advances the squelch state machine.
4. The sample is scaled by the updated gain and returned.

Squelch only flags the output as muted; samples are still scaled and
returned, and the gain loop keeps tracking through silence.
"""

import logging
from dataclasses import dataclass
from typing import TypeVar

import numpy as np

from ..core.config import (
    DEFAULT_BANDWIDTH,
    DEFAULT_TARGET_LEVEL,
    AGCConfig,
    validate_bandwidth,
    validate_target_level,
)
from ..core.errors import InvalidHandleError
from ..utils.conversions import linear_to_db
from .level_estimator import SignalLevelEstimator, power_of
from .loop_filter import GainLoopFilter
from .squelch import SquelchStateMachine, SquelchStatus

logger = logging.getLogger(__name__)

S = TypeVar("S", float, complex)


@dataclass
class AGCHistory:
    """Per-sample trace recorded while processing a block."""

    output: np.ndarray  # Gain-adjusted samples
    signal_level: np.ndarray  # Smoothed signal power (linear)
    gain: np.ndarray  # Gain applied to each sample
    squelch_enabled: np.ndarray  # Squelch active flag
    squelch_muted: np.ndarray  # Squelch mute flag

    @property
    def rssi_db(self) -> np.ndarray:
        """Signal level trace in dB."""
        return linear_to_db(self.signal_level)


class AGC:
    """
    Automatic Gain Control for real or complex sample streams.

    Features:
    - Single-pole loop with one user-visible time constant (bandwidth)
    - First-sample initialization of the level estimate
    - Validated, all-or-nothing configuration setters
    - Optional timeout-debounced squelch
    - Works on float and complex samples with the same control logic

    One instance serves one stream and must be driven by one thread.
    After destroy() every operation raises InvalidHandleError.
    """

    def __init__(
        self,
        target_level: float = DEFAULT_TARGET_LEVEL,
        bandwidth: float = DEFAULT_BANDWIDTH,
    ):
        """
        Initialize AGC with squelch disabled.

        Args:
            target_level: Desired output amplitude (> 0)
            bandwidth: Loop bandwidth in (0, 1); larger tracks faster but noisier

        Raises:
            InvalidParameterError: If either parameter is out of range
        """
        target_level = validate_target_level(target_level)
        bandwidth = validate_bandwidth(bandwidth)

        self._estimator = SignalLevelEstimator(bandwidth)
        self._loop = GainLoopFilter(target_level, self._estimator.coefficient)
        self._squelch = SquelchStateMachine()
        self._destroyed = False

    @classmethod
    def from_config(cls, config: AGCConfig) -> "AGC":
        """Create an AGC from a configuration."""
        agc = cls(config.target_level, config.bandwidth)
        agc.squelch_set_threshold(config.squelch_threshold_db)
        agc.squelch_set_timeout(config.squelch_timeout)
        if config.squelch_enabled:
            agc.squelch_activate()
        return agc

    def to_config(self) -> AGCConfig:
        """Snapshot the current configuration."""
        self._check_handle()
        return AGCConfig(
            target_level=self._loop.target_level,
            bandwidth=self._estimator.bandwidth,
            squelch_enabled=self._squelch.is_enabled,
            squelch_threshold_db=self._squelch.threshold_db,
            squelch_timeout=self._squelch.timeout,
        )

    def _check_handle(self) -> None:
        if self._destroyed:
            raise InvalidHandleError("AGC instance has been destroyed")

    @property
    def target_level(self) -> float:
        """Get target output amplitude."""
        return self.get_target()

    @property
    def bandwidth(self) -> float:
        """Get loop bandwidth."""
        return self.get_bandwidth()

    @property
    def current_gain(self) -> float:
        """Get current gain value."""
        return self.get_gain()

    @property
    def current_gain_db(self) -> float:
        """Get current gain in dB."""
        self._check_handle()
        return self._loop.gain_db

    @property
    def signal_level(self) -> float:
        """Get smoothed signal power (linear)."""
        return self.get_signal_level()

    @property
    def squelch_status(self) -> SquelchStatus:
        """Get squelch phase."""
        return self.squelch_get_status()

    @property
    def is_destroyed(self) -> bool:
        """True once destroy() has been called."""
        return self._destroyed

    def set_target(self, level: float) -> None:
        """Set target output amplitude."""
        self._check_handle()
        self._loop.set_target(level)
        logger.debug(f"AGC target level set to {self._loop.target_level}")

    def set_bandwidth(self, bandwidth: float) -> None:
        """Set loop bandwidth; the smoothing coefficient is recomputed once."""
        self._check_handle()
        bandwidth = validate_bandwidth(bandwidth)
        self._estimator.set_bandwidth(bandwidth)
        self._loop.set_coefficient(self._estimator.coefficient)
        logger.debug(
            f"AGC bandwidth set to {bandwidth} (coefficient {self._estimator.coefficient:.6g})"
        )

    def squelch_activate(self) -> None:
        """Enable squelch without disturbing the gain loop."""
        self._check_handle()
        self._squelch.activate()

    def squelch_deactivate(self) -> None:
        """Disable squelch without disturbing the gain loop."""
        self._check_handle()
        self._squelch.deactivate()

    def squelch_set_threshold(self, threshold_db: float) -> None:
        """Set squelch threshold in dB."""
        self._check_handle()
        self._squelch.set_threshold(threshold_db)
        logger.debug(f"Squelch threshold set to {self._squelch.threshold_db} dB")

    def squelch_set_timeout(self, timeout: int) -> None:
        """Set squelch debounce timeout in samples."""
        self._check_handle()
        self._squelch.set_timeout(timeout)
        logger.debug(f"Squelch timeout set to {self._squelch.timeout} samples")

    def execute(self, sample: S) -> S:
        """
        Process a single sample through AGC.

        Non-finite input poisons the level and gain (they become NaN or
        infinite); use reset() to recover.

        Args:
            sample: Input sample (real or complex)

        Returns:
            Gain-adjusted sample
        """
        if self._destroyed:
            raise InvalidHandleError("AGC instance has been destroyed")

        level = self._estimator.update(power_of(sample))
        gain = self._loop.update(level)

        squelch = self._squelch
        if squelch.is_enabled:
            squelch.update(self._estimator.level_db)

        return sample * gain

    def process(self, samples: np.ndarray) -> np.ndarray:
        """
        Process array of samples through AGC.

        Args:
            samples: Input samples (real or complex array)

        Returns:
            Gain-adjusted samples; integer input yields float output
        """
        samples = np.asarray(samples)
        output = np.zeros_like(samples, dtype=np.result_type(samples, 1.0))
        for i, sample in enumerate(samples):
            output[i] = self.execute(sample)
        return output

    def process_with_history(self, samples: np.ndarray) -> AGCHistory:
        """
        Process samples and record the loop state after each one.

        Args:
            samples: Input samples

        Returns:
            AGCHistory with output, signal level, gain and squelch traces
        """
        samples = np.asarray(samples)
        n_samples = len(samples)
        output = np.zeros_like(samples, dtype=np.result_type(samples, 1.0))
        levels = np.zeros(n_samples)
        gains = np.zeros(n_samples)
        enabled = np.zeros(n_samples, dtype=bool)
        muted = np.zeros(n_samples, dtype=bool)

        for i, sample in enumerate(samples):
            output[i] = self.execute(sample)
            levels[i] = self._estimator.level
            gains[i] = self._loop.gain
            enabled[i] = self._squelch.is_enabled
            muted[i] = self._squelch.is_muted

        return AGCHistory(output, levels, gains, enabled, muted)

    def reset(self) -> None:
        """
        Reset loop state.

        Clears the level estimate and returns the gain to unity. An
        active squelch returns to SIGNAL_ABSENT. Configuration is kept.
        """
        self._check_handle()
        self._estimator.reset()
        self._loop.reset()
        self._squelch.rearm()

    def get_signal_level(self) -> float:
        """Get smoothed signal power (linear)."""
        self._check_handle()
        return self._estimator.level

    def get_rssi(self) -> float:
        """Get signal level in dB."""
        self._check_handle()
        return self._estimator.level_db

    def get_gain(self) -> float:
        """Get current gain value."""
        self._check_handle()
        return self._loop.gain

    def get_target(self) -> float:
        """Get target output amplitude."""
        self._check_handle()
        return self._loop.target_level

    def get_bandwidth(self) -> float:
        """Get loop bandwidth."""
        self._check_handle()
        return self._estimator.bandwidth

    def get_coefficient(self) -> float:
        """Get the cached loop smoothing coefficient."""
        self._check_handle()
        return self._estimator.coefficient

    def squelch_is_enabled(self) -> bool:
        """True while squelch logic is active."""
        self._check_handle()
        return self._squelch.is_enabled

    def squelch_is_muted(self) -> bool:
        """True while squelch reports the output as muted."""
        self._check_handle()
        return self._squelch.is_muted

    def squelch_get_status(self) -> SquelchStatus:
        """Get squelch phase."""
        self._check_handle()
        return self._squelch.status

    def squelch_get_threshold(self) -> float:
        """Get squelch threshold in dB."""
        self._check_handle()
        return self._squelch.threshold_db

    def squelch_get_timeout(self) -> int:
        """Get squelch timeout in samples."""
        self._check_handle()
        return self._squelch.timeout

    def destroy(self) -> None:
        """Release the instance; no further operations are valid."""
        self._destroyed = True

    def __enter__(self) -> "AGC":
        self._check_handle()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.destroy()

    def __repr__(self) -> str:
        if self._destroyed:
            return "AGC(destroyed)"
        return (
            f"AGC(target_level={self._loop.target_level}, "
            f"bandwidth={self._estimator.bandwidth}, "
            f"squelch={self._squelch.status.value})"
        )

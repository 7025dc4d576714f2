"""
DSP module - Gain control and squelch components.
"""

from .agc import AGC, AGCHistory
from .level_estimator import (
    SignalLevelEstimator,
    power_of,
    settling_samples,
    smoothing_coefficient,
)
from .loop_filter import LEVEL_FLOOR, GainLoopFilter
from .squelch import MUTED_STATES, SquelchStateMachine, SquelchStatus

__all__ = [
    "AGC",
    "AGCHistory",
    "SignalLevelEstimator",
    "power_of",
    "settling_samples",
    "smoothing_coefficient",
    "GainLoopFilter",
    "LEVEL_FLOOR",
    "SquelchStateMachine",
    "SquelchStatus",
    "MUTED_STATES",
]

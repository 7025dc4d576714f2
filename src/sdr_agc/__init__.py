"""
SDR AGC - Adaptive gain control with integrated squelch

Normalizes the amplitude of a real or complex sample stream toward a
target level and flags intervals where no signal is present.

Components:
    - SignalLevelEstimator: smoothed signal power tracking
    - GainLoopFilter: single-pole gain loop
    - SquelchStateMachine: timeout-debounced presence detection
    - AGC: per-sample controller tying the three together

Example:
    agc = AGC(target_level=1.0, bandwidth=0.1)
    agc.squelch_activate()
    agc.squelch_set_threshold(-20.0)
    agc.squelch_set_timeout(16)
    y = agc.execute(x)
"""

__version__ = "0.1.0"
__author__ = "SDR Module Team"

from .core.config import AGCConfig, get_preset, list_presets
from .core.errors import InvalidHandleError, InvalidParameterError
from .dsp.agc import AGC, AGCHistory
from .dsp.level_estimator import SignalLevelEstimator
from .dsp.loop_filter import GainLoopFilter
from .dsp.squelch import SquelchStateMachine, SquelchStatus

__all__ = [
    # Controller
    "AGC",
    "AGCHistory",
    # Components
    "SignalLevelEstimator",
    "GainLoopFilter",
    "SquelchStateMachine",
    "SquelchStatus",
    # Configuration
    "AGCConfig",
    "get_preset",
    "list_presets",
    # Errors
    "InvalidParameterError",
    "InvalidHandleError",
    # Version
    "__version__",
]

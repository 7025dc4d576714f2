"""
Level conversion utilities for gain control.

Signal level is a power (|x|^2) and is reported with 10*log10. Gain is
an amplitude factor and is reported with 20*log10.
"""

import numpy as np
from typing import Union

Numeric = Union[float, np.ndarray]

# Added before the log so a zero level reads about -200 dB instead of -inf
LOG_FLOOR = 1e-20


def linear_to_db(power: Numeric) -> Numeric:
    """
    Express a signal power (or array of powers) in dB.

    Args:
        power: Linear power, e.g. the smoothed |x|^2 estimate

    Returns:
        10*log10(power), floored at about -200 dB
    """
    return 10 * np.log10(power + LOG_FLOOR)


def amplitude_to_db(amplitude: Numeric) -> Numeric:
    """Express an amplitude factor such as the loop gain in dB."""
    return 20 * np.log10(amplitude + LOG_FLOOR)

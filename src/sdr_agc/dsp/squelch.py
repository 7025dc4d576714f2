"""
Squelch - debounced signal presence detection.

Compares the signal level (dB) against a threshold and moves through a
hysteretic state machine. A transition between "present" and "absent"
only commits after the level has stayed on the new side of the
threshold for ``timeout`` further consecutive samples; any sample back
on the old side cancels the pending transition.

State transitions::

    DISABLED        --activate()-------> SIGNAL_ABSENT
    SIGNAL_PRESENT  --below------------> FALL_PENDING
    FALL_PENDING    --above------------> SIGNAL_PRESENT
    FALL_PENDING    --below x timeout--> SIGNAL_ABSENT
    SIGNAL_ABSENT   --above------------> RISE_PENDING
    RISE_PENDING    --below------------> SIGNAL_ABSENT
    RISE_PENDING    --above x timeout--> SIGNAL_PRESENT
"""

import logging
from enum import Enum

from ..core.config import (
    DEFAULT_SQUELCH_THRESHOLD_DB,
    DEFAULT_SQUELCH_TIMEOUT,
    validate_threshold_db,
    validate_timeout,
)

logger = logging.getLogger(__name__)


class SquelchStatus(Enum):
    """Squelch state machine phase."""

    DISABLED = "disabled"  # Squelch bypassed, signal always reported present
    RISE_PENDING = "rise_pending"  # Level above threshold, waiting out timeout
    SIGNAL_PRESENT = "signal_present"  # Signal detected
    FALL_PENDING = "fall_pending"  # Level below threshold, waiting out timeout
    SIGNAL_ABSENT = "signal_absent"  # No signal, output muted


# Phases in which the squelch reports the output as muted. Pending
# phases keep reporting the phase they started from.
MUTED_STATES = frozenset({SquelchStatus.SIGNAL_ABSENT, SquelchStatus.RISE_PENDING})


class SquelchStateMachine:
    """
    Timeout-debounced squelch.

    Features:
    - Threshold comparison in the log domain
    - Debounce counted in samples, with no partial credit on recovery
    - ``timeout = 0`` commits on the first qualifying sample
    """

    def __init__(
        self,
        threshold_db: float = DEFAULT_SQUELCH_THRESHOLD_DB,
        timeout: int = DEFAULT_SQUELCH_TIMEOUT,
    ):
        """
        Initialize squelch in the DISABLED state.

        Args:
            threshold_db: Signal level (dB) below which signal is absent
            timeout: Consecutive samples required to commit a transition
        """
        self._threshold_db = validate_threshold_db(threshold_db)
        self._timeout = validate_timeout(timeout)
        self._status = SquelchStatus.DISABLED
        self._counter = 0

    @property
    def status(self) -> SquelchStatus:
        """Get current phase."""
        return self._status

    @property
    def threshold_db(self) -> float:
        """Get threshold in dB."""
        return self._threshold_db

    @property
    def timeout(self) -> int:
        """Get debounce timeout in samples."""
        return self._timeout

    @property
    def counter(self) -> int:
        """Samples counted in the current pending transition."""
        return self._counter

    @property
    def is_enabled(self) -> bool:
        """True while squelch logic is active."""
        return self._status is not SquelchStatus.DISABLED

    @property
    def is_muted(self) -> bool:
        """True while the squelch holds the output muted."""
        return self._status in MUTED_STATES

    def activate(self) -> None:
        """Enable squelch; starts closed until a signal is confirmed."""
        if self._status is SquelchStatus.DISABLED:
            self._enter(SquelchStatus.SIGNAL_ABSENT)
            logger.debug("Squelch activated")

    def deactivate(self) -> None:
        """Disable squelch."""
        if self._status is not SquelchStatus.DISABLED:
            self._enter(SquelchStatus.DISABLED)
            logger.debug("Squelch deactivated")

    def rearm(self) -> None:
        """Return an active squelch to SIGNAL_ABSENT."""
        if self._status is not SquelchStatus.DISABLED:
            self._enter(SquelchStatus.SIGNAL_ABSENT)

    def set_threshold(self, threshold_db: float) -> None:
        """Set threshold in dB."""
        self._threshold_db = validate_threshold_db(threshold_db)

    def set_timeout(self, timeout: int) -> None:
        """Set debounce timeout in samples."""
        self._timeout = validate_timeout(timeout)
        # Keep a pending count within the new bound
        self._counter = min(self._counter, self._timeout)

    def _enter(self, status: SquelchStatus) -> None:
        self._status = status
        self._counter = 0

    def _commit(self, status: SquelchStatus) -> None:
        self._enter(status)
        logger.debug(f"Squelch committed to {status.value}")

    def _begin_pending(self, pending: SquelchStatus, target: SquelchStatus) -> None:
        self._enter(pending)
        if self._timeout == 0:
            self._commit(target)

    def _count_pending(self, target: SquelchStatus) -> None:
        self._counter += 1
        if self._counter >= self._timeout:
            self._commit(target)

    def update(self, level_db: float) -> SquelchStatus:
        """
        Advance the state machine by one sample.

        A NaN level compares as below threshold.

        Args:
            level_db: Current signal level in dB

        Returns:
            Status after this sample
        """
        status = self._status
        if status is SquelchStatus.DISABLED:
            return status

        above = level_db >= self._threshold_db

        if status is SquelchStatus.SIGNAL_PRESENT:
            if not above:
                self._begin_pending(SquelchStatus.FALL_PENDING, SquelchStatus.SIGNAL_ABSENT)
        elif status is SquelchStatus.FALL_PENDING:
            if above:
                self._enter(SquelchStatus.SIGNAL_PRESENT)
            else:
                self._count_pending(SquelchStatus.SIGNAL_ABSENT)
        elif status is SquelchStatus.SIGNAL_ABSENT:
            if above:
                self._begin_pending(SquelchStatus.RISE_PENDING, SquelchStatus.SIGNAL_PRESENT)
        elif status is SquelchStatus.RISE_PENDING:
            if above:
                self._count_pending(SquelchStatus.SIGNAL_PRESENT)
            else:
                self._enter(SquelchStatus.SIGNAL_ABSENT)

        return self._status

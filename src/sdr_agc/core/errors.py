"""
Exception types for the AGC core.
"""


class InvalidParameterError(ValueError):
    """Raised when a configuration value is outside its allowed domain.

    The object being configured keeps its previous settings.
    """

    pass


class InvalidHandleError(RuntimeError):
    """Raised when an AGC instance is used after it has been destroyed."""

    pass

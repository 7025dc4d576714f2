"""
Utility functions and helpers.
"""

from .conversions import amplitude_to_db, linear_to_db

__all__ = [
    "linear_to_db",
    "amplitude_to_db",
]

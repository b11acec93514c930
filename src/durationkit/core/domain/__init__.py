"""
Domain models and value objects.

Contains the Duration value type and duration configuration models.
"""

from durationkit.core.domain.bounds import DurationBounds
from durationkit.core.domain.duration import (
    NS_PER_HOUR,
    NS_PER_MICRO,
    NS_PER_MILLI,
    NS_PER_MINUTE,
    NS_PER_SECOND,
    Duration,
    DurationDivisionByZero,
    InvalidDuration,
    InvalidRange,
)

__all__ = [
    # Unit scales
    "NS_PER_MICRO",
    "NS_PER_MILLI",
    "NS_PER_SECOND",
    "NS_PER_MINUTE",
    "NS_PER_HOUR",
    # Duration
    "Duration",
    # Exceptions
    "InvalidDuration",
    "InvalidRange",
    "DurationDivisionByZero",
    # Configuration models
    "DurationBounds",
]

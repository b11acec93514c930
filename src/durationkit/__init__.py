"""
durationkit — неизменяемый неотрицательный интервал времени для таймаутов,
задержек и backoff расчётов.
"""

from durationkit.core.domain import (
    Duration,
    DurationBounds,
    DurationDivisionByZero,
    InvalidDuration,
    InvalidRange,
)

__all__ = [
    "Duration",
    "DurationBounds",
    "InvalidDuration",
    "InvalidRange",
    "DurationDivisionByZero",
]

__version__ = "0.1.0"

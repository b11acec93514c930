"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных Duration.
"""

from .validators import (
    ContractValidator,
    DurationPayloadValidator,
    SchemaLoader,
    validate_duration_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DurationPayloadValidator",
    # Functions
    "validate_duration_payload",
]

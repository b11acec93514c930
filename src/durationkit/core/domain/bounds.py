"""
DurationBounds — Конфигурация допустимого диапазона длительности

Immutable Pydantic модель для таймаутов и backoff интервалов, которые
должны оставаться в пределах [lower, upper]. Поля — Duration, сериализуются
в контракт {"nanos": <number>}.
"""

from pydantic import BaseModel, Field, model_validator

from .duration import Duration


class DurationBounds(BaseModel):
    """
    Диапазон длительностей [lower, upper] (включительно).

    Immutable модель (frozen=True).
    """

    lower: Duration = Field(
        default=Duration.ZERO, description="Нижняя граница (включительно)"
    )
    upper: Duration = Field(..., description="Верхняя граница (включительно)")

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="after")
    def validate_order(self) -> "DurationBounds":
        """Нижняя граница не может превышать верхнюю."""
        if self.lower.gt(self.upper):
            raise ValueError(
                f"lower bound {self.lower} exceeds upper bound {self.upper}"
            )
        return self

    def contains(self, duration: Duration) -> bool:
        """True если duration попадает в диапазон."""
        return self.lower.le(duration) and duration.le(self.upper)

    def apply(self, duration: Duration) -> Duration:
        """
        Ограничение длительности диапазоном.

        Args:
            duration: Исходная длительность

        Returns:
            duration, приведённая в [lower, upper]
        """
        return duration.clamp(self.lower, self.upper)

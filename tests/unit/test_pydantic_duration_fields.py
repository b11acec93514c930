"""
Tests for Duration as a Pydantic field type

Покрывает:
- Duration как поле Pydantic V2 модели (экземпляр и контракт {"nanos": ...})
- JSON сериализацию/десериализацию
- DurationBounds (валидация порядка, clamp, immutability)
"""

import math

import pytest
from pydantic import BaseModel, Field, ValidationError

from durationkit import Duration, DurationBounds
from durationkit.core.contracts import validate_duration_payload


class RetrySettings(BaseModel):
    """Модель с полями Duration для тестов."""

    timeout: Duration = Field(..., description="Таймаут запроса")
    initial_delay: Duration = Field(default=Duration.ZERO)

    model_config = {"frozen": True}


# =============================================================================
# DURATION FIELD
# =============================================================================


class TestDurationField:
    """Тесты Duration как типа поля"""

    def test_accepts_instance(self) -> None:
        settings = RetrySettings(timeout=Duration.from_secs(5))
        assert settings.timeout.as_secs() == 5.0
        assert settings.initial_delay.is_zero()

    def test_accepts_payload(self) -> None:
        settings = RetrySettings.model_validate({"timeout": {"nanos": 2e9}})
        assert settings.timeout == Duration.from_secs(2)

    @pytest.mark.parametrize(
        "timeout",
        [
            {"nanos": -1},
            {"nanos": "5"},
            {"millis": 5},
            "5s",
            5,
        ],
    )
    def test_rejects_invalid_values(self, timeout: object) -> None:
        with pytest.raises(ValidationError):
            RetrySettings.model_validate({"timeout": timeout})

    def test_rejects_non_finite_payload(self) -> None:
        with pytest.raises(ValidationError, match="must be finite"):
            RetrySettings.model_validate({"timeout": {"nanos": math.nan}})

    def test_model_dump(self) -> None:
        settings = RetrySettings(
            timeout=Duration.from_secs(5), initial_delay=Duration.from_millis(100)
        )
        data = settings.model_dump()
        assert data == {
            "timeout": {"nanos": 5e9},
            "initial_delay": {"nanos": 1e8},
        }
        validate_duration_payload(data["timeout"])

    def test_json_roundtrip(self) -> None:
        settings = RetrySettings(timeout=Duration.from_millis(1500))
        restored = RetrySettings.model_validate_json(settings.model_dump_json())
        assert restored == settings

    def test_json_schema(self) -> None:
        """JSON Schema поля совпадает с контрактом duration.json"""
        schema = RetrySettings.model_json_schema()
        timeout = schema["properties"]["timeout"]

        assert schema["required"] == ["timeout"]
        assert timeout["type"] == "object"
        assert timeout["required"] == ["nanos"]
        assert timeout["properties"]["nanos"]["minimum"] == 0
        assert "$id" not in timeout

    def test_json_schema_serialization_mode(self) -> None:
        schema = RetrySettings.model_json_schema(mode="serialization")
        assert schema["properties"]["initial_delay"]["required"] == ["nanos"]

    def test_frozen(self) -> None:
        settings = RetrySettings(timeout=Duration.from_secs(5))
        with pytest.raises(ValidationError, match="frozen"):
            settings.timeout = Duration.from_secs(1)


# =============================================================================
# DURATION BOUNDS
# =============================================================================


class TestDurationBounds:
    """Тесты DurationBounds"""

    @pytest.fixture
    def bounds(self) -> DurationBounds:
        return DurationBounds(lower=Duration.from_secs(1), upper=Duration.from_secs(30))

    def test_default_lower_is_zero(self) -> None:
        bounds = DurationBounds(upper=Duration.from_secs(1))
        assert bounds.lower.is_zero()

    def test_inverted_bounds_rejected(self) -> None:
        with pytest.raises(ValidationError, match="exceeds upper bound"):
            DurationBounds(lower=Duration.from_secs(3), upper=Duration.from_secs(1))

    def test_equal_bounds_allowed(self) -> None:
        d = Duration.from_secs(1)
        assert DurationBounds(lower=d, upper=d).apply(Duration.ZERO) == d

    def test_apply(self, bounds: DurationBounds) -> None:
        assert bounds.apply(Duration.from_millis(10)) == Duration.from_secs(1)
        assert bounds.apply(Duration.from_secs(10)) == Duration.from_secs(10)
        assert bounds.apply(Duration.from_minutes(5)) == Duration.from_secs(30)

    def test_contains(self, bounds: DurationBounds) -> None:
        assert bounds.contains(Duration.from_secs(1))
        assert bounds.contains(Duration.from_secs(30))
        assert not bounds.contains(Duration.ZERO)
        assert not bounds.contains(Duration.from_secs(31))

    def test_backoff_schedule_capped(self, bounds: DurationBounds) -> None:
        """Экспоненциальный backoff ограничивается верхней границей"""
        base = Duration.from_millis(500)
        delays = [bounds.apply(base.mul(2**attempt)) for attempt in range(8)]

        assert [str(d) for d in delays] == [
            "1s",
            "1s",
            "2s",
            "4s",
            "8s",
            "16s",
            "30s",
            "30s",
        ]

    def test_json_schema(self) -> None:
        """Схема DurationBounds генерируется для обоих полей"""
        schema = DurationBounds.model_json_schema()

        assert schema["required"] == ["upper"]
        for field in ("lower", "upper"):
            field_schema = schema["properties"][field]
            assert field_schema["required"] == ["nanos"]
            assert field_schema["additionalProperties"] is False

    def test_model_validate_payload(self) -> None:
        bounds = DurationBounds.model_validate(
            {"lower": {"nanos": 0}, "upper": {"nanos": 1e9}}
        )
        assert bounds.upper == Duration.from_secs(1)

    def test_frozen(self, bounds: DurationBounds) -> None:
        with pytest.raises(ValidationError, match="frozen"):
            bounds.upper = Duration.from_secs(60)

"""
Duration — Неизменяемый неотрицательный интервал времени

Единственный допустимый способ представления таймаутов, задержек и backoff
интервалов в инфраструктурном коде.

Характеристики:
- Хранение в наносекундах (float)
- Насыщающая арифметика: результат никогда не становится отрицательным
- Никакой календарной, timezone или locale семантики
- Явное конструирование и наблюдение в конкретных единицах

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Внутреннее значение всегда конечное и >= 0
2. Единственная точка входа для значения — валидатор _to_positive
3. Переполнение / NaN / Inf → InvalidDuration
4. Отрицательный результат → 0 (без ошибки)

ЗАПРЕЩЕНО смешивать единицы без явного конструктора или наблюдателя.
"""

import copy
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, ClassVar, Final

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from durationkit.core.contracts.validators import DurationPayloadValidator
from durationkit.core.math.numerical_safeguards import (
    checked_difference,
    checked_product,
    checked_quotient,
    checked_sum,
    clamp,
    format_magnitude,
    format_raw,
    is_multiple_of,
    is_valid_float,
    require_real,
)

# =============================================================================
# МАСШТАБЫ ЕДИНИЦ (наносекунд в единице)
# =============================================================================

NS_PER_MICRO: Final[float] = 1e3
NS_PER_MILLI: Final[float] = 1e6
NS_PER_SECOND: Final[float] = 1e9
NS_PER_MINUTE: Final[float] = 60 * NS_PER_SECOND
NS_PER_HOUR: Final[float] = 60 * NS_PER_MINUTE

# Порядок выбора единицы при отображении: от крупной к мелкой
_DISPLAY_UNITS: Final[tuple[tuple[float, str], ...]] = (
    (NS_PER_HOUR, "h"),
    (NS_PER_MINUTE, "m"),
    (NS_PER_SECOND, "s"),
    (NS_PER_MILLI, "ms"),
    (NS_PER_MICRO, "µs"),
)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidDuration(ValueError):
    """
    Величина не может представлять Duration: NaN, ±Inf или переполнение.

    Поднимается синхронно в точке вызова; внутри модуля не перехватывается.
    """


class InvalidRange(ValueError):
    """Нарушено предусловие диапазона (clamp с min > max)."""


class DurationDivisionByZero(InvalidRange, ZeroDivisionError):
    """Деление Duration на точный ноль."""


# =============================================================================
# ВАЛИДАТОР
# =============================================================================


def _to_positive(value: float) -> float:
    """
    Приведение числа к неотрицательному конечному значению.

    Насыщающая семантика:
    - NaN, Inf, -Inf → InvalidDuration
    - Отрицательные значения (и -0.0) → 0.0
    - Остальные → без изменений

    Args:
        value: Величина, уже переведённая в наносекунды

    Returns:
        Неотрицательное конечное число наносекунд

    Raises:
        InvalidDuration: Если значение не конечно
        TypeError: Если значение не является вещественным числом
    """
    require_real(value, "nanoseconds")

    try:
        value = float(value)
    except OverflowError as e:
        raise InvalidDuration(f"Value must be finite, got {value!r}") from e

    if not is_valid_float(value):
        raise InvalidDuration(f"Value must be finite, got {value!r}")

    return 0.0 if value <= 0 else value


# =============================================================================
# DURATION
# =============================================================================


@dataclass(frozen=True, slots=True, order=True, repr=False)
class Duration:
    """
    Неизменяемый неотрицательный интервал времени.

    Создаётся только через конструкторы единиц (from_secs, from_millis, ...),
    арифметику или clamp. Прямой вызов Duration(nanos) тоже проходит
    через валидатор.

    Examples:
        >>> Duration.from_secs(1.5).as_millis()
        1500.0
        >>> Duration.from_secs(1).sub(Duration.from_secs(5)).is_zero()
        True
        >>> str(Duration.from_hours(2))
        '2h'
    """

    _nanos: float

    ZERO: ClassVar["Duration"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "_nanos", _to_positive(self._nanos))

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def _scaled(cls, value: float, ns_per_unit: float, name: str) -> "Duration":
        require_real(value, name)
        return cls(checked_product(value, ns_per_unit))

    @classmethod
    def from_nanos(cls, nanos: float) -> "Duration":
        """Duration из наносекунд."""
        return cls(require_real(nanos, "nanos"))

    @classmethod
    def from_micros(cls, micros: float) -> "Duration":
        """Duration из микросекунд."""
        return cls._scaled(micros, NS_PER_MICRO, "micros")

    @classmethod
    def from_millis(cls, millis: float) -> "Duration":
        """Duration из миллисекунд."""
        return cls._scaled(millis, NS_PER_MILLI, "millis")

    @classmethod
    def from_secs(cls, secs: float) -> "Duration":
        """Duration из секунд."""
        return cls._scaled(secs, NS_PER_SECOND, "secs")

    @classmethod
    def from_minutes(cls, minutes: float) -> "Duration":
        """Duration из минут."""
        return cls._scaled(minutes, NS_PER_MINUTE, "minutes")

    @classmethod
    def from_hours(cls, hours: float) -> "Duration":
        """Duration из часов."""
        return cls._scaled(hours, NS_PER_HOUR, "hours")

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Duration":
        """
        Duration из datetime.timedelta.

        Отрицательный timedelta насыщается до нуля. Целые секунды и
        микросекунды масштабируются раздельно.

        Args:
            delta: Интервал stdlib

        Returns:
            Duration той же длины (или ZERO для отрицательного delta)
        """
        if not isinstance(delta, timedelta):
            raise TypeError(
                f"delta must be a timedelta, got {type(delta).__name__}"
            )
        whole_secs = delta.days * 86_400 + delta.seconds
        return cls(whole_secs * NS_PER_SECOND + delta.microseconds * NS_PER_MICRO)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Duration":
        """
        Duration из сериализованного контракта {"nanos": <number>}.

        Args:
            payload: Данные по схеме duration.json

        Returns:
            Duration с указанным числом наносекунд

        Raises:
            jsonschema.ValidationError: Если payload не соответствует схеме
            InvalidDuration: Если nanos не конечно
        """
        DurationPayloadValidator().validate(payload)
        return cls.from_nanos(payload["nanos"])

    # =========================================================================
    # НАБЛЮДАТЕЛИ
    # =========================================================================

    def as_nanos(self) -> float:
        """Длительность в наносекундах."""
        return self._nanos

    def as_micros(self) -> float:
        """Длительность в микросекундах."""
        return self._nanos / NS_PER_MICRO

    def as_millis(self) -> float:
        """Длительность в миллисекундах."""
        return self._nanos / NS_PER_MILLI

    def as_secs(self) -> float:
        """Длительность в секундах."""
        return self._nanos / NS_PER_SECOND

    def as_minutes(self) -> float:
        """Длительность в минутах."""
        return self._nanos / NS_PER_MINUTE

    def as_hours(self) -> float:
        """Длительность в часах."""
        return self._nanos / NS_PER_HOUR

    def to_timedelta(self) -> timedelta:
        """
        Конверсия в datetime.timedelta.

        Разрешение timedelta — микросекунда, меньшие доли округляются.

        Raises:
            OverflowError: Если длительность больше timedelta.max
        """
        return timedelta(microseconds=self.as_micros())

    def to_dict(self) -> dict[str, float]:
        """Сериализация в контракт {"nanos": <number>}."""
        return {"nanos": self._nanos}

    # =========================================================================
    # АРИФМЕТИКА (насыщающая)
    # =========================================================================

    def add(self, other: "Duration") -> "Duration":
        """
        Сумма двух длительностей.

        Raises:
            InvalidDuration: Если сумма переполняется
        """
        self._require_duration(other)
        return Duration(checked_sum(self._nanos, other._nanos))

    def sub(self, other: "Duration") -> "Duration":
        """
        Разность длительностей.

        Отрицательный результат насыщается до нуля, ошибки не бывает.
        """
        self._require_duration(other)
        return Duration(checked_difference(self._nanos, other._nanos))

    def mul(self, factor: float) -> "Duration":
        """
        Умножение на коэффициент.

        Отрицательный коэффициент → ZERO.

        Raises:
            InvalidDuration: Если коэффициент или произведение не конечны
        """
        require_real(factor, "factor")
        if not is_valid_float(factor):
            raise InvalidDuration(f"Factor must be finite, got {factor!r}")

        return Duration(checked_product(self._nanos, factor))

    def div(self, divisor: float) -> "Duration":
        """
        Деление на число.

        Отрицательный делитель → ZERO.

        Raises:
            DurationDivisionByZero: Если divisor == 0
            InvalidDuration: Если делитель или частное не конечны
        """
        require_real(divisor, "divisor")
        if divisor == 0:
            raise DurationDivisionByZero("Division by zero")

        if not is_valid_float(divisor):
            raise InvalidDuration(f"Divisor must be finite, got {divisor!r}")

        return Duration(checked_quotient(self._nanos, divisor))

    def __add__(self, other: object) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, factor: object) -> "Duration":
        if isinstance(factor, Duration):
            return NotImplemented
        return self.mul(factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> "Duration":
        if isinstance(divisor, Duration):
            return NotImplemented
        return self.div(divisor)

    # =========================================================================
    # СРАВНЕНИЯ
    # =========================================================================

    def eq(self, other: "Duration") -> bool:
        """True если длительности равны."""
        self._require_duration(other)
        return self._nanos == other._nanos

    def lt(self, other: "Duration") -> bool:
        """True если эта длительность меньше other."""
        self._require_duration(other)
        return self._nanos < other._nanos

    def le(self, other: "Duration") -> bool:
        """True если эта длительность меньше или равна other."""
        self._require_duration(other)
        return self._nanos <= other._nanos

    def gt(self, other: "Duration") -> bool:
        """True если эта длительность больше other."""
        self._require_duration(other)
        return self._nanos > other._nanos

    def ge(self, other: "Duration") -> bool:
        """True если эта длительность больше или равна other."""
        self._require_duration(other)
        return self._nanos >= other._nanos

    # =========================================================================
    # УТИЛИТЫ
    # =========================================================================

    def is_zero(self) -> bool:
        """True если длительность нулевая."""
        return self._nanos == 0

    def clamp(self, min_value: "Duration", max_value: "Duration") -> "Duration":
        """
        Ограничение длительности диапазоном [min, max].

        Args:
            min_value: Нижняя граница (включительно)
            max_value: Верхняя граница (включительно)

        Returns:
            Новая Duration в пределах диапазона

        Raises:
            InvalidRange: Если min_value больше max_value
        """
        self._require_duration(min_value)
        self._require_duration(max_value)
        if min_value.gt(max_value):
            raise InvalidRange(
                f"min must be <= max, got min={min_value}, max={max_value}"
            )

        return Duration(clamp(self._nanos, min_value._nanos, max_value._nanos))

    def __str__(self) -> str:
        """
        Человекочитаемое представление.

        Выбирается крупнейшая единица, на которую значение делится без
        остатка; если такой нет — наносекунды без округления. Ноль
        отображается как "0h".
        """
        for ns_per_unit, suffix in _DISPLAY_UNITS:
            if is_multiple_of(self._nanos, ns_per_unit):
                return f"{format_magnitude(self._nanos / ns_per_unit)}{suffix}"

        return f"{format_raw(self._nanos)}ns"

    def __repr__(self) -> str:
        return f"Duration(nanos={self._nanos!r})"

    @staticmethod
    def _require_duration(other: object) -> None:
        if not isinstance(other, Duration):
            raise TypeError(
                f"Expected Duration, got {type(other).__name__}: {other!r}"
            )

    # =========================================================================
    # PYDANTIC
    # =========================================================================

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Duration как тип поля Pydantic модели.

        Принимает экземпляр Duration или контракт {"nanos": <number>},
        сериализуется в контракт.
        """
        return core_schema.no_info_plain_validator_function(
            _coerce_duration,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda d: d.to_dict()
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        """JSON Schema поля — контракт duration.json."""
        json_schema = copy.deepcopy(DurationPayloadValidator().schema)
        json_schema.pop("$schema", None)
        json_schema.pop("$id", None)
        return json_schema


def _coerce_duration(value: Any) -> Duration:
    # Pydantic оборачивает только ValueError/AssertionError в ValidationError
    if isinstance(value, Duration):
        return value

    if isinstance(value, dict):
        validator = DurationPayloadValidator()
        errors = sorted(validator.iter_errors(value), key=lambda e: list(e.path))
        if errors:
            raise ValueError(f"Invalid duration payload: {errors[0].message}")
        return Duration.from_nanos(value["nanos"])

    raise ValueError(
        f"Expected Duration or {{'nanos': <number>}}, got {type(value).__name__}"
    )


Duration.ZERO = Duration(0.0)

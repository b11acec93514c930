"""
Numerical Safeguards — примитивы безопасной арифметики для Duration

Модуль обеспечивает численную устойчивость операций над наносекундами:
- Проверка входов на принадлежность к вещественным числам (без неявной коэрции)
- NaN/Inf детекция
- Арифметика с контролем переполнения (OverflowError → inf)
- Clamp и округление для отображения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. OverflowError никогда не выходит наружу: результат заменяется на ±inf,
   а решение об ошибке принимает валидатор Duration
2. bool, str, None и прочие не-числа отклоняются через TypeError
3. Все операции детерминированы и воспроизводимы
"""

import math
import numbers
from typing import Final

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Количество знаков после запятой при отображении дробных величин
DISPLAY_DECIMALS: Final[int] = 6

# Граница точного представления целых в float; выше — экспоненциальная запись
EXACT_INT_LIMIT: Final[float] = 2.0**53


# =============================================================================
# ПРОВЕРКА ТИПОВ И NaN/Inf
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли число валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    try:
        return math.isfinite(value)
    except OverflowError:
        # int за пределами диапазона float всё равно конечен
        return True


def require_real(value: object, name: str) -> float:
    """
    Проверка, что значение — вещественное число.

    bool формально является int, но как величина времени не имеет смысла
    и отклоняется.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        То же значение (без преобразования)

    Raises:
        TypeError: Если value не является вещественным числом
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(
            f"{name} must be a real number, got {type(value).__name__}: {value!r}"
        )
    return value


def _overflow_sign(a: float, b: float) -> float:
    # Знак бесконечности для произведения/частного двух чисел
    return math.inf if (a < 0) == (b < 0) else -math.inf


def _dominant_sign(a: float, b: float) -> float:
    # Знак бесконечности для суммы: определяет больший по модулю операнд
    dominant = a if abs(a) >= abs(b) else b
    return math.inf if dominant > 0 else -math.inf


# =============================================================================
# АРИФМЕТИКА С КОНТРОЛЕМ ПЕРЕПОЛНЕНИЯ
# =============================================================================


def checked_sum(a: float, b: float) -> float:
    """
    Сумма с переполнением в inf.

    Examples:
        >>> checked_sum(1.0, 2.0)
        3.0
        >>> checked_sum(1e308, 1e308)
        inf
    """
    try:
        return float(a) + float(b)
    except OverflowError:
        # int за пределами диапазона float
        return _dominant_sign(a, b)


def checked_difference(a: float, b: float) -> float:
    """
    Разность с переполнением в inf.

    Examples:
        >>> checked_difference(5.0, 3.0)
        2.0
        >>> checked_difference(1.0, 5.0)
        -4.0
    """
    try:
        return float(a) - float(b)
    except OverflowError:
        return _dominant_sign(a, -b)


def checked_product(a: float, b: float) -> float:
    """
    Произведение с переполнением в ±inf.

    Python поднимает OverflowError при конверсии слишком большого int
    в float; IEEE умножение float даёт inf без исключения. Оба случая
    сводятся к бесконечности.

    Examples:
        >>> checked_product(2.0, 1e9)
        2000000000.0
        >>> checked_product(10**400, 1.0)
        inf
        >>> checked_product(-(10**400), 1.0)
        -inf
    """
    try:
        return float(a) * float(b)
    except OverflowError:
        if a == 0 or b == 0:
            return 0.0
        return _overflow_sign(a, b)


def checked_quotient(numerator: float, denominator: float) -> float:
    """
    Частное с переполнением в ±inf.

    Проверка деления на ноль — ответственность вызывающего кода.

    Examples:
        >>> checked_quotient(10.0, 4.0)
        2.5
        >>> checked_quotient(1.0, 10**400)
        0.0
    """
    try:
        return float(numerator) / float(denominator)
    except OverflowError:
        # Огромный int: знаменатель → частное стремится к 0,
        # числитель → к бесконечности
        if abs(denominator) > abs(numerator):
            return 0.0
        return _overflow_sign(numerator, denominator)


# =============================================================================
# CLAMP И ОКРУГЛЕНИЕ
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Args:
        value: Исходное значение
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение, ограниченное диапазоном [min_value, max_value]

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
        >>> clamp(15.0, 0.0, 10.0)
        10.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def is_multiple_of(value: float, step: float) -> bool:
    """
    Проверка кратности через IEEE остаток (math.fmod).

    fmod точен для float, но сами значения могут быть неточны:
    0.3 секунды, полученные как 0.1 + 0.2, не кратны миллисекунде.

    Examples:
        >>> is_multiple_of(3.6e12, 6e10)
        True
        >>> is_multiple_of(1.5e9, 1e9)
        False
    """
    return math.fmod(value, step) == 0


def format_raw(value: float) -> str:
    """
    Текстовое представление величины без округления.

    Целые значения до EXACT_INT_LIMIT печатаются без дробной части,
    остальные — кратчайшим repr float.

    Examples:
        >>> format_raw(1.0)
        '1'
        >>> format_raw(1e-07)
        '1e-07'
        >>> format_raw(3.6e32)
        '3.6e+32'
    """
    value = float(value)

    if value.is_integer() and abs(value) < EXACT_INT_LIMIT:
        return str(int(value))
    return repr(value)


def format_magnitude(value: float, decimals: int = DISPLAY_DECIMALS) -> str:
    """
    Текстовое представление величины для отображения.

    Целые значения печатаются без дробной части, остальные округляются
    до `decimals` знаков.

    Examples:
        >>> format_magnitude(3.0)
        '3'
        >>> format_magnitude(1.5)
        '1.5'
        >>> format_magnitude(0.30000000000000004)
        '0.3'
        >>> format_magnitude(1e300)
        '1e+300'
    """
    rounded = value if float(value).is_integer() else round(value, decimals)
    return format_raw(rounded)

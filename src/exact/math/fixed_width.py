"""
Fixed-Width Integers — Checked Integer Arithmetic

Модуль моделирует целые фиксированной разрядности поверх неограниченных
int Python:
- IntegerWidth: разрядность и знаковость (signed/unsigned)
- ArithmeticLimits: разрядности числителя и экспоненты Dyadic
- Проверенные операции (checked_add/sub/mul/neg/shift)

ПОЛИТИКА ПЕРЕПОЛНЕНИЯ: явная ошибка.
Любой промежуточный или итоговый результат, не помещающийся в заданную
разрядность, приводит к FixedWidthOverflow. Wraparound и saturation
не применяются.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все операции детерминированы и не имеют побочных эффектов
2. Результат либо точен и в диапазоне, либо FixedWidthOverflow
"""

import logging
from typing import Final

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("exact.fixed_width")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FixedWidthOverflow(OverflowError):
    """
    Результат целочисленной операции вышел за пределы разрядности.

    Является precondition violation: вызывающий код отвечает за то, чтобы
    модули операндов (и коэффициенты масштабирования) оставались в
    пределах разрядности.
    """

    pass


# =============================================================================
# CONFIG MODELS
# =============================================================================


class IntegerWidth(BaseModel):
    """
    Разрядность целого числа.

    Immutable модель (frozen=True).
    """

    bits: int = Field(..., ge=1, le=128, description="Количество бит")
    signed: bool = Field(True, description="Знаковое (two's complement) или беззнаковое")

    model_config = {"frozen": True}

    @property
    def min_value(self) -> int:
        if self.signed:
            return -(1 << (self.bits - 1))
        return 0

    @property
    def max_value(self) -> int:
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        """Проверка, что value представимо в данной разрядности."""
        return self.min_value <= value <= self.max_value

    def __str__(self) -> str:
        prefix = "i" if self.signed else "u"
        return f"{prefix}{self.bits}"


INT64: Final[IntegerWidth] = IntegerWidth(bits=64, signed=True)
UINT32: Final[IntegerWidth] = IntegerWidth(bits=32, signed=False)


class ArithmeticLimits(BaseModel):
    """
    Разрядности, на которых построены Dyadic и RootTwo.

    numerator: разрядность числителя Dyadic и целых коэффициентов RootTwo
    exponent: разрядность экспоненты Dyadic (степень двойки в знаменателе)
    """

    numerator: IntegerWidth = Field(default=INT64, description="Знаковая разрядность числителя")
    exponent: IntegerWidth = Field(default=UINT32, description="Беззнаковая разрядность экспоненты")

    model_config = {"frozen": True}

    @field_validator("numerator")
    @classmethod
    def validate_numerator_signed(cls, v: IntegerWidth) -> IntegerWidth:
        if not v.signed:
            raise ValueError(f"numerator width must be signed, got {v}")
        return v

    @field_validator("exponent")
    @classmethod
    def validate_exponent_unsigned(cls, v: IntegerWidth) -> IntegerWidth:
        if v.signed:
            raise ValueError(f"exponent width must be unsigned, got {v}")
        return v


DEFAULT_LIMITS: Final[ArithmeticLimits] = ArithmeticLimits()


# =============================================================================
# CHECKED ARITHMETIC
# =============================================================================


def ensure_fits(value: int, width: IntegerWidth, name: str = "value") -> int:
    """
    Проверка, что value помещается в разрядность width.

    Args:
        value: Точный результат операции
        width: Целевая разрядность
        name: Имя величины (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        FixedWidthOverflow: Если value вне [width.min_value, width.max_value]

    Examples:
        >>> ensure_fits(7, INT64)
        7
        >>> ensure_fits(-1, UINT32)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        FixedWidthOverflow: ...
    """
    if width.contains(value):
        return value

    _log_overflow(name, value, width)
    raise FixedWidthOverflow(
        f"{name}={value} does not fit {width} "
        f"[{width.min_value}, {width.max_value}]"
    )


def checked_add(x: int, y: int, width: IntegerWidth, name: str = "sum") -> int:
    return ensure_fits(x + y, width, name)


def checked_sub(x: int, y: int, width: IntegerWidth, name: str = "difference") -> int:
    return ensure_fits(x - y, width, name)


def checked_mul(x: int, y: int, width: IntegerWidth, name: str = "product") -> int:
    return ensure_fits(x * y, width, name)


def checked_neg(x: int, width: IntegerWidth, name: str = "negation") -> int:
    # -min_value не представимо в two's complement
    return ensure_fits(-x, width, name)


def checked_shift(x: int, k: int, width: IntegerWidth, name: str = "scaled") -> int:
    """
    Проверенное x * 2**k (выравнивание числителя на k бит).

    Проверяется только итоговое произведение: 0 * 2**k == 0 для любого k.

    Raises:
        ValueError: Если k < 0
        FixedWidthOverflow: Если x * 2**k не помещается в width
    """
    if k < 0:
        raise ValueError(f"{name} shift must be non-negative, got {k}")

    if x == 0:
        return 0

    # |x| >= 1, поэтому при k >= bits переполнение гарантировано
    if k >= width.bits:
        _log_overflow(name, f"{x}*2**{k}", width)
        raise FixedWidthOverflow(f"{name}={x}*2**{k} does not fit {width}")

    return ensure_fits(x << k, width, name)


def _log_overflow(name: str, value: object, width: IntegerWidth) -> None:
    logger.debug(
        "fixed_width.overflow",
        extra={"quantity": name, "value": value, "width": str(width)},
    )

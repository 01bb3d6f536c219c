"""
Dyadic — Exact Dyadic Rationals

Модуль реализует точную арифметику над дробями вида numerator / 2^exponent:
- Каноническая форма с автоматическим упрощением (canonicalize)
- Сложение с выравниванием знаменателей, вычитание, отрицание
- Умножение Dyadic × Dyadic и Dyadic × int (в обоих порядках)
- Приближённая конверсия во float (to_approx_float) — ЕДИНСТВЕННАЯ
  операция с потерей точности

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все арифметические операции, кроме отрицания, возвращают каноническую форму
2. Прямой конструктор Dyadic(n, k) НЕ канонизирует (ответственность вызывающего)
3. Равенство — по паре (numerator, exponent), а не по рациональному значению
4. Переполнение числителя/экспоненты → FixedWidthOverflow (см. fixed_width)

КАНОНИЧЕСКАЯ ФОРМА:
    Пока exponent > 0 и numerator — степень двойки, большая 1
    (numerator & (numerator - 1) == 0), numerator делится на 2,
    exponent уменьшается на 1. Ноль всегда приводится к 0/2^0.

    - 4/2^2 → 1/2^0, 8/2^5 → 1/2^2, 0/2^k → 0/2^0
    - 1/2^k остаётся 1/2^k
    - 6/2^2 остаётся 6/2^2 (6 не степень двойки)
    - -2/2^1 остаётся -2/2^1 (отрицательные числители не упрощаются)
"""

import math
from dataclasses import dataclass

from src.exact.math.fixed_width import (
    DEFAULT_LIMITS,
    checked_add,
    checked_mul,
    checked_neg,
    checked_shift,
    ensure_fits,
)


# =============================================================================
# DYADIC
# =============================================================================


@dataclass(frozen=True)
class Dyadic:
    """
    Точное число numerator / 2^exponent.

    Immutable (frozen=True): все операции создают новый экземпляр.

    ВАЖНО: Dyadic(2, 1) != Dyadic(1, 0), хотя оба равны 1. Арифметика
    всегда возвращает каноническую форму, поэтому сравнивать безопасно
    только результаты операций (или заведомо канонические значения).
    """

    numerator: int
    exponent: int = 0

    def __post_init__(self) -> None:
        for name in ("numerator", "exponent"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Dyadic {name} must be int, got {type(value).__name__}")

        ensure_fits(self.numerator, DEFAULT_LIMITS.numerator, "numerator")
        ensure_fits(self.exponent, DEFAULT_LIMITS.exponent, "exponent")

    @classmethod
    def from_int(cls, value: int) -> "Dyadic":
        """Целое value как value / 2^0."""
        return cls(value, 0)

    def is_canonical(self) -> bool:
        """True если представление совпадает со своей канонической формой."""
        return canonicalize(self.numerator, self.exponent) == self

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Dyadic":
        if not isinstance(other, Dyadic):
            return NotImplemented

        numerator_width = DEFAULT_LIMITS.numerator

        if self.exponent == other.exponent:
            return canonicalize(
                checked_add(self.numerator, other.numerator, numerator_width, "numerator"),
                self.exponent,
            )

        # lo: операнд с меньшей экспонентой
        lo, hi = (self, other) if self.exponent < other.exponent else (other, self)
        scaled = checked_shift(
            lo.numerator, hi.exponent - lo.exponent, numerator_width, "numerator"
        )

        return canonicalize(
            checked_add(scaled, hi.numerator, numerator_width, "numerator"),
            hi.exponent,
        )

    def __neg__(self) -> "Dyadic":
        return Dyadic(
            checked_neg(self.numerator, DEFAULT_LIMITS.numerator, "numerator"),
            self.exponent,
        )

    def __sub__(self, other: object) -> "Dyadic":
        if not isinstance(other, Dyadic):
            return NotImplemented
        return self + -other

    def __mul__(self, other: object) -> "Dyadic":
        limits = DEFAULT_LIMITS

        if isinstance(other, Dyadic):
            return canonicalize(
                checked_mul(self.numerator, other.numerator, limits.numerator, "numerator"),
                checked_add(self.exponent, other.exponent, limits.exponent, "exponent"),
            )

        if isinstance(other, int) and not isinstance(other, bool):
            return canonicalize(
                checked_mul(self.numerator, other, limits.numerator, "numerator"),
                self.exponent,
            )

        return NotImplemented

    def __rmul__(self, other: object) -> "Dyadic":
        # Dyadic × Dyadic всегда обрабатывается в __mul__
        if isinstance(other, int) and not isinstance(other, bool):
            return self * other
        return NotImplemented

    # -------------------------------------------------------------------------
    # Приближение (LOSSY)
    # -------------------------------------------------------------------------

    def to_approx_float(self) -> float:
        """
        Приближённое значение numerator / 2^exponent во float.

        LOSSY: единственное место, где допускается потеря точности.
        Для |numerator| <= 2^53 результат точен, если не уходит в subnormal.

        Examples:
            >>> Dyadic(3, 2).to_approx_float()
            0.75
        """
        return math.ldexp(self.numerator, -self.exponent)


# =============================================================================
# КАНОНИЗАЦИЯ
# =============================================================================


def canonicalize(numerator: int, exponent: int) -> Dyadic:
    """
    Каноническая форма numerator / 2^exponent.

    Упрощаются только положительные степени двойки; ноль приводится к 0/2^0.
    Отрицательные числители и прочие чётные числители остаются как есть.
    Операция идемпотентна.

    Args:
        numerator: Числитель (в пределах знаковой разрядности)
        exponent: Экспонента знаменателя (в пределах беззнаковой разрядности)

    Returns:
        Dyadic в канонической форме

    Raises:
        FixedWidthOverflow: Если пара вне разрядностей DEFAULT_LIMITS

    Examples:
        >>> canonicalize(4, 2)
        Dyadic(numerator=1, exponent=0)
        >>> canonicalize(-2, 1)
        Dyadic(numerator=-2, exponent=1)
    """
    # Проверка до цикла: иначе переполнение маскируется сокращением
    ensure_fits(numerator, DEFAULT_LIMITS.numerator, "numerator")
    ensure_fits(exponent, DEFAULT_LIMITS.exponent, "exponent")

    if numerator == 0:
        return Dyadic(0, 0)

    # numerator > 1: единица тоже степень двойки, но делить её нельзя
    while exponent > 0 and numerator > 1 and numerator & (numerator - 1) == 0:
        numerator //= 2
        exponent -= 1

    return Dyadic(numerator, exponent)

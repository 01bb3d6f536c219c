"""
RootTwo — Quadratic Extension a + b√2

Модуль реализует кольцо чисел вида a + b·√2 над типом коэффициентов T:
- T = int     → Z[√2]
- T = Dyadic  → D[√2]

Операции:
- Сложение, вычитание, отрицание (покомпонентно)
- Умножение с учётом √2·√2 = 2
- Сопряжение adj2: a + b√2 ↦ a - b√2 (инволюция, автоморфизм кольца)
- Возведение в целую степень (только Z[√2])
- Норма a² - 2b²
- Приближённая конверсия во float (to_approx_float) — LOSSY

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Immutable: все операции создают новый экземпляр
2. Целые коэффициенты проверяются на разрядность (FixedWidthOverflow),
   включая промежуточные произведения
3. Отрицательная степень → InvalidExponent (никогда не clamp)
4. x ** 0 == RootTwo(0, 0) (аддитивная единица, не мультипликативная)

ФОРМУЛЫ:
    (a + b√2) + (c + d√2) = (a + c) + (b + d)√2
    (a + b√2) · (c + d√2) = (ac + 2bd) + (ad + bc)√2
    adj2(a + b√2) = a - b√2
    norm(a + b√2) = (a + b√2) · adj2(a + b√2) = a² - 2b²
"""

import logging
import math
from dataclasses import dataclass
from typing import Final, Generic, Protocol, TypeVar

from src.exact.math.dyadic import Dyadic
from src.exact.math.fixed_width import (
    DEFAULT_LIMITS,
    checked_add,
    checked_mul,
    checked_neg,
    checked_sub,
    ensure_fits,
)

logger = logging.getLogger("exact.root_two")

# √2 во float (корректно округлённый)
SQRT2: Final[float] = math.sqrt(2.0)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidExponent(ValueError):
    """
    Отрицательная степень в RootTwo.__pow__.

    Обратный элемент в Z[√2] в общем случае не существует, поэтому
    отрицательные степени не поддерживаются.
    """

    pass


# =============================================================================
# COEFFICIENT RING
# =============================================================================


class RingCoefficient(Protocol):
    """Минимальный набор операций над коэффициентом RootTwo."""

    def __add__(self, other, /): ...

    def __sub__(self, other, /): ...

    def __neg__(self): ...

    def __mul__(self, other, /): ...


C = TypeVar("C", bound=RingCoefficient)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# Целые коэффициенты через checked_*, остальные через собственные операторы


def _add(x, y):
    if _is_int(x):
        return checked_add(x, y, DEFAULT_LIMITS.numerator, "coefficient")
    return x + y


def _sub(x, y):
    if _is_int(x):
        return checked_sub(x, y, DEFAULT_LIMITS.numerator, "coefficient")
    return x - y


def _neg(x):
    if _is_int(x):
        return checked_neg(x, DEFAULT_LIMITS.numerator, "coefficient")
    return -x


def _mul(x, y):
    if _is_int(x):
        return checked_mul(x, y, DEFAULT_LIMITS.numerator, "coefficient")
    return x * y


def _double(x):
    if _is_int(x):
        return checked_mul(2, x, DEFAULT_LIMITS.numerator, "coefficient")
    return 2 * x


def _to_float(x) -> float:
    if _is_int(x):
        return float(x)
    if isinstance(x, Dyadic):
        return x.to_approx_float()
    raise TypeError(f"Cannot approximate coefficient of type {type(x).__name__}")


# =============================================================================
# ROOT TWO
# =============================================================================


@dataclass(frozen=True)
class RootTwo(Generic[C]):
    """
    Число a + b·√2 с коэффициентами типа C.

    Immutable модель (frozen=True). Равенство — покомпонентное по (a, b);
    для C = Dyadic наследует семантику равенства Dyadic (по представлению).
    """

    a: C
    b: C

    def __post_init__(self) -> None:
        for name in ("a", "b"):
            value = getattr(self, name)
            if not (_is_int(value) or isinstance(value, Dyadic)):
                raise TypeError(
                    f"RootTwo coefficient {name} must be int or Dyadic, "
                    f"got {type(value).__name__}"
                )
            if _is_int(value):
                ensure_fits(value, DEFAULT_LIMITS.numerator, f"coefficient {name}")

        if type(self.a) is not type(self.b):
            raise TypeError(
                f"RootTwo coefficients must share a type, got "
                f"{type(self.a).__name__} and {type(self.b).__name__}"
            )

    # -------------------------------------------------------------------------
    # Кольцевые операции
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "RootTwo[C]":
        if not isinstance(other, RootTwo):
            return NotImplemented
        return RootTwo(_add(self.a, other.a), _add(self.b, other.b))

    def __sub__(self, other: object) -> "RootTwo[C]":
        if not isinstance(other, RootTwo):
            return NotImplemented
        return RootTwo(_sub(self.a, other.a), _sub(self.b, other.b))

    def __neg__(self) -> "RootTwo[C]":
        return RootTwo(_neg(self.a), _neg(self.b))

    def __mul__(self, other: object) -> "RootTwo[C]":
        if not isinstance(other, RootTwo):
            return NotImplemented

        # √2 · √2 = 2
        a = _add(_mul(self.a, other.a), _double(_mul(self.b, other.b)))
        b = _add(_mul(self.a, other.b), _mul(self.b, other.a))
        return RootTwo(a, b)

    def __pow__(self, n: int) -> "RootTwo[int]":
        """
        Целая степень x ** n (только для целых коэффициентов).

        x ** 0 возвращает RootTwo(0, 0) — аддитивную единицу, а НЕ
        мультипликативную RootTwo(1, 0). Для n >= 1 — n-кратное
        произведение x · x · ... · x.

        Raises:
            TypeError: Если коэффициенты не int или n не int
            InvalidExponent: Если n < 0
        """
        if not _is_int(n):
            return NotImplemented
        if not _is_int(self.a):
            raise TypeError(
                f"RootTwo power requires int coefficients, got {type(self.a).__name__}"
            )

        if n < 0:
            logger.debug(
                "root_two.invalid_exponent",
                extra={"base": repr(self), "exponent": n},
            )
            raise InvalidExponent(
                f"Negative exponent {n} is not supported in Z[sqrt2] "
                f"(no reciprocal without rational coefficients)"
            )

        if n == 0:
            return RootTwo(0, 0)

        result = self
        for _ in range(n - 1):
            result = result * self
        return result

    # -------------------------------------------------------------------------
    # Сопряжение и норма
    # -------------------------------------------------------------------------

    def adj2(self) -> "RootTwo[C]":
        """
        Сопряжение a + b√2 ↦ a - b√2.

        Для Z[√2] adj2(x·y) == adj2(x)·adj2(y) и adj2(x + y) == adj2(x) + adj2(y)
        точно. Для D[√2] равенства выполняются по значению, но не всегда по
        представлению: отрицательные числители не сокращаются, поэтому
        при x = 1/2 + 1/2·√2 adj2(x·x).b == Dyadic(-1, 1), а
        (adj2(x)·adj2(x)).b == Dyadic(-2, 2).
        """
        return RootTwo(self.a, _neg(self.b))

    def norm(self) -> C:
        """Норма a² - 2b² (мультипликативна: norm(x·y) == norm(x)·norm(y))."""
        return _sub(_mul(self.a, self.a), _double(_mul(self.b, self.b)))

    # -------------------------------------------------------------------------
    # Приближение (LOSSY)
    # -------------------------------------------------------------------------

    def to_approx_float(self) -> float:
        """
        Приближённое значение a + b·√2 во float.

        LOSSY: результат содержит ошибку округления SQRT2 и сложения.
        """
        return _to_float(self.a) + _to_float(self.b) * SQRT2


def adj2(x: RootTwo[C]) -> RootTwo[C]:
    """Сопряжение как свободная функция: adj2(x) == x.adj2()."""
    return x.adj2()

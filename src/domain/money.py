from __future__ import annotations

from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    Inexact,
    InvalidOperation,
    localcontext,
)
from typing import Callable, Union

from .errors import InvalidArgument

MoneyLike = Union["Money", Decimal, int, float, str]

# Significant digits kept after the integer part of a quotient.
DIVISION_PRECISION = 28

# Sums, differences and products of finite decimals always fit in MAX_PREC
# digits; Inexact is trapped so a lost digit raises instead of rounding.
_EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=[InvalidOperation, Inexact])


class Money:
    """Exact decimal amount of money.

    Backed by `Decimal`; floats are converted through their `str` form so that
    `Money(4.15)` holds exactly 4.15. Addition, subtraction and multiplication
    are exact whatever the magnitude. Division keeps at least `DIVISION_PRECISION`
    digits past the integer part, rounding only happens through `round`.
    """

    __slots__ = ("_value",)

    def __init__(self, value: MoneyLike) -> None:
        self._value = _to_decimal(value)

    @classmethod
    def zero(cls) -> Money:
        return cls(Decimal(0))

    @property
    def value(self) -> Decimal:
        return self._value

    def round(self, places: int = 2, rounding: str = ROUND_HALF_EVEN) -> Money:
        """Round to `places` fractional digits using a `decimal` rounding mode."""
        if places < 0:
            raise InvalidArgument(f"places must be >= 0, got {places}")
        exponent = Decimal(1).scaleb(-places)
        digits = max(self._value.adjusted() + places + 2, DIVISION_PRECISION)
        with localcontext(Context(prec=digits, Emax=MAX_EMAX, Emin=MIN_EMIN)):
            try:
                return Money(self._value.quantize(exponent, rounding=rounding))
            except InvalidOperation as err:
                raise InvalidArgument(f"Cannot round {self._value} to {places} places") from err

    def __add__(self, other: object) -> Money:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return _exact(Decimal.__add__, self._value, other_value)

    __radd__ = __add__

    def __sub__(self, other: object) -> Money:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return _exact(Decimal.__sub__, self._value, other_value)

    def __rsub__(self, other: object) -> Money:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return _exact(Decimal.__sub__, other_value, self._value)

    def __mul__(self, other: object) -> Money:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return _exact(Decimal.__mul__, self._value, other_value)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Money:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return _divide(self._value, other_value)

    def __rtruediv__(self, other: object) -> Money:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return _divide(other_value, self._value)

    def __neg__(self) -> Money:
        return Money(self._value.copy_negate())

    def __eq__(self, other: object) -> bool:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value == other_value

    def __lt__(self, other: object) -> bool:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value < other_value

    def __le__(self, other: object) -> bool:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value <= other_value

    def __gt__(self, other: object) -> bool:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value > other_value

    def __ge__(self, other: object) -> bool:
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value >= other_value

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self._value}')"


def _exact(operation: Callable[[Decimal, Decimal], Decimal], left: Decimal, right: Decimal) -> Money:
    with localcontext(_EXACT_CONTEXT):
        try:
            return Money(operation(left, right))
        except (Inexact, InvalidOperation) as err:
            raise InvalidArgument(f"Cannot compute exact result for {left} and {right}") from err


def _divide(dividend: Decimal, divisor: Decimal) -> Money:
    if divisor == 0:
        raise InvalidArgument(f"Cannot divide {dividend} by zero")
    integer_digits = max(dividend.adjusted() - divisor.adjusted() + 1, 0)
    with localcontext(Context(prec=integer_digits + DIVISION_PRECISION, Emax=MAX_EMAX, Emin=MIN_EMIN)):
        try:
            return Money(dividend / divisor)
        except InvalidOperation as err:
            raise InvalidArgument(f"Cannot divide {dividend} by {divisor}") from err


def _to_decimal(value: object) -> Decimal:
    if value is None:
        raise InvalidArgument("Amount of money can't be None")
    if isinstance(value, Money):
        return value.value
    # bool is an int subclass, but True is not an amount of money.
    if isinstance(value, bool):
        raise InvalidArgument(f"Amount of money must be numeric, got {value!r}")
    if isinstance(value, Decimal):
        decimal_value = value
    elif isinstance(value, int):
        decimal_value = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            decimal_value = Decimal(str(value).strip())
        except InvalidOperation as err:
            raise InvalidArgument(f"Amount of money must be numeric, got {value!r}") from err
    else:
        raise InvalidArgument(f"Amount of money must be numeric, got {type(value).__name__}")

    if not decimal_value.is_finite():
        raise InvalidArgument(f"Amount of money must be finite, got {value!r}")
    return decimal_value


def _coerce(other: object) -> Decimal | None:
    if isinstance(other, Money):
        return other.value
    if isinstance(other, bool):
        return None
    if isinstance(other, (Decimal, int)):
        other_value = Decimal(other)
    elif isinstance(other, float):
        other_value = Decimal(str(other))
    else:
        return None
    return other_value if other_value.is_finite() else None


__all__ = ["DIVISION_PRECISION", "Money", "MoneyLike"]

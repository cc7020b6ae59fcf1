"""Checked wide integers for curve arithmetic.

This module provides SafeInt and SignedInt, thin wrappers that make the
intermediate arithmetic of the StableSwap solvers explicit about width and
signedness:
- SafeInt is unsigned; subtraction below zero raises Underflow
- SignedInt may go negative (used for the linear coefficient of the
  output solver, which can be negative relative to D)
- Every result is checked against a 256-bit width and raises WidthOverflow
- Division by zero raises DivisionByZero

An operation involving a SignedInt yields a SignedInt, so signedness only
spreads where it is asked for.

Usage pattern:
    from stablequote.safe_int import S, SignedInt

    def calculate(d: int, x: int) -> int:
        sd, sx = S(d), S(x)
        prod = sd * sd // (S(2) * sx)    # unsigned, raises on width overflow
        b = SignedInt(sx) - sd            # may be negative
        return (prod + b).value
"""

from __future__ import annotations

WIDE_BITS = 256
UINT_MAX = 2**WIDE_BITS - 1
INT_MAX = 2 ** (WIDE_BITS - 1) - 1
INT_MIN = -(2 ** (WIDE_BITS - 1))


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division or modulo by zero."""

    pass


class Underflow(SafeIntError):
    """Unsigned subtraction would produce a negative result."""

    pass


class WidthOverflow(SafeIntError):
    """Value does not fit the working integer width."""

    pass


class SafeInt:
    """Unsigned 256-bit integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    signed = False
    min_value = 0
    max_value = UINT_MAX

    def __init__(self, value: int | SafeInt) -> None:
        """Create a checked integer from an int or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt
            WidthOverflow: If value is outside this type's range
        """
        if isinstance(value, SafeInt):
            value = value._value
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{type(self).__name__} requires int, got {type(value).__name__}")
        if value < self.min_value or value > self.max_value:
            raise WidthOverflow(f"{type(self).__name__} out of range: {value}")
        self._value = value

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def _result(self, value: int, other: SafeInt | int | None = None) -> SafeInt:
        """Wrap a raw result in the widest signedness of the operands."""
        if isinstance(self, SignedInt) or isinstance(other, SignedInt):
            return SignedInt(value)
        if value < 0:
            raise Underflow(f"Underflow: result {value} is negative")
        return SafeInt(value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return self._result(self._value + _extract_value(other), other)

    def __radd__(self, other: int) -> SafeInt:
        return self._result(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If both operands are unsigned and the result is negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0 and not (isinstance(self, SignedInt) or isinstance(other, SignedInt)):
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return self._result(result, other)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0 and not isinstance(self, SignedInt):
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return self._result(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return self._result(self._value * _extract_value(other), other)

    def __rmul__(self, other: int) -> SafeInt:
        return self._result(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, rounding toward negative infinity.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return self._result(self._value // other_val, other)

    def __rfloordiv__(self, other: int) -> SafeInt:
        if self._value == 0:
            raise DivisionByZero(f"Division by zero: {other} // 0")
        return self._result(other // self._value)

    def __neg__(self) -> SafeInt:
        return SignedInt(-self._value)

    def __pos__(self) -> SafeInt:
        return self

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    def to_unsigned(self) -> SafeInt:
        """Convert to SafeInt.

        Raises:
            Underflow: If the value is negative
        """
        if self._value < 0:
            raise Underflow(f"Negative value cannot be unsigned: {self._value}")
        return SafeInt(self._value)

    @classmethod
    def zero(cls) -> SafeInt:
        """Create a value of 0."""
        return cls(0)


class SignedInt(SafeInt):
    """Signed 256-bit integer with checked arithmetic.

    Subtraction may go negative; results are still width-checked.
    """

    __slots__ = ()

    signed = True
    min_value = INT_MIN
    max_value = INT_MAX


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt

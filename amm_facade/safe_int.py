"""Checked uint256 arithmetic for token amounts.

SafeInt wraps a Python int and makes every operation behave like checked
uint256 math:
- Results above 2^256-1 raise ArithmeticOverflowError
- Subtraction below zero raises ArithmeticOverflowError
- Division by zero raises ArithmeticOverflowError

Usage pattern:
    from amm_facade.safe_int import S

    def calculate(a: int, b: int, c: int) -> int:
        # Wrap at entry
        sa, sb, sc = S(a), S(b), S(c)

        # Natural arithmetic - automatically checked
        result = (sa * sb) // sc

        # Unwrap at exit
        return result.value
"""

from __future__ import annotations

from amm_facade.constants import UINT256_MAX
from amm_facade.errors import ArithmeticOverflowError


def _checked(value: int) -> int:
    if value < 0:
        raise ArithmeticOverflowError(f"Underflow: {value} is negative")
    if value > UINT256_MAX:
        raise ArithmeticOverflowError(f"Overflow: {value} exceeds uint256 max")
    return value


class SafeInt:
    """Unsigned 256-bit integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt
            ArithmeticOverflowError: If value is outside [0, 2^256-1]
        """
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = _checked(value)
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    __radd__ = __add__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            ArithmeticOverflowError: If result would be negative
        """
        return SafeInt(self._value - _extract_value(other))

    def __rsub__(self, other: int) -> SafeInt:
        return SafeInt(other - self._value)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    __rmul__ = __mul__

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, truncating towards zero.

        Raises:
            ArithmeticOverflowError: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise ArithmeticOverflowError(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

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

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt

"""Arithmetic in the scalar field of the BLS12-381 curve."""

from __future__ import annotations

import operator

_MODULUS = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001
_S = 32
_GENERATOR = 7
_ROOT_OF_UNITY = pow(_GENERATOR, (_MODULUS - 1) >> _S, _MODULUS)
_DIGITS = frozenset("0123456789")


class Fr:
    """An element of the prime field of order ``Fr.MODULUS``."""

    MODULUS = _MODULUS
    NUM_BITS = 255
    CAPACITY = 254
    S = _S

    __slots__ = ("_value",)

    def __init__(self, value: int | Fr = 0) -> None:
        if isinstance(value, Fr):
            self._value = value._value
        else:
            self._value = operator.index(value) % _MODULUS

    @classmethod
    def zero(cls) -> Fr:
        return cls(0)

    @classmethod
    def one(cls) -> Fr:
        return cls(1)

    @classmethod
    def random(cls, rng) -> Fr:
        """Draw a uniformly random element using ``rng.randrange``."""
        return cls(rng.randrange(_MODULUS))

    @classmethod
    def from_str(cls, text: str) -> Fr:
        """Parse a decimal string, optionally prefixed with ``-``."""
        negative = text.startswith("-")
        digits = text[1:] if negative else text
        if not digits or not set(digits) <= _DIGITS:
            raise ValueError(f"not a decimal field element: {text!r}")
        if len(digits) > 1 and digits[0] == "0":
            raise ValueError(f"leading zeros are not allowed: {text!r}")
        value = cls(int(digits))
        return -value if negative else value

    @classmethod
    def root_of_unity(cls) -> Fr:
        """A primitive 2**S-th root of unity."""
        return cls(_ROOT_OF_UNITY)

    @classmethod
    def multiplicative_generator(cls) -> Fr:
        return cls(_GENERATOR)

    def is_zero(self) -> bool:
        return self._value == 0

    def square(self) -> Fr:
        return Fr(self._value * self._value)

    def double(self) -> Fr:
        return Fr(self._value << 1)

    def inverse(self) -> Fr:
        if self._value == 0:
            raise ZeroDivisionError("zero has no inverse in the field")
        return Fr(pow(self._value, _MODULUS - 2, _MODULUS))

    def pow(self, exponent: int) -> Fr:
        exponent = operator.index(exponent)
        if exponent < 0:
            return self.inverse().pow(-exponent)
        return Fr(pow(self._value, exponent, _MODULUS))

    def to_le_bits(self) -> list[bool]:
        """The canonical value as ``NUM_BITS`` bits, least significant first."""
        return [(self._value >> i) & 1 == 1 for i in range(self.NUM_BITS)]

    @staticmethod
    def _coerce(other):
        if isinstance(other, Fr):
            return other
        if isinstance(other, int):
            return Fr(other)
        return NotImplemented

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return Fr(self._value + other._value)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return Fr(self._value - other._value)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return Fr(other._value - self._value)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return Fr(self._value * other._value)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self * other.inverse()

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other * self.inverse()

    def __neg__(self) -> Fr:
        return Fr(-self._value)

    def __int__(self) -> int:
        return self._value

    def __eq__(self, other) -> bool:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Fr(0x{self._value:064x})"
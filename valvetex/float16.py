"""A 16-bit float made of the upper half of an IEEE single.

The value keeps the sign, the full 8-bit exponent and the top 7 bits of the
mantissa of a 32-bit float; the low 16 bits are cleared after every operation.
"""

import math
import numbers
import struct

_F32 = struct.Struct("<f")
_U32 = struct.Struct("<I")


def _upper_bits(value):
    """Return the upper 16 bits of the single nearest to ``value``."""
    try:
        packed = _F32.pack(value)
    except OverflowError:
        packed = _F32.pack(math.copysign(math.inf, value))
    return _U32.unpack(packed)[0] >> 16


def _divide(numerator, denominator):
    if denominator != 0.0:
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


class Float16:
    """A truncated single-precision float stored in 16 bits."""

    __slots__ = ("_bits",)

    def __init__(self, value=0.0):
        if isinstance(value, Float16):
            self._bits = value._bits
        elif isinstance(value, numbers.Real):
            self._bits = _upper_bits(float(value))
        else:
            raise TypeError(f"cannot make a Float16 from {type(value).__name__}")

    @classmethod
    def from_bits(cls, bits):
        """Build a value from its 16-bit pattern."""
        if not 0 <= bits <= 0xFFFF:
            raise ValueError(f"bit pattern out of range: {bits:#x}")
        instance = cls.__new__(cls)
        instance._bits = bits
        return instance

    @property
    def bits(self):
        """The 16-bit pattern."""
        return self._bits

    @property
    def value(self):
        """The value as a Python float."""
        return _F32.unpack(_U32.pack(self._bits << 16))[0]

    @staticmethod
    def _operand(other):
        if isinstance(other, Float16):
            return other.value
        if isinstance(other, numbers.Real):
            return Float16(other).value
        return None

    def __eq__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.value == operand

    def __lt__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.value < operand

    def __le__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.value <= operand

    def __gt__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.value > operand

    def __ge__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.value >= operand

    def __pos__(self):
        return Float16.from_bits(self._bits)

    def __neg__(self):
        return Float16.from_bits(self._bits ^ 0x8000)

    def __add__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return Float16(self.value + operand)

    def __sub__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return Float16(self.value - operand)

    def __mul__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return Float16(self.value * operand)

    def __truediv__(self, other):
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return Float16(_divide(self.value, operand))

    def __iadd__(self, other):
        return self.__add__(other)

    def __isub__(self, other):
        return self.__sub__(other)

    def __imul__(self, other):
        return self.__mul__(other)

    def __itruediv__(self, other):
        return self.__truediv__(other)

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"Float16({self.value!r})"
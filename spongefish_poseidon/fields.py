"""Prime fields and their elements."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from functools import total_ordering
from typing import Iterable, Optional, Union


@dataclass(frozen=True)
class PrimeField:
    """The integers modulo a prime ``modulus``, with a multiplicative ``generator``."""

    modulus: int
    generator: int

    def __post_init__(self) -> None:
        if self.modulus < 2:
            raise ValueError(f"modulus must be at least 2, got {self.modulus}")

    def __call__(self, value: Union[int, "FieldElement"]) -> "FieldElement":
        """Map an integer (reduced modulo the prime) or an element into this field."""
        if isinstance(value, FieldElement):
            if value.field.modulus != self.modulus:
                raise ValueError("element belongs to a field of another characteristic")
            return FieldElement(self, value.value)
        if not isinstance(value, int):
            raise TypeError(f"cannot convert {type(value).__name__} to a field element")
        return FieldElement(self, value % self.modulus)

    @property
    def characteristic(self) -> int:
        return self.modulus

    @property
    def num_limbs(self) -> int:
        """Number of 64-bit words in the big-integer representation."""
        return (self.bit_size() + 63) // 64

    @property
    def serialized_size(self) -> int:
        """Length in bytes of the compressed serialization of an element."""
        return (self.bit_size() + 7) // 8

    def zero(self) -> "FieldElement":
        return FieldElement(self, 0)

    def one(self) -> "FieldElement":
        return FieldElement(self, 1 % self.modulus)

    def from_le_bytes_mod_order(self, data: bytes) -> "FieldElement":
        """Interpret ``data`` as a little-endian integer and reduce it."""
        return self(int.from_bytes(bytes(data), "little"))

    def from_bigint(self, value: int) -> Optional["FieldElement"]:
        """Return the element for ``value``, or None if it is not below the modulus."""
        if not 0 <= value < self.modulus:
            return None
        return FieldElement(self, value)

    def from_bits_le(self, bits: Iterable[bool]) -> int:
        """Return the integer whose little-endian bits are ``bits``."""
        return sum(1 << i for i, bit in enumerate(bits) if bit)

    def bit_size(self) -> int:
        return self.modulus.bit_length()

    def random(self, rng: Optional[_random.Random] = None) -> "FieldElement":
        """Draw a uniformly random element."""
        source = rng if rng is not None else _random.Random()
        return FieldElement(self, source.randrange(self.modulus))


@total_ordering
@dataclass(frozen=True)
class FieldElement:
    """An element of a :class:`PrimeField`, stored as its canonical integer."""

    field: PrimeField
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value < self.field.modulus:
            raise ValueError("value is not a canonical representative of the field")

    def __repr__(self) -> str:
        return f"FieldElement({self.value})"

    def _coerce(self, other: object):
        if isinstance(other, FieldElement):
            if other.field != self.field:
                raise ValueError("cannot combine elements of different fields")
            return other.value
        if isinstance(other, int):
            return other
        return NotImplemented

    def to_bytes_le(self) -> bytes:
        """Little-endian bytes of the full big-integer representation."""
        return self.value.to_bytes(self.field.num_limbs * 8, "little")

    def to_bits_le(self) -> list[bool]:
        """Little-endian bits of the full big-integer representation."""
        return [bool((self.value >> i) & 1) for i in range(self.field.num_limbs * 64)]

    def serialize_compressed(self) -> bytes:
        """Compressed canonical serialization: the value in the fewest whole bytes."""
        return self.value.to_bytes(self.field.serialized_size, "little")

    def inverse(self) -> "FieldElement":
        if self.value == 0:
            raise ZeroDivisionError("zero has no multiplicative inverse")
        return FieldElement(self.field, pow(self.value, -1, self.field.modulus))

    def __add__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self.field(self.value + o)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self.field(self.value - o)

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self.field(o - self.value)

    def __mul__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self.field(self.value * o)

    __rmul__ = __mul__

    def __truediv__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self * self.field(o).inverse()

    def __neg__(self) -> "FieldElement":
        return self.field(-self.value)

    def __pow__(self, exponent: int) -> "FieldElement":
        if not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            return self.inverse() ** -exponent
        return FieldElement(self.field, pow(self.value, exponent, self.field.modulus))

    def __int__(self) -> int:
        return self.value

    def __bool__(self) -> bool:
        return self.value != 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FieldElement):
            return NotImplemented
        if other.field != self.field:
            raise ValueError("cannot compare elements of different fields")
        return self.value < other.value


BLS12_381_FR = PrimeField(
    modulus=52435875175126190479447740508185965837690552500527637822603658699938581184513,
    generator=7,
)
"""The scalar field of BLS12-381."""
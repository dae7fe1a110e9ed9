"""The cryptographic sponge interface and its shared default behaviour."""

from __future__ import annotations

import abc
import copy
import enum
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .absorb import Int, IntType
from .fields import FieldElement, PrimeField


@dataclass(frozen=True)
class FieldElementSize:
    """How many bits a squeezed field element is drawn from.

    ``FieldElementSize.full()`` samples from the whole field (all but the top
    bit of the modulus); ``FieldElementSize.truncated(n)`` samples ``n`` bits.
    """

    truncated_bits: Optional[int] = None

    def __post_init__(self) -> None:
        if self.truncated_bits is not None and self.truncated_bits < 0:
            raise ValueError("a truncated size cannot be negative")

    @classmethod
    def full(cls) -> "FieldElementSize":
        return cls(None)

    @classmethod
    def truncated(cls, num_bits: int) -> "FieldElementSize":
        return cls(num_bits)

    @property
    def is_full(self) -> bool:
        return self.truncated_bits is None

    def num_bits(self, field: PrimeField) -> int:
        """Number of bits an element of this size takes from ``field``."""
        if self.truncated_bits is None:
            return field.bit_size() - 1
        if self.truncated_bits > field.bit_size():
            raise ValueError("num_bits is greater than the capacity of the field")
        return self.truncated_bits


def total_bits(sizes: Sequence[FieldElementSize], field: PrimeField) -> int:
    """Sum of the bit sizes of ``sizes`` in ``field``."""
    return sum(size.num_bits(field) for size in sizes)


class SpongePhase(enum.Enum):
    ABSORBING = "absorbing"
    SQUEEZING = "squeezing"


@dataclass(frozen=True)
class DuplexSpongeMode:
    """Whether a duplex sponge is absorbing or squeezing, and the next state position."""

    phase: SpongePhase
    next_index: int = 0

    @classmethod
    def absorb_at(cls, next_absorb_index: int = 0) -> "DuplexSpongeMode":
        return cls(SpongePhase.ABSORBING, next_absorb_index)

    @classmethod
    def squeeze_at(cls, next_squeeze_index: int = 0) -> "DuplexSpongeMode":
        return cls(SpongePhase.SQUEEZING, next_squeeze_index)

    @property
    def is_absorbing(self) -> bool:
        return self.phase is SpongePhase.ABSORBING

    @property
    def is_squeezing(self) -> bool:
        return self.phase is SpongePhase.SQUEEZING


def _bits_to_le_bytes(bits: Sequence[bool]) -> bytes:
    return bytes(
        sum(1 << i for i, bit in enumerate(bits[start:start + 8]) if bit)
        for start in range(0, len(bits), 8)
    )


def squeeze_field_elements_with_sizes_default(
    sponge: "CryptographicSponge", field: PrimeField, sizes: Sequence[FieldElementSize]
) -> list[FieldElement]:
    """Squeeze elements of ``field`` by drawing bits and packing them little-endian."""
    if not sizes:
        return []
    widths = [size.num_bits(field) for size in sizes]
    bits = sponge.squeeze_bits(sum(widths))
    output = []
    offset = 0
    for width in widths:
        window = bits[offset:offset + width]
        offset += width
        output.append(field.from_le_bytes_mod_order(_bits_to_le_bytes(window)))
    return output


class CryptographicSponge(abc.ABC):
    """A sponge absorbs inputs and later squeezes out bytes, bits or field elements.

    Outputs depend on every earlier absorb and squeeze.
    """

    @abc.abstractmethod
    def absorb(self, value: Any) -> None:
        """Absorb an absorbable value."""

    def absorb_all(self, *args: Any) -> None:
        """Absorb each value in turn."""
        if not args:
            raise TypeError("absorb_all needs at least one value")
        for value in args:
            self.absorb(value)

    @abc.abstractmethod
    def squeeze_bytes(self, num_bytes: int) -> bytes:
        """Squeeze ``num_bytes`` bytes."""

    @abc.abstractmethod
    def squeeze_bits(self, num_bits: int) -> list[bool]:
        """Squeeze ``num_bits`` bits."""

    def squeeze_field_elements_with_sizes(
        self, field: PrimeField, sizes: Sequence[FieldElementSize]
    ) -> list[FieldElement]:
        """Squeeze one element of ``field`` per entry of ``sizes``."""
        return squeeze_field_elements_with_sizes_default(self, field, sizes)

    def squeeze_field_elements(self, field: PrimeField, num_elements: int) -> list[FieldElement]:
        """Squeeze ``num_elements`` full-size elements of ``field``."""
        return self.squeeze_field_elements_with_sizes(
            field, [FieldElementSize.full()] * num_elements
        )

    def fork(self, domain: bytes) -> "CryptographicSponge":
        """Return a copy of this sponge with ``domain`` absorbed for separation."""
        forked = copy.deepcopy(self)
        domain = bytes(domain)
        forked.absorb(Int(len(domain), IntType.USIZE).to_sponge_bytes() + domain)
        return forked


class FieldBasedCryptographicSponge(CryptographicSponge):
    """A sponge whose state is made of elements of a native prime field."""

    @property
    @abc.abstractmethod
    def field(self) -> PrimeField:
        """The native field of the sponge."""

    @abc.abstractmethod
    def squeeze_native_field_elements(self, num_elements: int) -> list[FieldElement]:
        """Squeeze ``num_elements`` elements of the native field."""

    def squeeze_native_field_elements_with_sizes(
        self, sizes: Sequence[FieldElementSize]
    ) -> list[FieldElement]:
        """Squeeze native elements, drawing bits unless every size is full."""
        if all(size.is_full for size in sizes):
            return self.squeeze_native_field_elements(len(sizes))
        return squeeze_field_elements_with_sizes_default(self, self.field, sizes)
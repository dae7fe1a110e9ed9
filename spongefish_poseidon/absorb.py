"""Encoding of values into sponge input, as bytes or as field elements.

Supported values:

* ``bool``: one byte / one element 0 or 1.
* :class:`Int`: a fixed-width integer, little-endian bytes / one element.
* ``int``: a 64-bit integer (signed when negative).
* :class:`~spongefish_poseidon.fields.FieldElement`: its compressed
  serialization / itself, in a field of the same characteristic.
* ``str``: byte length then UTF-8 bytes / the UTF-8 bytes as a byte slice.
* ``bytes``: the raw bytes / length-prefixed bytes packed into elements.
* ``list`` and ``tuple``: each item in turn.
* :class:`Option` and ``None``: a presence flag followed by the value.
* Objects with ``to_sponge_bytes()`` and ``to_sponge_field_elements(field)``
  methods, such as classes decorated with :func:`absorbable`.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Any, Iterable, Optional, Sequence

from .fields import FieldElement, PrimeField

_BYTES_LIKE = (bytes, bytearray, memoryview)


class IntType(enum.Enum):
    """Fixed-width integer types, with their width in bits and signedness."""

    U8 = ("u8", 8, False)
    U16 = ("u16", 16, False)
    U32 = ("u32", 32, False)
    U64 = ("u64", 64, False)
    U128 = ("u128", 128, False)
    USIZE = ("usize", 64, False)
    I8 = ("i8", 8, True)
    I16 = ("i16", 16, True)
    I32 = ("i32", 32, True)
    I64 = ("i64", 64, True)
    I128 = ("i128", 128, True)
    ISIZE = ("isize", 64, True)

    def __init__(self, label: str, bits: int, signed: bool) -> None:
        self.label = label
        self.bits = bits
        self.signed = signed

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


@dataclasses.dataclass(frozen=True)
class Int:
    """An integer of a fixed width."""

    value: int
    type: IntType = IntType.U64

    def __post_init__(self) -> None:
        if not self.type.min_value <= self.value <= self.type.max_value:
            raise ValueError(f"{self.value} does not fit in {self.type.label}")

    def to_sponge_bytes(self) -> bytes:
        return self.value.to_bytes(self.type.bits // 8, "little", signed=self.type.signed)

    def to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        return [field(self.value)]


@dataclasses.dataclass(frozen=True)
class Option:
    """An optional value; ``Option()`` is absent, ``Option(x)`` holds ``x``."""

    value: Any = None

    @property
    def is_some(self) -> bool:
        return self.value is not None

    def to_sponge_bytes(self) -> bytes:
        out = to_sponge_bytes(self.is_some)
        if self.is_some:
            out += to_sponge_bytes(self.value)
        return out

    def to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        out = to_sponge_field_elements(self.is_some, field)
        if self.is_some:
            out.extend(to_sponge_field_elements(self.value, field))
        return out


@dataclasses.dataclass(frozen=True)
class LengthPrefixed:
    """A sequence that is encoded with its length in front."""

    items: Sequence[Any]

    def to_sponge_bytes(self) -> bytes:
        return to_sponge_bytes_with_length(self.items)

    def to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        return to_sponge_field_elements_with_length(self.items, field)


def _implements(value: Any, name: str) -> bool:
    return callable(getattr(type(value), name, None))


def _bare_int(value: int) -> Int:
    return Int(value, IntType.I64 if value < 0 else IntType.U64)


def _pack_bytes(data: bytes, field: PrimeField) -> list[FieldElement]:
    """Pack length-prefixed bytes into elements, as many bytes each as always fit."""
    prefixed = len(data).to_bytes(8, "little") + data
    chunk = (field.bit_size() - 1) // 8
    if chunk == 0:
        raise ValueError("field is too small to hold a byte")
    return [
        field.from_le_bytes_mod_order(prefixed[start:start + chunk])
        for start in range(0, len(prefixed), chunk)
    ]


def _as_u8_batch(items: Sequence[Any]) -> Optional[bytes]:
    if isinstance(items, _BYTES_LIKE):
        return bytes(items)
    if items and all(isinstance(item, Int) and item.type is IntType.U8 for item in items):
        return bytes(item.value for item in items)
    return None


def to_sponge_bytes(value: Any) -> bytes:
    """Encode ``value`` as bytes for a sponge."""
    if _implements(value, "to_sponge_bytes"):
        return bytes(value.to_sponge_bytes())
    if value is None:
        return Option().to_sponge_bytes()
    if isinstance(value, bool):
        return bytes([int(value)])
    if isinstance(value, int):
        return _bare_int(value).to_sponge_bytes()
    if isinstance(value, FieldElement):
        return value.serialize_compressed()
    if isinstance(value, str):
        data = value.encode("utf-8")
        return Int(len(data), IntType.USIZE).to_sponge_bytes() + data
    if isinstance(value, _BYTES_LIKE):
        return bytes(value)
    if isinstance(value, (list, tuple)):
        return batch_to_sponge_bytes(value)
    raise TypeError(f"cannot absorb a value of type {type(value).__name__}")


def to_sponge_field_elements(value: Any, field: PrimeField) -> list[FieldElement]:
    """Encode ``value`` as elements of ``field`` for a sponge."""
    if _implements(value, "to_sponge_field_elements"):
        return list(value.to_sponge_field_elements(field))
    if value is None:
        return Option().to_sponge_field_elements(field)
    if isinstance(value, bool):
        return [field(int(value))]
    if isinstance(value, int):
        return _bare_int(value).to_sponge_field_elements(field)
    if isinstance(value, FieldElement):
        return field_cast([value], field)
    if isinstance(value, str):
        return _pack_bytes(value.encode("utf-8"), field)
    if isinstance(value, _BYTES_LIKE):
        return _pack_bytes(bytes(value), field)
    if isinstance(value, (list, tuple)):
        return batch_to_sponge_field_elements(value, field)
    raise TypeError(f"cannot absorb a value of type {type(value).__name__}")


def batch_to_sponge_bytes(batch: Iterable[Any]) -> bytes:
    """Encode every item of ``batch`` as bytes, one after another."""
    if isinstance(batch, _BYTES_LIKE):
        return bytes(batch)
    return b"".join(to_sponge_bytes(item) for item in batch)


def batch_to_sponge_field_elements(batch: Iterable[Any], field: PrimeField) -> list[FieldElement]:
    """Encode a batch as field elements; a batch of bytes is packed with its length."""
    items = batch if isinstance(batch, _BYTES_LIKE) else list(batch)
    data = _as_u8_batch(items)
    if data is not None:
        return _pack_bytes(data, field)
    return [element for item in items for element in to_sponge_field_elements(item, field)]


def _check_sequence(value: Any) -> int:
    if not isinstance(value, (list, tuple, bytes, bytearray)):
        raise TypeError(f"a length can only be absorbed for sequences, not {type(value).__name__}")
    return len(value)


def to_sponge_bytes_with_length(value: Sequence[Any]) -> bytes:
    """Encode a sequence as bytes, preceded by its length."""
    length = _check_sequence(value)
    return Int(length, IntType.USIZE).to_sponge_bytes() + to_sponge_bytes(value)


def to_sponge_field_elements_with_length(value: Sequence[Any], field: PrimeField) -> list[FieldElement]:
    """Encode a sequence as field elements, preceded by its length."""
    length = _check_sequence(value)
    return Int(length, IntType.USIZE).to_sponge_field_elements(field) + to_sponge_field_elements(
        value, field
    )


def field_cast(elements: Iterable[FieldElement], field: PrimeField) -> list[FieldElement]:
    """Move elements into ``field``, which must have the same characteristic."""
    result = []
    for element in elements:
        if element.field.characteristic != field.characteristic:
            raise ValueError("cannot absorb non-native field elements")
        result.append(field.from_le_bytes_mod_order(element.to_bytes_le()))
    return result


def collect_sponge_bytes(*args: Any) -> bytes:
    """Encode several values as bytes, one after another."""
    if not args:
        raise TypeError("collect_sponge_bytes needs at least one value")
    return b"".join(to_sponge_bytes(arg) for arg in args)


def collect_sponge_field_elements(field: PrimeField, *args: Any) -> list[FieldElement]:
    """Encode several values as field elements, one after another."""
    if not args:
        raise TypeError("collect_sponge_field_elements needs at least one value")
    return [element for arg in args for element in to_sponge_field_elements(arg, field)]


def absorbable(cls):
    """Make a dataclass or named tuple absorbable by encoding its fields in order."""
    if isinstance(cls, type) and dataclasses.is_dataclass(cls):
        names = tuple(f.name for f in dataclasses.fields(cls))

        def parts(self):
            return [getattr(self, name) for name in names]

    elif isinstance(cls, type) and issubclass(cls, tuple) and hasattr(cls, "_fields"):

        def parts(self):
            return list(self)

    else:
        raise TypeError(f"absorbable can only be applied to dataclasses or named tuples, not {cls!r}")

    def _to_sponge_bytes(self) -> bytes:
        return b"".join(to_sponge_bytes(part) for part in parts(self))

    def _to_sponge_field_elements(self, field: PrimeField) -> list[FieldElement]:
        return [element for part in parts(self) for element in to_sponge_field_elements(part, field)]

    cls.to_sponge_bytes = _to_sponge_bytes
    cls.to_sponge_field_elements = _to_sponge_field_elements
    return cls
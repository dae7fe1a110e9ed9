"""The Poseidon permutation and a duplex sponge built on it."""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from typing import Any, Sequence

from .absorb import field_cast, to_sponge_field_elements
from .fields import FieldElement, PrimeField
from .params import PoseidonConfig
from .sponge import (
    DuplexSpongeMode,
    FieldBasedCryptographicSponge,
    FieldElementSize,
    squeeze_field_elements_with_sizes_default,
)


@dataclass
class PoseidonSpongeState:
    """The state of a Poseidon sponge, without its parameters."""

    state: list[FieldElement] = dataclass_field(default_factory=list)
    mode: DuplexSpongeMode = dataclass_field(default_factory=DuplexSpongeMode.absorb_at)


class PoseidonSponge(FieldBasedCryptographicSponge):
    """A duplex sponge using the Poseidon permutation over the config's field."""

    def __init__(self, config: PoseidonConfig) -> None:
        if not config.mds or not config.mds[0]:
            raise ValueError("the configuration has an empty MDS matrix")
        self.config = config
        self._field: PrimeField = config.mds[0][0].field
        modulus = self._field.modulus
        self._ark = [[int(x) % modulus for x in row] for row in config.ark]
        self._mds = [[int(x) % modulus for x in row] for row in config.mds]
        self.state: list[FieldElement] = [self._field.zero()] * config.state_size
        self.mode = DuplexSpongeMode.absorb_at(0)

    @property
    def field(self) -> PrimeField:
        return self._field

    def permute(self) -> None:
        """Apply the Poseidon permutation to the state."""
        cfg = self.config
        p = self._field.modulus
        alpha = cfg.alpha
        half = cfg.full_rounds // 2
        last_partial = half + cfg.partial_rounds
        state = [int(x) for x in self.state]
        for rnd in range(cfg.full_rounds + cfg.partial_rounds):
            state = [(s + k) % p for s, k in zip(state, self._ark[rnd])]
            if rnd < half or rnd >= last_partial:
                state = [pow(s, alpha, p) for s in state]
            else:
                state[0] = pow(state[0], alpha, p)
            state = [sum(m * s for m, s in zip(row, state)) % p for row in self._mds]
        self.state = [FieldElement(self._field, s) for s in state]

    def _absorb_internal(self, start: int, elements: Sequence[FieldElement]) -> None:
        rate, capacity = self.config.rate, self.config.capacity
        remaining = list(elements)
        while True:
            if start + len(remaining) <= rate:
                for offset, element in enumerate(remaining):
                    pos = capacity + start + offset
                    self.state[pos] = self.state[pos] + element
                self.mode = DuplexSpongeMode.absorb_at(start + len(remaining))
                return
            taken = rate - start
            for offset, element in enumerate(remaining[:taken]):
                pos = capacity + start + offset
                self.state[pos] = self.state[pos] + element
            self.permute()
            remaining = remaining[taken:]
            start = 0

    def _squeeze_internal(self, start: int, count: int) -> list[FieldElement]:
        rate, capacity = self.config.rate, self.config.capacity
        output: list[FieldElement] = []
        remaining = count
        while True:
            if start + remaining <= rate:
                output.extend(self.state[capacity + start:capacity + start + remaining])
                self.mode = DuplexSpongeMode.squeeze_at(start + remaining)
                return output
            taken = rate - start
            output.extend(self.state[capacity + start:capacity + rate])
            remaining -= taken
            if remaining:
                self.permute()
            start = 0

    def absorb(self, value: Any) -> None:
        elements = to_sponge_field_elements(value, self._field)
        if not elements:
            return
        if self.mode.is_absorbing:
            index = self.mode.next_index
            if index == self.config.rate:
                self.permute()
                index = 0
        else:
            index = 0
        self._absorb_internal(index, elements)

    def squeeze_bytes(self, num_bytes: int) -> bytes:
        usable = (self._field.bit_size() - 1) // 8
        num_elements = -(-num_bytes // usable)
        out = b"".join(
            element.to_bytes_le()[:usable]
            for element in self.squeeze_native_field_elements(num_elements)
        )
        return out[:num_bytes]

    def squeeze_bits(self, num_bits: int) -> list[bool]:
        usable = self._field.bit_size() - 1
        num_elements = -(-num_bits // usable)
        bits: list[bool] = []
        for element in self.squeeze_native_field_elements(num_elements):
            bits.extend(element.to_bits_le()[:usable])
        return bits[:num_bits]

    def squeeze_native_field_elements(self, num_elements: int) -> list[FieldElement]:
        if self.mode.is_absorbing:
            self.permute()
            index = 0
        else:
            index = self.mode.next_index
            if index == self.config.rate:
                self.permute()
                index = 0
        return self._squeeze_internal(index, num_elements)

    def squeeze_field_elements_with_sizes(
        self, field: PrimeField, sizes: Sequence[FieldElementSize]
    ) -> list[FieldElement]:
        if field.characteristic == self._field.characteristic:
            return field_cast(self.squeeze_native_field_elements_with_sizes(sizes), field)
        return squeeze_field_elements_with_sizes_default(self, field, sizes)

    def squeeze_field_elements(self, field: PrimeField, num_elements: int) -> list[FieldElement]:
        if field == self._field:
            return field_cast(self.squeeze_native_field_elements(num_elements), field)
        return self.squeeze_field_elements_with_sizes(
            field, [FieldElementSize.full()] * num_elements
        )

    def to_state(self) -> PoseidonSpongeState:
        """Return a snapshot of the state and mode."""
        return PoseidonSpongeState(state=list(self.state), mode=self.mode)

    @classmethod
    def from_state(cls, state: PoseidonSpongeState, config: PoseidonConfig) -> "PoseidonSponge":
        """Build a sponge with ``config`` that continues from ``state``."""
        sponge = cls(config)
        if len(state.state) != config.state_size:
            raise ValueError(
                f"state has {len(state.state)} elements, expected {config.state_size}"
            )
        sponge.state = list(state.state)
        sponge.mode = state.mode
        return sponge
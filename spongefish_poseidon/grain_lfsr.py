"""The Grain LFSR used to generate Poseidon round constants and MDS matrices."""

from __future__ import annotations

from collections import deque

from .fields import FieldElement, PrimeField

_STATE_BITS = 80
_TAPS = (62, 51, 38, 23, 13, 0)
_WARMUP_ROUNDS = 160


def _write_field(state: list[bool], start: int, width: int, value: int) -> None:
    """Store the low ``width`` bits of ``value`` most-significant first at ``start``."""
    for offset in range(width):
        state[start + offset] = bool((value >> (width - 1 - offset)) & 1)


class PoseidonGrainLFSR:
    """An 80-bit self-shrinking Grain LFSR seeded with the Poseidon instance parameters."""

    def __init__(
        self,
        is_sbox_an_inverse: bool,
        prime_num_bits: int,
        state_len: int,
        num_full_rounds: int,
        num_partial_rounds: int,
    ) -> None:
        self.prime_num_bits = prime_num_bits
        state = [False] * _STATE_BITS
        # b0, b1 describe the field; b2..b5 the S-box.
        state[1] = True
        state[5] = bool(is_sbox_an_inverse)
        _write_field(state, 6, 12, prime_num_bits)
        _write_field(state, 18, 12, state_len)
        _write_field(state, 30, 10, num_full_rounds)
        _write_field(state, 40, 10, num_partial_rounds)
        for i in range(50, _STATE_BITS):
            state[i] = True
        self._state = deque(state, maxlen=_STATE_BITS)
        for _ in range(_WARMUP_ROUNDS):
            self._update()

    def _update(self) -> bool:
        state = self._state
        new_bit = False
        for tap in _TAPS:
            new_bit ^= state[tap]
        state.append(new_bit)
        return new_bit

    def get_bits(self, num_bits: int) -> list[bool]:
        """Return ``num_bits`` output bits, each kept only after a set selector bit."""
        bits = []
        for _ in range(num_bits):
            while not self._update():
                self._update()
            bits.append(self._update())
        return bits

    def _check_field(self, field: PrimeField) -> None:
        if field.bit_size() != self.prime_num_bits:
            raise ValueError(
                f"field has {field.bit_size()} bits, the LFSR was set up for {self.prime_num_bits}"
            )

    def _next_integer(self, field: PrimeField) -> int:
        bits = self.get_bits(self.prime_num_bits)
        bits.reverse()
        return field.from_bits_le(bits)

    def get_field_elements_rejection_sampling(
        self, field: PrimeField, num_elems: int
    ) -> list[FieldElement]:
        """Draw elements, discarding any candidate not below the modulus."""
        self._check_field(field)
        result = []
        for _ in range(num_elems):
            while True:
                element = field.from_bigint(self._next_integer(field))
                if element is not None:
                    result.append(element)
                    break
        return result

    def get_field_elements_mod_p(self, field: PrimeField, num_elems: int) -> list[FieldElement]:
        """Draw elements, reducing each candidate modulo the prime."""
        self._check_field(field)
        return [field(self._next_integer(field)) for _ in range(num_elems)]
"""Poseidon parameters and their default generation with the Grain LFSR."""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from functools import lru_cache
from typing import Optional

from .fields import BLS12_381_FR, FieldElement, PrimeField
from .grain_lfsr import PoseidonGrainLFSR


@dataclass
class PoseidonConfig:
    """The parameters of a Poseidon permutation and sponge.

    ``ark[round][i]`` is the round key added to state element ``i`` before
    the MDS matrix is applied in round ``round``.
    """

    full_rounds: int
    partial_rounds: int
    alpha: int
    ark: list[list[FieldElement]] = dataclass_field(repr=False)
    mds: list[list[FieldElement]] = dataclass_field(repr=False)
    rate: int
    capacity: int

    def __post_init__(self) -> None:
        width = self.rate + self.capacity
        if len(self.ark) != self.full_rounds + self.partial_rounds:
            raise ValueError(
                f"ark has {len(self.ark)} rows, expected "
                f"{self.full_rounds + self.partial_rounds}"
            )
        if any(len(row) != width for row in self.ark):
            raise ValueError(f"every ark row must have {width} elements")
        if len(self.mds) != width:
            raise ValueError(f"mds has {len(self.mds)} rows, expected {width}")
        if any(len(row) != width for row in self.mds):
            raise ValueError(f"every mds row must have {width} elements")

    @property
    def state_size(self) -> int:
        """Number of field elements in the sponge state."""
        return self.rate + self.capacity


@dataclass(frozen=True)
class PoseidonDefaultConfigEntry:
    """One row of a field's default Poseidon parameter table.

    ``skip_matrices`` is how many candidate MDS matrices the Grain LFSR
    discards before the one that satisfies all requirements.
    """

    rate: int
    alpha: int
    full_rounds: int
    partial_rounds: int
    skip_matrices: int


_E = PoseidonDefaultConfigEntry

# (optimized for constraints, optimized for weights), keyed by field modulus.
_DEFAULT_TABLES: dict[int, tuple[tuple[PoseidonDefaultConfigEntry, ...], ...]] = {
    BLS12_381_FR.modulus: (
        (
            _E(2, 17, 8, 31, 0),
            _E(3, 5, 8, 56, 0),
            _E(4, 5, 8, 56, 0),
            _E(5, 5, 8, 57, 0),
            _E(6, 5, 8, 57, 0),
            _E(7, 5, 8, 57, 0),
            _E(8, 5, 8, 57, 0),
        ),
        (
            _E(2, 257, 8, 13, 0),
            _E(3, 257, 8, 13, 0),
            _E(4, 257, 8, 13, 0),
            _E(5, 257, 8, 13, 0),
            _E(6, 257, 8, 13, 0),
            _E(7, 257, 8, 13, 0),
            _E(8, 257, 8, 13, 0),
        ),
    ),
}


@lru_cache(maxsize=None)
def _ark_and_mds(
    field: PrimeField,
    prime_bits: int,
    rate: int,
    full_rounds: int,
    partial_rounds: int,
    skip_matrices: int,
) -> tuple[tuple[tuple[FieldElement, ...], ...], tuple[tuple[FieldElement, ...], ...]]:
    width = rate + 1
    lfsr = PoseidonGrainLFSR(False, prime_bits, width, full_rounds, partial_rounds)

    ark = tuple(
        tuple(lfsr.get_field_elements_rejection_sampling(field, width))
        for _ in range(full_rounds + partial_rounds)
    )

    for _ in range(skip_matrices):
        lfsr.get_field_elements_mod_p(field, 2 * width)

    xs = lfsr.get_field_elements_mod_p(field, width)
    ys = lfsr.get_field_elements_mod_p(field, width)
    mds = tuple(tuple((x + y).inverse() for y in ys) for x in xs)
    return ark, mds


def find_poseidon_ark_and_mds(
    field: PrimeField,
    prime_bits: int,
    rate: int,
    full_rounds: int,
    partial_rounds: int,
    skip_matrices: int,
) -> tuple[list[list[FieldElement]], list[list[FieldElement]]]:
    """Generate the round keys and the Cauchy MDS matrix from the Grain LFSR.

    Returns ``(ark, mds)`` for a state of ``rate + 1`` elements.
    """
    ark, mds = _ark_and_mds(
        field, prime_bits, rate, full_rounds, partial_rounds, skip_matrices
    )
    return [list(row) for row in ark], [list(row) for row in mds]


def get_default_poseidon_parameters(
    field: PrimeField, rate: int, optimized_for_weights: bool
) -> Optional[PoseidonConfig]:
    """Return the default parameters of ``field`` for ``rate``, or None if there are none.

    Raises ValueError if no default table is known for ``field``.
    """
    tables = _DEFAULT_TABLES.get(field.modulus)
    if tables is None:
        raise ValueError(f"no default Poseidon parameters for the field of modulus {field.modulus}")
    entries = tables[1] if optimized_for_weights else tables[0]
    for entry in entries:
        if entry.rate == rate:
            ark, mds = find_poseidon_ark_and_mds(
                field,
                field.bit_size(),
                rate,
                entry.full_rounds,
                entry.partial_rounds,
                entry.skip_matrices,
            )
            return PoseidonConfig(
                full_rounds=entry.full_rounds,
                partial_rounds=entry.partial_rounds,
                alpha=entry.alpha,
                ark=ark,
                mds=mds,
                rate=entry.rate,
                capacity=1,
            )
    return None
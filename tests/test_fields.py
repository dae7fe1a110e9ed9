import random

import pytest
from hypothesis import given
from hypothesis import strategies as st

from spongefish_poseidon.fields import BLS12_381_FR as FR
from spongefish_poseidon.fields import FieldElement, PrimeField

MODULUS = 52435875175126190479447740508185965837690552500527637822603658699938581184513

elements = st.integers(min_value=0, max_value=MODULUS - 1).map(FR)
nonzero = st.integers(min_value=1, max_value=MODULUS - 1).map(FR)


def test_bit_size():
    assert FR.bit_size() == 255
    assert FR.characteristic == MODULUS
    assert FR.generator == 7


def test_call_reduces_modulo():
    assert FR(MODULUS + 3) == FR(3)
    assert int(FR(-1)) == MODULUS - 1
    assert int(FR.zero()) == 0
    assert int(FR.one()) == 1


@given(elements)
def test_additive_inverse(a):
    assert a + (-a) == FR.zero()


@given(nonzero)
def test_multiplicative_inverse(a):
    assert a * a.inverse() == FR.one()
    assert a ** -1 == a.inverse()


@given(elements, elements)
def test_sub_round_trip(a, b):
    restored = (a - b) + b
    assert restored == a
    assert FR.from_le_bytes_mod_order(restored.to_bytes_le()) == a


@given(elements, elements, elements)
def test_distributive(a, b, c):
    left = a * (b + c)
    right = a * b + a * c
    assert left == right
    assert FR.from_le_bytes_mod_order(left.to_bytes_le()) == right
    assert FR(int(a) * (int(b) + int(c))) == left


def test_inverse_of_zero_raises():
    with pytest.raises(ZeroDivisionError):
        FR.zero().inverse()


def test_fermat_little_theorem():
    assert FR(FR.generator) ** (MODULUS - 1) == FR.one()
    assert FR(2) ** 3 == FR(2) * FR(2) * FR(2)


def test_mixed_int_arithmetic():
    assert FR(2) + 3 == FR(5)
    assert 3 - FR(1) == FR(2)
    assert 4 * FR(2) == FR(8)


def test_from_le_bytes_mod_order():
    assert FR.from_le_bytes_mod_order(MODULUS.to_bytes(32, "little")) == FR.zero()
    assert FR.from_le_bytes_mod_order((MODULUS + 5).to_bytes(32, "little")) == FR(5)


def test_from_bigint():
    assert FR.from_bigint(MODULUS) is None
    assert FR.from_bigint(-1) is None
    assert FR.from_bigint(MODULUS - 1) == FR(-1)


@given(elements)
def test_bits_round_trip(a):
    bits = a.to_bits_le()
    assert len(bits) == 256
    assert FR.from_bits_le(bits) == int(a)


@given(elements)
def test_bytes_round_trip(a):
    data = a.to_bytes_le()
    assert len(data) == 32
    assert FR.from_le_bytes_mod_order(data) == a


def test_mixing_fields_raises():
    small = PrimeField(101, 2)
    with pytest.raises(ValueError):
        _ = FR(1) + small(1)


def test_invalid_modulus():
    with pytest.raises(ValueError):
        PrimeField(1, 1)


def test_non_canonical_element_rejected():
    with pytest.raises(ValueError):
        FieldElement(FR, MODULUS)


def test_ordering():
    assert FR(1) < FR(2)
    assert FR(-1) > FR(0)


def test_random_in_range():
    rng = random.Random(1)
    values = [FR.random(rng) for _ in range(20)]
    assert all(0 <= int(v) < MODULUS for v in values)
    assert len(set(values)) == 20
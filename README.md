# spongefish_poseidon

A Poseidon duplex sponge over prime fields, in plain Python with no
dependencies outside the standard library.

The package is made of these modules:

- `spongefish_poseidon.fields`: `PrimeField` and `FieldElement`, arithmetic
  modulo a prime. `BLS12_381_FR` is the scalar field of BLS12-381.
- `spongefish_poseidon.absorb`: turns values into sponge bytes or sponge
  field elements. It handles `bool`, `int`, `str`, `bytes`, lists and tuples,
  `None` and `Option`, field elements, fixed-width `Int` values, and any
  object that has `to_sponge_bytes()` and `to_sponge_field_elements(field)`
  methods. The `absorbable` decorator gives those two methods to a dataclass
  or a named tuple, encoding its fields in order.
- `spongefish_poseidon.sponge`: the `CryptographicSponge` and
  `FieldBasedCryptographicSponge` base classes, `FieldElementSize` and
  `DuplexSpongeMode`.
- `spongefish_poseidon.grain_lfsr`: `PoseidonGrainLFSR`, the generator of
  round constants and MDS matrices.
- `spongefish_poseidon.params`: `PoseidonConfig`,
  `find_poseidon_ark_and_mds` and `get_default_poseidon_parameters`.
- `spongefish_poseidon.poseidon`: `PoseidonSponge`, a duplex sponge on the
  Poseidon permutation, and `PoseidonSpongeState`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from spongefish_poseidon.fields import BLS12_381_FR as fr
from spongefish_poseidon.params import get_default_poseidon_parameters
from spongefish_poseidon.poseidon import PoseidonSponge

config = get_default_poseidon_parameters(fr, 2, False)
sponge = PoseidonSponge(config)
sponge.absorb([fr(0), fr(1), fr(2)])
elements = sponge.squeeze_native_field_elements(3)
digest = sponge.squeeze_bytes(32)
bits = sponge.squeeze_bits(10)
```

`get_default_poseidon_parameters(field, rate, optimized_for_weights)` returns
the parameters for a rate from 2 to 8, tuned either for constraint count
(`False`) or for weight (`True`). It returns `None` for any other rate. The
parameters are derived with the Grain LFSR and cached, so the second call for
the same set is fast. `absorb_all(a, b, ...)` absorbs several values in turn.

### Field elements of a chosen size

```python
from spongefish_poseidon.sponge import FieldElementSize

small = sponge.squeeze_field_elements_with_sizes(fr, [FieldElementSize.truncated(128)])
full = sponge.squeeze_field_elements(fr, 2)
```

`FieldElementSize.full()` draws from all but the top bit of the modulus. A
truncated size larger than the field's bit size raises `ValueError`.

### Domain separation

`fork(domain)` returns a copy of the sponge that has also absorbed `domain`,
with its length in front of it. The original sponge does not change.

```python
child = sponge.fork(b"transcript")
```

### Encodings

A Python `int` has no width of its own: it is encoded as a 64-bit integer,
signed when negative. Wrap it in `Int` with an `IntType` (for example
`IntType.U16` or `IntType.I64`) for another width. `Option` is a value that
may be absent, and `LengthPrefixed` puts a sequence's length in front of it.

```python
from dataclasses import dataclass

from spongefish_poseidon.absorb import (
    Int, IntType, absorbable, collect_sponge_bytes, to_sponge_field_elements,
)

@absorbable
@dataclass
class Point:
    x: int
    y: int

data = collect_sponge_bytes(Int(7, IntType.U16), "hello", [1, 2, 3], Point(1, 2))
elements = to_sponge_field_elements(Point(1, 2), fr)
```

Field elements of a field with another characteristic than the sponge's
cannot be absorbed; `field_cast` raises `ValueError` for them. Values of an
unsupported type raise `TypeError`.

### Saving and restoring state

`to_state()` captures the sponge state and mode, without the parameters.
`PoseidonSponge.from_state(state, config)` builds a sponge that continues
from that state.

## Limitations

- Default parameter tables exist only for the BLS12-381 scalar field;
  `get_default_poseidon_parameters` raises `ValueError` for any other field.
  For other fields, build a `PoseidonConfig` yourself, for example from
  `find_poseidon_ark_and_mds`.
- There are no constraint-system (circuit) versions of the sponge or of the
  encodings: everything here computes on concrete values.
- There is no command-line tool.
- Arithmetic is done with Python integers, so the sponge is far slower than
  a compiled one.
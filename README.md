# zkcircuit

This package provides building blocks for writing arithmetic circuits as
rank-1 constraint systems over the BLS12-381 scalar field. It is plain
Python and needs nothing beyond the standard library.

## Modules

- `zkcircuit.field` defines `Fr`, an element of the scalar field.
  - It supports `+`, `-`, `*`, `/` and negation, with plain integers too.
  - Methods: `inverse`, `pow`, `square`, `double`, `is_zero` and `to_le_bits`.
  - Constructors: `zero`, `one`, `from_str` (decimal text), `random` (takes anything with `randrange`), `root_of_unity` and `multiplicative_generator`.
  - Constants: `MODULUS`, `NUM_BITS`, `CAPACITY` and `S`.
- `zkcircuit.constraint_system` holds the core types.
  - `Index`, `Variable` and `LinearCombination`. A linear combination supports `+` and `-` with variables, with other combinations and with `(coeff, target)` pairs.
  - The `ConstraintSystem` and `Circuit` interfaces.
  - The `SynthesisError` hierarchy: `AssignmentMissing`, `Unsatisfiable`, `PolynomialDegreeTooLarge` and others.
  - `require`, which turns a missing value (`None`) into `AssignmentMissing`.
  - Namespaces, which work as context managers.
  - `RecordingConstraintSystem`, which records every allocation and constraint by path. You can check a circuit with `is_satisfied`, `which_is_unsatisfied`, `num_constraints`, `num_inputs`, `get`, `set` and `verify`.
- `zkcircuit.domain` provides `EvaluationDomain` and `serial_fft`.
  - `EvaluationDomain` does radix-2 FFT, inverse FFT and coset FFT.
  - It also has `distribute_powers`, the vanishing polynomial `z`, `divide_by_z_on_coset`, and pointwise `mul_assign` and `sub_assign`.
  - All transforms run serially in pure Python.
- `zkcircuit.allocated` provides `AllocatedBit`, a variable constrained to 0 or 1.
  - Its gates: `xor`, `and_`, `and_not`, `nor` and `alloc_conditionally`.
  - `field_into_allocated_bits_le` splits an `Fr` into its bits.
- `zkcircuit.boolean` provides `Boolean`, which is one of three things: a constant, an allocated bit, or the negation of an allocated bit.
  - It has `negate` (also `~`), `lc`, `xor`, `and_` and `enforce_equal`.
  - Operations fold constants away where they can.
- `zkcircuit.sha256_ops` provides the SHA-256 choice and majority functions, `sha256_ch` and `sha256_maj`.
- `zkcircuit.multieq` provides `MultiEq`, which packs many small equality checks into as few constraints as the field's capacity allows. It is a context manager, and closing it emits the pending constraint.
- `zkcircuit.bits` provides `u64_into_boolean_vec_le` and `field_into_boolean_vec_le`.
- `zkcircuit.multipack` provides:
  - `pack_into_inputs`, which exposes bits as compact public inputs;
  - `compute_multipacking`, which gives the matching field values;
  - `bytes_to_bits` and `bytes_to_bits_le`.

## Example

```python
from zkcircuit.constraint_system import RecordingConstraintSystem
from zkcircuit.allocated import AllocatedBit
from zkcircuit.boolean import Boolean

cs = RecordingConstraintSystem()
with cs.namespace("a") as ns:
    a = Boolean.of(AllocatedBit.alloc(ns, True))
with cs.namespace("b") as ns:
    b = Boolean.of(AllocatedBit.alloc(ns, False))

c = Boolean.xor(cs, a, b)
assert c.value is True
assert cs.is_satisfied()
assert cs.get("a/boolean") == 1
```

The next example multiplies two polynomials through an evaluation domain:

```python
from zkcircuit.field import Fr
from zkcircuit.domain import EvaluationDomain

a = EvaluationDomain.from_coeffs([Fr(1), Fr(2), Fr(0), Fr(0)])
b = EvaluationDomain.from_coeffs([Fr(3), Fr(4), Fr(0), Fr(0)])
a.fft()
b.fft()
a.mul_assign(b)
a.ifft()
assert a.coeffs == [3, 10, 8, 0]
```

## What it does not do

This package builds and checks constraint systems. It does not do the rest of a proving system:

- It does not generate proving or verifying parameters.
- It does not create, serialize, verify or aggregate proofs.
- It has no elliptic-curve or pairing arithmetic.
- It has no hash-function circuits beyond the SHA-256 `ch` and `maj` bit functions.
- It has no GPU or multi-threaded acceleration.
- It has no command-line interface.

## Running the tests

```
pip install -e .[test]
pytest
```
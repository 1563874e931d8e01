"""Decomposition of integers and field elements into allocated boolean bits."""

from __future__ import annotations

from .allocated import AllocatedBit, field_into_allocated_bits_le
from .boolean import Boolean
from .constraint_system import ConstraintSystem
from .field import Fr

_U64_BITS = 64


def u64_into_boolean_vec_le(cs: ConstraintSystem, value: int | None) -> list[Boolean]:
    """Allocate the 64 bits of ``value``, least significant first.

    A value of None allocates bits whose assignment is unknown.
    """
    if value is None:
        values: list[bool | None] = [None] * _U64_BITS
    else:
        if not 0 <= value < 1 << _U64_BITS:
            raise ValueError(f"value does not fit in 64 bits: {value}")
        values = [(value >> i) & 1 == 1 for i in range(_U64_BITS)]
    bits = []
    for i, bit in enumerate(values):
        with cs.namespace(f"bit {i}") as ns:
            bits.append(Boolean.of(AllocatedBit.alloc(ns, bit)))
    return bits


def field_into_boolean_vec_le(cs: ConstraintSystem, value: Fr | None) -> list[Boolean]:
    """Allocate the ``Fr.NUM_BITS`` bits of ``value`` as booleans, least significant first."""
    return [Boolean.of(bit) for bit in field_into_allocated_bits_le(cs, value)]
"""Variables constrained to hold a single bit, and gates combining them."""

from __future__ import annotations

from dataclasses import dataclass

from .constraint_system import ConstraintSystem, Variable, require
from .field import Fr


def _alloc_bit(cs: ConstraintSystem, annotation: str, value: bool | None) -> Variable:
    return cs.alloc(annotation, lambda: Fr.one() if require(value) else Fr.zero())


def _combine(a: bool | None, b: bool | None, op) -> bool | None:
    if a is None or b is None:
        return None
    return op(a, b)


@dataclass(frozen=True)
class AllocatedBit:
    """A variable in a constraint system that is constrained to be zero or one."""

    variable: Variable
    value: bool | None

    @classmethod
    def alloc(cls, cs: ConstraintSystem, value: bool | None) -> AllocatedBit:
        """Allocate a boolean-constrained variable."""
        var = _alloc_bit(cs, "boolean", value)
        one = cs.one()
        # (1 - a) * a = 0
        cs.enforce(
            "boolean constraint",
            lambda lc: lc + one - var,
            lambda lc: lc + var,
            lambda lc: lc,
        )
        return cls(var, value)

    @classmethod
    def alloc_conditionally(
        cls, cs: ConstraintSystem, value: bool | None, must_be_false: AllocatedBit
    ) -> AllocatedBit:
        """Allocate a bit that is forced to zero whenever ``must_be_false`` is one."""
        var = _alloc_bit(cs, "boolean", value)
        one = cs.one()
        # (1 - must_be_false - a) * a = 0
        cs.enforce(
            "boolean constraint",
            lambda lc: lc + one - must_be_false.variable - var,
            lambda lc: lc + var,
            lambda lc: lc,
        )
        return cls(var, value)

    @classmethod
    def xor(cls, cs: ConstraintSystem, a: AllocatedBit, b: AllocatedBit) -> AllocatedBit:
        value = _combine(a.value, b.value, lambda x, y: x ^ y)
        result = _alloc_bit(cs, "xor result", value)
        # (a + a) * b = a + b - c
        cs.enforce(
            "xor constraint",
            lambda lc: lc + a.variable + a.variable,
            lambda lc: lc + b.variable,
            lambda lc: lc + a.variable + b.variable - result,
        )
        return cls(result, value)

    @classmethod
    def and_(cls, cs: ConstraintSystem, a: AllocatedBit, b: AllocatedBit) -> AllocatedBit:
        value = _combine(a.value, b.value, lambda x, y: x and y)
        result = _alloc_bit(cs, "and result", value)
        # a * b = c
        cs.enforce(
            "and constraint",
            lambda lc: lc + a.variable,
            lambda lc: lc + b.variable,
            lambda lc: lc + result,
        )
        return cls(result, value)

    @classmethod
    def and_not(cls, cs: ConstraintSystem, a: AllocatedBit, b: AllocatedBit) -> AllocatedBit:
        """Compute ``a AND (NOT b)``."""
        value = _combine(a.value, b.value, lambda x, y: x and not y)
        result = _alloc_bit(cs, "and not result", value)
        one = cs.one()
        # a * (1 - b) = c
        cs.enforce(
            "and not constraint",
            lambda lc: lc + a.variable,
            lambda lc: lc + one - b.variable,
            lambda lc: lc + result,
        )
        return cls(result, value)

    @classmethod
    def nor(cls, cs: ConstraintSystem, a: AllocatedBit, b: AllocatedBit) -> AllocatedBit:
        """Compute ``(NOT a) AND (NOT b)``."""
        value = _combine(a.value, b.value, lambda x, y: not x and not y)
        result = _alloc_bit(cs, "nor result", value)
        one = cs.one()
        # (1 - a) * (1 - b) = c
        cs.enforce(
            "nor constraint",
            lambda lc: lc + one - a.variable,
            lambda lc: lc + one - b.variable,
            lambda lc: lc + result,
        )
        return cls(result, value)


def field_into_allocated_bits_le(cs: ConstraintSystem, value: Fr | None) -> list[AllocatedBit]:
    """Allocate the ``Fr.NUM_BITS`` bits of ``value``, least significant first."""
    if value is None:
        values: list[bool | None] = [None] * Fr.NUM_BITS
    else:
        values = list(value.to_le_bits())
    bits = []
    for i, bit in enumerate(values):
        with cs.namespace(f"bit {i}") as ns:
            bits.append(AllocatedBit.alloc(ns, bit))
    return bits
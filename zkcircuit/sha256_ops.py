"""The SHA-256 choice and majority functions as circuit gadgets."""

from __future__ import annotations

from .allocated import AllocatedBit
from .boolean import Boolean
from .constraint_system import ConstraintSystem, require
from .field import Fr


def _is(x: Boolean, value: bool) -> bool:
    return x.is_constant() and x.fixed == value


def _known(*values: bool | None) -> bool:
    return all(v is not None for v in values)


def _alloc_result(cs: ConstraintSystem, annotation: str, value: bool | None):
    return cs.alloc(annotation, lambda: Fr.one() if require(value) else Fr.zero())


def sha256_ch(cs: ConstraintSystem, a: Boolean, b: Boolean, c: Boolean) -> Boolean:
    """Compute ``(a AND b) XOR ((NOT a) AND c)``."""
    av, bv, cv = a.value, b.value, c.value
    ch_value = ((av and bv) ^ ((not av) and cv)) if _known(av, bv, cv) else None

    if a.is_constant() and b.is_constant() and c.is_constant():
        return Boolean.constant(ch_value)
    if _is(a, False):
        return c
    if _is(b, False):
        return Boolean.and_(cs, a.negate(), c)
    if _is(c, False):
        return Boolean.and_(cs, a, b)
    if _is(c, True):
        return Boolean.and_(cs, a, b.negate()).negate()
    if _is(b, True):
        return Boolean.and_(cs, a.negate(), c.negate()).negate()
    # Remaining cases: a is constant true or all operands are allocated.

    ch = _alloc_result(cs, "ch", ch_value)
    one = cs.one()
    unit = Fr.one()
    b_minus_c = b.lc(one, unit) - c.lc(one, unit)
    a_lc = a.lc(one, unit)
    c_lc = c.lc(one, unit)

    # a * (b - c) = ch - c
    cs.enforce(
        "ch computation",
        lambda _: b_minus_c,
        lambda _: a_lc,
        lambda lc: lc + ch - c_lc,
    )
    return Boolean.of(AllocatedBit(ch, ch_value))


def sha256_maj(cs: ConstraintSystem, a: Boolean, b: Boolean, c: Boolean) -> Boolean:
    """Compute ``(a AND b) XOR (a AND c) XOR (b AND c)``."""
    av, bv, cv = a.value, b.value, c.value
    maj_value = (
        ((av and bv) ^ (av and cv) ^ (bv and cv)) if _known(av, bv, cv) else None
    )

    if a.is_constant() and b.is_constant() and c.is_constant():
        return Boolean.constant(maj_value)
    if _is(a, False):
        return Boolean.and_(cs, b, c)
    if _is(b, False):
        return Boolean.and_(cs, a, c)
    if _is(c, False):
        return Boolean.and_(cs, a, b)
    if _is(c, True):
        return Boolean.and_(cs, a.negate(), b.negate()).negate()
    if _is(b, True):
        return Boolean.and_(cs, a.negate(), c.negate()).negate()
    if _is(a, True):
        return Boolean.and_(cs, b.negate(), c.negate()).negate()

    maj = _alloc_result(cs, "maj", maj_value)

    with cs.namespace("b and c") as ns:
        bc = Boolean.and_(ns, b, c)

    one = cs.one()
    unit = Fr.one()
    bc_lc = bc.lc(one, unit)
    left = bc_lc + bc_lc - b.lc(one, unit) - c.lc(one, unit)
    a_lc = a.lc(one, unit)
    right = bc_lc - maj

    # (2bc - b - c) * a = bc - maj
    cs.enforce(
        "maj computation",
        lambda _: left,
        lambda _: a_lc,
        lambda _: right,
    )
    return Boolean.of(AllocatedBit(maj, maj_value))
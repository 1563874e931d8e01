"""Boolean values in a circuit: constants or views of allocated bits."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .allocated import AllocatedBit
from .constraint_system import ConstraintSystem, LinearCombination, Unsatisfiable, Variable
from .field import Fr


class BooleanKind(Enum):
    IS = "is"
    NOT = "not"
    CONSTANT = "constant"


@dataclass(frozen=True)
class Boolean:
    """A constant, or an allocated bit seen directly or negated."""

    kind: BooleanKind
    bit: AllocatedBit | None = None
    fixed: bool = False

    @classmethod
    def constant(cls, value: bool) -> Boolean:
        return cls(BooleanKind.CONSTANT, None, bool(value))

    @classmethod
    def of(cls, bit: AllocatedBit) -> Boolean:
        """View an allocated bit as a boolean."""
        return cls(BooleanKind.IS, bit)

    def is_constant(self) -> bool:
        return self.kind is BooleanKind.CONSTANT

    @property
    def value(self) -> bool | None:
        """The boolean's value, or None when it is not known."""
        if self.kind is BooleanKind.CONSTANT:
            return self.fixed
        bit_value = self.bit.value
        if bit_value is None:
            return None
        return bit_value if self.kind is BooleanKind.IS else not bit_value

    def lc(self, one: Variable, coeff: Fr | None = None) -> LinearCombination:
        """A linear combination equal to ``coeff`` times this boolean."""
        coeff = Fr.one() if coeff is None else coeff
        zero = LinearCombination()
        if self.kind is BooleanKind.CONSTANT:
            return zero + (coeff, one) if self.fixed else zero
        if self.kind is BooleanKind.IS:
            return zero + (coeff, self.bit.variable)
        return zero + (coeff, one) - (coeff, self.bit.variable)

    def negate(self) -> Boolean:
        if self.kind is BooleanKind.CONSTANT:
            return Boolean.constant(not self.fixed)
        if self.kind is BooleanKind.IS:
            return Boolean(BooleanKind.NOT, self.bit)
        return Boolean(BooleanKind.IS, self.bit)

    __invert__ = negate

    @classmethod
    def enforce_equal(cls, cs: ConstraintSystem, a: Boolean, b: Boolean) -> None:
        """Constrain ``a`` and ``b`` to be equal; raise Unsatisfiable for unequal constants."""
        one = cs.one()
        if a.is_constant() and b.is_constant():
            if a.fixed != b.fixed:
                raise Unsatisfiable()
            return
        if a.is_constant() or b.is_constant():
            const, other = (a, b) if a.is_constant() else (b, a)
            other_lc = other.lc(one, Fr.one())
            if const.fixed:
                cs.enforce(
                    "enforce equal to one",
                    lambda lc: lc,
                    lambda lc: lc,
                    lambda lc: lc + one - other_lc,
                )
            else:
                cs.enforce(
                    "enforce equal to zero",
                    lambda lc: lc,
                    lambda lc: lc,
                    lambda _: other_lc,
                )
            return
        diff = a.lc(one, Fr.one()) - b.lc(one, Fr.one())
        cs.enforce("enforce equal", lambda lc: lc, lambda lc: lc, lambda _: diff)

    @classmethod
    def xor(cls, cs: ConstraintSystem, a: Boolean, b: Boolean) -> Boolean:
        for x, y in ((a, b), (b, a)):
            if x.is_constant() and not x.fixed:
                return y
        for x, y in ((a, b), (b, a)):
            if x.is_constant() and x.fixed:
                return y.negate()
        if a.kind is not b.kind:
            # a XOR (NOT b) = NOT (a XOR b)
            is_, not_ = (a, b) if a.kind is BooleanKind.IS else (b, a)
            return cls.xor(cs, is_, not_.negate()).negate()
        # a XOR b = (NOT a) XOR (NOT b)
        return cls.of(AllocatedBit.xor(cs, a.bit, b.bit))

    @classmethod
    def and_(cls, cs: ConstraintSystem, a: Boolean, b: Boolean) -> Boolean:
        if (a.is_constant() and not a.fixed) or (b.is_constant() and not b.fixed):
            return cls.constant(False)
        if a.is_constant():
            return b
        if b.is_constant():
            return a
        if a.kind is BooleanKind.IS and b.kind is BooleanKind.IS:
            return cls.of(AllocatedBit.and_(cs, a.bit, b.bit))
        if a.kind is BooleanKind.NOT and b.kind is BooleanKind.NOT:
            return cls.of(AllocatedBit.nor(cs, a.bit, b.bit))
        is_, not_ = (a, b) if a.kind is BooleanKind.IS else (b, a)
        return cls.of(AllocatedBit.and_not(cs, is_.bit, not_.bit))
"""Batching of equality constraints into as few R1CS constraints as possible."""

from __future__ import annotations

from .constraint_system import ConstraintSystem, LinearCombination
from .field import Fr


class MultiEq(ConstraintSystem):
    """Packs many small ``lhs == rhs`` equalities into shared constraints.

    Each equality over ``num_bits`` bits is shifted into free bit positions of
    an accumulated combination; a constraint is emitted whenever the field's
    capacity would be exceeded, and when the object is closed.
    """

    def __init__(self, cs: ConstraintSystem) -> None:
        self._cs = cs
        self._ops = 0
        self._bits_used = 0
        self._lhs = LinearCombination()
        self._rhs = LinearCombination()

    def _accumulate(self) -> None:
        lhs, rhs = self._lhs, self._rhs
        one = self._cs.one()
        self._cs.enforce(f"multieq {self._ops}", lhs, lambda lc: lc + one, rhs)
        self._lhs = LinearCombination()
        self._rhs = LinearCombination()
        self._bits_used = 0
        self._ops += 1

    def enforce_equal(self, num_bits: int, lhs: LinearCombination, rhs: LinearCombination) -> None:
        """Record that ``lhs == rhs`` where both fit in ``num_bits`` bits."""
        if Fr.CAPACITY <= self._bits_used + num_bits:
            self._accumulate()
        if Fr.CAPACITY <= self._bits_used + num_bits:
            raise ValueError(f"{num_bits} bits do not fit in one constraint")
        coeff = Fr(2).pow(self._bits_used)
        self._lhs = self._lhs + (coeff, lhs)
        self._rhs = self._rhs + (coeff, rhs)
        self._bits_used += num_bits

    def one(self):
        return self._cs.one()

    def alloc(self, annotation, value_fn):
        return self._cs.alloc(annotation, value_fn)

    def alloc_input(self, annotation, value_fn):
        return self._cs.alloc_input(annotation, value_fn)

    def enforce(self, annotation, a, b, c):
        self._cs.enforce(annotation, a, b, c)

    def push_namespace(self, name):
        self._cs.push_namespace(name)

    def pop_namespace(self):
        self._cs.pop_namespace()

    def close(self) -> None:
        """Emit the pending constraint, if any equalities are outstanding."""
        if self._bits_used > 0:
            self._accumulate()

    def __enter__(self) -> MultiEq:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
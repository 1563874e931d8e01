"""Packing of bit vectors into scalar field elements."""

from __future__ import annotations

from typing import Iterable, Sequence

from .boolean import Boolean
from .constraint_system import ConstraintSystem, LinearCombination, require
from .field import Fr


def _chunks(items: Sequence, size: int):
    for start in range(0, len(items), size):
        yield items[start:start + size]


def pack_into_inputs(cs: ConstraintSystem, bits: Sequence[Boolean]) -> None:
    """Expose ``bits`` as compact public inputs of ``Fr.CAPACITY`` bits each."""
    one = cs.one()
    for i, chunk in enumerate(_chunks(list(bits), Fr.CAPACITY)):
        lc = LinearCombination()
        value: Fr | None = Fr.zero()
        coeff = Fr.one()
        for bit in chunk:
            bit_value = bit.value
            if value is not None and bit_value is not None:
                if bit_value:
                    value = value + coeff
            else:
                value = None
            lc = lc + bit.lc(one, coeff)
            coeff = coeff.double()

        known = value
        public = cs.alloc_input(f"input {i}", lambda: require(known))

        # num * 1 = input
        cs.enforce(
            f"packing constraint {i}",
            lc,
            LinearCombination() + one,
            LinearCombination() + public,
        )


def bytes_to_bits(data: bytes) -> list[bool]:
    """Bits of ``data``, most significant bit of each byte first."""
    return [(byte >> i) & 1 == 1 for byte in data for i in range(7, -1, -1)]


def bytes_to_bits_le(data: bytes) -> list[bool]:
    """Bits of ``data``, least significant bit of each byte first."""
    return [(byte >> i) & 1 == 1 for byte in data for i in range(8)]


def compute_multipacking(bits: Iterable[bool]) -> list[Fr]:
    """The field elements ``pack_into_inputs`` exposes for these bit values."""
    result = []
    for chunk in _chunks(list(bits), Fr.CAPACITY):
        packed = sum(1 << i for i, bit in enumerate(chunk) if bit)
        result.append(Fr(packed))
    return result
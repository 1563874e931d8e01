"""Radix-2 evaluation domains for polynomial arithmetic over the scalar field.

Polynomials are held as coefficient vectors whose length is a power of two.
Transforming them with an FFT over the powers of a root of unity turns
multiplication and subtraction into element-wise operations.
"""

from __future__ import annotations

from itertools import accumulate, repeat
from typing import Iterable, Sequence

from .constraint_system import PolynomialDegreeTooLarge
from .field import Fr

_P = Fr.MODULUS


def _bitreverse(k: int, log_n: int) -> int:
    if log_n == 0:
        return 0
    return int(format(k, f"0{log_n}b")[::-1], 2)


def _fft_ints(values: Sequence[int], omega: int, log_n: int) -> list[int]:
    """Iterative Cooley-Tukey transform on canonical integer representatives."""
    n = len(values)
    if n != 1 << log_n:
        raise ValueError(f"expected {1 << log_n} values, got {n}")
    a = [values[_bitreverse(k, log_n)] for k in range(n)]
    m = 1
    for _ in range(log_n):
        w_m = pow(omega, n // (2 * m), _P)
        twiddles = list(accumulate(repeat(w_m, m - 1), lambda w, x: w * x % _P, initial=1))
        for k in range(0, n, 2 * m):
            for j, w in enumerate(twiddles):
                lo, hi = k + j, k + j + m
                t = a[hi] * w % _P
                u = a[lo]
                a[hi] = (u - t) % _P
                a[lo] = (u + t) % _P
        m *= 2
    return a


def serial_fft(values: Sequence[Fr], omega: Fr, log_n: int) -> list[Fr]:
    """Evaluate the polynomial ``values`` at the powers of ``omega``.

    ``values`` must hold exactly ``2**log_n`` elements and ``omega`` should be
    a primitive ``2**log_n``-th root of unity.
    """
    result = _fft_ints([int(v) for v in values], int(omega), log_n)
    return [Fr(v) for v in result]


class EvaluationDomain:
    """A polynomial over a radix-2 domain, in coefficient or evaluation form."""

    def __init__(self, coeffs: list[Fr], exp: int, omega: Fr) -> None:
        self.coeffs = coeffs
        self.exp = exp
        self.omega = omega
        self.omegainv = omega.inverse()
        self.geninv = Fr.multiplicative_generator().inverse()
        self.minv = Fr(len(coeffs)).inverse()

    @classmethod
    def from_coeffs(cls, coeffs: Iterable[Fr]) -> EvaluationDomain:
        """Build a domain large enough for ``coeffs``, padding with zeros.

        Raises PolynomialDegreeTooLarge if the field has no root of unity of
        the required order.
        """
        size = len(coeffs) if hasattr(coeffs, "__len__") else None
        if size is None:
            coeffs = list(coeffs)
            size = len(coeffs)
        m, exp = 1, 0
        while m < size:
            m *= 2
            exp += 1
            if exp >= Fr.S:
                raise PolynomialDegreeTooLarge()
        values = [Fr(c) for c in coeffs]
        values.extend(Fr.zero() for _ in range(m - len(values)))
        omega = Fr.root_of_unity().pow(1 << (Fr.S - exp))
        return cls(values, exp, omega)

    def __len__(self) -> int:
        return len(self.coeffs)

    def __iter__(self):
        return iter(self.coeffs)

    def _transform(self, omega: Fr) -> None:
        self.coeffs = serial_fft(self.coeffs, omega, self.exp)

    def fft(self) -> None:
        """Convert coefficients into evaluations over the domain."""
        self._transform(self.omega)

    @classmethod
    def fft_many(cls, domains: Iterable[EvaluationDomain]) -> None:
        for domain in domains:
            domain.fft()

    def ifft(self) -> None:
        """Convert evaluations over the domain back into coefficients."""
        self.ifft_many([self])

    @classmethod
    def ifft_many(cls, domains: Iterable[EvaluationDomain]) -> None:
        for domain in domains:
            domain._transform(domain.omegainv)
            minv = int(domain.minv)
            domain.coeffs = [Fr(int(v) * minv) for v in domain.coeffs]

    def distribute_powers(self, g: Fr) -> None:
        """Multiply the i-th coefficient by ``g**i``."""
        step = int(g)
        power = 1
        result = []
        for value in self.coeffs:
            result.append(Fr(int(value) * power))
            power = power * step % _P
        self.coeffs = result

    def coset_fft(self) -> None:
        self.coset_fft_many([self])

    @classmethod
    def coset_fft_many(cls, domains: Iterable[EvaluationDomain]) -> None:
        domains = list(domains)
        generator = Fr.multiplicative_generator()
        for domain in domains:
            domain.distribute_powers(generator)
        cls.fft_many(domains)

    def icoset_fft(self) -> None:
        geninv = self.geninv
        self.ifft()
        self.distribute_powers(geninv)

    def z(self, tau: Fr) -> Fr:
        """Evaluate the vanishing polynomial ``tau**m - 1`` of this domain."""
        return tau.pow(len(self.coeffs)) - Fr.one()

    def divide_by_z_on_coset(self) -> None:
        """Divide evaluations on the coset by the vanishing polynomial."""
        factor = int(self.z(Fr.multiplicative_generator()).inverse())
        self.coeffs = [Fr(int(v) * factor) for v in self.coeffs]

    def _check_same_size(self, other: EvaluationDomain) -> None:
        if len(self.coeffs) != len(other.coeffs):
            raise ValueError(
                f"domain sizes differ: {len(self.coeffs)} and {len(other.coeffs)}"
            )

    def mul_assign(self, other: EvaluationDomain) -> None:
        """Multiply element-wise by ``other``."""
        self._check_same_size(other)
        self.coeffs = [a * b for a, b in zip(self.coeffs, other.coeffs)]

    def sub_assign(self, other: EvaluationDomain) -> None:
        """Subtract ``other`` element-wise."""
        self._check_same_size(other)
        self.coeffs = [a - b for a, b in zip(self.coeffs, other.coeffs)]
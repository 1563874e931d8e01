"""Rank-1 constraint systems: variables, linear combinations and namespaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Mapping

from .field import Fr


class SynthesisError(Exception):
    """An error raised while synthesizing, proving or verifying a circuit."""

    default_message = "synthesis error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.default_message if message is None else message)


class AssignmentMissing(SynthesisError):
    default_message = "an assignment for a variable could not be computed"


class DivisionByZero(SynthesisError):
    default_message = "division by zero"


class Unsatisfiable(SynthesisError):
    default_message = "unsatisfiable constraint system"


class PolynomialDegreeTooLarge(SynthesisError):
    default_message = "polynomial degree is too large"


class UnexpectedIdentity(SynthesisError):
    default_message = "encountered an identity element in the CRS"


class MalformedVerifyingKey(SynthesisError):
    default_message = "malformed verifying key"


class UnconstrainedVariable(SynthesisError):
    default_message = "auxiliary variable was unconstrained"


class MalformedProofs(SynthesisError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"attempted to aggregate malformed proofs: {detail}")


class MalformedSrs(SynthesisError):
    default_message = "malformed SRS"


class NonPowerOfTwo(SynthesisError):
    default_message = "non power of two proofs given for aggregation"


class IncompatibleLengthVector(SynthesisError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"incompatible vector length: {detail}")


class InvalidPairing(SynthesisError):
    default_message = "invalid pairing"


def require(value):
    """Return ``value``, or raise AssignmentMissing when it is None."""
    if value is None:
        raise AssignmentMissing()
    return value


@dataclass(frozen=True)
class Index:
    """Position of a variable among the public inputs or the auxiliary ones."""

    is_input: bool
    position: int


@dataclass(frozen=True)
class Variable:
    index: Index


def _as_fr(value) -> Fr:
    return value if isinstance(value, Fr) else Fr(value)


class LinearCombination:
    """A sum of variables weighted by field coefficients."""

    __slots__ = ("_terms",)

    def __init__(self, terms: Iterable[tuple[Variable, Fr]] = ()) -> None:
        self._terms: dict[Variable, Fr] = {}
        for variable, coeff in terms:
            self._accumulate(variable, _as_fr(coeff))

    def _accumulate(self, variable: Variable, coeff: Fr) -> None:
        self._terms[variable] = self._terms.get(variable, Fr.zero()) + coeff

    def _copy(self) -> LinearCombination:
        result = LinearCombination()
        result._terms = dict(self._terms)
        return result

    def add_term(self, coeff, variable: Variable) -> LinearCombination:
        """Return a new combination with ``coeff * variable`` added."""
        result = self._copy()
        result._accumulate(variable, _as_fr(coeff))
        return result

    def terms(self) -> list[tuple[Variable, Fr]]:
        """The terms with a nonzero coefficient, in first-seen order."""
        return [(var, coeff) for var, coeff in self._terms.items() if not coeff.is_zero()]

    def evaluate(self, assignment: Mapping[Variable, Fr]) -> Fr:
        return sum((coeff * assignment[var] for var, coeff in self._terms.items()), Fr.zero())

    def _combine(self, other, sign: int) -> LinearCombination:
        scale = Fr(sign)
        if isinstance(other, Variable):
            return self.add_term(scale, other)
        if isinstance(other, LinearCombination):
            return self._scaled_add(scale, other)
        if isinstance(other, tuple) and len(other) == 2:
            coeff, target = other
            coeff = _as_fr(coeff) * scale
            if isinstance(target, Variable):
                return self.add_term(coeff, target)
            if isinstance(target, LinearCombination):
                return self._scaled_add(coeff, target)
        return NotImplemented

    def _scaled_add(self, coeff: Fr, other: LinearCombination) -> LinearCombination:
        result = self._copy()
        for var, c in other._terms.items():
            result._accumulate(var, c * coeff)
        return result

    def __add__(self, other):
        return self._combine(other, 1)

    def __sub__(self, other):
        return self._combine(other, -1)

    def __neg__(self) -> LinearCombination:
        return LinearCombination((var, -coeff) for var, coeff in self._terms.items())

    def __eq__(self, other) -> bool:
        if not isinstance(other, LinearCombination):
            return NotImplemented
        return dict(self.terms()) == dict(other.terms())

    __hash__ = None

    def __repr__(self) -> str:
        return f"LinearCombination({self.terms()!r})"


LcSpec = Callable[[LinearCombination], LinearCombination] | LinearCombination | Variable


def _build(spec) -> LinearCombination:
    if isinstance(spec, LinearCombination):
        return spec
    if isinstance(spec, Variable):
        return LinearCombination() + spec
    if callable(spec):
        result = spec(LinearCombination())
        if not isinstance(result, LinearCombination):
            raise TypeError("a constraint builder must return a LinearCombination")
        return result
    raise TypeError(f"cannot build a linear combination from {spec!r}")


_ONE = Variable(Index(True, 0))


class Circuit(ABC):
    """A circuit that can be synthesized into a constraint system."""

    @abstractmethod
    def synthesize(self, cs: ConstraintSystem) -> None:
        """Allocate the circuit's variables and constraints in ``cs``."""


class ConstraintSystem(ABC):
    """A system in which variables are allocated and constraints formed."""

    def one(self) -> Variable:
        """The input variable that always holds one."""
        return _ONE

    @abstractmethod
    def alloc(self, annotation: str, value_fn: Callable[[], Fr]) -> Variable:
        """Allocate a private variable whose value ``value_fn`` computes."""

    @abstractmethod
    def alloc_input(self, annotation: str, value_fn: Callable[[], Fr]) -> Variable:
        """Allocate a public variable whose value ``value_fn`` computes."""

    @abstractmethod
    def enforce(self, annotation: str, a, b, c) -> None:
        """Enforce ``a * b = c``; each side is a builder, a combination or a variable."""

    @abstractmethod
    def push_namespace(self, name: str) -> None:
        """Enter a sub-namespace; prefer ``namespace``."""

    @abstractmethod
    def pop_namespace(self) -> None:
        """Leave the current namespace; prefer ``namespace``."""

    def namespace(self, name: str) -> Namespace:
        """Enter a namespace, left again when the returned object is closed."""
        self.push_namespace(name)
        return Namespace(self)

    def is_extensible(self) -> bool:
        return False

    def extend(self, other: ConstraintSystem) -> None:
        raise TypeError(f"{type(self).__name__} cannot be extended")


class Namespace(ConstraintSystem):
    """A view of a constraint system inside one namespace; usable with ``with``."""

    def __init__(self, parent: ConstraintSystem) -> None:
        self._parent = parent
        self._open = True

    def one(self) -> Variable:
        return self._parent.one()

    def alloc(self, annotation, value_fn):
        return self._parent.alloc(annotation, value_fn)

    def alloc_input(self, annotation, value_fn):
        return self._parent.alloc_input(annotation, value_fn)

    def enforce(self, annotation, a, b, c):
        self._parent.enforce(annotation, a, b, c)

    def push_namespace(self, name):
        self._parent.push_namespace(name)

    def pop_namespace(self):
        self._parent.pop_namespace()

    def close(self) -> None:
        """Leave the namespace; later calls do nothing."""
        if self._open:
            self._open = False
            self._parent.pop_namespace()

    def __enter__(self) -> Namespace:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class _Kind(Enum):
    VARIABLE = "variable"
    CONSTRAINT = "constraint"
    NAMESPACE = "namespace"


@dataclass
class _Slot:
    value: Fr
    path: str


class RecordingConstraintSystem(ConstraintSystem):
    """Records every variable and constraint by path so they can be checked."""

    def __init__(self) -> None:
        self._inputs: list[_Slot] = [_Slot(Fr.one(), "ONE")]
        self._aux: list[_Slot] = []
        self._constraints: list[tuple[LinearCombination, LinearCombination, LinearCombination, str]] = []
        self._named: dict[str, tuple[_Kind, Variable | None]] = {"ONE": (_Kind.VARIABLE, _ONE)}
        self._stack: list[str] = []

    def _path(self, name: str) -> str:
        if "/" in name:
            raise ValueError(f"name may not contain '/': {name!r}")
        return "/".join([*self._stack, name])

    def _claim(self, path: str, kind: _Kind, variable: Variable | None = None) -> None:
        if path in self._named:
            raise ValueError(f"path {path!r} already exists")
        self._named[path] = (kind, variable)

    def _allocate(self, slots: list[_Slot], is_input: bool, annotation, value_fn) -> Variable:
        path = self._path(annotation)
        value = _as_fr(value_fn())
        variable = Variable(Index(is_input, len(slots)))
        self._claim(path, _Kind.VARIABLE, variable)
        slots.append(_Slot(value, path))
        return variable

    def alloc(self, annotation, value_fn):
        return self._allocate(self._aux, False, annotation, value_fn)

    def alloc_input(self, annotation, value_fn):
        return self._allocate(self._inputs, True, annotation, value_fn)

    def enforce(self, annotation, a, b, c):
        path = self._path(annotation)
        self._claim(path, _Kind.CONSTRAINT)
        self._constraints.append((_build(a), _build(b), _build(c), path))

    def push_namespace(self, name):
        path = self._path(name)
        self._claim(path, _Kind.NAMESPACE)
        self._stack.append(name)

    def pop_namespace(self):
        if not self._stack:
            raise RuntimeError("no namespace to leave")
        self._stack.pop()

    def _slot(self, variable: Variable) -> _Slot:
        slots = self._inputs if variable.index.is_input else self._aux
        return slots[variable.index.position]

    def _assignment(self) -> dict[Variable, Fr]:
        assignment = {Variable(Index(True, i)): slot.value for i, slot in enumerate(self._inputs)}
        assignment.update(
            (Variable(Index(False, i)), slot.value) for i, slot in enumerate(self._aux)
        )
        return assignment

    def which_is_unsatisfied(self) -> str | None:
        """The path of the first constraint that fails, or None."""
        assignment = self._assignment()
        for a, b, c, path in self._constraints:
            if a.evaluate(assignment) * b.evaluate(assignment) != c.evaluate(assignment):
                return path
        return None

    def is_satisfied(self) -> bool:
        return self.which_is_unsatisfied() is None

    def num_constraints(self) -> int:
        return len(self._constraints)

    def num_inputs(self) -> int:
        """The number of public inputs, counting the constant one."""
        return len(self._inputs)

    def _variable_at(self, path: str) -> Variable:
        kind, variable = self._named.get(path, (None, None))
        if kind is not _Kind.VARIABLE:
            raise KeyError(path)
        return variable

    def get(self, path: str) -> Fr:
        return self._slot(self._variable_at(path)).value

    def set(self, path: str, value) -> None:
        self._slot(self._variable_at(path)).value = _as_fr(value)

    def verify(self, expected: Iterable) -> bool:
        """Whether the public inputs after the constant one equal ``expected``."""
        expected = [_as_fr(v) for v in expected]
        return [slot.value for slot in self._inputs[1:]] == expected
import itertools

import pytest

from zkcircuit.allocated import AllocatedBit
from zkcircuit.boolean import Boolean, BooleanKind
from zkcircuit.constraint_system import RecordingConstraintSystem, Unsatisfiable
from zkcircuit.field import Fr

OPERANDS = ["T", "F", "AT", "AF", "NT", "NF"]


def make(cs, operand, name):
    if operand == "T":
        return Boolean.constant(True)
    if operand == "F":
        return Boolean.constant(False)
    with cs.namespace(name) as ns:
        bit = Boolean.of(AllocatedBit.alloc(ns, operand in ("AT", "NF") if operand[0] == "A" else operand == "NT"))
    return bit.negate() if operand.startswith("N") else bit


def alloc(cs, name, value):
    with cs.namespace(name) as ns:
        return Boolean.of(AllocatedBit.alloc(ns, value))


def test_make_helper_values():
    cs = RecordingConstraintSystem()
    expected = {"T": True, "F": False, "AT": True, "AF": False, "NT": False, "NF": True}
    for i, op in enumerate(OPERANDS):
        assert make(cs, op, f"x{i}").value == expected[op]


@pytest.mark.parametrize(
    "a_bool,b_bool,a_neg,b_neg", list(itertools.product([False, True], repeat=4))
)
def test_enforce_equal(a_bool, b_bool, a_neg, b_neg):
    expected = (a_bool ^ a_neg) == (b_bool ^ b_neg)

    def maybe_neg(x, neg):
        return x.negate() if neg else x

    cs = RecordingConstraintSystem()
    a = maybe_neg(alloc(cs, "a", a_bool), a_neg)
    b = maybe_neg(alloc(cs, "b", b_bool), b_neg)
    Boolean.enforce_equal(cs, a, b)
    assert cs.is_satisfied() == expected

    cs = RecordingConstraintSystem()
    a = maybe_neg(Boolean.constant(a_bool), a_neg)
    b = maybe_neg(alloc(cs, "b", b_bool), b_neg)
    Boolean.enforce_equal(cs, a, b)
    assert cs.is_satisfied() == expected

    cs = RecordingConstraintSystem()
    a = maybe_neg(alloc(cs, "a", a_bool), a_neg)
    b = maybe_neg(Boolean.constant(b_bool), b_neg)
    Boolean.enforce_equal(cs, a, b)
    assert cs.is_satisfied() == expected

    cs = RecordingConstraintSystem()
    a = maybe_neg(Boolean.constant(a_bool), a_neg)
    b = maybe_neg(Boolean.constant(b_bool), b_neg)
    if expected:
        Boolean.enforce_equal(cs, a, b)
        assert cs.is_satisfied()
        assert cs.num_constraints() == 0
    else:
        with pytest.raises(Unsatisfiable):
            Boolean.enforce_equal(cs, a, b)


def test_boolean_negation():
    cs = RecordingConstraintSystem()
    b = Boolean.of(AllocatedBit.alloc(cs, True))
    assert b.kind is BooleanKind.IS
    b = b.negate()
    assert b.kind is BooleanKind.NOT
    assert b.value is False
    b = b.negate()
    assert b.kind is BooleanKind.IS
    assert b.value is True

    b = Boolean.constant(True)
    assert b == Boolean.constant(True)
    b = b.negate()
    assert b == Boolean.constant(False)
    b = b.negate()
    assert b == Boolean.constant(True)


def test_lc_evaluation():
    cs = RecordingConstraintSystem()
    bit = alloc(cs, "a", True)
    one = cs.one()
    coeff = Fr(5)
    nbit = bit.negate()
    cs.enforce("is", lambda lc: lc, lambda lc: lc, lambda lc: lc + bit.lc(one, coeff) - (coeff, one))
    cs.enforce("not", lambda lc: lc, lambda lc: lc, nbit.lc(one, coeff))
    cs.enforce("const", lambda lc: lc, lambda lc: lc, Boolean.constant(False).lc(one, coeff))
    assert cs.is_satisfied()
    assert Boolean.constant(True).lc(one, coeff).terms() == [(one, coeff)]


# expected result: kind ("Ct", "Cf", "Is", "Not"), and for gates the result name and value
XOR_TABLE = {
    ("T", "T"): ("Cf", None, None),
    ("T", "F"): ("Ct", None, None),
    ("T", "AT"): ("Not", None, None),
    ("T", "AF"): ("Not", None, None),
    ("T", "NT"): ("Is", None, None),
    ("T", "NF"): ("Is", None, None),
    ("F", "T"): ("Ct", None, None),
    ("F", "F"): ("Cf", None, None),
    ("F", "AT"): ("Is", None, None),
    ("F", "AF"): ("Is", None, None),
    ("F", "NT"): ("Not", None, None),
    ("F", "NF"): ("Not", None, None),
    ("AT", "T"): ("Not", None, None),
    ("AT", "F"): ("Is", None, None),
    ("AT", "AT"): ("Is", "xor result", False),
    ("AT", "AF"): ("Is", "xor result", True),
    ("AT", "NT"): ("Not", "xor result", False),
    ("AT", "NF"): ("Not", "xor result", True),
    ("AF", "T"): ("Not", None, None),
    ("AF", "F"): ("Is", None, None),
    ("AF", "AT"): ("Is", "xor result", True),
    ("AF", "AF"): ("Is", "xor result", False),
    ("AF", "NT"): ("Not", "xor result", True),
    ("AF", "NF"): ("Not", "xor result", False),
    ("NT", "T"): ("Is", None, None),
    ("NT", "F"): ("Not", None, None),
    ("NT", "AT"): ("Not", "xor result", False),
    ("NT", "AF"): ("Not", "xor result", True),
    ("NT", "NT"): ("Is", "xor result", False),
    ("NT", "NF"): ("Is", "xor result", True),
    ("NF", "T"): ("Is", None, None),
    ("NF", "F"): ("Not", None, None),
    ("NF", "AT"): ("Not", "xor result", True),
    ("NF", "AF"): ("Not", "xor result", False),
    ("NF", "NT"): ("Is", "xor result", True),
    ("NF", "NF"): ("Is", "xor result", False),
}

AND_TABLE = {
    ("T", "T"): ("Ct", None, None),
    ("T", "F"): ("Cf", None, None),
    ("T", "AT"): ("Is", None, None),
    ("T", "AF"): ("Is", None, None),
    ("T", "NT"): ("Not", None, None),
    ("T", "NF"): ("Not", None, None),
    ("F", "T"): ("Cf", None, None),
    ("F", "F"): ("Cf", None, None),
    ("F", "AT"): ("Cf", None, None),
    ("F", "AF"): ("Cf", None, None),
    ("F", "NT"): ("Cf", None, None),
    ("F", "NF"): ("Cf", None, None),
    ("AT", "T"): ("Is", None, None),
    ("AT", "F"): ("Cf", None, None),
    ("AT", "AT"): ("Is", "and result", True),
    ("AT", "AF"): ("Is", "and result", False),
    ("AT", "NT"): ("Is", "and not result", False),
    ("AT", "NF"): ("Is", "and not result", True),
    ("AF", "T"): ("Is", None, None),
    ("AF", "F"): ("Cf", None, None),
    ("AF", "AT"): ("Is", "and result", False),
    ("AF", "AF"): ("Is", "and result", False),
    ("AF", "NT"): ("Is", "and not result", False),
    ("AF", "NF"): ("Is", "and not result", False),
    ("NT", "T"): ("Not", None, None),
    ("NT", "F"): ("Cf", None, None),
    ("NT", "AT"): ("Is", "and not result", False),
    ("NT", "AF"): ("Is", "and not result", False),
    ("NT", "NT"): ("Is", "nor result", False),
    ("NT", "NF"): ("Is", "nor result", False),
    ("NF", "T"): ("Not", None, None),
    ("NF", "F"): ("Cf", None, None),
    ("NF", "AT"): ("Is", "and not result", True),
    ("NF", "AF"): ("Is", "and not result", False),
    ("NF", "NT"): ("Is", "nor result", False),
    ("NF", "NF"): ("Is", "nor result", True),
}


def check_result(cs, result, expectation):
    kind, gate, gate_value = expectation
    if kind == "Ct":
        assert result == Boolean.constant(True)
    elif kind == "Cf":
        assert result == Boolean.constant(False)
    elif kind == "Is":
        assert result.kind is BooleanKind.IS
    else:
        assert result.kind is BooleanKind.NOT
    if gate is not None:
        assert cs.get(gate) == (Fr.one() if gate_value else Fr.zero())
        assert result.bit.value is gate_value


@pytest.mark.parametrize("first,second", sorted(XOR_TABLE))
def test_boolean_xor(first, second):
    cs = RecordingConstraintSystem()
    a = make(cs, first, "a")
    b = make(cs, second, "b")
    c = Boolean.xor(cs, a, b)
    assert cs.is_satisfied()
    check_result(cs, c, XOR_TABLE[(first, second)])
    assert c.value == (a.value ^ b.value)


@pytest.mark.parametrize("first,second", sorted(AND_TABLE))
def test_boolean_and(first, second):
    cs = RecordingConstraintSystem()
    a = make(cs, first, "a")
    b = make(cs, second, "b")
    c = Boolean.and_(cs, a, b)
    assert cs.is_satisfied()
    check_result(cs, c, AND_TABLE[(first, second)])
    assert c.value == (a.value and b.value)


def test_xor_result_tampering_is_detected():
    cs = RecordingConstraintSystem()
    a = alloc(cs, "a", True)
    b = alloc(cs, "b", False)
    Boolean.xor(cs, a, b)
    assert cs.is_satisfied()
    cs.set("xor result", Fr.zero())
    assert cs.which_is_unsatisfied() == "xor constraint"


def test_unknown_values_propagate():
    cs = RecordingConstraintSystem()
    bit = Boolean.of(AllocatedBit(cs.one(), None))
    assert bit.value is None
    assert bit.negate().value is None
    assert Boolean.xor(cs, bit, Boolean.constant(True)).value is None
    assert Boolean.and_(cs, bit, Boolean.constant(False)).value is False
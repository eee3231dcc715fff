"""Perform builtin operations on Variables.

There is a function here for each binary operator kind. Every operator is
total: it returns an Intermediate for any pair of Variables and never raises.
Failures are reported as an Invalid value, the caller checks the result tag.

Integer and floating point operands mix by promoting the integer to float.
Integer by integer arithmetic stays exact through the bigint module.
"""

__all__ = [
    "OpKind",
    "CmpKind",
    "OPERATORS",
    "apply",
    "op_add",
    "op_sub",
    "op_mul",
    "op_div",
    "op_mod",
    "op_pow",
    "op_cnct",
    "op_cmp",
]

import enum
import logging
import math
import types

from . import bigint
from ._error import EvalError, TypeMismatch
from ._value import Integer, Intermediate, Invalid, Number, RuntimeType, Text, Variable


log = logging.getLogger(__name__)


class OpKind(enum.Enum):
    """Binary operator kinds, valued by their source symbol."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"
    CONCAT = ".."


class CmpKind(enum.Enum):
    """Comparison operator kinds, valued by their source symbol."""

    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="


_OP_NAMES = {
    OpKind.ADD: "Addition",
    OpKind.SUB: "Subtraction",
    OpKind.MUL: "Multiplication",
    OpKind.DIV: "Division",
    OpKind.MOD: "Modulus",
    OpKind.POW: "Power",
    OpKind.CONCAT: "Concatenation",
}

_NUMERIC = (RuntimeType.INT, RuntimeType.NUM)


def op_add(left, right):
    """Add two numbers."""
    return _arith(OpKind.ADD, left, right)


def op_sub(left, right):
    """Subtract right from left."""
    return _arith(OpKind.SUB, left, right)


def op_mul(left, right):
    """Multiply two numbers."""
    return _arith(OpKind.MUL, left, right)


def op_div(left, right):
    """Divide left by right.

    Integers use truncating division and fail on a zero divisor. Floats
    follow IEEE rules and produce infinities or nan instead.
    """
    return _arith(OpKind.DIV, left, right)


def op_mod(left, right):
    """Remainder of left divided by right, signed like the dividend."""
    return _arith(OpKind.MOD, left, right)


def op_pow(left, right):
    """Raise left to the power of right.

    An integer base with a negative integer exponent fails rather than
    producing a fraction.
    """
    return _arith(OpKind.POW, left, right)


def op_cnct(left, right):
    """Concatenate the canonical text of both operands.

    Integers, numbers and strings all have a textual form. Text is never
    converted back into a number.

    Args:
        left: (Variable) Left operand
        right: (Variable) Right operand

    Returns:
        (Intermediate) String result, or Invalid
    """
    lval, rval = _operands(left, right)
    failed = _propagate(OpKind.CONCAT, lval, rval)
    if failed is not None:
        return failed
    try:
        return Intermediate(Text(lval.format() + rval.format()))
    except TypeMismatch:
        return _invalid(OpKind.CONCAT, TypeMismatch(
            f"Concatenation is not defined for {lval.type} and {rval.type}"))


OPERATORS = types.MappingProxyType({
    OpKind.ADD: op_add,
    OpKind.SUB: op_sub,
    OpKind.MUL: op_mul,
    OpKind.DIV: op_div,
    OpKind.MOD: op_mod,
    OpKind.POW: op_pow,
    OpKind.CONCAT: op_cnct,
})


def apply(kind, left, right):
    """Dispatch a binary operator by kind.

    Args:
        kind: (OpKind | CmpKind) Operator to apply
        left: (Variable) Left operand
        right: (Variable) Right operand

    Returns:
        (Intermediate) Result of the operator

    Raises:
        TypeError: If kind is not an operator kind
    """
    if isinstance(kind, CmpKind):
        return op_cmp(kind, left, right)
    if not isinstance(kind, OpKind):
        raise TypeError(f"Unknown operator kind: {kind!r}")
    return OPERATORS[kind](left, right)


def op_cmp(kind, left, right):
    """Comparison operation.

    Numbers compare by exact value, even when an integer is mixed with a
    float, and nan is unordered. Strings compare lexically. There is no boolean type, so the result is the
    integer 1 for true and 0 for false.

    Args:
        kind: (CmpKind) Comparison to perform
        left: (Variable) Left operand
        right: (Variable) Right operand

    Returns:
        (Intermediate) Integer 1 or 0, or Invalid
    """
    if not isinstance(kind, CmpKind):
        raise TypeError(f"Unknown comparison kind: {kind!r}")
    lval, rval = _operands(left, right)
    failed = _propagate(kind, lval, rval)
    if failed is not None:
        return failed

    ltype, rtype = lval.type, rval.type
    if ltype is RuntimeType.INT and rtype is RuntimeType.INT:
        order = int(bigint.compare(lval.data, rval.data))
    elif ltype in _NUMERIC and rtype in _NUMERIC:
        # Python orders int against float exactly, so no precision is lost
        lnum, rnum = _exact(lval.data), _exact(rval.data)
        if _is_nan(lnum) or _is_nan(rnum):
            # Unordered, only != holds
            return _truth(kind is CmpKind.NE)
        order = (lnum > rnum) - (lnum < rnum)
    elif ltype is RuntimeType.STRING and rtype is RuntimeType.STRING:
        order = (lval.data > rval.data) - (lval.data < rval.data)
    else:
        return _invalid(kind, TypeMismatch(
            f"Comparison {kind.value} is not defined for {ltype} and {rtype}"))

    match kind:
        case CmpKind.EQ:
            return _truth(order == 0)
        case CmpKind.NE:
            return _truth(order != 0)
        case CmpKind.LT:
            return _truth(order < 0)
        case CmpKind.LE:
            return _truth(order <= 0)
        case CmpKind.GT:
            return _truth(order > 0)
        case CmpKind.GE:
            return _truth(order >= 0)


def _arith(kind, left, right):
    """Shared numeric path for the arithmetic operators."""
    lval, rval = _operands(left, right)
    failed = _propagate(kind, lval, rval)
    if failed is not None:
        return failed

    ltype, rtype = lval.type, rval.type
    try:
        if ltype is RuntimeType.INT and rtype is RuntimeType.INT:
            result = Integer(_INT_IMPLS[kind](lval.data, rval.data))
        elif ltype in _NUMERIC and rtype in _NUMERIC:
            # Int operands are promoted, float(BigInt) saturates to inf
            result = Number(_FLOAT_IMPLS[kind](float(lval.data), float(rval.data)))
        else:
            raise TypeMismatch(f"{_OP_NAMES[kind]} is not defined for {ltype} and {rtype}")
    except EvalError as e:
        return _invalid(kind, e)
    return Intermediate(result)


def _operands(left, right):
    if not isinstance(left, Variable):
        raise TypeError(f"Left operand is not a Variable: {left!r}")
    if not isinstance(right, Variable):
        raise TypeError(f"Right operand is not a Variable: {right!r}")
    return left.value, right.value


def _propagate(kind, lval, rval):
    """Carry an Invalid operand through to the result."""
    for value in (lval, rval):
        if isinstance(value, Invalid):
            log.debug("%s: propagating invalid operand (%s)", kind.name, value.reason)
            return Intermediate(value)
    return None


def _invalid(kind, error):
    log.debug("%s failed: %s", kind.name, error)
    return Intermediate(Invalid(str(error), type(error).__name__))


def _truth(flag):
    return Intermediate(Integer(bigint.ONE if flag else bigint.ZERO))


def _exact(data):
    if isinstance(data, bigint.BigInt):
        return data.to_int()
    return data


def _is_nan(num):
    return isinstance(num, float) and math.isnan(num)


def _int_div(a, b):
    return bigint.divide(a, b)[0]


_INT_IMPLS = {
    OpKind.ADD: bigint.add,
    OpKind.SUB: bigint.subtract,
    OpKind.MUL: bigint.multiply,
    OpKind.DIV: _int_div,
    OpKind.MOD: bigint.modulus,
    OpKind.POW: bigint.power,
}


def _float_div(a, b):
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _float_mod(a, b):
    if b == 0.0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


def _float_pow(a, b):
    try:
        return math.pow(a, b)
    except OverflowError:
        # Only a negative base raised to an odd integer stays negative
        if a < 0 and b.is_integer() and b % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        if a == 0.0 and b < 0:
            if math.copysign(1.0, a) < 0 and b.is_integer() and b % 2 == 1:
                return -math.inf
            return math.inf
        return math.nan


_FLOAT_IMPLS = {
    OpKind.ADD: lambda a, b: a + b,
    OpKind.SUB: lambda a, b: a - b,
    OpKind.MUL: lambda a, b: a * b,
    OpKind.DIV: _float_div,
    OpKind.MOD: _float_mod,
    OpKind.POW: _float_pow,
}

"""Tests for the arbitrary-precision integer library

Python's own int serves as the reference for exact results. Division is
truncating, so the reference quotient is rounded toward zero.
"""

import itertools

import pytest

import tagval
from tagval import bigint
from valtest import big, params, sample_ints


def trunc_divmod(a, b):
    """Reference truncating division on Python ints."""
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient, a - quotient * b


VALUES = sample_ints()
PAIRS = list(zip(VALUES, reversed(VALUES)))


@params(
    "text",
    zero="0",
    one="1",
    neg="-1",
    limb="999999999",
    carry="1000000000",
    neglimb="-1000000000",
    long="123456789012345678901234567890",
    neglong="-98765432109876543210987654321098765432",
)
def test_string_round_trip(key, text):
    """Canonical text parses back to the same value."""
    value = bigint.from_string(text)
    assert bigint.to_string(value) == text
    assert bigint.from_string(bigint.to_string(value)) == value


def test_round_trip_samples():
    for value in VALUES:
        parsed = bigint.from_string(str(value))
        assert parsed.to_int() == value
        assert bigint.to_string(parsed) == str(value)
        assert bigint.from_string(bigint.to_string(parsed)) == parsed


@params(
    "text expected",
    plus=("+42", "42"),
    lead=("007", "7"),
    nzero=("-0", "0"),
    pzero=("+000", "0"),
    negpad=("-000000000000000000012", "-12"),
)
def test_from_string_normalizes(key, text, expected):
    assert bigint.to_string(bigint.from_string(text)) == expected


@params(
    "text position",
    empty=("", 0),
    sign=("-", 1),
    alpha=("12a4", 2),
    space=(" 12", 0),
    trail=("12 ", 2),
    dot=("1.5", 1),
    double=("--1", 1),
    unicode=("１２", 0),
    superscript=("2²", 1),
)
def test_from_string_malformed(key, text, position):
    with pytest.raises(tagval.MalformedInteger) as info:
        bigint.from_string(text)
    assert info.value.position == position


def test_from_string_requires_str():
    with pytest.raises(TypeError):
        bigint.from_string(12)


def test_zero_is_canonical():
    """Every way of producing zero gives the same representation."""
    zeros = [
        bigint.BigInt(),
        bigint.BigInt((0, 0, 0), negative=True),
        bigint.from_string("-0"),
        bigint.subtract(big(10**20), big(10**20)),
        bigint.multiply(big(-5), big(0)),
        bigint.add(big(-7), big(7)),
    ]
    for zero in zeros:
        assert zero.limbs == ()
        assert zero.negative is False
        assert zero == bigint.ZERO
        assert hash(zero) == hash(bigint.ZERO)
        assert not zero


def test_limbs_are_normalized():
    value = bigint.BigInt((5, 0, 0))
    assert value.limbs == (5,)
    assert big(10**9).limbs == (0, 1)


def test_immutable():
    value = big(5)
    with pytest.raises(AttributeError):
        value.negative = True
    with pytest.raises(AttributeError):
        value.limbs = (6,)


def test_add_subtract_samples():
    for a, b in PAIRS:
        assert bigint.add(big(a), big(b)).to_int() == a + b
        assert bigint.subtract(big(a), big(b)).to_int() == a - b


def test_multiply_samples():
    for a, b in PAIRS:
        assert bigint.multiply(big(a), big(b)).to_int() == a * b


def test_divide_samples():
    for a, b in PAIRS:
        if b == 0:
            continue
        quotient, remainder = bigint.divide(big(a), big(b))
        assert (quotient.to_int(), remainder.to_int()) == trunc_divmod(a, b)


def test_divide_small_divisors():
    """Dividends over every divisor shape, including single-limb divisors."""
    divisors = [1, -1, 2, 7, -10, 999_999_999, 10**9, 10**9 + 7, 10**18 + 3, -(10**27 + 11)]
    for a, b in itertools.product(VALUES[:60], divisors):
        quotient, remainder = bigint.divide(big(a), big(b))
        assert (quotient.to_int(), remainder.to_int()) == trunc_divmod(a, b)


def test_divide_correction_step():
    """Divisors whose top limbs force the quotient estimate to be corrected."""
    cases = [
        (10**36 - 1, 10**18 + 1),
        (2 * 10**27, 10**18 - 1),
        (10**45, 999_999_999_000_000_001),
        (123456789 * 10**36 + 987654321, 500_000_000_999_999_999),
        ((10**18 - 1) * (10**18 + 1) - 1, 10**18 + 1),
    ]
    for a, b in cases:
        quotient, remainder = bigint.divide(big(a), big(b))
        assert (quotient.to_int(), remainder.to_int()) == trunc_divmod(a, b)


def test_truncating_division_identity():
    """(a / b) * b + (a % b) == a"""
    for a, b in PAIRS:
        if b == 0:
            continue
        quotient, _ = bigint.divide(big(a), big(b))
        remainder = bigint.modulus(big(a), big(b))
        assert bigint.add(bigint.multiply(quotient, big(b)), remainder) == big(a)


@params(
    "a b quotient remainder",
    pospos=(7, 3, 2, 1),
    negpos=(-7, 3, -2, -1),
    posneg=(7, -3, -2, 1),
    negneg=(-7, -3, 2, -1),
    exact=(-9, 3, -3, 0),
    small=(2, 5, 0, 2),
    negsmall=(-2, 5, 0, -2),
)
def test_truncating_signs(key, a, b, quotient, remainder):
    """Quotient rounds toward zero and remainder follows the dividend."""
    q, r = bigint.divide(big(a), big(b))
    assert q == big(quotient)
    assert r == big(remainder)
    assert bigint.modulus(big(a), big(b)) == big(remainder)


@params("a", zero=0, pos=7, neg=-7, large=10**40)
def test_divide_by_zero(key, a):
    with pytest.raises(tagval.DivisionByZero):
        bigint.divide(big(a), bigint.ZERO)
    with pytest.raises(tagval.DivisionByZero):
        bigint.modulus(big(a), bigint.ZERO)


def test_division_by_zero_is_zero_division_error():
    with pytest.raises(ZeroDivisionError):
        bigint.divide(big(1), big(0))


def test_identities():
    for a in VALUES:
        value = big(a)
        assert bigint.add(value, bigint.ZERO) == value
        assert bigint.multiply(value, bigint.ONE) == value
        assert bigint.multiply(value, bigint.ZERO) == bigint.ZERO


@params(
    "base exponent",
    small=(2, 10),
    limb=(2, 64),
    big=(3, 200),
    neg_odd=(-3, 7),
    neg_even=(-3, 8),
    large_base=(10**20 + 7, 5),
    one=(1, 10**12),
    neg_one_odd=(-1, 10**12 + 1),
    neg_one_even=(-1, 10**12),
    zero=(0, 5),
    ten=(10, 30),
)
def test_power(key, base, exponent):
    result = bigint.power(big(base), big(exponent))
    assert result.to_int() == base**exponent


def test_power_zero_exponent():
    """Any base to the zero is one, including zero itself."""
    for a in VALUES:
        assert bigint.power(big(a), bigint.ZERO) == bigint.ONE
    assert bigint.power(bigint.ZERO, bigint.ZERO) == bigint.ONE


def test_power_multi_limb_exponent():
    """Exponents wider than one limb still square correctly for unit bases."""
    assert bigint.power(big(-1), big(10**18 + 3)) == big(-1)
    assert bigint.power(big(0), big(10**18)) == bigint.ZERO


def test_power_result_too_large():
    """Results past MAX_POWER_DIGITS fail before any multiplication."""
    with pytest.raises(tagval.IntegerTooLarge):
        bigint.power(big(2), big(10**12))
    with pytest.raises(tagval.IntegerTooLarge):
        bigint.power(big(10**9), big(10**18 + 3))
    assert len(bigint.to_string(bigint.power(big(10), big(1000)))) == 1001


@params("exponent", one=-1, large=-(10**30))
def test_power_negative_exponent(key, exponent):
    with pytest.raises(tagval.NegativeExponentUnsupported):
        bigint.power(big(2), big(exponent))


def test_compare_samples():
    for a, b in PAIRS:
        expected = (a > b) - (a < b)
        assert bigint.compare(big(a), big(b)) == expected
        assert isinstance(bigint.compare(big(a), big(b)), bigint.Ordering)


@params(
    "a b ordering",
    equal=(5, 5, bigint.Ordering.EQUAL),
    less=(-5, 5, bigint.Ordering.LESS),
    greater=(10**9, 999_999_999, bigint.Ordering.GREATER),
    negs=(-(10**9), -999_999_999, bigint.Ordering.LESS),
    zeros=(0, 0, bigint.Ordering.EQUAL),
)
def test_compare(key, a, b, ordering):
    assert bigint.compare(big(a), big(b)) is ordering


def test_python_operators():
    a, b = big(-17), big(5)
    assert a + b == big(-12)
    assert a - b == big(-22)
    assert a * b == big(-85)
    assert a // b == big(-3)
    assert a % b == big(-2)
    assert divmod(a, b) == (big(-3), big(-2))
    assert b ** big(3) == big(125)
    assert -a == big(17)
    assert abs(a) == big(17)
    assert a < b and b > a and a <= a and b >= b
    assert a != b


def test_no_mixing_with_int():
    assert (big(5) == 5) is False
    with pytest.raises(TypeError):
        big(5) + 5


def test_conversions():
    value = big(-(10**30) - 1)
    assert int(value) == -(10**30) - 1
    assert float(big(12345)) == 12345.0
    assert float(big(10**400)) == float("inf")
    assert float(big(-(10**400))) == float("-inf")
    assert str(value) == "-1000000000000000000000000000001"
    assert repr(big(42)) == "BigInt(42)"


def test_operations_do_not_mutate():
    a, b = big(10**20), big(-3)
    before = (a.limbs, a.negative, b.limbs, b.negative)
    bigint.add(a, b)
    bigint.multiply(a, b)
    bigint.divide(a, b)
    bigint.power(b, big(3))
    assert (a.limbs, a.negative, b.limbs, b.negative) == before

"""Arbitrary-precision signed integers.

A BigInt is a sign and a little-endian tuple of limbs in radix 10**9. The
radix is a power of ten so that textual conversion is a per-limb operation.

Limb tuples are always normalized: there is never a most-significant zero
limb, and zero is the empty tuple. Zero is never negative. This makes
equality and hashing independent of how a value was produced.

Division and modulus truncate toward zero, and the remainder takes the sign
of the dividend. The Python operators `//` and `%` on BigInt follow this same
truncating convention, which differs from Python's own floor division on int.
"""

__all__ = [
    "BigInt",
    "Ordering",
    "add",
    "subtract",
    "multiply",
    "divide",
    "modulus",
    "power",
    "compare",
    "to_string",
    "from_string",
]

import enum
import math
import operator

from ._error import (
    DivisionByZero,
    IntegerTooLarge,
    MalformedInteger,
    NegativeExponentUnsupported,
)


LIMB_DIGITS = 9
RADIX = 10**LIMB_DIGITS

# Largest result power() will build, in decimal digits
MAX_POWER_DIGITS = 1_000_000

_DIGITS = frozenset("0123456789")


class Ordering(enum.IntEnum):
    """Result of comparing two integers."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class BigInt:
    """Immutable arbitrary-precision integer.

    Most code should build these with `from_string` or `BigInt.from_int`
    rather than passing limbs directly.

    Args:
        limbs: (Sequence[int]) Little-endian limbs, each in range(RADIX)
        negative: (bool) Sign, ignored for zero
    Attributes:
        limbs: (tuple[int, ...]) Normalized little-endian limbs
        negative: (bool) True for values below zero
    """

    __slots__ = ("limbs", "negative")

    def __init__(self, limbs=(), negative=False):
        limbs = _trim(limbs)
        object.__setattr__(self, "limbs", limbs)
        object.__setattr__(self, "negative", bool(negative) and bool(limbs))

    def __setattr__(self, name, value):
        raise AttributeError(f"BigInt is immutable, cannot set {name!r}")

    @classmethod
    def from_int(cls, value):
        """Convert a Python int into a BigInt.

        Args:
            value: (int) Any integer value
        Returns:
            (BigInt) Equal value
        """
        value = operator.index(value)
        negative = value < 0
        if negative:
            value = -value
        limbs = []
        while value:
            value, limb = divmod(value, RADIX)
            limbs.append(limb)
        return cls(limbs, negative)

    def to_int(self):
        """(int) Python int with the same value."""
        value = 0
        for limb in reversed(self.limbs):
            value = value * RADIX + limb
        return -value if self.negative else value

    @property
    def is_zero(self):
        """(bool) True for the canonical zero."""
        return not self.limbs

    def __int__(self):
        return self.to_int()

    def __float__(self):
        # Parsing the decimal text gives a correctly rounded float, and
        # saturates to infinity for magnitudes beyond the float range.
        return float(to_string(self))

    def __bool__(self):
        return bool(self.limbs)

    def __str__(self):
        return to_string(self)

    def __repr__(self):
        return f"BigInt({to_string(self)})"

    def __hash__(self):
        return hash((self.negative, self.limbs))

    def __eq__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.negative == other.negative and self.limbs == other.limbs

    def __lt__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) is Ordering.LESS

    def __le__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) is not Ordering.GREATER

    def __gt__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) is Ordering.GREATER

    def __ge__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) is not Ordering.LESS

    def __neg__(self):
        return BigInt(self.limbs, not self.negative)

    def __pos__(self):
        return self

    def __abs__(self):
        return BigInt(self.limbs)

    def __add__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return multiply(self, other)

    def __floordiv__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return divide(self, other)[0]

    def __mod__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return modulus(self, other)

    def __divmod__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return divide(self, other)

    def __pow__(self, other):
        if not isinstance(other, BigInt):
            return NotImplemented
        return power(self, other)


def add(a, b):
    """Exact sum of two integers."""
    if a.negative == b.negative:
        return BigInt(_mag_add(a.limbs, b.limbs), a.negative)
    order = _mag_compare(a.limbs, b.limbs)
    if order == 0:
        return ZERO
    if order > 0:
        return BigInt(_mag_sub(a.limbs, b.limbs), a.negative)
    return BigInt(_mag_sub(b.limbs, a.limbs), b.negative)


def subtract(a, b):
    """Exact difference `a - b`."""
    return add(a, -b)


def multiply(a, b):
    """Exact product of two integers."""
    return BigInt(_mag_mul(a.limbs, b.limbs), a.negative != b.negative)


def divide(a, b):
    """Truncating division.

    The quotient rounds toward zero and the remainder has the sign of the
    dividend, so `quotient * b + remainder == a` always holds.

    Args:
        a: (BigInt) Dividend
        b: (BigInt) Divisor
    Returns:
        (tuple[BigInt, BigInt]) Quotient and remainder
    Raises:
        DivisionByZero: If b is zero
    """
    if not b.limbs:
        raise DivisionByZero("Integer division by zero")
    quotient, remainder = _mag_divmod(a.limbs, b.limbs)
    return BigInt(quotient, a.negative != b.negative), BigInt(remainder, a.negative)


def modulus(a, b):
    """Remainder of truncating division, signed like the dividend.

    Raises:
        DivisionByZero: If b is zero
    """
    if not b.limbs:
        raise DivisionByZero("Integer modulus by zero")
    return divide(a, b)[1]


def power(a, exponent):
    """Raise to a non-negative integer power by repeated squaring.

    `power(0, 0)` is 1.

    Args:
        a: (BigInt) Base
        exponent: (BigInt) Non-negative exponent
    Returns:
        (BigInt) Exact result
    Raises:
        NegativeExponentUnsupported: If exponent is below zero
        IntegerTooLarge: If the result would exceed MAX_POWER_DIGITS
    """
    if exponent.negative:
        raise NegativeExponentUnsupported(
            f"Integer exponent must not be negative, got {to_string(exponent)}")
    if not exponent.limbs:
        return ONE
    if not a.limbs:
        return ZERO

    # Radix is even, so the lowest limb decides parity
    negative = a.negative and exponent.limbs[0] % 2 == 1
    if a.limbs == (1,):
        return BigInt((1,), negative)

    # Digits of the result are about exponent * log10(|a|)
    magnitude = math.log10(a.limbs[-1]) + LIMB_DIGITS * (len(a.limbs) - 1)
    if float(exponent) * magnitude > MAX_POWER_DIGITS:
        raise IntegerTooLarge(
            f"Integer power {to_string(a)}^{to_string(exponent)} exceeds "
            f"{MAX_POWER_DIGITS} digits")

    # a**e is the product of (a**(RADIX**i))**limb_i over the exponent limbs
    result = (1,)
    base = a.limbs
    last = len(exponent.limbs) - 1
    for index, limb in enumerate(exponent.limbs):
        if limb:
            result = _mag_mul(result, _mag_pow(base, limb))
        if index < last:
            base = _mag_pow(base, RADIX)
    return BigInt(result, negative)


def compare(a, b):
    """Total order of two integers.

    Returns:
        (Ordering) LESS, EQUAL or GREATER for `a` relative to `b`
    """
    if a.negative != b.negative:
        return Ordering.LESS if a.negative else Ordering.GREATER
    order = _mag_compare(a.limbs, b.limbs)
    return Ordering(-order if a.negative else order)


def to_string(a):
    """Canonical base-10 text, with a leading "-" for negative values."""
    if not a.limbs:
        return "0"
    parts = [str(a.limbs[-1])]
    parts.extend(f"{limb:0{LIMB_DIGITS}d}" for limb in reversed(a.limbs[:-1]))
    text = "".join(parts)
    return "-" + text if a.negative else text


def from_string(text):
    """Parse base-10 text into a BigInt.

    Accepts an optional "+" or "-" followed by one or more ASCII digits.
    Leading zeros are tolerated.

    Args:
        text: (str) Integer text
    Returns:
        (BigInt) Parsed value
    Raises:
        MalformedInteger: If the text is not an integer
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")

    digits = text
    negative = False
    if digits[:1] in ("+", "-"):
        negative = digits[0] == "-"
        digits = digits[1:]
    offset = len(text) - len(digits)

    if not digits:
        raise MalformedInteger(f"Missing digits in integer {text!r}", offset)
    for index, char in enumerate(digits):
        if char not in _DIGITS:
            raise MalformedInteger(
                f"Invalid character {char!r} in integer {text!r}", offset + index)

    limbs = []
    for end in range(len(digits), 0, -LIMB_DIGITS):
        limbs.append(int(digits[max(0, end - LIMB_DIGITS):end]))
    return BigInt(limbs, negative)


def _trim(limbs):
    """Drop most-significant zero limbs."""
    end = len(limbs)
    while end and not limbs[end - 1]:
        end -= 1
    return tuple(limbs[:end])


def _mag_compare(a, b):
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            return -1 if x < y else 1
    return 0


def _mag_add(a, b):
    if len(a) < len(b):
        a, b = b, a
    result = []
    carry = 0
    for index, limb in enumerate(a):
        total = limb + carry
        if index < len(b):
            total += b[index]
        if total >= RADIX:
            result.append(total - RADIX)
            carry = 1
        else:
            result.append(total)
            carry = 0
    if carry:
        result.append(carry)
    return tuple(result)


def _mag_sub(a, b):
    """Magnitude difference, requires a >= b."""
    result = []
    borrow = 0
    for index, limb in enumerate(a):
        diff = limb - borrow
        if index < len(b):
            diff -= b[index]
        if diff < 0:
            result.append(diff + RADIX)
            borrow = 1
        else:
            result.append(diff)
            borrow = 0
    return _trim(result)


def _mag_mul(a, b):
    if not a or not b:
        return ()
    result = [0] * (len(a) + len(b))
    for i, x in enumerate(a):
        if not x:
            continue
        carry = 0
        for j, y in enumerate(b):
            carry, result[i + j] = divmod(result[i + j] + x * y + carry, RADIX)
        k = i + len(b)
        while carry:
            carry, result[k] = divmod(result[k] + carry, RADIX)
            k += 1
    return _trim(result)


def _mag_mul_limb(a, factor):
    """Multiply by a single limb, returns a list that may grow by one limb."""
    result = []
    carry = 0
    for limb in a:
        carry, limb = divmod(limb * factor + carry, RADIX)
        result.append(limb)
    if carry:
        result.append(carry)
    return result


def _mag_divmod_limb(a, divisor):
    """Short division by a single non-zero limb."""
    quotient = [0] * len(a)
    remainder = 0
    for index in range(len(a) - 1, -1, -1):
        quotient[index], remainder = divmod(remainder * RADIX + a[index], divisor)
    return _trim(quotient), remainder


def _mag_divmod(a, b):
    """Schoolbook long division of magnitudes (Knuth, algorithm D)."""
    if _mag_compare(a, b) < 0:
        return (), a
    if len(b) == 1:
        quotient, remainder = _mag_divmod_limb(a, b[0])
        return quotient, _trim((remainder,))

    # Scale so the divisor's top limb is large, which bounds the quotient
    # estimate below to at most two corrections.
    scale = RADIX // (b[-1] + 1)
    u = _mag_mul_limb(a, scale)
    if len(u) == len(a):
        u.append(0)
    v = _mag_mul_limb(b, scale)

    n = len(v)
    m = len(u) - n - 1
    v_top = v[-1]
    v_next = v[-2]
    quotient = [0] * (m + 1)

    for j in range(m, -1, -1):
        qhat, rhat = divmod(u[j + n] * RADIX + u[j + n - 1], v_top)
        while qhat >= RADIX or qhat * v_next > rhat * RADIX + u[j + n - 2]:
            qhat -= 1
            rhat += v_top
            if rhat >= RADIX:
                break

        borrow = 0
        carry = 0
        for i in range(n):
            carry, low = divmod(qhat * v[i] + carry, RADIX)
            diff = u[i + j] - low - borrow
            if diff < 0:
                u[i + j] = diff + RADIX
                borrow = 1
            else:
                u[i + j] = diff
                borrow = 0
        diff = u[j + n] - carry - borrow

        if diff < 0:
            # Estimate was one too large, add the divisor back
            qhat -= 1
            carry = 0
            for i in range(n):
                total = u[i + j] + v[i] + carry
                if total >= RADIX:
                    u[i + j] = total - RADIX
                    carry = 1
                else:
                    u[i + j] = total
                    carry = 0
            diff += carry

        u[j + n] = diff
        quotient[j] = qhat

    remainder, _ = _mag_divmod_limb(_trim(u[:n]), scale)
    return _trim(quotient), remainder


def _mag_pow(base, exponent):
    """Square and multiply for a small non-negative int exponent."""
    result = (1,)
    while exponent:
        if exponent & 1:
            result = _mag_mul(result, base)
        exponent >>= 1
        if exponent:
            base = _mag_mul(base, base)
    return result


ZERO = BigInt()
ONE = BigInt((1,))

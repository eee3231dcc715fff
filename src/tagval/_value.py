"""Runtime values and the variables that hold them."""

__all__ = [
    "RuntimeType",
    "Value",
    "Integer",
    "Number",
    "Text",
    "Invalid",
    "Opaque",
    "Variable",
    "Intermediate",
    "Binding",
    "var",
    "declare",
    "validate",
]

import decimal
import enum
import math
from dataclasses import dataclass, field

from . import bigint
from ._error import BindingError, EvalError, TypeMismatch


class RuntimeType(enum.Enum):
    """Runtime type tag carried by every value."""

    OBJECT = "Object"
    NUM = "Num"
    INT = "Int"
    STRING = "String"
    FUNCTION = "Function"
    INVALID = "Invalid"

    def __str__(self):
        return self.value


class Value:
    """Runtime value.

    This is a closed tagged union. Each subclass is one variant and fixes its
    own runtime type, so a value can never disagree with its tag:

        Integer(BigInt) | Number(float) | Text(str) | Invalid | Opaque

    Values are immutable. Operators build new values rather than changing
    their operands, so the same value can safely appear on both sides of an
    expression.
    """

    __slots__ = ()

    @property
    def type(self):
        """(RuntimeType) Tag for this value."""
        raise NotImplementedError

    def format(self):
        """Canonical textual form of this value.

        Returns:
            (str) Text used for string concatenation and display
        Raises:
            TypeMismatch: If the value has no textual form
        """
        raise TypeMismatch(f"{self.type} value has no textual form")

    def to_python(self):
        """Convert this value to a Python equivalent."""
        raise NotImplementedError

    @classmethod
    def from_python(cls, value):
        """Convert Python values into runtime Values.

        Booleans become the integers 1 and 0. Callables become opaque
        Function values and anything unrecognized becomes an opaque Object.

        Args:
            value: Python value to convert
        Returns:
            (Value) Runtime equivalent
        Raises:
            TypeError: If value is already a Value
        """
        if isinstance(value, Value):
            raise TypeError("from_python called with existing Value")

        if isinstance(value, bool):
            return Integer(bigint.ONE if value else bigint.ZERO)
        if isinstance(value, int):
            return Integer(bigint.BigInt.from_int(value))
        if isinstance(value, bigint.BigInt):
            return Integer(value)
        if isinstance(value, float):
            return Number(value)
        if isinstance(value, str):
            return Text(value)
        if callable(value):
            return Opaque(RuntimeType.FUNCTION, value)
        return Opaque(RuntimeType.OBJECT, value)


@dataclass(frozen=True, slots=True, repr=False)
class Integer(Value):
    """Arbitrary-precision integer value."""

    data: bigint.BigInt

    def __post_init__(self):
        if not isinstance(self.data, bigint.BigInt):
            raise TypeError(f"Integer requires BigInt, got {type(self.data).__name__}")

    @property
    def type(self):
        return RuntimeType.INT

    def format(self):
        return bigint.to_string(self.data)

    def to_python(self):
        return self.data.to_int()

    def __repr__(self):
        return f"Integer({self.format()})"


@dataclass(frozen=True, slots=True, repr=False)
class Number(Value):
    """Double precision floating point value."""

    data: float

    def __post_init__(self):
        if not isinstance(self.data, float):
            raise TypeError(f"Number requires float, got {type(self.data).__name__}")

    @property
    def type(self):
        return RuntimeType.NUM

    def format(self):
        return _format_float(self.data)

    def to_python(self):
        return self.data

    def __repr__(self):
        return f"Number({self.format()})"


@dataclass(frozen=True, slots=True, repr=False)
class Text(Value):
    """String value."""

    data: str

    def __post_init__(self):
        if not isinstance(self.data, str):
            raise TypeError(f"Text requires str, got {type(self.data).__name__}")

    @property
    def type(self):
        return RuntimeType.STRING

    def format(self):
        return self.data

    def to_python(self):
        return self.data

    def __repr__(self):
        return f"Text({self.data!r})"


@dataclass(frozen=True, slots=True, repr=False)
class Invalid(Value):
    """Result of a failed operation.

    The reason and error name are diagnostics for whoever reports the
    failure. They are not part of equality, every Invalid equals every other.

    Attributes:
        reason: (str) Description of what failed
        error: (str) Name of the error class that caused the failure
    """

    reason: str = field(default="", compare=False)
    error: str = field(default="", compare=False)

    @property
    def type(self):
        return RuntimeType.INVALID

    def to_python(self):
        raise TypeMismatch(f"Invalid value has no Python equivalent: {self.reason}")

    def __repr__(self):
        return f"Invalid({self.reason!r})"


@dataclass(frozen=True, slots=True, repr=False)
class Opaque(Value):
    """Non-arithmetic Object or Function value wrapping a host payload."""

    kind: RuntimeType
    payload: object

    def __post_init__(self):
        if self.kind not in (RuntimeType.OBJECT, RuntimeType.FUNCTION):
            raise TypeError(f"Opaque values must be Object or Function, got {self.kind}")

    @property
    def type(self):
        return self.kind

    def to_python(self):
        return self.payload

    def __repr__(self):
        return f"Opaque({self.kind}, {self.payload!r})"


class Variable:
    """A Value together with how it is held.

    There are two kinds of variable. An `Intermediate` is an anonymous result
    produced while evaluating an expression. A `Binding` is a named value
    declared by the user. Whether a variable is bound in a scope is decided by
    which class it is, never by inspecting a name.
    """

    __slots__ = ()
    is_bound = False

    @property
    def type(self):
        """(RuntimeType) Tag of the held value."""
        return self.value.type

    @property
    def is_invalid(self):
        """(bool) True if the held value is Invalid."""
        return self.value.type is RuntimeType.INVALID


@dataclass(frozen=True, slots=True)
class Intermediate(Variable):
    """Anonymous value produced inside expression evaluation."""

    value: Value

    def __post_init__(self):
        if not isinstance(self.value, Value):
            raise TypeError(f"Variable requires Value, got {type(self.value).__name__}")


@dataclass(frozen=True, slots=True)
class Binding(Variable):
    """Named value declared by the user.

    Attributes:
        name: (str) Declared name
        value: (Value) Current value
        dynamic: (bool) True if the binding may be reassigned
    """

    name: str
    value: Value
    dynamic: bool = False
    is_bound = True

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise TypeError(f"Binding requires a non-empty name, got {self.name!r}")
        if not isinstance(self.value, Value):
            raise TypeError(f"Variable requires Value, got {type(self.value).__name__}")

    def rebind(self, value):
        """Reassign this binding.

        Args:
            value: (Value | object) New value, Python values are converted
        Returns:
            (Binding) New binding with the same name
        Raises:
            BindingError: If the binding is not dynamic
        """
        if not self.dynamic:
            raise BindingError(f"Cannot reassign constant binding {self.name!r}")
        return Binding(self.name, _as_value(value), True)


def var(value):
    """Create an intermediate variable from a Value or Python value."""
    return Intermediate(_as_value(value))


def declare(name, value, dynamic=False):
    """Create a named binding from a Value or Python value."""
    return Binding(name, _as_value(value), dynamic)


def validate(item):
    """Validate that a Variable or Value is in a proper state.

    This isn't regularly done during runtime for efficiency. It is meant for
    tests and analysis tools. A failure means there is a bug in the
    implementation, never in user code.

    Args:
        item: (Variable | Value) object to check
    Raises:
        (EvalError) if any type of problem is found
    """
    if isinstance(item, Variable):
        if isinstance(item, Binding) and not item.name:
            raise EvalError("Binding has an empty name")
        item = item.value

    if not isinstance(item, Value):
        raise EvalError(f"Expected Value, got {type(item).__name__}")

    if isinstance(item, Integer):
        data = item.data
        if not isinstance(data, bigint.BigInt):
            raise EvalError(f"Integer holds {type(data).__name__}")
        if not isinstance(data.limbs, tuple):
            raise EvalError("BigInt limbs are not a tuple")
        for limb in data.limbs:
            if not isinstance(limb, int) or not 0 <= limb < bigint.RADIX:
                raise EvalError(f"BigInt limb out of range: {limb!r}")
        if data.limbs and not data.limbs[-1]:
            raise EvalError("BigInt has a most-significant zero limb")
        if data.negative and not data.limbs:
            raise EvalError("BigInt zero is negative")
    elif isinstance(item, Number):
        if not isinstance(item.data, float):
            raise EvalError(f"Number holds {type(item.data).__name__}")
    elif isinstance(item, Text):
        if not isinstance(item.data, str):
            raise EvalError(f"Text holds {type(item.data).__name__}")
    elif isinstance(item, Opaque):
        if item.kind not in (RuntimeType.OBJECT, RuntimeType.FUNCTION):
            raise EvalError(f"Opaque value tagged {item.kind}")
    elif not isinstance(item, Invalid):
        raise EvalError(f"Unknown value variant {type(item).__name__}")


def _as_value(value):
    if isinstance(value, Value):
        return value
    return Value.from_python(value)


def _format_float(value):
    """Fixed-point text with the shortest digits that round trip."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(decimal.Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text

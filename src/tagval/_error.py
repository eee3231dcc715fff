"""Error classes and helpers"""

__all__ = [
    "EvalError",
    "DivisionByZero",
    "NegativeExponentUnsupported",
    "MalformedInteger",
    "TypeMismatch",
    "BindingError",
    "IntegerTooLarge",
    "ParseError",
]


class EvalError(Exception):
    """Error in internal processing of the value engine."""


class DivisionByZero(EvalError, ZeroDivisionError):
    """Integer division or modulus with a zero divisor."""


class NegativeExponentUnsupported(EvalError, ValueError):
    """Integer exponentiation with a negative exponent."""


class MalformedInteger(EvalError, ValueError):
    """Text that is not a base-10 integer.

    Args:
        message: (str) Error description
        position: (int | None) Index of the first offending character

    Attributes:
        message: (str) Error description
        position: (int | None) Index of the first offending character
    """

    def __init__(self, message, position=None):
        self.message = message
        self.position = position
        super().__init__(message)


class TypeMismatch(EvalError, TypeError):
    """Operand types have no rule for the requested operator."""


class BindingError(EvalError):
    """Reassignment of a binding that is not dynamic."""


class IntegerTooLarge(EvalError, OverflowError):
    """Integer result would exceed the supported number of digits."""


class ParseError(Exception):
    """Exception raised for literal parsing errors.

    Args:
        message: (str) Error description
        position: (int | None) Optional character position where error occurred

    Attributes:
        message: (str) Error description
        position: (int | None) Character position where error occurred
    """

    def __init__(self, message, position=None):
        self.message = message
        self.position = position
        super().__init__(message)

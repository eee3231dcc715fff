"""
Tagval runtime value core

Tagged runtime values, arbitrary-precision integers and the binary operators
of a small dynamically-typed expression language.
"""

__version__ = "0.1.0"


from ._error import *
from .bigint import BigInt, Ordering
from ._value import *
from ._ops import *
from ._literal import *

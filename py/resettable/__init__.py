"""Resettable - values with a lazy, single-level checkpoint.

Wrap a value, mutate it freely, and reset it to what it held before the
first mutation since the last reset. Composites reset field by field
through the Resettable capability.
"""

__version__ = "0.1.0"

from resettable.protocols import Resettable, reset_field
from resettable.types import ResettableValue, ConsumedValueError

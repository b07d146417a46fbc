"""Core data type for the resettable value model.

ResettableValue holds a live value plus at most one checkpoint. The
checkpoint is taken lazily on the first write access after construction
or reset, and restored by reset().
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, TypeVar

from resettable.protocols import Resettable

logger = logging.getLogger(__name__)

T = TypeVar("T")

Duplicate = Callable[[Any], Any]


class ConsumedValueError(RuntimeError):
    """Raised when a wrapper is used after unwrap(), reset() or reset_to_checkpoint()."""


# ============================================================
# ResettableValue - live value with lazy checkpoint
# ============================================================

@dataclass(init=False, repr=False, order=True)
class ResettableValue(Resettable, Generic[T]):
    """Wrapper that can be mutated and later reset to its last checkpoint.

    States:
      - clean: no checkpoint (after construction or reset)
      - dirty: checkpoint present (after the first write access)

    Comparison is lexicographic: live value, then dirty flag, then
    checkpoint, so a clean wrapper orders before a dirty one.

    unwrap(), reset_to_checkpoint() and reset() consume the wrapper;
    any later access raises ConsumedValueError.
    """
    _live: Any
    _dirty: bool
    _checkpoint: Optional[Any]  # meaningful only while dirty (None is a valid value)
    _duplicate: Duplicate = field(compare=False)
    _consumed: bool = field(compare=False)

    def __init__(self, value: T, duplicate: Duplicate = copy.deepcopy):
        self._live = value
        self._dirty = False
        self._checkpoint = None
        self._duplicate = duplicate
        self._consumed = False

    @classmethod
    def from_value(cls, value: T) -> "ResettableValue[T]":
        """Conversion constructor. Same as ResettableValue(value)."""
        return cls(value)

    @classmethod
    def default(cls, factory: Callable[[], T]) -> "ResettableValue[T]":
        """Wrap a freshly built default, e.g. ResettableValue.default(list)."""
        return cls(factory())

    # -- access --

    def _check(self) -> None:
        if self._consumed:
            raise ConsumedValueError("ResettableValue used after being consumed")

    @property
    def is_dirty(self) -> bool:
        self._check()
        return self._dirty

    def read(self) -> T:
        """Live value. Never takes a checkpoint.

        The returned object is the live value itself, not a copy: mutating
        it in place bypasses the checkpoint. Use write() for that.
        """
        self._check()
        return self._live

    def write(self) -> T:
        """Live value for in-place mutation.

        Stashes a duplicate of the live value first, unless a checkpoint
        already exists for this dirty period.
        """
        self._check()
        if not self._dirty:
            self._checkpoint = self._duplicate(self._live)
            self._dirty = True
            logger.debug("Stashed checkpoint for %s value", type(self._live).__name__)
        return self._live

    def set(self, value: T) -> None:
        """Replace the live value (write access)."""
        self.write()
        self._live = value

    def update(self, fn: Callable[[T], T]) -> T:
        """Replace the live value with fn(live) and return it."""
        self._live = fn(self.write())
        return self._live

    # -- terminal operations --

    def _consume(self):
        self._check()
        live, checkpoint, dirty = self._live, self._checkpoint, self._dirty
        self._live = self._checkpoint = None
        self._consumed = True
        return live, checkpoint, dirty

    def unwrap(self) -> T:
        """Consume the wrapper and return the live value; the checkpoint is discarded."""
        live, _, _ = self._consume()
        return live

    def reset_to_checkpoint(self) -> T:
        """Consume the wrapper and return the checkpoint, or the live value if clean."""
        live, checkpoint, dirty = self._consume()
        return checkpoint if dirty else live

    def reset(self) -> "ResettableValue[T]":
        """Consume the wrapper and return a clean one holding the checkpointed value."""
        duplicate = self._duplicate
        if self.is_dirty:
            logger.debug("Resetting dirty %s value to checkpoint", type(self._live).__name__)
        return type(self)(self.reset_to_checkpoint(), duplicate=duplicate)

    # -- copying and display --

    def __copy__(self) -> "ResettableValue[T]":
        """Independent wrapper in the same state; live and checkpoint are duplicated."""
        self._check()
        clone = type(self)(self._duplicate(self._live), duplicate=self._duplicate)
        if self._dirty:
            clone._checkpoint = self._duplicate(self._checkpoint)
            clone._dirty = True
        return clone

    def __repr__(self) -> str:
        if self._consumed:
            return "<consumed ResettableValue>"
        return repr(self._live)

    # -- JSON (live value only) --

    def to_json(self) -> Any:
        live = self.read()
        return live.to_json() if hasattr(live, "to_json") else live

    @classmethod
    def from_json(cls, data: Any,
                  decode: Optional[Callable[[Any], T]] = None) -> "ResettableValue[T]":
        """Build a clean wrapper from its external representation."""
        return cls(decode(data) if decode is not None else data)

"""Resettable capability as a Python Abstract Base Class.

Composite types implement Resettable by returning a new instance in
which every field that is itself Resettable has been reset and every
other field is carried over unchanged:

    @dataclass
    class Form(Resettable):
        name: ResettableValue[str]
        tags: ResettableValue[list]
        form_id: str

        def reset(self) -> "Form":
            return Form(
                name=reset_field(self.name),
                tags=reset_field(self.tags),
                form_id=reset_field(self.form_id),
            )

Hand-written and generated composites must follow the same rule.
"""

from abc import ABC, abstractmethod
from typing import Any


# ============================================================
# Resettable
# ============================================================

class Resettable(ABC):
    """Value that can be restored to its last checkpoint."""

    @abstractmethod
    def reset(self) -> "Resettable":
        """Consume self and return the reset version of it.
        Fields that are Resettable are reset, all others pass through."""
        ...


def reset_field(value: Any) -> Any:
    """Reset value if it carries the capability, otherwise return it unchanged."""
    if isinstance(value, Resettable):
        return value.reset()
    return value

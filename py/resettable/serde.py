"""Transparent JSON adapter for ResettableValue.

Only the live value is written. Reading always produces a clean wrapper,
whatever state the serialized wrapper was in. Decode errors from the
json module propagate unchanged.
"""

import json
from typing import Any, Callable, Optional

from resettable.types import ResettableValue


class ResettableJSONEncoder(json.JSONEncoder):
    """JSON encoder that writes wrappers (and nested to_json values) transparently.

    Usable for composites holding wrappers in dicts or lists:
        json.dumps({"name": ResettableValue("foo")}, cls=ResettableJSONEncoder)

    fallback handles objects without to_json; it runs after the wrapper
    check, unlike json's own default= hook, which would replace it.
    """

    def __init__(self, *, fallback: Optional[Callable[[Any], Any]] = None,
                 **kwargs: Any):
        super().__init__(**kwargs)
        self.fallback = fallback

    def default(self, o: Any) -> Any:
        if hasattr(o, "to_json"):
            return o.to_json()
        if self.fallback is not None:
            return self.fallback(o)
        return super().default(o)


def dumps(wrapper: ResettableValue, **kwargs: Any) -> str:
    """Serialize the live value of wrapper.

    A default= hook is applied only to values that are neither wrappers
    nor have to_json. Other kwargs go to json.dumps.
    """
    fallback = kwargs.pop("default", None)
    return json.dumps(wrapper, cls=ResettableJSONEncoder, fallback=fallback, **kwargs)


def loads(text: str, decode: Optional[Callable[[Any], Any]] = None,
          **kwargs: Any) -> ResettableValue:
    """Deserialize text into a clean wrapper.

    decode, if given, turns the parsed JSON into the held value type.
    Extra kwargs go to json.loads.
    """
    return ResettableValue.from_json(json.loads(text, **kwargs), decode=decode)

"""Event mapping rules — declarative event → notification bindings.

Extraction descriptors are small strategy objects instead of raw closures:

    PropertyPath("order.user")       walk the event graph
    CustomFunction(fn)               call ``fn(event)``
    StaticValue({"source": "api"})   constant value

Raw configuration values are coerced: strings become ``PropertyPath``,
callables become ``CustomFunction`` and anything else a ``StaticValue``.
"""

import inspect
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

_MISSING = object()


class PropertyPath:
    """Dotted attribute path, e.g. ``"comment.post.author"``."""

    def __init__(self, path: str):
        self.path = path
        self.segments = path.split(".")

    def extract(self, event):
        """Walk the path; return None when any segment is unresolved."""
        value = event
        for segment in self.segments:
            value = _step(value, segment)
            if value is _MISSING:
                return None
        return value

    def __eq__(self, other):
        return isinstance(other, PropertyPath) and other.path == self.path

    def __hash__(self):
        return hash(("path", self.path))

    def __repr__(self):
        return f"PropertyPath({self.path!r})"


class CustomFunction:
    """Extraction delegated to a callable receiving the event."""

    def __init__(self, fn: Callable[[Any], Any]):
        self.fn = fn

    def extract(self, event):
        return self.fn(event)

    def __repr__(self):
        return f"CustomFunction({getattr(self.fn, '__qualname__', self.fn)!r})"


class StaticValue:
    """A constant, independent of the event."""

    def __init__(self, value):
        self.value = value

    def extract(self, event):
        return self.value

    def __repr__(self):
        return f"StaticValue({self.value!r})"


Descriptor = PropertyPath | CustomFunction | StaticValue


def as_descriptor(value):
    """Coerce a raw configuration value into an extraction descriptor."""
    if value is None or isinstance(value, PropertyPath | CustomFunction | StaticValue):
        return value
    if isinstance(value, str):
        return PropertyPath(value)
    if callable(value):
        return CustomFunction(value)
    return StaticValue(value)


def _step(value, segment: str):
    """Resolve one path segment: mapping key, attribute, or zero-arg method."""
    if isinstance(value, Mapping):
        return value.get(segment, _MISSING)

    try:
        attr = getattr(value, segment)
    except AttributeError:
        return _MISSING

    if inspect.ismethod(attr):
        try:
            inspect.signature(attr).bind()
        except TypeError:
            # Accessor needs arguments; not resolvable from a path
            return _MISSING
        return attr()

    return attr


class EventMappingRule(BaseModel):
    """Binds a host event to a notification type.

    ``notification_type`` is optional here so that a rule can be switched
    off with just ``{"enabled": False}``; the mapper enforces it when the
    rule is actually used.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    notification_type: str | None = None
    notifiable: Descriptor | None = None
    data: Descriptor | None = None
    condition: Callable[[Any], Any] | None = None
    enabled: bool = True

    @field_validator("notifiable", "data", mode="before")
    @classmethod
    def coerce_descriptor(cls, value):
        return as_descriptor(value)

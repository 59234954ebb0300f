"""Exceptions raised by the strict accessors.

The lenient accessors never raise for data problems; they report absence
through the existence flag and malformed values through the zero value.
``NameValues.strict`` turns both conditions into exceptions instead.
"""

from __future__ import annotations

from typing import Any


class NameValuesError(Exception):
    """Base class for every data error raised by this package."""


class NameNotFoundError(NameValuesError, KeyError):
    """The requested name is not present in the collection."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"name not found: {self.name!r}"


class CoercionError(NameValuesError, ValueError):
    """A stored value cannot be converted to the requested type.

    Attributes:
        name:   Name the value was stored under (``None`` when coercing a
                bare value).
        target: The requested ``ScalarType``.
        value:  The raw stored value.
    """

    def __init__(self, value: Any, target: Any, name: str | None = None) -> None:
        self.name = name
        self.target = target
        self.value = value
        super().__init__(value, target, name)

    def __str__(self) -> str:
        where = f" for {self.name!r}" if self.name is not None else ""
        return f"cannot convert {self.value!r} to {self.target.value}{where}"

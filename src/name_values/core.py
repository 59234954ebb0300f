"""Value model: the stored-value variant, target types, and the record type.

Exports
-------
ValueKind
    Closed set of native representations a stored value can have.

StoredValue
    A raw value tagged with its ``ValueKind``.  Build one with
    ``StoredValue.classify(raw)``.

ScalarType
    The targets the coercion engine can produce, each with its zero value.

NameValue
    A single ``(name, value)`` transport record.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


# ─────────────────────────────────────────────────────────────────────────────
# Stored values
# ─────────────────────────────────────────────────────────────────────────────


class ValueKind(enum.Enum):
    """Native representation of a stored value."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DECIMAL = "decimal"
    TIMESTAMP = "timestamp"
    NONE = "none"
    OTHER = "other"


@dataclass(frozen=True)
class StoredValue:
    """A raw value together with its kind.

    ``classify`` is the only place that inspects the Python type of a raw
    value; casters branch on ``kind`` instead.
    """

    kind: ValueKind
    raw: Any

    @classmethod
    def classify(cls, raw: Any) -> StoredValue:
        # bool before int: bool is an int subclass
        if raw is None:
            kind = ValueKind.NONE
        elif isinstance(raw, bool):
            kind = ValueKind.BOOLEAN
        elif isinstance(raw, str):
            kind = ValueKind.STRING
        elif isinstance(raw, int):
            kind = ValueKind.INTEGER
        elif isinstance(raw, float):
            kind = ValueKind.FLOAT
        elif isinstance(raw, Decimal):
            kind = ValueKind.DECIMAL
        elif isinstance(raw, datetime):
            kind = ValueKind.TIMESTAMP
        else:
            kind = ValueKind.OTHER
        return cls(kind, raw)

    @property
    def is_text(self) -> bool:
        return self.kind is ValueKind.STRING


# ─────────────────────────────────────────────────────────────────────────────
# Coercion targets
# ─────────────────────────────────────────────────────────────────────────────


class ScalarType(enum.Enum):
    """Types the coercion engine can produce.

    ``INT`` is an unbounded Python ``int``; ``INT64`` is the same value
    restricted to the signed 64-bit range.
    """

    STRING = "string"
    INT = "int"
    INT64 = "int64"
    FLOAT64 = "float64"
    BOOL = "bool"
    DECIMAL = "decimal"

    @property
    def zero(self) -> Any:
        return _ZEROS[self]()

    @classmethod
    def for_python_type(cls, target: type) -> ScalarType:
        """Map a Python type to its scalar target.

        Raises:
            TypeError: *target* is not one of ``str``, ``int``, ``float``,
                ``bool`` or ``Decimal``.
        """
        try:
            return _PYTHON_TYPES[target]
        except (KeyError, TypeError):
            raise TypeError(f"unsupported target type: {target!r}") from None


_ZEROS = {
    ScalarType.STRING: str,
    ScalarType.INT: int,
    ScalarType.INT64: int,
    ScalarType.FLOAT64: float,
    ScalarType.BOOL: bool,
    ScalarType.DECIMAL: Decimal,
}

_PYTHON_TYPES = {
    str: ScalarType.STRING,
    int: ScalarType.INT,
    float: ScalarType.FLOAT64,
    bool: ScalarType.BOOL,
    Decimal: ScalarType.DECIMAL,
}


# ─────────────────────────────────────────────────────────────────────────────
# Record
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class NameValue(Generic[T]):
    """A single strongly-typed name-value pair.

    Attributes:
        name:       Entry name.  Case is kept as given.
        value:      The typed value, or ``None`` for an absent value.
        value_type: Declared type of ``value``; used to render ``None``.
    """

    name: str
    value: Optional[T] = None
    value_type: Optional[type] = None

    def display(self) -> str:
        """Render ``value`` with the interpolation display rules."""
        from .template import display

        hint = self.value_type if self.value_type is not None else type(self.value)
        return display(self.value, hint)

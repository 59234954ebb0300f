"""Coercion engine: turning a stored value into a requested scalar type.

Every target type has one *caster*, a callable ``(StoredValue) -> value``
that raises ``CoercionError`` when the stored value cannot be converted.
Casters try, in order:

1. the native representation, when it already matches the target;
2. a parse of the text, when the stored value is a string;
3. nothing else (the conversion fails).

``Coercer`` wraps the caster table.  ``Coercer.convert`` is strict and lets
``CoercionError`` through; ``Coercer.coerce`` is lenient and returns the
target's zero value instead.

Exports
-------
BUILTIN_CASTERS
    Default caster table keyed by ``ScalarType``.

TRUE_LITERALS
    Strings that the default boolean caster maps to ``True``.

make_bool_caster
    Build a boolean caster around a custom literal set.

Coercer
    Caster table plus the strict and lenient entry points.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Mapping

import regex

from .core import ScalarType, StoredValue, ValueKind
from .exceptions import CoercionError
from .logger import logger

Caster = Callable[[StoredValue], Any]

TRUE_LITERALS: frozenset[str] = frozenset({"true", "yes", "1", "-1", "on"})

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# ASCII digits only; int() and float() would also take whitespace,
# underscores and non-ASCII digits.
_INT_PATTERN = regex.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = regex.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    regex.IGNORECASE,
)
_DECIMAL_PATTERN = regex.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_DECIMAL_NOISE = regex.compile(r"[, ]")


# ─────────────────────────────────────────────────────────────────────────────
# Built-in casters
# ─────────────────────────────────────────────────────────────────────────────


def cast_string(stored: StoredValue) -> str:
    if stored.kind is ValueKind.STRING:
        return stored.raw
    raise CoercionError(stored.raw, ScalarType.STRING)


def _parse_int(stored: StoredValue, target: ScalarType) -> int:
    if stored.kind is ValueKind.INTEGER:
        return stored.raw
    if stored.is_text and _INT_PATTERN.fullmatch(stored.raw):
        return int(stored.raw)
    raise CoercionError(stored.raw, target)


def cast_int(stored: StoredValue) -> int:
    return _parse_int(stored, ScalarType.INT)


def cast_int64(stored: StoredValue) -> int:
    value = _parse_int(stored, ScalarType.INT64)
    if not INT64_MIN <= value <= INT64_MAX:
        raise CoercionError(stored.raw, ScalarType.INT64)
    return value


def cast_float64(stored: StoredValue) -> float:
    if stored.kind is ValueKind.FLOAT:
        return stored.raw
    if stored.is_text and _FLOAT_PATTERN.fullmatch(stored.raw):
        return float(stored.raw)
    raise CoercionError(stored.raw, ScalarType.FLOAT64)


def make_bool_caster(literals: Iterable[str]) -> Caster:
    """Return a boolean caster that maps exactly *literals* to ``True``.

    Matching is case-sensitive.  Every other string maps to ``False``, so the
    caster only fails for values that are neither boolean nor text.
    """
    true_set = frozenset(literals)

    def cast_bool(stored: StoredValue) -> bool:
        if stored.kind is ValueKind.BOOLEAN:
            return stored.raw
        if stored.is_text:
            return stored.raw in true_set
        raise CoercionError(stored.raw, ScalarType.BOOL)

    return cast_bool


def cast_decimal(stored: StoredValue) -> Decimal:
    """Decimal caster.

    Accepts decimals as-is, integers exactly, finite floats through their
    shortest round-trip representation, and text with thousands separators
    and spaces removed (``"10,281,028.4321"`` → ``Decimal("10281028.4321")``).
    """
    kind = stored.kind
    if kind is ValueKind.DECIMAL:
        return stored.raw
    if kind is ValueKind.INTEGER:
        return Decimal(stored.raw)
    if kind is ValueKind.FLOAT and math.isfinite(stored.raw):
        return Decimal(repr(stored.raw))
    if kind is ValueKind.STRING:
        text = _DECIMAL_NOISE.sub("", stored.raw)
        if _DECIMAL_PATTERN.fullmatch(text):
            try:
                return Decimal(text)
            except InvalidOperation:
                pass
    raise CoercionError(stored.raw, ScalarType.DECIMAL)


BUILTIN_CASTERS: dict[ScalarType, Caster] = {
    ScalarType.STRING: cast_string,
    ScalarType.INT: cast_int,
    ScalarType.INT64: cast_int64,
    ScalarType.FLOAT64: cast_float64,
    ScalarType.BOOL: make_bool_caster(TRUE_LITERALS),
    ScalarType.DECIMAL: cast_decimal,
}


# ─────────────────────────────────────────────────────────────────────────────
# Coercer
# ─────────────────────────────────────────────────────────────────────────────


class Coercer:
    """Dispatch a stored value to the caster for the requested type.

    Configuration
    -------------
    casters
        ``None``    → ``BUILTIN_CASTERS``.
        ``Mapping`` → ``{ScalarType: caster}`` entries that override the
        built-in ones; targets not listed keep the built-in caster.

    bool_literals
        ``None``    → ``TRUE_LITERALS``.
        iterable    → replacement set of strings that mean ``True``.
        Ignored when *casters* supplies its own ``ScalarType.BOOL`` caster.
    """

    def __init__(
            self,
            *,
            casters: Mapping[ScalarType, Caster] | None = None,
            bool_literals: Iterable[str] | None = None,
    ) -> None:
        table = dict(BUILTIN_CASTERS)
        if bool_literals is not None:
            table[ScalarType.BOOL] = make_bool_caster(bool_literals)
        if casters:
            table.update(casters)
        self._casters = table

    def convert(self, stored: StoredValue, target: ScalarType, name: str | None = None) -> Any:
        """Strict conversion.

        Custom casters may signal failure with ``ValueError``, ``TypeError``
        or ``ArithmeticError`` as well; those are re-raised as
        ``CoercionError``.

        Raises:
            CoercionError: *stored* cannot be converted to *target*.
        """
        try:
            return self._casters[target](stored)
        except CoercionError as exc:
            if exc.name is None and name is not None:
                exc.name = name
            raise
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise CoercionError(stored.raw, target, name) from exc

    def coerce(self, stored: StoredValue, target: ScalarType, name: str | None = None) -> Any:
        """Lenient conversion: the target's zero value replaces any failure."""
        try:
            return self.convert(stored, target, name)
        except CoercionError as exc:
            logger.debug("%s; using zero value", exc)
            return target.zero


DEFAULT_COERCER = Coercer()

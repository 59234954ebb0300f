"""Template interpolation: everything that touches ``${…}`` syntax.

Exports
-------
display
    Render any stored value as the string used inside an interpolated
    template.

Interpolator
    Substitutes ``${name}`` placeholders with values from a collection and
    reports the substituted values in order of occurrence.

interpolate
    Module-level shortcut over a collection or a plain mapping.

Display rules
-------------
* ``str``       – as-is
* ``bool``      – ``"true"`` / ``"false"``
* ``int``       – base 10
* ``float``     – six fixed decimals (``3.5`` → ``"3.500000"``)
* ``Decimal``   – fixed-point notation
* ``datetime``  – RFC 3339 to the second, single-quoted
* ``None``      – depends on the type hint: ``""`` for text, ``"0"`` for
  numbers, ``"false"`` for booleans, the quoted zero timestamp for datetimes
* anything else – ``""``
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any, List, Mapping, Tuple

import regex

from .core import StoredValue, ValueKind

if TYPE_CHECKING:
    from .collection import NameValues

INTERPOLATE_PATTERN = r"\$\{(\w*)\}"
FALLBACK = "0"

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


# ─────────────────────────────────────────────────────────────────────────────
# Display
# ─────────────────────────────────────────────────────────────────────────────


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None or value.utcoffset() is None:
        value = value.replace(tzinfo=timezone.utc)
    stamp = value.replace(tzinfo=None).isoformat(timespec="seconds")
    offset = value.utcoffset()
    if not offset:
        return f"'{stamp}Z'"
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"'{stamp}{sign}{hours:02d}:{minutes:02d}'"


def _display_none(hint: Any) -> str:
    if hint is bool:
        return "false"
    if hint in (int, float, Decimal):
        return "0"
    if hint is datetime:
        return _format_timestamp(_ZERO_TIME)
    return ""


def display(value: Any, hint: Any = None) -> str:
    """Render *value* as a display string.

    *hint* is only consulted when *value* is ``None`` and names the type the
    value would have had.
    """
    kind = StoredValue.classify(value).kind
    if kind is ValueKind.NONE:
        return _display_none(hint)
    if kind is ValueKind.STRING:
        return value
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.INTEGER:
        return str(value)
    if kind in (ValueKind.FLOAT, ValueKind.DECIMAL):
        return f"{value:f}"
    if kind is ValueKind.TIMESTAMP:
        return _format_timestamp(value)
    return ""


# ─────────────────────────────────────────────────────────────────────────────
# Interpolator
# ─────────────────────────────────────────────────────────────────────────────


class Interpolator:
    """Expand ``${name}`` placeholders against a name-value mapping.

    Each placeholder is looked up case-insensitively.  A hit is replaced by
    ``display(value)`` and the raw value is recorded; a miss is replaced by
    *fallback* and *fallback* is recorded.  The text produced by a
    substitution is not scanned again.

    Configuration
    -------------
    pattern
        Placeholder regex; group 1 is the name.  Default ``\\$\\{(\\w*)\\}``.
        Compiled with ``regex.ASCII``, so ``\\w`` is ``[0-9A-Za-z_]``.

    fallback
        Replacement for unknown names.  Default ``"0"``, which works as a
        positional argument for both text and numeric parameters.

    timeout
        Seconds allowed for one scan of a template.  Exceeding it raises
        ``TimeoutError``.
    """

    def __init__(
            self,
            *,
            pattern: str = INTERPOLATE_PATTERN,
            fallback: str = FALLBACK,
            timeout: float = 2.0,
    ) -> None:
        self._pattern = regex.compile(pattern, regex.ASCII)
        self._fallback = fallback
        self._timeout = timeout

    def interpolate(self, template: str, values: Mapping[str, Any]) -> Tuple[str, List[Any]]:
        """Substitute every placeholder in *template*.

        Args:
            template: Text containing ``${name}`` placeholders.
            values:   Mapping with lowercase keys, normally a ``NameValues``.

        Returns:
            ``(text, found)`` where *found* lists the substituted values in
            order of occurrence, repeated placeholders included.
        """
        found: List[Any] = []

        def _replace(match: regex.Match) -> str:
            name = match.group(1).lower()
            if name in values:
                value = values[name]
                found.append(value)
                return display(value)
            found.append(self._fallback)
            return self._fallback

        try:
            text = self._pattern.sub(_replace, template, timeout=self._timeout)
        except TimeoutError:
            raise TimeoutError(f"Interpolation exceeded timeout of {self._timeout}s")
        return text, found


DEFAULT_INTERPOLATOR = Interpolator()


def interpolate(template: str, values: NameValues | Mapping[str, Any]) -> Tuple[str, List[Any]]:
    """Interpolate *template* against *values*.

    A plain mapping is wrapped in a ``NameValues`` first so that its keys are
    normalized and the default ``Interpolator`` applies; a collection uses its
    own interpolator.
    """
    from .collection import NameValues

    if not isinstance(values, NameValues):
        values = NameValues(values)
    return values.interpolate(template)

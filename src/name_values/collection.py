"""The name-value collection and its typed accessors.

``NameValues`` is a read-only, case-insensitive mapping.  Keys are lowercased
once, when the collection is built; afterwards the collection never changes
and may be shared between threads.

Every typed accessor returns ``(value, existed)``:

* ``existed`` is ``False`` only when the name is absent.  The value is then
  the target type's zero value (or ``None`` for the ``ref_*`` accessors).
* A present value that cannot be converted still reports ``existed=True``
  and yields the zero value.  Use ``strict`` to tell the two apart.

Array accessors return an empty list when the name is absent and a
single-element list otherwise.  ``strings`` is the exception: it splits the
stored text on commas.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import jmespath

from .casters import DEFAULT_COERCER, Coercer
from .core import NameValue, ScalarType, StoredValue
from .exceptions import NameNotFoundError
from .jmes_ext import JP_OPTIONS
from .logger import logger
from .ordering import sort_by_key
from .template import DEFAULT_INTERPOLATOR, Interpolator

PairsInput = Union[Mapping[str, Any], Iterable[Union[Tuple[str, Any], NameValue]]]

_MISSING = object()


def _iter_pairs(pairs: PairsInput) -> Iterator[Tuple[str, Any]]:
    if isinstance(pairs, Mapping):
        yield from pairs.items()
        return
    for item in pairs:
        if isinstance(item, NameValue):
            yield item.name, item.value
        else:
            try:
                name, value = item
            except (TypeError, ValueError):
                raise TypeError(f"pair must be a (name, value) tuple, not {type(item).__name__}") from None
            yield name, value


def normalize(pairs: PairsInput) -> dict[str, Any]:
    """Return a new dict with every key lowercased.

    When two names fold to the same key only one value survives; which one
    depends on the iteration order of *pairs* and is not part of the
    contract.

    Raises:
        TypeError: a name is not a string, or an item is not a
            ``(name, value)`` pair.
    """
    normalized: dict[str, Any] = {}
    for name, value in _iter_pairs(pairs):
        if not isinstance(name, str):
            raise TypeError(f"name must be a string, not {type(name).__name__}")
        key = name.lower()
        if key in normalized:
            logger.debug("Name %r collides with an existing entry; replacing it", name)
        normalized[key] = value
    return normalized


class NameValues(Mapping[str, Any]):
    """Case-insensitive, read-only mapping of names to loosely typed values.

    Args:
        pairs:        A mapping, or an iterable of ``(name, value)`` tuples or
                      ``NameValue`` records.  The input is copied.
        coercer:      Caster table used by the typed accessors.  ``None`` →
                      the built-in casters.
        interpolator: Placeholder engine used by ``interpolate``.  ``None`` →
                      ``${name}`` placeholders with a ``"0"`` fallback.

    Example::

        nv = NameValues({"Age": "48", "Name": "Zaldy"})
        nv.int("AGE")                          # (48, True)
        nv.interpolate("${name} is ${age}")    # ("Zaldy is 48", ["Zaldy", "48"])
    """

    def __init__(
            self,
            pairs: PairsInput = (),
            *,
            coercer: Coercer | None = None,
            interpolator: Interpolator | None = None,
    ) -> None:
        self._pairs = normalize(pairs)
        self._coercer = coercer if coercer is not None else DEFAULT_COERCER
        self._interpolator = interpolator if interpolator is not None else DEFAULT_INTERPOLATOR

    def derive(self, pairs: PairsInput) -> NameValues:
        """Build a new collection with the same coercer and interpolator."""
        return NameValues(pairs, coercer=self._coercer, interpolator=self._interpolator)

    # -- Mapping protocol ---------------------------------------------------

    def __getitem__(self, name: str) -> Any:
        if not isinstance(name, str):
            raise KeyError(name)
        return self._pairs[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._pairs

    def __iter__(self) -> Iterator[str]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._pairs!r})"

    # -- internal -----------------------------------------------------------

    def _typed(self, name: str, target: ScalarType) -> Tuple[Any, bool]:
        raw = self._pairs.get(name.lower(), _MISSING)
        if raw is _MISSING:
            return target.zero, False
        return self._coercer.coerce(StoredValue.classify(raw), target, name), True

    def _typed_ref(self, name: str, target: ScalarType) -> Tuple[Any, bool]:
        value, exists = self._typed(name, target)
        return (value if exists else None), exists

    def _typed_list(self, name: str, target: ScalarType) -> list:
        value, exists = self._typed(name, target)
        return [value] if exists else []

    # -- membership & raw access --------------------------------------------

    def exists(self, name: str) -> bool:
        """Return whether *name* is present, ignoring case."""
        return name.lower() in self._pairs

    def plain(self, name: str) -> Tuple[Any, bool]:
        """Return the stored value as-is, without any coercion."""
        raw = self._pairs.get(name.lower(), _MISSING)
        if raw is _MISSING:
            return None, False
        return raw, True

    def ref_plain(self, name: str) -> Tuple[Any, bool]:
        return self.plain(name)

    def to_list(self) -> List[Any]:
        """Return the stored values in iteration order."""
        return list(self._pairs.values())

    # -- typed scalars ------------------------------------------------------

    def string(self, name: str) -> Tuple[str, bool]:
        return self._typed(name, ScalarType.STRING)

    def int(self, name: str) -> Tuple[int, bool]:
        return self._typed(name, ScalarType.INT)

    def int64(self, name: str) -> Tuple[int, bool]:
        return self._typed(name, ScalarType.INT64)

    def float64(self, name: str) -> Tuple[float, bool]:
        return self._typed(name, ScalarType.FLOAT64)

    def bool(self, name: str) -> Tuple[bool, bool]:
        """Return the value as a boolean.

        The strings ``"true"``, ``"yes"``, ``"1"``, ``"-1"`` and ``"on"`` are
        ``True``; any other string is ``False``.
        """
        return self._typed(name, ScalarType.BOOL)

    def decimal(self, name: str) -> Tuple[Decimal, bool]:
        """Return the value as a ``Decimal``; commas and spaces in text are ignored."""
        return self._typed(name, ScalarType.DECIMAL)

    # -- arrays -------------------------------------------------------------

    def strings(self, name: str) -> List[str]:
        """Return the value split on commas; ``[]`` when absent."""
        value, exists = self.string(name)
        if not exists:
            return []
        return value.split(",")

    def ints(self, name: str) -> List[int]:
        return self._typed_list(name, ScalarType.INT)

    def int64s(self, name: str) -> List[int]:
        return self._typed_list(name, ScalarType.INT64)

    def float64s(self, name: str) -> List[float]:
        return self._typed_list(name, ScalarType.FLOAT64)

    def bools(self, name: str) -> List[bool]:
        return self._typed_list(name, ScalarType.BOOL)

    def decimals(self, name: str) -> List[Decimal]:
        return self._typed_list(name, ScalarType.DECIMAL)

    # -- references ---------------------------------------------------------

    def ref_string(self, name: str) -> Tuple[Optional[str], bool]:
        return self._typed_ref(name, ScalarType.STRING)

    def ref_int(self, name: str) -> Tuple[Optional[int], bool]:
        return self._typed_ref(name, ScalarType.INT)

    def ref_int64(self, name: str) -> Tuple[Optional[int], bool]:
        return self._typed_ref(name, ScalarType.INT64)

    def ref_float64(self, name: str) -> Tuple[Optional[float], bool]:
        return self._typed_ref(name, ScalarType.FLOAT64)

    def ref_bool(self, name: str) -> Tuple[Optional[bool], bool]:
        return self._typed_ref(name, ScalarType.BOOL)

    def ref_decimal(self, name: str) -> Tuple[Optional[Decimal], bool]:
        return self._typed_ref(name, ScalarType.DECIMAL)

    # -- generic ------------------------------------------------------------

    def typed(self, name: str, target: type) -> Tuple[Any, bool]:
        """Typed lookup by Python type.

        *target* is one of ``str``, ``int``, ``float``, ``bool`` or
        ``Decimal``; the lookup behaves like the matching typed accessor.

        Raises:
            TypeError: *target* is not a supported type.
        """
        return self._typed(name, ScalarType.for_python_type(target))

    def typed_ref(self, name: str, target: type) -> Tuple[Any, bool]:
        """Like ``typed`` but the value is ``None`` when the name is absent."""
        return self._typed_ref(name, ScalarType.for_python_type(target))

    def strict(self, name: str, target: Union[ScalarType, type]) -> Any:
        """Return the converted value or raise.

        Raises:
            NameNotFoundError: *name* is absent.
            CoercionError:     the stored value cannot be converted.
            TypeError:         *target* is not a supported type.
        """
        if not isinstance(target, ScalarType):
            target = ScalarType.for_python_type(target)
        raw = self._pairs.get(name.lower(), _MISSING)
        if raw is _MISSING:
            raise NameNotFoundError(name)
        return self._coercer.convert(StoredValue.classify(raw), target, name)

    # -- derived views ------------------------------------------------------

    def interpolate(self, template: str) -> Tuple[str, List[Any]]:
        """Replace ``${name}`` placeholders; see ``Interpolator.interpolate``."""
        return self._interpolator.interpolate(template, self)

    def sort_by_key(self, key_order: Optional[Sequence[str]]) -> NameValues:
        """Return the entries named in *key_order*, in that order."""
        return sort_by_key(self, key_order)

    def search(self, expression: str) -> Any:
        """Evaluate a JMESPath *expression* against the normalized entries.

        Keys are lowercase, so identifiers in *expression* must be too.
        ``split(s, sep)`` and ``lower(s)`` are available as functions.
        """
        return jmespath.search(expression, self._pairs, options=JP_OPTIONS)

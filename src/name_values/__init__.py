"""Typed access to case-insensitive name-value pairs."""

from .casters import BUILTIN_CASTERS, TRUE_LITERALS, Coercer, make_bool_caster
from .collection import NameValues, normalize
from .core import NameValue, ScalarType, StoredValue, ValueKind
from .exceptions import CoercionError, NameNotFoundError, NameValuesError
from .logger import enable_logging, set_logging_level
from .ordering import sort_by_key
from .template import INTERPOLATE_PATTERN, Interpolator, display, interpolate

__all__ = [
    # collection
    "NameValues",
    "NameValue",
    "normalize",
    # coercion
    "Coercer",
    "BUILTIN_CASTERS",
    "TRUE_LITERALS",
    "make_bool_caster",
    "ScalarType",
    "StoredValue",
    "ValueKind",
    # templates & ordering
    "Interpolator",
    "INTERPOLATE_PATTERN",
    "interpolate",
    "display",
    "sort_by_key",
    # errors & logging
    "NameValuesError",
    "NameNotFoundError",
    "CoercionError",
    "set_logging_level",
    "enable_logging",
]

from __future__ import annotations

from typing import List

import jmespath
from jmespath import functions as _jp_funcs


class _UserFunctions(_jp_funcs.Functions):
    """Custom JMESPath functions available to ``NameValues.search``."""

    @_jp_funcs.signature({'types': ['string']}, {'types': ['string']})
    def _func_split(self, s: str, sep: str) -> List[str]:
        """Split a comma-separated (or *sep*-separated) field into a list."""
        return s.split(sep)

    @_jp_funcs.signature({'types': ['string']})
    def _func_lower(self, s: str) -> str:
        """Lowercase a string, matching how collection keys are stored."""
        return s.lower()


USER_FUNCTIONS = _UserFunctions()
JP_OPTIONS = jmespath.Options(custom_functions=USER_FUNCTIONS)

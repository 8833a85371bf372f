"""Built-in rules: aggregate all categories in priority order."""

from tsnarrow.rules.builtin.api import ALL_API_RULES
from tsnarrow.rules.builtin.arrays import ALL_ARRAY_RULES
from tsnarrow.rules.builtin.data import ALL_DATA_RULES
from tsnarrow.rules.builtin.dom import ALL_DOM_RULES
from tsnarrow.rules.builtin.events import ALL_EVENT_RULES
from tsnarrow.rules.builtin.functions import ALL_FUNCTION_RULES
from tsnarrow.rules.models import ReplacementRule

ALL_BUILTIN_RULES: list[ReplacementRule] = [
    *ALL_EVENT_RULES,
    *ALL_DOM_RULES,
    *ALL_DATA_RULES,
    *ALL_ARRAY_RULES,
    *ALL_FUNCTION_RULES,
    *ALL_API_RULES,
]

__all__ = ["ALL_BUILTIN_RULES"]

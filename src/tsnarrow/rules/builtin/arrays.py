"""Well-known array element types (surface pattern ``name: any[]``)."""

from tsnarrow.rules.models import ReplacementRule

ITEMS_ARRAY = ReplacementRule(
    id="ITEMS_ARRAY",
    pattern=r"items: any\[\]",
    replacement="unknown[]",
    description="Generic items array",
)

RESULTS_ARRAY = ReplacementRule(
    id="RESULTS_ARRAY",
    pattern=r"results: any\[\]",
    replacement="unknown[]",
    description="Results array",
)

USERS_ARRAY = ReplacementRule(
    id="USERS_ARRAY",
    pattern=r"users: any\[\]",
    replacement="{ id: string; name: string; [key: string]: unknown }[]",
    description="Users array with common properties",
)

ROWS_ARRAY = ReplacementRule(
    id="ROWS_ARRAY",
    pattern=r"rows: any\[\]",
    replacement="Record<string, unknown>[]",
    description="Data rows array",
)

ALL_ARRAY_RULES = [ITEMS_ARRAY, RESULTS_ARRAY, USERS_ARRAY, ROWS_ARRAY]

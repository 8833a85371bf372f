"""Common data-carrying objects.

These match in every context: a parameter called ``data`` is a keyed record
whether it sits in a function signature or an interface.
"""

from tsnarrow.rules.models import ReplacementRule

RECORD = "Record<string, unknown>"

DATA_OBJECT = ReplacementRule(
    id="DATA_OBJECT",
    pattern=r"data: any",
    replacement=RECORD,
    description="Generic data object",
)

OPTIONS_OBJECT = ReplacementRule(
    id="OPTIONS_OBJECT",
    pattern=r"options: any",
    replacement=RECORD,
    description="Options configuration object",
)

CONFIG_OBJECT = ReplacementRule(
    id="CONFIG_OBJECT",
    pattern=r"config: any",
    replacement=RECORD,
    description="Configuration object",
)

PROPS_OBJECT = ReplacementRule(
    id="PROPS_OBJECT",
    pattern=r"props: any",
    replacement=RECORD,
    description="Component props object",
)

STATE_OBJECT = ReplacementRule(
    id="STATE_OBJECT",
    pattern=r"state: any",
    replacement=RECORD,
    description="Component state object",
)

CONTEXT_OBJECT = ReplacementRule(
    id="CONTEXT_OBJECT",
    pattern=r"context: any",
    replacement=RECORD,
    description="Context object",
)

ALL_DATA_RULES = [
    DATA_OBJECT,
    OPTIONS_OBJECT,
    CONFIG_OBJECT,
    PROPS_OBJECT,
    STATE_OBJECT,
    CONTEXT_OBJECT,
]

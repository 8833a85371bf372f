"""Callback-shaped parameters."""

from tsnarrow.rules.models import ReplacementRule

VARIADIC_FUNCTION = "(...args: unknown[]) => unknown"

CALLBACK = ReplacementRule(
    id="CALLBACK",
    pattern=r"callback: any",
    replacement=VARIADIC_FUNCTION,
    usage="function",
    description="Generic callback function",
)

HANDLER = ReplacementRule(
    id="HANDLER",
    pattern=r"handler: any",
    replacement=VARIADIC_FUNCTION,
    usage="function",
    description="Generic event handler function",
)

FN = ReplacementRule(
    id="FN",
    pattern=r"fn: any",
    replacement=VARIADIC_FUNCTION,
    usage="function",
    description="Generic function",
)

FORMATTER = ReplacementRule(
    id="FORMATTER",
    pattern=r"formatter: any",
    replacement="(value: unknown) => string",
    usage="function",
    description="Formatter function",
)

VALIDATOR = ReplacementRule(
    id="VALIDATOR",
    pattern=r"validator: any",
    replacement="(value: unknown) => boolean",
    usage="function",
    description="Validator function",
)

ALL_FUNCTION_RULES = [CALLBACK, HANDLER, FN, FORMATTER, VALIDATOR]

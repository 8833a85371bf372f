"""API and web request shapes, matched inside object/interface bodies."""

from tsnarrow.rules.models import ReplacementRule

RESPONSE_OBJECT = ReplacementRule(
    id="RESPONSE_OBJECT",
    pattern=r"response: any",
    replacement="{ data?: unknown; status?: number; [key: string]: unknown }",
    usage="object",
    description="API response object",
)

ERROR_OBJECT = ReplacementRule(
    id="ERROR_OBJECT",
    pattern=r"error: any",
    replacement="Error | unknown",
    usage="object",
    description="Error object",
)

ROUTE_PARAMS = ReplacementRule(
    id="ROUTE_PARAMS",
    pattern=r"params: any",
    replacement="Record<string, string | number | boolean>",
    usage="object",
    description="Route or query parameters",
)

ALL_API_RULES = [RESPONSE_OBJECT, ERROR_OBJECT, ROUTE_PARAMS]

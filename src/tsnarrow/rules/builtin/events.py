"""React event handler parameters inside JSX."""

from tsnarrow.rules.models import ReplacementRule

_HANDLERS = [
    ("ON_CHANGE", "onChange", "(value: unknown) => void", "Generic change handler"),
    ("ON_CLICK", "onClick", "(event: React.MouseEvent<HTMLElement>) => void", "Click event handler"),
    ("ON_SUBMIT", "onSubmit", "(event: React.FormEvent<HTMLFormElement>) => void", "Form submission handler"),
    ("ON_INPUT", "onInput", "(event: React.FormEvent<HTMLInputElement>) => void", "Input event handler"),
    ("ON_BLUR", "onBlur", "(event: React.FocusEvent<HTMLElement>) => void", "Blur event handler"),
    ("ON_FOCUS", "onFocus", "(event: React.FocusEvent<HTMLElement>) => void", "Focus event handler"),
    ("ON_KEY_DOWN", "onKeyDown", "(event: React.KeyboardEvent<HTMLElement>) => void", "Keyboard event handler"),
    ("ON_KEY_UP", "onKeyUp", "(event: React.KeyboardEvent<HTMLElement>) => void", "Keyboard event handler"),
    ("ON_KEY_PRESS", "onKeyPress", "(event: React.KeyboardEvent<HTMLElement>) => void", "Keyboard event handler"),
]

EVENT_E = ReplacementRule(
    id="EVENT_E",
    pattern=r"e: any",
    replacement="React.SyntheticEvent",
    usage="jsx",
    description="Generic React event handler",
)

EVENT_PARAM = ReplacementRule(
    id="EVENT_PARAM",
    pattern=r"event: any",
    replacement="React.SyntheticEvent",
    usage="jsx",
    description="Generic React event handler",
)

HANDLER_RULES = [
    ReplacementRule(
        id=rule_id,
        pattern=rf"{name}: any",
        replacement=replacement,
        usage="jsx",
        description=description,
    )
    for rule_id, name, replacement, description in _HANDLERS
]

ALL_EVENT_RULES = [EVENT_E, EVENT_PARAM, *HANDLER_RULES]

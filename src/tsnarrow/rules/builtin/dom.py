"""DOM element references."""

from tsnarrow.rules.models import ReplacementRule

_REFS = [
    ("REF", "ref", "HTMLElement", "Generic DOM reference"),
    ("BUTTON_REF", "buttonRef", "HTMLButtonElement", "Button DOM reference"),
    ("INPUT_REF", "inputRef", "HTMLInputElement", "Input DOM reference"),
    ("FORM_REF", "formRef", "HTMLFormElement", "Form DOM reference"),
    ("DIV_REF", "divRef", "HTMLDivElement", "Div DOM reference"),
]

ALL_DOM_RULES = [
    ReplacementRule(
        id=rule_id,
        pattern=rf"{name}: any",
        replacement=f"React.RefObject<{element}>",
        usage="dom",
        description=description,
    )
    for rule_id, name, element, description in _REFS
]

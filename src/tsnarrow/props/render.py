"""Render a props mapping as a TypeScript interface declaration."""

from __future__ import annotations

import json
import re
from typing import Iterable, List

from tsnarrow.props.models import PropDescriptor

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][\w$]*")


def _prop_key(name: str) -> str:
    if _IDENTIFIER_RE.fullmatch(name):
        return name
    return json.dumps(name)


def render_interface(component: str, props: Iterable[PropDescriptor]) -> str:
    lines: List[str] = [
        "/**",
        f" * Props for the {component} component",
        " */",
        f"interface {component}Props {{",
    ]

    for prop in props:
        if prop.description:
            lines.append("  /**")
            lines.append(f"   * {prop.description}")
            lines.append("   */")
        marker = "" if prop.required else "?"
        lines.append(f"  {_prop_key(prop.name)}{marker}: {prop.type};")

    lines.append("}")
    lines.append("")
    lines.append("/**")
    lines.append(f" * Default props for the {component} component")
    lines.append(" */")
    lines.append(f"type {component}DefaultProps = Partial<{component}Props>;")
    return "\n".join(lines) + "\n"

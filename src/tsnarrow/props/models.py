"""Prop descriptors and interface generation results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

UNKNOWN = "unknown"


@dataclass
class PropDescriptor:
    """One inferred or declared component prop.

    Only non-declared props whose type is still ``unknown`` may be upgraded;
    a declared or already-refined type is never overwritten.
    """

    name: str
    type: str = UNKNOWN
    required: bool = True
    description: str = ""
    source: str = "usage"  # declared | usage | destructured

    @property
    def upgradable(self) -> bool:
        return self.source != "declared" and self.type == UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ComponentProps:
    name: str
    kind: str  # function | arrow | memo | class
    props: List[PropDescriptor] = field(default_factory=list)


@dataclass
class InterfaceResult:
    component: str
    component_kind: Optional[str] = None
    props: List[PropDescriptor] = field(default_factory=list)
    interface_text: str = ""
    file_path: str = ""
    output_path: Optional[str] = None
    success: bool = True
    error: Optional[Dict[str, str]] = None

    @property
    def written_to_file(self) -> bool:
        return self.output_path is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component,
            "component_kind": self.component_kind,
            "props": [p.to_dict() for p in self.props],
            "interface": self.interface_text,
            "file_path": self.file_path,
            "output_path": self.output_path,
            "written_to_file": self.written_to_file,
            "success": self.success,
            "error": self.error,
        }

"""React component props extraction and interface rendering."""

from tsnarrow.props.extractor import PropExtractor, extract_props
from tsnarrow.props.models import ComponentProps, InterfaceResult, PropDescriptor
from tsnarrow.props.render import render_interface

__all__ = [
    "ComponentProps",
    "InterfaceResult",
    "PropDescriptor",
    "PropExtractor",
    "extract_props",
    "render_interface",
]

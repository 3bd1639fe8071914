"""Code Envelope - wrap a serialized root back into an importable module."""

from core.vocabulary import ICON_PACKAGE, ICONS, LAYOUT_PRIMITIVES, UI_COMPONENTS, component_import_path
from .models import Node
from .serializer import serialize


def _build_header() -> str:
    lines = ["import React from 'react';"]
    for name in UI_COMPONENTS + LAYOUT_PRIMITIVES:
        lines.append(f"import {{ {name} }} from '{component_import_path(name)}';")
    icons = ",\n".join(f"  {icon}" for icon in ICONS)
    lines.append(f"import {{\n{icons}\n}} from '{ICON_PACKAGE}';")
    return "\n".join(lines)


# Always the full vocabulary: every whitelisted name is in scope whatever the tree uses.
IMPORT_HEADER = _build_header()


def reconstruct_module(root: Node, component_name: str = "App") -> str:
    """
    Build a complete component module around a tree.

    Args:
        root: Root node of the tree
        component_name: Name of the default-exported function

    Returns:
        Module source: import header + ``export default function`` returning the JSX
    """
    return (
        f"{IMPORT_HEADER}\n\n"
        f"export default function {component_name}() {{\n"
        f"  return (\n"
        f"    {serialize(root)}\n"
        f"  );\n"
        f"}}\n"
    )

"""Serializer - Node tree back to JSX text."""

from .models import AttributeValue, Expression, Node


def serialize_attribute(name: str, value: AttributeValue) -> str:
    """
    Render one attribute (without the leading space).

    Embedded quotes are not escaped; a value containing a double quote is
    wrapped in single quotes instead, when it holds none of those.
    """
    if value is True:
        return name
    if isinstance(value, Expression):
        return f"{name}={value.source}"
    if value is False:
        return f"{name}={{false}}"
    if '"' in value and "'" not in value:
        return f"{name}='{value}'"
    return f'{name}="{value}"'


def serialize(node: Node) -> str:
    """
    Render a Node as JSX.

    Childless nodes self-close (``<Card padding="lg" />``); anything with
    children, text included, gets an explicit open/close pair. Fragments
    always use ``<>...</>``.
    """
    attrs = "".join(f" {serialize_attribute(k, v)}" for k, v in node.attributes.items())

    if not node.children and not node.is_fragment:
        return f"<{node.type}{attrs} />"

    inner = "".join(c if isinstance(c, str) else serialize(c) for c in node.children)
    return f"<{node.type}{attrs}>{inner}</{node.type}>"

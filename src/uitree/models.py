"""UI Tree Models."""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from core.id import new_node_id


class Expression(BaseModel):
    """Brace-delimited attribute value kept byte-for-byte, never interpreted."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["expression"] = "expression"
    source: str = Field(..., description="Full text including the outer braces")

    def __str__(self) -> str:
        return self.source


AttributeValue = Union[bool, Expression, str]


class Node(BaseModel):
    """A single element of the parsed UI tree."""

    id: str = Field(default_factory=new_node_id, description="Opaque key, not semantic")
    type: str = Field(..., description="Tag name; empty for a fragment")
    attributes: dict[str, AttributeValue] = Field(default_factory=dict)
    children: list[Union["Node", str]] = Field(default_factory=list)

    @property
    def is_fragment(self) -> bool:
        return self.type == ""

    def element_children(self) -> list["Node"]:
        """Children that are elements, in source order."""
        return [c for c in self.children if isinstance(c, Node)]

    def walk(self):
        """Yield this node and every descendant element, depth first."""
        yield self
        for child in self.element_children():
            yield from child.walk()

    def structure(self) -> tuple:
        """Id-free structural signature; equal signatures mean equal trees."""
        attrs = tuple(
            sorted(
                (name, ("expr", value.source) if isinstance(value, Expression) else (type(value).__name__, value))
                for name, value in self.attributes.items()
            )
        )
        children = tuple(c.structure() if isinstance(c, Node) else c for c in self.children)
        return (self.type, attrs, children)

    def structurally_equal(self, other: "Node") -> bool:
        """Compare type, attribute set and ordered children, ignoring ids."""
        return self.structure() == other.structure()


Node.model_rebuild()

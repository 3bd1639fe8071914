"""Serializer, envelope and round-trip tests."""

import pytest
from hypothesis import given, settings, strategies as st

from core.vocabulary import ICONS, LAYOUT_PRIMITIVES, UI_COMPONENTS
from guard import CodeValidator
from uitree import (
    IMPORT_HEADER,
    Expression,
    Node,
    parse_fragment,
    reconstruct_module,
    serialize,
    transform,
)
from uitree.serializer import serialize_attribute


@pytest.mark.unit
class TestSerializeAttribute:
    def test_boolean(self):
        assert serialize_attribute("disabled", True) == "disabled"

    def test_string(self):
        assert serialize_attribute("variant", "primary") == 'variant="primary"'

    def test_expression_verbatim(self):
        assert serialize_attribute("onClick", Expression(source="{() => go()}")) == "onClick={() => go()}"

    def test_string_with_double_quote_uses_single_quotes(self):
        assert serialize_attribute("title", 'say "hi"') == "title='say \"hi\"'"

    def test_false(self):
        assert serialize_attribute("open", False) == "open={false}"


@pytest.mark.unit
class TestSerialize:
    def test_childless_self_closes(self):
        node = Node(type="Card", attributes={"padding": "lg"})
        assert serialize(node) == '<Card padding="lg" />'

    def test_children_get_pair(self):
        node = Node(type="p", children=["hello ", Node(type="b", children=["world"])])
        assert serialize(node) == "<p>hello <b>world</b></p>"

    def test_fragment(self):
        node = Node(type="", children=[Node(type="br")])
        assert serialize(node) == "<><br /></>"

    def test_empty_fragment(self):
        assert serialize(Node(type="")) == "<></>"

    def test_attribute_order(self):
        node = Node(type="Button", attributes={"variant": "ghost", "disabled": True, "onClick": Expression(source="{f}")})
        assert serialize(node) == '<Button variant="ghost" disabled onClick={f} />'


@pytest.mark.unit
class TestEnvelope:
    def test_header_covers_vocabulary(self):
        for name in UI_COMPONENTS + LAYOUT_PRIMITIVES:
            assert f"import {{ {name} }} from" in IMPORT_HEADER
        for icon in ICONS:
            assert f"  {icon}" in IMPORT_HEADER
        assert IMPORT_HEADER.startswith("import React from 'react';")

    def test_reconstruct_module(self):
        module = reconstruct_module(Node(type="div", children=["hi"]))
        assert "export default function App() {\n  return (\n    <div>hi</div>\n  );\n}" in module

    def test_custom_component_name(self):
        module = reconstruct_module(Node(type="div"), component_name="Landing")
        assert "export default function Landing()" in module

    def test_reconstructed_module_passes_strict_validation(self, sample_component):
        result = transform(sample_component)
        report = CodeValidator().validate(result.canonical_code)
        assert report.ok, report.violations


@pytest.mark.unit
def test_transform_is_canonical(sample_component):
    """Transforming canonical code again gives the same code and tree."""
    first = transform(sample_component)
    second = transform(first.canonical_code)

    assert second.canonical_code == first.canonical_code
    assert second.tree.structurally_equal(first.tree)


# ============================================================================
# Round-trip law: parse(serialize(t)) is structurally equal to t
# ============================================================================

_TAGS = st.sampled_from(["div", "span", "p", "section", "Card", "Stack", "Button", "React.Fragment"])
_ATTR_NAMES = st.from_regex(r"[a-zA-Z][a-zA-Z0-9\-]{0,8}", fullmatch=True)
_STRINGS = st.text(
    alphabet=st.characters(blacklist_characters="\"'", blacklist_categories=("Cs",)),
    max_size=15,
) | st.sampled_from(['say "hi"', "it's", "a > b", "{not an expression}"])
_EXPRESSIONS = st.sampled_from(
    ["{x}", "{() => go(1)}", "{{ a: 1, b: { c: 2 } }}", '{"}"}', "{items.length > 0}", "{<Bell />}", "{`${a}`}"]
).map(lambda source: Expression(source=source))
_ATTRIBUTES = st.dictionaries(_ATTR_NAMES, st.just(True) | _STRINGS | _EXPRESSIONS, max_size=3)
_TEXT = st.text(
    alphabet=st.characters(blacklist_characters="<>{}", blacklist_categories=("Cs",)),
    min_size=1,
    max_size=20,
)


def _node(tag: str, attributes: dict, children: list) -> Node:
    merged: list = []
    for child in children:
        if isinstance(child, str) and merged and isinstance(merged[-1], str):
            merged[-1] += child
        else:
            merged.append(child)
    return Node(type=tag, attributes=attributes, children=merged)


_TREES = st.recursive(
    st.builds(_node, _TAGS, _ATTRIBUTES, st.just([])),
    lambda children: st.builds(_node, _TAGS, _ATTRIBUTES, st.lists(children | _TEXT, max_size=4)),
    max_leaves=12,
)


@pytest.mark.unit
@settings(max_examples=200)
@given(_TREES)
def test_round_trip(tree):
    """Serializing then parsing gives back the same structure."""
    parsed = parse_fragment(serialize(tree))
    assert parsed.structurally_equal(tree)


@pytest.mark.unit
@settings(max_examples=100)
@given(_TREES)
def test_serialize_is_stable(tree):
    """A second serialize/parse pass changes nothing."""
    once = serialize(tree)
    assert serialize(parse_fragment(once)) == once


@pytest.mark.unit
@settings(max_examples=50)
@given(_TREES)
def test_module_round_trip(tree):
    """The full module envelope parses back to the same tree."""
    assert transform(reconstruct_module(tree)).tree.structurally_equal(tree)

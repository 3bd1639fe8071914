"""Attribute parser tests."""

import pytest

from uitree import Expression, MalformedTag, parse_attributes


@pytest.mark.unit
def test_mixed_attributes():
    """Strings, expressions and booleans in one tag."""
    attrs = parse_attributes(' variant="primary" onClick={() => setOpen(!open)} disabled')

    assert attrs == {
        "variant": "primary",
        "onClick": Expression(source="{() => setOpen(!open)}"),
        "disabled": True,
    }


@pytest.mark.unit
def test_single_quoted_value():
    assert parse_attributes("title='He said \"hi\"'") == {"title": 'He said "hi"'}


@pytest.mark.unit
def test_expression_with_nested_braces_and_jsx():
    source = "{{ a: 1, b: { c: '}' } }}"
    attrs = parse_attributes(f"data={source} icon={{<Bell className=\"w-4\" />}}")

    assert attrs["data"] == Expression(source=source)
    assert attrs["icon"] == Expression(source='{<Bell className="w-4" />}')


@pytest.mark.unit
def test_whitespace_around_equals():
    assert parse_attributes('gap = "4"') == {"gap": "4"}


@pytest.mark.unit
def test_spread_stored_as_key():
    attrs = parse_attributes("{...props} className=\"x\"")
    assert attrs == {"{...props}": True, "className": "x"}


@pytest.mark.unit
def test_hyphenated_and_namespaced_names():
    attrs = parse_attributes('aria-label="Close" xlink:href="#a" data-id={id}')
    assert attrs["aria-label"] == "Close"
    assert attrs["xlink:href"] == "#a"
    assert attrs["data-id"] == Expression(source="{id}")


@pytest.mark.unit
def test_unquoted_value():
    assert parse_attributes("tabIndex=0 hidden") == {"tabIndex": "0", "hidden": True}


@pytest.mark.unit
def test_source_order_preserved():
    attrs = parse_attributes('b="1" a="2" c')
    assert list(attrs) == ["b", "a", "c"]


@pytest.mark.unit
def test_empty():
    assert parse_attributes("") == {}
    assert parse_attributes("   \n  ") == {}


@pytest.mark.unit
@pytest.mark.parametrize("text", ['title="open', "title='open", "onClick={() => {"])
def test_unterminated_values(text):
    with pytest.raises(MalformedTag):
        parse_attributes(text)

"""Attribute Parser - raw tag attribute text to a name/value mapping."""

import re

from .errors import MalformedTag
from .models import AttributeValue, Expression
from .scanner import TagScanner

_NAME = re.compile(r"[\w\-:.$]+")
_WHITESPACE = re.compile(r"\s")


def _skip_whitespace(text: str, i: int) -> int:
    while i < len(text) and text[i].isspace():
        i += 1
    return i


def _token_end(text: str, i: int) -> int:
    match = _WHITESPACE.search(text, i)
    return match.start() if match else len(text)


def parse_attributes(text: str) -> dict[str, AttributeValue]:
    """
    Parse a tag's attribute text.

    Supports:
    - Boolean attributes: ``disabled`` -> True
    - String literals: ``variant="primary"`` / ``variant='primary'`` -> "primary"
    - Expressions: ``onClick={() => setOpen(!open)}`` -> Expression, verbatim
      including braces, nested braces, quotes and JSX
    - Spreads: ``{...props}`` -> stored under its own text with value True

    Args:
        text: Everything between the tag name and the closing ``>`` / ``/>``

    Returns:
        Attributes in source order; a repeated name keeps the last value

    Raises:
        MalformedTag: On an unterminated quote or unbalanced expression
    """
    attributes: dict[str, AttributeValue] = {}
    scanner = TagScanner(text)
    i = 0

    while i < len(text):
        if text[i].isspace():
            i += 1
            continue

        if text[i] == "{":
            end = scanner.find_expression_end(i)
            attributes[text[i:end + 1]] = True
            i = end + 1
            continue

        match = _NAME.match(text, i)
        if not match:
            # Not an identifier: keep the token as a bare attribute
            end = _token_end(text, i)
            attributes[text[i:end]] = True
            i = end
            continue

        name = match.group(0)
        j = _skip_whitespace(text, match.end())
        if j >= len(text) or text[j] != "=":
            attributes[name] = True
            i = match.end()
            continue

        j = _skip_whitespace(text, j + 1)
        if j >= len(text):
            raise MalformedTag(f"Attribute '{name}' has no value")

        opener = text[j]
        if opener in "\"'":
            end = text.find(opener, j + 1)
            if end == -1:
                raise MalformedTag(f"Unterminated value for attribute '{name}'", j)
            attributes[name] = text[j + 1:end]
            i = end + 1
        elif opener == "{":
            end = scanner.find_expression_end(j)
            attributes[name] = Expression(source=text[j:end + 1])
            i = end + 1
        else:
            end = _token_end(text, j)
            attributes[name] = text[j:end]
            i = end

    return attributes

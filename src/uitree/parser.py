"""Structural Parser - JSX fragment to a single-root Node tree."""

import re

from core import get_logger
from .attributes import parse_attributes
from .errors import MismatchedTag, MissingReturn, MultipleRoots, NoRootFound
from .models import Node
from .scanner import TagScanner

logger = get_logger(__name__)

_RETURN = re.compile(r"\breturn\s*\(")
_TAG_NAME = re.compile(r"\s*([A-Za-z_$][\w.:\-$]*)?")

ROOT_HOLDER = "__root__"


def extract_return_body(source: str) -> str:
    """
    Cut the JSX out of the default export's ``return ( ... )``.

    The first ``return (`` after ``export default`` wins; modules that export
    at the bottom (``export default App;``) fall back to the first
    ``return (`` anywhere.

    Raises:
        MissingReturn: If no ``return (`` exists
        MalformedTag: If its parenthesis never closes
    """
    export_at = source.find("export default")
    match = _RETURN.search(source, export_at if export_at != -1 else 0) or _RETURN.search(source)
    if not match:
        raise MissingReturn("Could not find a 'return (' statement in generated code")

    open_paren = match.end() - 1
    close_paren = TagScanner(source).find_closing_paren(open_paren)
    return source[open_paren + 1:close_paren]


class JSXParser:
    """Stack-based JSX fragment parser.

    Text between tags becomes string children (whitespace included, so the
    serializer can reproduce formatting). Brace expressions in child position
    are carried as opaque text.
    """

    def __init__(self, jsx: str) -> None:
        self.jsx = jsx
        self.scanner = TagScanner(jsx)
        self.holder = Node(id=ROOT_HOLDER, type=ROOT_HOLDER)
        self.stack: list[Node] = [self.holder]
        self.text = ""

    def parse(self) -> Node:
        """
        Build the tree.

        Raises:
            MalformedTag: Unterminated tag, string or expression
            MismatchedTag: Wrong closing tag, stray closing tag or unclosed element
            NoRootFound: No element at the top level
            MultipleRoots: More than one element at the top level
        """
        jsx = self.jsx
        cursor = 0

        while cursor < len(jsx):
            char = jsx[cursor]
            nxt = jsx[cursor + 1] if cursor + 1 < len(jsx) else ""

            if char == "<" and nxt == "/":
                self._flush_text()
                cursor = self._close_tag(cursor)
            elif char == "<" and (nxt.isalpha() or nxt in "_$>"):
                self._flush_text()
                cursor = self._open_tag(cursor)
            elif char == "{":
                end = self.scanner.find_expression_end(cursor)
                self.text += jsx[cursor:end + 1]
                cursor = end + 1
            else:
                self.text += char
                cursor += 1

        self._flush_text()

        if len(self.stack) > 1:
            unclosed = self.stack[-1].type or "<>"
            raise MismatchedTag(f"Element <{unclosed}> is never closed")

        roots = self.holder.element_children()
        if not roots:
            raise NoRootFound("Failed to parse JSX structure: no root element found")
        if len(roots) > 1:
            raise MultipleRoots(
                f"Expected one root element, found {len(roots)}: "
                + ", ".join(f"<{r.type}>" for r in roots)
            )
        return roots[0]

    def _flush_text(self) -> None:
        if not self.text:
            return
        top = self.stack[-1]
        if top is self.holder:
            if self.text.strip():
                logger.debug("root_text_dropped", text=self.text.strip()[:50])
        else:
            top.children.append(self.text)
        self.text = ""

    def _close_tag(self, cursor: int) -> int:
        end = self.scanner.find_tag_end(cursor + 2)
        name = self.jsx[cursor + 2:end].strip()

        if len(self.stack) == 1:
            raise MismatchedTag(f"Closing tag </{name}> has no open element", cursor)

        top = self.stack[-1]
        if name != top.type:
            raise MismatchedTag(f"Expected </{top.type}> but found </{name}>", cursor)

        self.stack.pop()
        return end + 1

    def _open_tag(self, cursor: int) -> int:
        end = self.scanner.find_tag_end(cursor + 1)
        content = self.jsx[cursor + 1:end]

        stripped = content.rstrip()
        self_closing = stripped.endswith("/")
        if self_closing:
            content = stripped[:-1]

        match = _TAG_NAME.match(content)
        tag_type = match.group(1) or ""
        node = Node(type=tag_type, attributes=parse_attributes(content[match.end():]))

        self.stack[-1].children.append(node)
        if not self_closing:
            self.stack.append(node)
        return end + 1


def parse_fragment(jsx: str) -> Node:
    """Parse a JSX fragment into its single root Node."""
    return JSXParser(jsx).parse()


def parse_component(source: str) -> Node:
    """Parse a full component module: locate its return body, then parse it."""
    return parse_fragment(extract_return_body(source))

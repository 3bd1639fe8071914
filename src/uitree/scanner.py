"""Tag Scanner - boundary finding over JSX text.

Every lookup is a pure function of ``(text, start)``: the scanner holds the
text and nothing else, so the same instance can answer questions about any
offset in any order.

Two lexical modes are involved. In JavaScript (inside ``{...}`` or a
``return (...)``) quotes open strings and comments are skipped. Inside a JSX
element, text is just text: an apostrophe in ``<p>Don't</p>`` or a ``)`` in
``<li>1) Sign up</li>`` means nothing.
"""

from .errors import MalformedTag

QUOTES = frozenset("\"'`")

# Characters after which a ``<`` in JavaScript starts JSX rather than a comparison
_JSX_LEADERS = frozenset("({[,;=?:&|!>")


class TagScanner:
    """Finds tag, element and expression terminators over one text."""

    def __init__(self, text: str) -> None:
        self.text = text

    def _skip_quoted(self, index: int) -> int:
        """Return the index of the quote closing the string opened at ``index``."""
        quote = self.text[index]
        end = self.text.find(quote, index + 1)
        if end == -1:
            raise MalformedTag(f"Unterminated {quote} string", index)
        return end

    def _skip_comment(self, index: int) -> int | None:
        """Index just past a ``//`` or ``/* */`` comment at ``index``, or None."""
        text = self.text
        if text.startswith("//", index):
            end = text.find("\n", index)
            return len(text) if end == -1 else end
        if text.startswith("/*", index):
            end = text.find("*/", index + 2)
            if end == -1:
                raise MalformedTag("Unterminated comment", index)
            return end + 2
        return None

    def _is_tag_open(self, index: int) -> bool:
        nxt = self.text[index + 1:index + 2]
        return self.text[index] == "<" and (nxt.isalpha() or nxt in ("/", ">", "_", "$"))

    def _starts_jsx(self, index: int, floor: int) -> bool:
        """True when the ``<`` at ``index`` opens JSX in JavaScript context."""
        if not self._is_tag_open(index):
            return False
        before = self.text[floor:index].rstrip()
        return not before or before[-1] in _JSX_LEADERS or before.endswith("return")

    def find_tag_end(self, start: int) -> int:
        """
        Index of the ``>`` that closes the tag starting at or after ``start``.

        ``>`` inside single/double-quoted strings or inside a ``{...}``
        expression is skipped.

        Raises:
            MalformedTag: If the input ends before the tag does
        """
        text = self.text
        i = start
        while i < len(text):
            char = text[i]
            if char in "\"'":
                i = self._skip_quoted(i) + 1
                continue
            if char == "{":
                i = self.find_expression_end(i) + 1
                continue
            if char == ">":
                return i
            i += 1
        raise MalformedTag("Tag not closed", start)

    def skip_element(self, start: int) -> int:
        """
        Index just past the JSX element whose opening ``<`` is at ``start``.

        Text between tags is not quote-scanned; ``{...}`` children are skipped
        as expressions.

        Raises:
            MalformedTag: If the element never closes
        """
        text = self.text
        depth = 0
        i = start
        while i < len(text):
            if text[i] == "{":
                i = self.find_expression_end(i) + 1
                continue
            if self._is_tag_open(i):
                end = self.find_tag_end(i + 1)
                if text[i + 1] == "/":
                    depth -= 1
                elif not text[i + 1:end].rstrip().endswith("/"):
                    depth += 1
                i = end + 1
                if depth <= 0:
                    return i
                continue
            i += 1
        raise MalformedTag("Element not closed", start)

    def find_expression_end(self, start: int) -> int:
        """
        Index of the ``}`` matching the ``{`` at ``start``.

        Quotes, template literals and comments inside the expression are
        skipped, so braces in them do not count. JSX elements inside the
        expression are skipped whole.

        Raises:
            MalformedTag: If ``start`` is not a ``{`` or the braces never balance
        """
        text = self.text
        if start >= len(text) or text[start] != "{":
            raise MalformedTag("Expression must start with '{'", start)

        depth = 0
        i = start
        while i < len(text):
            char = text[i]
            if char in QUOTES:
                i = self._skip_quoted(i) + 1
                continue
            if char == "/":
                skipped = self._skip_comment(i)
                if skipped is not None:
                    i = skipped
                    continue
            if char == "<" and self._starts_jsx(i, start):
                i = self.skip_element(i)
                continue
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return i
            i += 1
        raise MalformedTag("Unbalanced braces in expression", start)

    def find_closing_paren(self, start: int) -> int:
        """
        Index of the ``)`` matching the ``(`` at ``start``.

        Used to cut the JSX body out of ``return ( ... )``. Elements and
        braced expressions are skipped as units, so parentheses in JSX text
        never count.
        """
        text = self.text
        depth = 0
        i = start
        while i < len(text):
            char = text[i]
            if char in QUOTES:
                i = self._skip_quoted(i) + 1
                continue
            if char == "<" and self._starts_jsx(i, start):
                i = self.skip_element(i)
                continue
            if char == "{":
                i = self.find_expression_end(i) + 1
                continue
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    return i
            i += 1
        raise MalformedTag("Unbalanced parentheses", start)


def find_tag_end(text: str, start: int) -> int:
    """Functional form of :meth:`TagScanner.find_tag_end`."""
    return TagScanner(text).find_tag_end(start)


def find_expression_end(text: str, start: int) -> int:
    """Functional form of :meth:`TagScanner.find_expression_end`."""
    return TagScanner(text).find_expression_end(start)

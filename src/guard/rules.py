"""Static checks over raw generated source.

Each rule is independent and returns every message it finds; the validator
runs all of them so a single pass reports the complete picture.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from core.vocabulary import ALLOWED_IMPORTS, TAG_WHITELIST
from uitree import MalformedTag, TagScanner

_SINKS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("dangerouslySetInnerHTML", re.compile(r"\bdangerouslySetInnerHTML\b")),
    ("innerHTML", re.compile(r"\.innerHTML\s*\+?=")),
    ("outerHTML", re.compile(r"\.outerHTML\s*\+?=")),
    ("insertAdjacentHTML", re.compile(r"\binsertAdjacentHTML\s*\(")),
    ("document.write", re.compile(r"\bdocument\.write(?:ln)?\s*\(")),
    ("eval", re.compile(r"(?<![\w.])eval\s*\(")),
    ("new Function", re.compile(r"\bnew\s+Function\s*\(")),
)

_SCRIPT_TAG = re.compile(r"<\s*script\b", re.IGNORECASE)
_IFRAME_TAG = re.compile(r"<\s*iframe\b", re.IGNORECASE)
_TAG_OPEN = re.compile(r"<[A-Za-z][\w.]*")
_INLINE_HANDLER = re.compile(r"(?<!\S)(on[a-zA-Z]{3,})\s*=\s*[\"']")
_INLINE_STYLE = re.compile(r"\bstyle\s*=\s*\{")
_IMPORT_FROM = re.compile(r"\bimport\s+[\s\S]*?\s+from\s+['\"]([^'\"]+)['\"]")
_IMPORT_BARE = re.compile(r"\bimport\s+['\"]([^'\"]+)['\"]")
_CAPITAL_TAG = re.compile(r"<([A-Z][\w.]*)")


def check_dangerous_sinks(source: str) -> list[str]:
    return [
        f"Dangerous DOM sink '{name}' is forbidden in generated code."
        for name, pattern in _SINKS
        if pattern.search(source)
    ]


def check_script_tags(source: str) -> list[str]:
    errors = []
    if _SCRIPT_TAG.search(source):
        errors.append("Script tags (<script>) are forbidden in generated code.")
    if _IFRAME_TAG.search(source):
        errors.append("Iframe tags (<iframe>) are forbidden in generated code.")
    return errors


def _tag_attribute_text(source: str) -> list[str]:
    """Attribute text of every opening tag, with ``{...}`` values blanked."""
    scanner = TagScanner(source)
    spans = []
    for match in _TAG_OPEN.finditer(source):
        try:
            end = scanner.find_tag_end(match.end())
        except MalformedTag:
            continue
        parts, segment, i = [], match.end(), match.end()
        while i < end:
            char = source[i]
            if char in "\"'":
                i = source.index(char, i + 1) + 1
            elif char == "{":
                parts.append(source[segment:i])
                i = segment = scanner.find_expression_end(i) + 1
            else:
                i += 1
        parts.append(source[segment:end])
        spans.append(" ".join(parts))
    return spans


def check_inline_handlers(source: str) -> list[str]:
    names = (m.group(1) for text in _tag_attribute_text(source) for m in _INLINE_HANDLER.finditer(text))
    return [
        f"Inline event handler string '{name}=\"...\"' is forbidden. Use a JSX function handler instead."
        for name in dict.fromkeys(names)
    ]


def check_inline_styles(source: str) -> list[str]:
    if _INLINE_STYLE.search(source):
        return ["Inline styles (style={{...}}) are strictly forbidden. Use Tailwind CSS classes instead."]
    return []


def check_imports(source: str) -> list[str]:
    paths = [m.group(1) for m in _IMPORT_FROM.finditer(source)]
    paths += [m.group(1) for m in _IMPORT_BARE.finditer(source)]
    return [
        f'Unauthorized import detected: "{path}". Only standard UI components and layout primitives are allowed.'
        for path in dict.fromkeys(paths)
        if path not in ALLOWED_IMPORTS
    ]


def check_components(source: str) -> list[str]:
    names = dict.fromkeys(m.group(1) for m in _CAPITAL_TAG.finditer(source))
    return [
        f'Unauthorized component used: "<{name}>". Please only use whitelisted UI components.'
        for name in names
        if name not in TAG_WHITELIST
    ]


@dataclass(frozen=True)
class Rule:
    """A named check; mandatory rules run at every strictness level."""

    name: str
    check: Callable[[str], list[str]]
    mandatory: bool


RULES: tuple[Rule, ...] = (
    Rule("dangerous_sink", check_dangerous_sinks, mandatory=True),
    Rule("script_tag", check_script_tags, mandatory=True),
    Rule("inline_handler", check_inline_handlers, mandatory=True),
    Rule("inline_style", check_inline_styles, mandatory=False),
    Rule("component_whitelist", check_components, mandatory=False),
    Rule("import_whitelist", check_imports, mandatory=False),
)

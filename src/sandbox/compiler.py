"""Sandbox Preview Compiler - untrusted component source to a self-contained document."""

import html
import re
from dataclasses import dataclass, field

from core import get_logger, dumps
from core.vocabulary import REACT_HOOKS
from monitoring import metrics_collector
from .shims import COLLIDING_GLOBALS, JS_GLOBALS, render_table
from .template import CONTENT_SECURITY_POLICY, FALLBACK, HEAD, RUNTIME, STATUS_MESSAGE_TYPE

logger = get_logger(__name__)

_IMPORT_FROM = re.compile(r"^[ \t]*[+-]?[ \t]*import\s+([^'\"`;]*?)\s+from\s+['\"][^'\"\n]*['\"][ \t]*;?", re.M)
_IMPORT_BARE = re.compile(r"^[ \t]*[+-]?[ \t]*import\s+['\"][^'\"\n]*['\"][ \t]*;?", re.M)
_NAMED = re.compile(r"\{([\s\S]*?)\}")
_NAMESPACE = re.compile(r"\*\s*as\s+([A-Za-z_$][\w$]*)")
_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")
_COMMENT = re.compile(r"/\*[\s\S]*?\*/|//[^\n]*")
_CAPITALISED = re.compile(r"\b[A-Z][A-Za-z0-9_]*\b")
_DECLARED = re.compile(r"\b(?:function\*?|class|const|let|var)\s+([A-Za-z_$][\w$]*)")
_DESTRUCTURED = re.compile(r"\b(?:const|let|var)\s*[{\[]([^}\]]*)[}\]]")

_EXPORT_DEFAULT = re.compile(r"\bexport\s+default\s+")
_EXPORT_LIST = re.compile(r"^[ \t]*export\s*\{[^}]*\}(?:\s*from\s*['\"][^'\"]*['\"])?[ \t]*;?", re.M)
_EXPORT_KEYWORD = re.compile(r"\bexport\s+(?=(?:const|let|var|function|class|async|type|interface|enum)\b)")
_MODULE_EXPORTS = re.compile(r"\bmodule\.exports\s*=\s*")
_REQUIRE = re.compile(r"\brequire\(\s*['\"][^'\"]*['\"]\s*\)")

NAMESPACE_TARGET = "*"


@dataclass(frozen=True)
class Binding:
    """Local name bound inside the user-code scope, resolved through the shim table."""

    local: str
    target: str


@dataclass
class PreparedSource:
    """Result of the static passes over one source string."""

    imported: list[str] = field(default_factory=list)
    detected: list[str] = field(default_factory=list)
    declared: set[str] = field(default_factory=set)
    bindings: list[Binding] = field(default_factory=list)
    script: str = ""

    @property
    def forced(self) -> list[str]:
        """Collected names that shadow browser globals and are always shimmed."""
        return [b.local for b in self.bindings if b.local in COLLIDING_GLOBALS]


def _split_specifiers(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def collect_imports(source: str) -> list[Binding]:
    """
    Bindings introduced by ``import`` statements (default, named, aliased, namespace).

    ``import { BarChart as Bars }`` binds ``Bars`` to the ``BarChart`` shim.
    Hooks and React itself are provided by the runtime and skipped.
    """
    bindings: list[Binding] = []
    for match in _IMPORT_FROM.finditer(source):
        clause = _COMMENT.sub(" ", match.group(1)).strip()
        if clause.startswith("type "):
            continue

        named = _NAMED.search(clause)
        if named:
            for spec in _split_specifiers(named.group(1)):
                spec = spec.removeprefix("type ").strip()
                parts = re.split(r"\s+as\s+", spec)
                imported, local = parts[0].strip(), parts[-1].strip()
                valid = _IDENTIFIER.fullmatch(imported) and _IDENTIFIER.fullmatch(local)
                if not valid or imported in REACT_HOOKS:
                    continue
                bindings.append(Binding(local, imported))
            clause = clause[:named.start()] + clause[named.end():]

        namespace = _NAMESPACE.search(clause)
        if namespace:
            bindings.append(Binding(namespace.group(1), NAMESPACE_TARGET))
            clause = clause[:namespace.start()] + clause[namespace.end():]

        default = clause.strip().strip(",").strip()
        if default and default != "React" and _IDENTIFIER.fullmatch(default):
            bindings.append(Binding(default, default))
    return bindings


def detect_identifiers(source: str) -> list[str]:
    """
    Every capitalised bare identifier, minus JS/React globals.

    Over-approximates on purpose: components reached through props, arrays or
    without an import still get a binding.
    """
    names = dict.fromkeys(m.group(0) for m in _CAPITALISED.finditer(source))
    return [n for n in names if n not in JS_GLOBALS and n not in REACT_HOOKS]


def declared_names(source: str) -> set[str]:
    """Names the source declares itself (functions, classes, variables, destructuring)."""
    names = {m.group(1) for m in _DECLARED.finditer(source)}
    for match in _DESTRUCTURED.finditer(source):
        for spec in _split_specifiers(match.group(1)):
            local = spec.removeprefix("...")
            if ":" in local:
                local = local.split(":", 1)[1]
            local = local.split("=", 1)[0].strip()
            if re.fullmatch(r"[A-Za-z_$][\w$]*", local):
                names.add(local)
    return names


def strip_module_syntax(source: str) -> str:
    """
    Rewrite a module into a plain script.

    - ``import ... from '...'`` and side-effect imports removed (diff-prefixed too)
    - ``export default`` -> ``window.App =``; other ``export`` keywords dropped
    - ``module.exports =`` -> ``window.App =``; ``require('...')`` -> ``undefined``
    """
    script = _IMPORT_FROM.sub("", source)
    script = _IMPORT_BARE.sub("", script)
    script = _EXPORT_LIST.sub("", script)
    script = _EXPORT_DEFAULT.sub("window.App = ", script)
    script = _EXPORT_KEYWORD.sub("", script)
    script = _MODULE_EXPORTS.sub("window.App = ", script)
    script = _REQUIRE.sub("undefined", script)
    return script


def prepare(source: str) -> PreparedSource:
    """Run the static passes and decide the local bindings for the user scope."""
    imports = collect_imports(source)
    detected = detect_identifiers(source)
    declared = declared_names(source)

    bindings: dict[str, Binding] = {}
    for binding in imports:
        bindings.setdefault(binding.local, binding)
    for name in detected:
        if name in bindings:
            continue
        # Colliding names are bound even when declared; the user block shadows them.
        if name in COLLIDING_GLOBALS or name not in declared:
            bindings[name] = Binding(name, name)

    return PreparedSource(
        imported=[b.local for b in imports],
        detected=detected,
        declared=declared,
        bindings=list(bindings.values()),
        script=strip_module_syntax(source),
    )


def _script_json(value: object) -> str:
    """JSON safe to place inside a <script> element."""
    return dumps(value).replace("<", "\\u003c").replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


def _fill(template: str, values: dict[str, str]) -> str:
    """Replace every marker in one pass; substituted text is never rescanned."""
    pattern = "|".join(re.escape(marker) for marker in sorted(values, key=len, reverse=True))
    return re.sub(pattern, lambda m: values[m.group(0)], template)


def render_fallback(message: str, generation: int = 0) -> str:
    """Static document that only shows a compilation error."""
    return _fill(FALLBACK, {
        "__CSP__": CONTENT_SECURITY_POLICY,
        "__STATUS_TYPE__": STATUS_MESSAGE_TYPE,
        "__GENERATION_VALUE__": str(int(generation)),
        "__MESSAGE_JSON__": _script_json(message),
        "__MESSAGE__": html.escape(message),
    })


class PreviewCompiler:
    """Turns component source into an isolated preview document."""

    def __init__(self) -> None:
        self._shim_table = render_table()

    def render(self, prepared: PreparedSource, generation: int = 0) -> str:
        """Assemble the document from the template and the prepared source."""
        bindings = [[b.local, b.target] for b in prepared.bindings]
        return _fill(HEAD + RUNTIME, {
            "__CSP__": CONTENT_SECURITY_POLICY,
            "__STATUS_TYPE__": STATUS_MESSAGE_TYPE,
            "__GENERATION_VALUE__": str(int(generation)),
            "__SHIM_TABLE__": self._shim_table,
            "__BINDINGS_JSON__": _script_json(bindings),
            "__USER_SOURCE_JSON__": _script_json(prepared.script),
        })

    def compile(self, source: str, generation: int = 0) -> str:
        """
        Build the preview document for ``source``.

        Never raises: any failure here yields a document that renders the
        error, so the preview surface always shows something.

        Args:
            source: Validated component source (may still be broken)
            generation: Render counter echoed back in status messages

        Returns:
            Complete HTML document
        """
        try:
            if not isinstance(source, str):
                raise TypeError(f"Expected component source text, got {type(source).__name__}")
            prepared = prepare(source)
            document = self.render(prepared, generation)
        except Exception as e:
            logger.error("preview_compile_failed", error=str(e), generation=generation)
            metrics_collector.record_preview_compile("fallback")
            return render_fallback(str(e) or type(e).__name__, generation)

        logger.debug(
            "preview_compiled",
            generation=generation,
            bindings=len(prepared.bindings),
            forced=prepared.forced,
        )
        metrics_collector.record_preview_compile("ok")
        return document


_default_compiler: PreviewCompiler | None = None


def compile_for_preview(source: str, generation: int = 0) -> str:
    """Compile with a shared compiler instance."""
    global _default_compiler
    if _default_compiler is None:
        _default_compiler = PreviewCompiler()
    return _default_compiler.compile(source, generation)

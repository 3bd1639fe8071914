"""
Sandbox preview
Compiles untrusted component source into isolated preview documents
"""

from .compiler import (
    Binding,
    PreparedSource,
    PreviewCompiler,
    collect_imports,
    compile_for_preview,
    declared_names,
    detect_identifiers,
    prepare,
    render_fallback,
    strip_module_syntax,
)
from .session import PreviewLoad, PreviewSession, PreviewState
from .shims import ALIASES, COLLIDING_GLOBALS, COMPONENT_SHIMS
from .template import CONTENT_SECURITY_POLICY, SANDBOX_FLAGS, STATUS_MESSAGE_TYPE

__all__ = [
    "Binding",
    "PreparedSource",
    "PreviewCompiler",
    "collect_imports",
    "compile_for_preview",
    "declared_names",
    "detect_identifiers",
    "prepare",
    "render_fallback",
    "strip_module_syntax",
    "PreviewLoad",
    "PreviewSession",
    "PreviewState",
    "ALIASES",
    "COLLIDING_GLOBALS",
    "COMPONENT_SHIMS",
    "CONTENT_SECURITY_POLICY",
    "SANDBOX_FLAGS",
    "STATUS_MESSAGE_TYPE",
]

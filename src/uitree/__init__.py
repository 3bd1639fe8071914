"""
UI Tree Engine
Parses generated JSX into a canonical tree and serializes it back.
"""

from .errors import ParseError, MalformedTag, MismatchedTag, NoRootFound, MultipleRoots, MissingReturn
from .models import Node, Expression, AttributeValue
from .scanner import TagScanner, find_tag_end, find_expression_end
from .attributes import parse_attributes
from .parser import JSXParser, extract_return_body, parse_fragment, parse_component
from .serializer import serialize
from .envelope import reconstruct_module, IMPORT_HEADER
from .transform import TransformResult, transform

__all__ = [
    "ParseError",
    "MalformedTag",
    "MismatchedTag",
    "NoRootFound",
    "MultipleRoots",
    "MissingReturn",
    "Node",
    "Expression",
    "AttributeValue",
    "TagScanner",
    "find_tag_end",
    "find_expression_end",
    "parse_attributes",
    "JSXParser",
    "extract_return_body",
    "parse_fragment",
    "parse_component",
    "serialize",
    "reconstruct_module",
    "IMPORT_HEADER",
    "TransformResult",
    "transform",
]

"""Source -> tree -> canonical source."""

from dataclasses import dataclass

from core import get_logger
from .envelope import reconstruct_module
from .models import Node
from .parser import parse_component

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransformResult:
    """Parsed tree plus the module rebuilt from it."""

    tree: Node
    canonical_code: str


def transform(source: str, component_name: str = "App") -> TransformResult:
    """
    Parse generated source and rebuild it from the tree.

    The canonical code is what gets stored, so the stored source always
    matches the tree.

    Raises:
        ParseError: Any structural failure; callers fall back to the raw source
    """
    tree = parse_component(source)
    canonical = reconstruct_module(tree, component_name)
    logger.debug("transformed", root=tree.type, nodes=sum(1 for _ in tree.walk()))
    return TransformResult(tree=tree, canonical_code=canonical)

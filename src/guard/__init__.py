"""Static validation of generated component source."""

from .rules import RULES, Rule
from .validator import CodeValidator, Strictness, ValidationReport, ValidationViolation, validate_code

__all__ = [
    "RULES",
    "Rule",
    "CodeValidator",
    "Strictness",
    "ValidationReport",
    "ValidationViolation",
    "validate_code",
]

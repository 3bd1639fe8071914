"""Generated-Code Validator - reject unsafe or off-vocabulary source before it is trusted."""

from dataclasses import dataclass, field
from enum import Enum

from returns.result import Failure, Result, Success

from core import get_logger
from monitoring import metrics_collector
from .rules import RULES, Rule

logger = get_logger(__name__)


class Strictness(str, Enum):
    """Validation policy."""

    PERMISSIVE = "permissive"  # Security sinks only
    STRICT = "strict"  # Security sinks + style/component/import whitelists


class ValidationViolation(Exception):
    """Candidate rejected; carries every violated rule, not just the first."""

    def __init__(self, violations: list[str], rules: list[str] | None = None) -> None:
        super().__init__("Security Violation: " + " ".join(violations))
        self.violations = list(violations)
        self.rules = list(rules or [])


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of a validation pass."""

    ok: bool
    violations: list[str] = field(default_factory=list)
    rules: list[str] = field(default_factory=list)

    def raise_for_violations(self) -> None:
        """Raise ValidationViolation if the candidate was rejected."""
        if not self.ok:
            raise ValidationViolation(self.violations, self.rules)


class CodeValidator:
    """Runs every applicable rule over candidate source."""

    def __init__(self, strictness: Strictness = Strictness.STRICT) -> None:
        self.strictness = Strictness(strictness)

    @classmethod
    def from_flag(cls, strict: bool) -> "CodeValidator":
        return cls(Strictness.STRICT if strict else Strictness.PERMISSIVE)

    @property
    def rules(self) -> list[Rule]:
        if self.strictness == Strictness.STRICT:
            return list(RULES)
        return [r for r in RULES if r.mandatory]

    def validate(self, source: str) -> ValidationReport:
        """
        Check source against every rule (no short-circuit).

        Args:
            source: Raw generator output, before parsing

        Returns:
            Report with the full violation list
        """
        violations: list[str] = []
        hit: list[str] = []

        for rule in self.rules:
            found = rule.check(source)
            if found:
                hit.append(rule.name)
                violations.extend(found)
                metrics_collector.record_violation(rule.name, len(found))

        if violations:
            logger.warning("validation_failed", rules=hit, count=len(violations))
        else:
            logger.debug("validation_passed", strictness=self.strictness.value)

        return ValidationReport(ok=not violations, violations=violations, rules=hit)


def validate_code(
    source: str, strictness: Strictness = Strictness.STRICT
) -> Result[str, ValidationViolation]:
    """
    Validate source (Result pattern version).

    Returns:
        Success with the source unchanged, or Failure carrying every violation
    """
    report = CodeValidator(strictness).validate(source)
    if report.ok:
        return Success(source)
    return Failure(ValidationViolation(report.violations, report.rules))

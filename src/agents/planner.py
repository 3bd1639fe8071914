"""Planner - user intent to a structured, whitelist-checked build plan."""

from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from core import extract_json, get_logger, JSONParseError
from core.vocabulary import COMPONENT_WHITELIST
from versions import Plan
from .errors import UpstreamGenerationError
from .prompts import PromptBuilder
from .resilience import ResilientCaller

logger = get_logger(__name__)


class Planner(Protocol):
    def plan(self, intent: str, previous_plan: dict[str, Any] | None = None) -> Plan: ...


def _as_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, list):
        return [str(item) for item in value if str(item).strip()]
    return []


def coerce_plan(data: dict[str, Any], intent: str) -> Plan:
    """
    Build a Plan from loosely shaped model output.

    Accepts camelCase and snake_case keys. Components outside the whitelist
    are dropped with a warning rather than failing the whole plan.
    """
    components = _as_list(data.get("components", data.get("componentsToUse", [])))
    unknown = [name for name in components if name not in COMPONENT_WHITELIST]
    if unknown:
        logger.warning("plan_components_dropped", components=unknown)
    components = list(dict.fromkeys(name for name in components if name in COMPONENT_WHITELIST))

    return Plan(
        intent=str(data.get("intent") or intent),
        steps=_as_list(data.get("steps", [])),
        components=components,
        layout_strategy=str(data.get("layoutStrategy", data.get("layout_strategy", "")) or ""),
        explanation=str(data.get("explanation", "") or ""),
    )


class LLMPlanner:
    """Planner backed by a text LLM returning a JSON plan."""

    def __init__(self, caller: ResilientCaller):
        self.caller = caller

    def plan(self, intent: str, previous_plan: dict[str, Any] | None = None) -> Plan:
        if not intent or not intent.strip():
            raise ValueError("Cannot plan an empty intent")

        logger.info("plan_start", incremental=previous_plan is not None)
        raw = self.caller(PromptBuilder.planner(intent, previous_plan))
        try:
            plan = coerce_plan(extract_json(raw), intent)
        except (JSONParseError, PydanticValidationError) as e:
            logger.error("plan_parse_failed", error=str(e), preview=raw[:200])
            raise UpstreamGenerationError(f"Planner returned an unusable plan: {e}", "planner") from e

        logger.info("plan_complete", components=plan.components, steps=len(plan.steps))
        return plan


class TemplatePlanner:
    """Deterministic planner used when no model is configured."""

    def plan(self, intent: str, previous_plan: dict[str, Any] | None = None) -> Plan:
        if not intent or not intent.strip():
            raise ValueError("Cannot plan an empty intent")
        components = ["Container", "Stack", "Card", "Button"]
        if previous_plan:
            components = list(dict.fromkeys(_as_list(previous_plan.get("components", [])) + components))
            components = [name for name in components if name in COMPONENT_WHITELIST]
        return Plan(
            intent=intent.strip(),
            steps=[
                "Analyze request context",
                "Map to component library components",
                "Define state and prop requirements",
            ],
            components=components,
            layout_strategy="Single centered column: Container wrapping a Stack of Cards",
            explanation="Template plan (no model configured)",
        )

"""Explainer - plain-language summary of what changed."""

from typing import Any, Protocol

from core import get_logger
from versions import Plan
from .prompts import PromptBuilder
from .resilience import ResilientCaller

logger = get_logger(__name__)


class Explainer(Protocol):
    def explain(self, prompt: str, plan: Plan, previous_plan: dict[str, Any] | None = None) -> str: ...


class LLMExplainer:
    def __init__(self, caller: ResilientCaller):
        self.caller = caller

    def explain(self, prompt: str, plan: Plan, previous_plan: dict[str, Any] | None = None) -> str:
        text = self.caller(PromptBuilder.explainer(prompt, plan.model_dump(by_alias=True), previous_plan))
        return text.strip()


class TemplateExplainer:
    def explain(self, prompt: str, plan: Plan, previous_plan: dict[str, Any] | None = None) -> str:
        verb = "updated the" if previous_plan else "generated a new"
        return (
            f'I\'ve {verb} component to satisfy your request: "{prompt}". '
            f"It uses {', '.join(plan.components) or 'plain markup'} from the design system."
        )

"""Planner, generator and explainer agents plus the build pipeline."""

from .errors import UpstreamGenerationError, RateLimitError
from .sanitizer import sanitize_prompt
from .resilience import ResilientCaller, create_breaker, is_rate_limit
from .planner import Planner, LLMPlanner, TemplatePlanner, coerce_plan
from .generator import Generator, LLMGenerator, TemplateGenerator
from .explainer import Explainer, LLMExplainer, TemplateExplainer
from .pipeline import BuildPipeline, BuildResult

__all__ = [
    "UpstreamGenerationError",
    "RateLimitError",
    "sanitize_prompt",
    "ResilientCaller",
    "create_breaker",
    "is_rate_limit",
    "Planner",
    "LLMPlanner",
    "TemplatePlanner",
    "coerce_plan",
    "Generator",
    "LLMGenerator",
    "TemplateGenerator",
    "Explainer",
    "LLMExplainer",
    "TemplateExplainer",
    "BuildPipeline",
    "BuildResult",
]

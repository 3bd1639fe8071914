"""
Build Pipeline - one generate request from prompt to stored version.

sanitize -> user message -> plan -> generate -> explain -> validate
-> tree transform (raw fallback) -> version -> assistant message
"""

import time
from dataclasses import dataclass
from typing import Any

from core import get_logger, LogContext
from guard import CodeValidator
from monitoring import metrics_collector
from uitree import Node, ParseError, transform
from versions import Plan, ProjectStore, Role, Version
from .errors import RateLimitError, UpstreamGenerationError
from .explainer import Explainer
from .generator import Generator
from .planner import Planner
from .sanitizer import sanitize_prompt

logger = get_logger(__name__)


@dataclass(frozen=True)
class BuildResult:
    """Everything a generate request produced."""

    plan: Plan
    code: str
    raw_code: str
    explanation: str
    version: Version
    tree: Node | None

    @property
    def structured(self) -> bool:
        return self.tree is not None


class BuildPipeline:
    """Runs planner, generator, explainer and validator against a project store."""

    def __init__(
        self,
        store: ProjectStore,
        planner: Planner,
        generator: Generator,
        explainer: Explainer,
        validator: CodeValidator | None = None,
    ):
        self.store = store
        self.planner = planner
        self.generator = generator
        self.explainer = explainer
        self.validator = validator or CodeValidator()

    def run(self, file: str | None, raw_prompt: str, previous_plan: dict[str, Any] | None = None) -> BuildResult:
        """
        Execute one generate request.

        Raises:
            ValueError: Prompt is empty after sanitising
            ValidationViolation: Candidate rejected; nothing is stored
            UpstreamGenerationError: A model call failed (RateLimitError for quotas)
        """
        start = time.time()
        file = file or self.store.default_file
        prompt = sanitize_prompt(raw_prompt)
        if not prompt:
            raise ValueError("Prompt is empty after sanitising")

        with LogContext(file=file):
            try:
                result = self._run(file, prompt, previous_plan)
            except RateLimitError:
                metrics_collector.record_generation("rate_limited", time.time() - start)
                raise
            except UpstreamGenerationError:
                metrics_collector.record_generation("upstream_error", time.time() - start)
                raise
            except Exception as e:
                metrics_collector.record_generation("failed", time.time() - start)
                metrics_collector.record_error(type(e).__name__, "pipeline")
                raise

            metrics_collector.record_generation("success", time.time() - start)
            return result

    def _run(self, file: str, prompt: str, previous_plan: dict[str, Any] | None) -> BuildResult:
        self.store.add_message(file, Role.USER, prompt)

        previous_code = self.store.code(file) if self.store.current(file) else None
        plan = self.planner.plan(prompt, previous_plan)
        logger.info("plan_ready", incremental=previous_plan is not None, intent=plan.intent[:80])

        code = self.generator.generate(prompt, plan, previous_code)
        explanation = self.explainer.explain(prompt, plan, previous_plan)

        self.validator.validate(code).raise_for_violations()

        tree: Node | None
        try:
            result = transform(code)
            tree, final_code = result.tree, result.canonical_code
        except ParseError as e:
            logger.warning("tree_fallback", error=str(e), error_type=type(e).__name__)
            metrics_collector.record_parse_fallback(type(e).__name__)
            tree, final_code = None, code

        version = self.store.add_version(file, prompt, plan, final_code, tree, explanation)
        self.store.add_message(file, Role.ASSISTANT, f"{plan.summary()}\n\n---\n{explanation}")

        logger.info("build_complete", version_id=version.id, structured=tree is not None)
        return BuildResult(
            plan=plan,
            code=final_code,
            raw_code=code,
            explanation=explanation,
            version=version,
            tree=tree,
        )

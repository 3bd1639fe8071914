"""Generator - plan to component source."""

from typing import Protocol

from core import get_logger, strip_code_fences
from core.vocabulary import component_import_path
from versions import Plan
from .errors import UpstreamGenerationError
from .prompts import PromptBuilder
from .resilience import ResilientCaller

logger = get_logger(__name__)


class Generator(Protocol):
    def generate(self, prompt: str, plan: Plan, previous_code: str | None = None) -> str: ...


class LLMGenerator:
    """Generator backed by a text LLM."""

    def __init__(self, caller: ResilientCaller):
        self.caller = caller

    def generate(self, prompt: str, plan: Plan, previous_code: str | None = None) -> str:
        logger.info("generate_start", components=plan.components)
        raw = self.caller(PromptBuilder.generator(prompt, plan.model_dump(by_alias=True), previous_code))
        code = strip_code_fences(raw)
        if not code:
            raise UpstreamGenerationError("Generator returned no code", "generator")
        logger.info("generate_complete", code_length=len(code))
        return code


class TemplateGenerator:
    """Deterministic generator used when no model is configured."""

    def generate(self, prompt: str, plan: Plan, previous_code: str | None = None) -> str:
        imports = "\n".join(
            f"import {{ {name} }} from '{component_import_path(name)}';"
            for name in ("Container", "Stack", "Card", "Button")
        )
        title = plan.intent.replace("{", "").replace("}", "").replace("<", "").replace(">", "")
        return f"""import React from 'react';
{imports}

export default function App() {{
  return (
    <Container className="py-12">
      <Stack gap={{6}}>
        <Card padding="lg">
          <h2 className="text-2xl font-bold mb-4">{title}</h2>
          <p className="text-gray-600 mb-6">This component was generated based on your request.</p>
          <Button variant="primary">Learn More</Button>
        </Card>
      </Stack>
    </Container>
  );
}}
"""

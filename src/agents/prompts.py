"""
Prompt Builder
System prompts and prompt assembly for the planner, generator and explainer.
"""

from core import dumps
from core.vocabulary import ICONS, LAYOUT_PRIMITIVES, UI_COMPONENTS, component_import_path


def _vocabulary() -> str:
    components = ", ".join(UI_COMPONENTS)
    primitives = ", ".join(LAYOUT_PRIMITIVES)
    icons = ", ".join(ICONS)
    imports = "\n".join(
        f"  import {{ {name} }} from '{component_import_path(name)}';"
        for name in LAYOUT_PRIMITIVES + UI_COMPONENTS
    )
    return (
        f"Components: {components}\n"
        f"Layout primitives: {primitives}\n"
        f"Icons (from 'lucide-react'): {icons}\n"
        f"Import paths:\n{imports}"
    )


PLANNER_SYSTEM = f"""You are the planning stage of a UI builder.
Turn the user's request into a structured build plan.

=== VOCABULARY ===
{_vocabulary()}

=== OUTPUT ===
Output ONLY a JSON object, no markdown:
{{
  "intent": "one sentence describing what the user wants",
  "steps": ["ordered implementation steps"],
  "components": ["component names, ONLY from the vocabulary above"],
  "layoutStrategy": "how the page is laid out with the layout primitives",
  "explanation": "short rationale"
}}

When a previous plan is given, treat the request as an incremental change:
keep what still applies and describe only the resulting full plan."""

GENERATOR_SYSTEM = f"""You are the code generation stage of a UI builder.
Write ONE React function component in TSX implementing the plan.

=== VOCABULARY ===
{_vocabulary()}

=== RULES ===
- Output ONLY the module source, no markdown fences, no commentary
- `import React from 'react';` plus imports from the paths above only
- `export default function App() {{ return ( ... ); }}` with a single root element
- Style with Tailwind CSS classes; inline style={{{{...}}}} is forbidden
- No dangerouslySetInnerHTML, innerHTML, eval, new Function, <script> or <iframe>
- No HTML string event handlers (onclick="..."); use React handlers
- Capitalised tags must come from the vocabulary"""

EXPLAINER_SYSTEM = """You are the explanation stage of a UI builder.
In two to four sentences of plain prose, tell the user what was built or
changed and why, referring to the plan. No code, no markdown headings."""


class PromptBuilder:
    """Builds the per-role prompts."""

    @staticmethod
    def build_structured(system: str, context: str, request: str) -> str:
        """
        Build a sectioned prompt.

        Args:
            system: System instructions
            context: Additional context (plans, previous code)
            request: User request

        Returns:
            Complete prompt
        """
        parts = [system]
        if context:
            parts.append(f"\n=== CONTEXT ===\n{context}")
        parts.append(f"\n=== REQUEST ===\n{request}")
        return "\n".join(parts)

    @classmethod
    def planner(cls, intent: str, previous_plan: dict | None) -> str:
        context = ""
        if previous_plan:
            context = f"Previous plan:\n{dumps(previous_plan, indent=True)}"
        return cls.build_structured(PLANNER_SYSTEM, context, intent) + "\n\nPlan JSON:"

    @classmethod
    def generator(cls, prompt: str, plan: dict, previous_code: str | None) -> str:
        context = f"Plan:\n{dumps(plan, indent=True)}"
        if previous_code:
            context += f"\n\nCurrent code (modify it, keep what still applies):\n{previous_code}"
        return cls.build_structured(GENERATOR_SYSTEM, context, prompt) + "\n\nComponent source:"

    @classmethod
    def explainer(cls, prompt: str, plan: dict, previous_plan: dict | None) -> str:
        context = f"Plan:\n{dumps(plan, indent=True)}"
        if previous_plan:
            context += f"\n\nPrevious plan:\n{dumps(previous_plan, indent=True)}"
        return cls.build_structured(EXPLAINER_SYSTEM, context, prompt)

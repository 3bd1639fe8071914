"""Version store data models."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.id import new_message_id, new_version_id
from core.vocabulary import COMPONENT_WHITELIST
from uitree import Node


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Plan(BaseModel):
    """Structured build plan produced by the planner."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    intent: str = Field(..., min_length=1)
    steps: list[str] = Field(default_factory=list)
    components: list[str] = Field(default_factory=list)
    layout_strategy: str = Field(default="", alias="layoutStrategy")
    explanation: str = Field(default="")

    @field_validator("intent")
    @classmethod
    def validate_intent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Plan intent cannot be empty")
        return stripped

    @field_validator("components")
    @classmethod
    def validate_components(cls, v: list[str]) -> list[str]:
        unknown = [name for name in v if name not in COMPONENT_WHITELIST]
        if unknown:
            raise ValueError(f"Components outside the whitelist: {', '.join(unknown)}")
        return v

    def summary(self) -> str:
        """Markdown summary used for the assistant chat message."""
        steps = "\n".join(f"- {step}" for step in self.steps)
        return (
            "### Design Plan\n"
            f"**Intent**: {self.intent}\n"
            f"**Steps**:\n{steps}\n\n"
            f"**Layout Strategy**: {self.layout_strategy}\n"
            f"**Components**: {', '.join(self.components)}"
        )


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """One entry in a file's chat history."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str = Field(default_factory=new_message_id)
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=_utcnow)


class Version(BaseModel):
    """Immutable snapshot of one accepted generation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_version_id)
    file: str
    prompt: str
    plan: Plan
    code: str
    tree: Node | None = None
    explanation: str = ""
    timestamp: datetime = Field(default_factory=_utcnow)


class FileWorkspace(BaseModel):
    """Chat history, version history and current code of one file."""

    name: str
    messages: list[ChatMessage] = Field(default_factory=list)
    versions: list[Version] = Field(default_factory=list)
    cursor: str | None = None
    code: str

    def find(self, version_id: str) -> Version | None:
        for version in self.versions:
            if version.id == version_id:
                return version
        return None

    def current(self) -> Version | None:
        if self.cursor is None:
            return None
        return self.find(self.cursor)

"""Input validation for requests crossing the HTTP boundary."""

from typing import Any

from pydantic import BaseModel, Field, field_validator, ConfigDict


# Validation limits
MAX_PROMPT_LENGTH = 10_000
MAX_SOURCE_SIZE = 256 * 1024  # 256KB of component source
MAX_FILE_NAME_LENGTH = 255


class ValidationError(Exception):
    """Request validation failed."""

    pass


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


def _check_file_name(v: str | None) -> str | None:
    if v is None:
        return v
    stripped = v.strip()
    if not stripped:
        raise ValueError("File name cannot be empty")
    if ".." in stripped.split("/"):
        raise ValueError("File name cannot traverse directories")
    return stripped


class GenerateRequest(RequestValidator):
    """Validated generate request."""

    prompt: str = Field(min_length=1, max_length=MAX_PROMPT_LENGTH)
    file: str | None = Field(default=None, max_length=MAX_FILE_NAME_LENGTH)
    previous_plan: dict[str, Any] | None = Field(default=None, alias="previousPlan")

    model_config = ConfigDict(
        strict=True, extra="forbid", frozen=True, populate_by_name=True
    )

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        """Ensure prompt is non-empty after stripping."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Prompt cannot be empty")
        return stripped

    @field_validator("file")
    @classmethod
    def validate_file(cls, v: str | None) -> str | None:
        return _check_file_name(v)


class RollbackRequest(RequestValidator):
    """Validated rollback request."""

    id: str = Field(min_length=1)
    file: str | None = Field(default=None, max_length=MAX_FILE_NAME_LENGTH)

    @field_validator("file")
    @classmethod
    def validate_file(cls, v: str | None) -> str | None:
        return _check_file_name(v)


class SourceRequest(RequestValidator):
    """Raw component source submitted for validation, transform or preview."""

    code: str = Field(max_length=MAX_SOURCE_SIZE)

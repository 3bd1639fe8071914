"""
Model configuration with strong typing.
Centralized settings for the Gemini API.
"""

from enum import Enum
import os

from pydantic import BaseModel, ConfigDict, Field


class GeminiModel(str, Enum):
    """Available Gemini model variants."""

    FLASH = "gemini-2.0-flash"  # Default: fast, cheap, good at TSX
    FLASH_LITE = "gemini-2.0-flash-lite"
    PRO = "gemini-1.5-pro"  # More capable, higher cost


class GeminiConfig(BaseModel):
    """Type-safe Gemini API configuration."""

    model_config = ConfigDict(frozen=True, use_enum_values=True, protected_namespaces=())

    model_name: str = Field(default=GeminiModel.FLASH.value)
    api_key: str | None = Field(default=None)

    # Generation parameters
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(default=8192, ge=1, le=65536)
    top_p: float = Field(default=0.95, ge=0.0, le=1.0)
    top_k: int = Field(default=40, ge=1, le=100)

    # JSON mode (planner)
    json_mode: bool = Field(default=False)

    def __init__(self, **data):
        """Initialize config with API key from environment if not provided."""
        if data.get("api_key") is None:
            data["api_key"] = os.getenv("GOOGLE_API_KEY")
        super().__init__(**data)

"""
Models package - Gemini API integration.
Model loading and configuration for the planner, generator and explainer.
"""

from .config import GeminiConfig, GeminiModel as GeminiModelName
from .loader import ModelLoader, GeminiModel, ModelLoadError

__all__ = [
    "GeminiConfig",
    "GeminiModelName",
    "GeminiModel",
    "ModelLoader",
    "ModelLoadError",
]

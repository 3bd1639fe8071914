"""Model Loader - Gemini API."""

import google.generativeai as genai

from core import get_logger
from .config import GeminiConfig


logger = get_logger(__name__)


class ModelLoadError(Exception):
    """Model loading failed."""
    pass


class GeminiModel:
    """Gemini API wrapper exposing a blocking ``invoke``."""

    def __init__(self, config: GeminiConfig):
        self.config = config
        genai.configure(api_key=config.api_key)

        generation_config = genai.GenerationConfig(
            temperature=config.temperature,
            max_output_tokens=config.max_tokens,
            top_p=config.top_p,
            top_k=config.top_k,
            response_mime_type="application/json" if config.json_mode else None,
        )

        self.model = genai.GenerativeModel(
            model_name=config.model_name,
            generation_config=generation_config,
        )

        logger.info("model_loaded", model=config.model_name, json_mode=config.json_mode)

    def invoke(self, prompt: str) -> str:
        """Non-streaming generation."""
        try:
            response = self.model.generate_content(prompt)
            return response.text
        except Exception as e:
            logger.error("invoke_error", error=str(e))
            raise


class ModelLoader:
    """Model lifecycle manager."""

    _instances: dict[str, GeminiModel] = {}

    @classmethod
    def load(cls, config: GeminiConfig) -> GeminiModel:
        """Load (or reuse) a model for this exact config."""
        key = f"{config.model_name}:{config.json_mode}:{config.temperature}"
        if key in cls._instances:
            return cls._instances[key]
        logger.info("loading", model=config.model_name)
        try:
            model = GeminiModel(config)
        except Exception as e:
            logger.error("load_failed", error=str(e))
            raise ModelLoadError(f"Failed to load {config.model_name}") from e
        cls._instances[key] = model
        return model

    @classmethod
    def unload(cls) -> None:
        if cls._instances:
            logger.info("unloading", count=len(cls._instances))
            cls._instances.clear()


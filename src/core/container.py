"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from agents import (
    BuildPipeline,
    LLMExplainer,
    LLMGenerator,
    LLMPlanner,
    ResilientCaller,
    TemplateExplainer,
    TemplateGenerator,
    TemplatePlanner,
    create_breaker,
)
from agents.explainer import Explainer
from agents.generator import Generator
from agents.planner import Planner
from guard import CodeValidator
from models import GeminiConfig, GeminiModel, ModelLoader
from sandbox import PreviewCompiler
from versions import JsonSnapshotRepository, ProjectStore
from .config import Settings, get_settings
from .logging_config import get_logger

logger = get_logger(__name__)


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_store(self) -> ProjectStore:
        """Project store loaded from the JSON snapshot."""
        store = ProjectStore(
            repository=JsonSnapshotRepository(self.settings.snapshot_path),
            default_file=self.settings.default_file,
        )
        store.load()
        return store

    @singleton
    @provider
    def provide_validator(self) -> CodeValidator:
        return CodeValidator.from_flag(self.settings.strict_validation)

    @singleton
    @provider
    def provide_preview_compiler(self) -> PreviewCompiler:
        return PreviewCompiler()


class AgentModule(Module):
    """Planner, generator and explainer; template fallbacks without an API key."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.breaker = create_breaker(
            "llm",
            fail_max=self.settings.breaker_fail_max,
            reset_timeout=self.settings.breaker_reset_timeout,
        )

    @property
    def use_llm(self) -> bool:
        return bool(self.settings.gemini_api_key)

    def _load(self, json_mode: bool = False) -> GeminiModel:
        config = GeminiConfig(
            model_name=self.settings.gemini_model,
            api_key=self.settings.gemini_api_key,
            temperature=self.settings.gemini_temperature,
            max_tokens=self.settings.gemini_max_tokens,
            json_mode=json_mode,
        )
        return ModelLoader.load(config)

    def _caller(self, role: str, json_mode: bool = False) -> ResilientCaller:
        return ResilientCaller(
            self._load(json_mode),
            role,
            breaker=self.breaker,
            max_retries=self.settings.retry_attempts,
            initial_delay=self.settings.retry_initial_delay,
        )

    @singleton
    @provider
    def provide_planner(self) -> Planner:
        if not self.use_llm:
            logger.warning("no_api_key", mode="template")
            return TemplatePlanner()
        return LLMPlanner(self._caller("planner", json_mode=True))

    @singleton
    @provider
    def provide_generator(self) -> Generator:
        if not self.use_llm:
            return TemplateGenerator()
        return LLMGenerator(self._caller("generator"))

    @singleton
    @provider
    def provide_explainer(self) -> Explainer:
        if not self.use_llm:
            return TemplateExplainer()
        return LLMExplainer(self._caller("explainer"))

    @singleton
    @provider
    def provide_pipeline(
        self,
        store: ProjectStore,
        planner: Planner,
        generator: Generator,
        explainer: Explainer,
        validator: CodeValidator,
    ) -> BuildPipeline:
        return BuildPipeline(store, planner, generator, explainer, validator)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    settings = settings or get_settings()
    return Injector([CoreModule(settings), AgentModule(settings)])

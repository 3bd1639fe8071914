"""Configuration and container tests."""

import pytest

from agents import BuildPipeline, LLMPlanner, TemplatePlanner
from agents.planner import Planner
from core.config import Settings
from core.container import create_container
from guard import CodeValidator, Strictness
from models import GeminiConfig
from models.config import GeminiModel
from versions import ProjectStore


@pytest.mark.unit
def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("BUILDER_LOG_LEVEL", raising=False)
    settings = Settings()

    assert settings.port == 5001
    assert settings.strict_validation is True
    assert settings.default_file == "App.tsx"
    assert settings.retry_attempts == 3
    assert settings.log_level == "INFO"


@pytest.mark.unit
def test_settings_env_prefix(monkeypatch):
    monkeypatch.setenv("BUILDER_STRICT_VALIDATION", "false")
    monkeypatch.setenv("BUILDER_PREVIEW_WATCHDOG_SECONDS", "2.5")

    settings = Settings()
    assert settings.strict_validation is False
    assert settings.preview_watchdog_seconds == 2.5


@pytest.mark.unit
def test_settings_validation():
    assert Settings(gemini_temperature=0.5).gemini_temperature == 0.5

    with pytest.raises(Exception):
        Settings(gemini_temperature=3.0)

    with pytest.raises(Exception):
        Settings(max_prompt_length=0)


@pytest.mark.unit
def test_snapshot_path(tmp_path):
    settings = Settings(data_dir=tmp_path, snapshot_name="s.json")
    assert settings.snapshot_path == tmp_path / "s.json"


# ============================================================================
# GeminiConfig Tests
# ============================================================================

@pytest.mark.unit
def test_gemini_config_defaults():
    config = GeminiConfig(api_key="test-key")

    assert config.model_name == GeminiModel.FLASH.value
    assert config.temperature == 0.2
    assert config.json_mode is False


@pytest.mark.unit
def test_gemini_config_env_key():
    assert GeminiConfig().api_key == "test-api-key"


@pytest.mark.unit
def test_gemini_config_immutable():
    config = GeminiConfig(api_key="k")
    with pytest.raises(Exception):
        config.temperature = 1.0

    updated = config.model_copy(update={"json_mode": True, "model_name": GeminiModel.PRO.value})
    assert updated.json_mode is True
    assert updated.model_name == GeminiModel.PRO.value
    assert config.json_mode is False


@pytest.mark.unit
def test_gemini_config_bounds():
    with pytest.raises(Exception):
        GeminiConfig(api_key="k", max_tokens=0)


# ============================================================================
# Container Tests
# ============================================================================

@pytest.mark.unit
def test_container_without_api_key(settings):
    container = create_container(settings)

    assert isinstance(container.get(Planner), TemplatePlanner)
    assert container.get(ProjectStore) is container.get(ProjectStore)
    assert container.get(CodeValidator).strictness == Strictness.STRICT
    assert container.get(BuildPipeline).store is container.get(ProjectStore)


@pytest.mark.unit
def test_container_store_uses_snapshot(settings):
    store = create_container(settings).get(ProjectStore)
    assert store.repository.path == settings.snapshot_path


@pytest.mark.unit
def test_container_with_api_key(settings, monkeypatch):
    loaded = []

    def fake_load(config):
        loaded.append(config)
        return object()

    monkeypatch.setattr("core.container.ModelLoader.load", fake_load)
    keyed = settings.model_copy(update={"gemini_api_key": "k"})

    assert isinstance(create_container(keyed).get(Planner), LLMPlanner)
    assert loaded[0].json_mode is True

"""Tests for model loading."""

from unittest.mock import MagicMock, patch

import pytest

from models import GeminiConfig, ModelLoader, ModelLoadError


@pytest.fixture(autouse=True)
def clean_loader():
    ModelLoader.unload()
    yield
    ModelLoader.unload()


@pytest.mark.unit
@patch("models.loader.genai")
def test_load_configures_client(mock_genai):
    model = ModelLoader.load(GeminiConfig(api_key="k", json_mode=True))

    mock_genai.configure.assert_called_once_with(api_key="k")
    kwargs = mock_genai.GenerationConfig.call_args.kwargs
    assert kwargs["response_mime_type"] == "application/json"
    assert model.model is mock_genai.GenerativeModel.return_value


@pytest.mark.unit
@patch("models.loader.genai")
def test_load_is_cached_per_config(mock_genai):
    config = GeminiConfig(api_key="k")
    assert ModelLoader.load(config) is ModelLoader.load(config)
    assert ModelLoader.load(config) is not ModelLoader.load(config.model_copy(update={"json_mode": True}))


@pytest.mark.unit
@patch("models.loader.genai")
def test_invoke_returns_text(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.return_value = MagicMock(text="hello")
    assert ModelLoader.load(GeminiConfig(api_key="k")).invoke("hi") == "hello"


@pytest.mark.unit
@patch("models.loader.genai")
def test_invoke_propagates_errors(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("429 quota")
    with pytest.raises(RuntimeError):
        ModelLoader.load(GeminiConfig(api_key="k")).invoke("hi")


@pytest.mark.unit
@patch("models.loader.genai")
def test_load_failure(mock_genai):
    mock_genai.GenerativeModel.side_effect = ValueError("bad model")
    with pytest.raises(ModelLoadError):
        ModelLoader.load(GeminiConfig(api_key="k", model_name="nope"))

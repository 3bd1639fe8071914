"""Pytest configuration and fixtures."""

import os
from unittest.mock import MagicMock

import pytest
from injector import Injector, Module, provider, singleton

from agents import BuildPipeline, TemplateExplainer, TemplateGenerator, TemplatePlanner
from core import Settings
from guard import CodeValidator
from sandbox import PreviewCompiler
from versions import JsonSnapshotRepository, Plan, ProjectStore


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["BUILDER_LOG_LEVEL"] = "DEBUG"
    os.environ["BUILDER_GEMINI_API_KEY"] = ""
    os.environ["GOOGLE_API_KEY"] = "test-api-key"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings(tmp_path):
    """Test settings with state under a temp directory."""
    return Settings(
        data_dir=tmp_path / "db",
        gemini_api_key="",
        retry_initial_delay=0.0,
        preview_watchdog_seconds=5.0,
    )


@pytest.fixture
def store():
    """In-memory project store."""
    return ProjectStore()


@pytest.fixture
def persistent_store(tmp_path):
    """Project store backed by a snapshot file."""
    return ProjectStore(repository=JsonSnapshotRepository(tmp_path / "state.json"))


@pytest.fixture
def sample_plan():
    """Plan with whitelisted components."""
    return Plan(
        intent="Build a pricing page",
        steps=["Add hero", "Add pricing cards"],
        components=["Container", "Card", "Button"],
        layout_strategy="Centered container with a three-column grid",
        explanation="Pricing tiers side by side",
    )


# ============================================================================
# Model Fixtures
# ============================================================================

@pytest.fixture
def mock_llm():
    """Mock text LLM (``invoke`` returns a fixed string)."""
    mock = MagicMock()
    mock.invoke.return_value = "test response"
    return mock


# ============================================================================
# Code Fixtures
# ============================================================================

@pytest.fixture
def sample_component():
    """A valid generated component using only vocabulary components."""
    return """import React from 'react';
import { Card } from '../components/Card';
import { Button } from '../components/Button';
import { Stack } from '../layout-primitives/Stack';

export default function App() {
  const [count, setCount] = React.useState(0);
  return (
    <Stack gap={4} className="p-8">
      <Card padding="lg">
        <h1 className="text-2xl font-bold">Don't panic</h1>
        <p>{count > 1 ? "many" : "few"} clicks</p>
        <Button variant="primary" onClick={() => setCount(count + 1)} disabled>
          Click
        </Button>
      </Card>
    </Stack>
  );
}
"""


# ============================================================================
# App Fixtures
# ============================================================================

class StubAgentModule(Module):
    """Template agents around a caller-supplied store."""

    def __init__(self, store: ProjectStore, planner=None, generator=None, explainer=None) -> None:
        self.store = store
        self.planner = planner or TemplatePlanner()
        self.generator = generator or TemplateGenerator()
        self.explainer = explainer or TemplateExplainer()

    @singleton
    @provider
    def provide_store(self) -> ProjectStore:
        return self.store

    @singleton
    @provider
    def provide_validator(self) -> CodeValidator:
        return CodeValidator()

    @singleton
    @provider
    def provide_compiler(self) -> PreviewCompiler:
        return PreviewCompiler()

    @singleton
    @provider
    def provide_pipeline(self, validator: CodeValidator) -> BuildPipeline:
        return BuildPipeline(self.store, self.planner, self.generator, self.explainer, validator)


@pytest.fixture
def make_client(settings):
    """Factory for a TestClient over an app with stubbed agents."""
    from fastapi.testclient import TestClient
    from main import create_app

    clients = []

    def _make(store: ProjectStore | None = None, **agents):
        container = Injector([StubAgentModule(store or ProjectStore(), **agents)])
        client = TestClient(create_app(settings=settings, container=container))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)

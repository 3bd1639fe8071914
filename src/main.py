"""
UI Builder Service - Main Entry Point
HTTP surface for generation, version history, validation and previews
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from injector import Injector
from prometheus_client import CONTENT_TYPE_LATEST
from pydantic import BaseModel, Field

from agents import BuildPipeline, RateLimitError, UpstreamGenerationError
from core import (
    GenerateRequest,
    LogContext,
    RollbackRequest,
    Settings,
    SourceRequest,
    ValidationError,
    configure_logging,
    create_container,
    get_logger,
    get_settings,
)
from guard import CodeValidator, ValidationViolation
from models import ModelLoader
from monitoring import metrics_collector
from sandbox import PreviewCompiler, PreviewSession, PreviewState, SANDBOX_FLAGS
from uitree import ParseError, transform
from versions import ProjectStore, VersionNotFound

logger = get_logger(__name__)


class PreviewStatusReport(BaseModel):
    """Status message relayed from a preview document."""

    generation: int = Field(ge=0)
    state: PreviewState
    message: str = ""


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json")


def create_app(settings: Settings | None = None, container: Injector | None = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        settings: Overrides environment settings
        container: Pre-built injector (tests pass one with stub agents)
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Wire dependencies on startup, flush the store on shutdown."""
        configure_logging(settings.log_level, settings.json_logs)
        injector = container or create_container(settings)
        app.state.container = injector
        app.state.settings = settings
        app.state.store = injector.get(ProjectStore)
        app.state.pipeline = injector.get(BuildPipeline)
        app.state.validator = injector.get(CodeValidator)
        app.state.preview = PreviewSession(
            injector.get(PreviewCompiler),
            watchdog_seconds=settings.preview_watchdog_seconds,
        )
        logger.info("service_ready", files=len(app.state.store.files()), strict=settings.strict_validation)

        yield

        logger.info("service_stopping")
        app.state.store.close()
        ModelLoader.unload()

    app = FastAPI(
        title="UI Builder Service",
        description="Prompt-to-component builder with versioning and sandboxed previews",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Enable CORS for the local editor client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)
    _register_routes(app)
    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationViolation)
    async def on_violation(request: Request, exc: ValidationViolation):
        return JSONResponse(status_code=422, content={"error": str(exc), "violations": exc.violations, "rules": exc.rules})

    @app.exception_handler(ParseError)
    async def on_parse_error(request: Request, exc: ParseError):
        return JSONResponse(status_code=422, content={"error": str(exc), "type": type(exc).__name__})

    @app.exception_handler(RateLimitError)
    async def on_rate_limit(request: Request, exc: RateLimitError):
        return JSONResponse(status_code=429, content={"error": str(exc)})

    @app.exception_handler(UpstreamGenerationError)
    async def on_upstream(request: Request, exc: UpstreamGenerationError):
        return JSONResponse(status_code=502, content={"error": str(exc), "role": exc.role})

    @app.exception_handler(VersionNotFound)
    async def on_version_not_found(request: Request, exc: VersionNotFound):
        return JSONResponse(status_code=404, content={"error": "Version not found", "id": exc.version_id})

    @app.exception_handler(ValidationError)
    async def on_bad_request(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})


def _register_routes(app: FastAPI) -> None:
    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/metrics")
    async def metrics():
        return Response(content=metrics_collector.get_metrics(), media_type=CONTENT_TYPE_LATEST)

    # ------------------------------------------------------------------
    # Files

    @app.get("/api/files")
    def list_files(request: Request):
        store: ProjectStore = request.app.state.store
        return [
            {"name": name, "type": "file", "versions": len(store.versions(name))}
            for name in store.files()
        ]

    @app.get("/api/files/{file:path}/code")
    def file_code(file: str, request: Request):
        store: ProjectStore = request.app.state.store
        current = store.current(file)
        return {"file": file, "code": store.code(file), "version": current.id if current else None}

    @app.get("/api/files/{file:path}/messages")
    def file_messages(file: str, request: Request):
        return [_dump(m) for m in request.app.state.store.messages(file)]

    @app.get("/api/files/{file:path}/versions")
    def file_versions(file: str, request: Request):
        store: ProjectStore = request.app.state.store
        current = store.current(file)
        return {
            "current": current.id if current else None,
            "versions": [_dump(v) for v in store.versions(file)],
        }

    @app.delete("/api/files/{file:path}")
    def delete_file(file: str, request: Request):
        if not request.app.state.store.delete_file(file):
            return JSONResponse(status_code=404, content={"error": "File not found", "file": file})
        return {"status": "deleted", "file": file}

    # ------------------------------------------------------------------
    # Generation and history

    @app.post("/api/agent/generate")
    def generate(body: GenerateRequest, request: Request):
        settings: Settings = request.app.state.settings
        if len(body.prompt) > settings.max_prompt_length:
            raise ValidationError(f"Prompt exceeds {settings.max_prompt_length} characters")

        pipeline: BuildPipeline = request.app.state.pipeline
        with LogContext(endpoint="generate"):
            try:
                result = pipeline.run(body.file, body.prompt, body.previous_plan)
            except ValueError as e:
                raise ValidationError(str(e)) from e

        return {
            "plan": result.plan.model_dump(mode="json", by_alias=True),
            "code": result.code,
            "explanation": result.explanation,
            "structured": result.structured,
            "version": _dump(result.version),
        }

    @app.post("/api/version/rollback")
    def rollback(body: RollbackRequest, request: Request):
        version = request.app.state.store.rollback(body.file, body.id)
        return {"status": "rolled_back", "version": _dump(version)}

    # ------------------------------------------------------------------
    # Structural tools

    @app.post("/api/validate")
    def validate(body: SourceRequest, request: Request):
        report = request.app.state.validator.validate(body.code)
        return {"ok": report.ok, "violations": report.violations, "rules": report.rules}

    @app.post("/api/transform")
    def transform_source(body: SourceRequest):
        result = transform(body.code)
        return {"tree": _dump(result.tree), "code": result.canonical_code}

    # ------------------------------------------------------------------
    # Preview

    @app.post("/api/preview", response_class=HTMLResponse)
    def preview(body: SourceRequest, request: Request):
        session: PreviewSession = request.app.state.preview
        loaded = session.load(body.code)
        return HTMLResponse(
            content=loaded.document,
            headers={
                "X-Preview-Generation": str(loaded.generation),
                "X-Sandbox-Flags": SANDBOX_FLAGS,
            },
        )

    @app.post("/api/preview/status")
    def preview_report(body: PreviewStatusReport, request: Request):
        session: PreviewSession = request.app.state.preview
        accepted = session.report(body.generation, body.state, body.message)
        return {"accepted": accepted, "state": session.state.value, "generation": session.generation}

    @app.get("/api/preview/status")
    def preview_status(request: Request):
        session: PreviewSession = request.app.state.preview
        teardown = session.check_watchdog()
        return {
            "state": session.state.value,
            "generation": session.generation,
            "message": session.message,
            "teardown": teardown,
        }


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "main:app",
        host=_settings.host,
        port=_settings.port,
        log_level=_settings.log_level.lower(),
    )

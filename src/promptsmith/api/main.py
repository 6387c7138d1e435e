"""FastAPI entrypoint for the prompt pipeline operations."""

from __future__ import annotations

import json
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, ValidationError

from promptsmith.config import Settings
from promptsmith.domains import Domain, Tone
from promptsmith.errors import DependencyDegraded, InvalidInput
from promptsmith.obs.telemetry import TelemetryRecorder
from promptsmith.pipeline.orchestrator import PromptOrchestrator
from promptsmith.serialization import to_jsonable
from promptsmith.storage.store import InMemoryPromptStore, PromptStore, SQLitePromptStore
from promptsmith.tools.builtin import (
    CompareToolInput,
    EvaluateToolInput,
    ProcessToolInput,
    SaveToolInput,
    ValidateToolInput,
    register_builtin_tools,
)
from promptsmith.tools.registry import ToolRegistry


class ToolCallRequest(BaseModel):
    payload: dict[str, Any] = Field(default_factory=dict)


def _create_store(settings: Settings) -> PromptStore:
    if settings.store_path:
        return SQLitePromptStore(settings.store_path)
    return InMemoryPromptStore()


_settings = Settings.from_env()
_telemetry = TelemetryRecorder()
_orchestrator = PromptOrchestrator(
    settings=_settings,
    store=_create_store(_settings),
    telemetry=_telemetry,
)
_registry = ToolRegistry(telemetry=_telemetry)
register_builtin_tools(_registry, _orchestrator)

app = FastAPI(title="Promptsmith", version=_settings.pipeline.version)


def _run(operation: Any, *args: Any, **kwargs: Any) -> Any:
    try:
        return operation(*args, **kwargs)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except DependencyDegraded as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "version": _settings.pipeline.version,
        "domains": [domain.value for domain in Domain],
        "tones": [tone.value for tone in Tone],
        "store": "sqlite" if _settings.store_path else "memory",
        "tool_count": len(_registry.specs()),
    }


@app.get("/tools")
def tools(tag: str | None = None) -> dict[str, Any]:
    return {"items": _registry.describe(tag)}


@app.post("/tools/{name}")
def call_tool(name: str, request: ToolCallRequest) -> dict[str, Any]:
    try:
        output = _run(_registry.execute, name, request.payload)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc
    try:
        result: Any = json.loads(output)
    except json.JSONDecodeError:
        result = output
    return {"tool": name, "result": result}


@app.post("/process")
def process(request: ProcessToolInput) -> dict[str, Any]:
    result = _run(
        _orchestrator.process,
        request.raw,
        domain=request.domain,
        tone=request.tone,
        context=request.context,
        variables=request.variables,
    )
    return to_jsonable(result)


@app.post("/evaluate")
def evaluate(request: EvaluateToolInput) -> dict[str, Any]:
    criteria = [dimension.value for dimension in request.criteria] if request.criteria else None
    result = _run(_orchestrator.evaluate, request.text, domain=request.domain, criteria=criteria)
    return to_jsonable(result)


@app.post("/compare")
def compare(request: CompareToolInput) -> dict[str, Any]:
    result = _run(
        _orchestrator.compare,
        request.variants,
        test_input=request.test_input,
        domain=request.domain,
    )
    return to_jsonable(result)


@app.post("/validate")
def validate(request: ValidateToolInput) -> dict[str, Any]:
    result = _run(_orchestrator.validate, request.text, domain=request.domain)
    return to_jsonable(result)


@app.post("/prompts")
def save_prompt(request: SaveToolInput) -> dict[str, Any]:
    record = _run(
        _orchestrator.save,
        request.text,
        name=request.name,
        domain=request.domain,
        tags=request.tags,
        description=request.description,
    )
    return to_jsonable(record)


@app.get("/prompts")
def search_prompts(query: str = "", domain: str | None = None, limit: int = 10) -> dict[str, Any]:
    records = _run(_orchestrator.search, query, domain=domain, limit=limit)
    return {"items": [to_jsonable(record) for record in records]}


@app.get("/prompts/{record_id}")
def prompt_detail(record_id: str) -> dict[str, Any]:
    record = _run(_orchestrator.get, record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Unknown prompt: {record_id}")
    return to_jsonable(record)


@app.get("/metrics")
def metrics() -> dict[str, Any]:
    _orchestrator.flush(timeout=_settings.pipeline.dependency_timeout_seconds)
    return _run(_orchestrator.stats)

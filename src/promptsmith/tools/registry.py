"""Named pipeline operations with validated arguments and per-call tracing."""

from __future__ import annotations

import logging
from collections.abc import Callable
from time import perf_counter
from typing import Any

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, ConfigDict, Field

from promptsmith.errors import DependencyDegraded
from promptsmith.obs.telemetry import NullTelemetry, TelemetrySink
from promptsmith.types import ToolTrace

logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 320


class ToolSpec(BaseModel):
    """One exposed operation: its argument model and the handler behind it."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    args_schema: type[BaseModel]
    handler: Callable[[BaseModel], str]
    tags: list[str] = Field(default_factory=list)

    def invoke(self, payload: dict[str, Any]) -> str:
        data = self.args_schema.model_validate(payload)
        return self.handler(data)

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "tags": list(self.tags),
            "input_schema": self.args_schema.model_json_schema(),
        }


class ToolRegistry:
    """Dispatches pipeline operations by name.

    Every call, successful or not, is emitted to the telemetry sink as a
    `tool_call` event carrying the tool name, latency and status. An optional
    observer additionally receives the full `ToolTrace`.
    """

    def __init__(self, *, telemetry: TelemetrySink | None = None) -> None:
        self._tools: dict[str, ToolSpec] = {}
        self._telemetry: TelemetrySink = telemetry if telemetry is not None else NullTelemetry()
        self._observer: Callable[[ToolTrace], None] | None = None

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = spec

    def set_observer(self, observer: Callable[[ToolTrace], None] | None) -> None:
        self._observer = observer

    def get(self, name: str) -> ToolSpec:
        spec = self._tools.get(name)
        if spec is None:
            raise KeyError(f"Unknown tool: {name}")
        return spec

    def execute(self, name: str, payload: dict[str, Any]) -> str:
        return self._execute_spec(self.get(name), payload)

    def describe(self, tag: str | None = None) -> list[dict[str, Any]]:
        """Schemas of registered tools, optionally only those carrying `tag`."""
        return [spec.describe() for spec in self._tools.values() if tag is None or tag in spec.tags]

    def as_langchain_tools(self) -> list[StructuredTool]:
        return [
            StructuredTool.from_function(
                name=spec.name,
                description=spec.description,
                args_schema=spec.args_schema,
                func=self._build_function(spec),
            )
            for spec in self._tools.values()
        ]

    def specs(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def _build_function(self, spec: ToolSpec) -> Callable[..., str]:
        def _callable(**kwargs: Any) -> str:
            return self._execute_spec(spec, kwargs)

        return _callable

    def _execute_spec(self, spec: ToolSpec, payload: dict[str, Any]) -> str:
        start = perf_counter()
        try:
            output = spec.invoke(payload)
        except Exception as exc:
            self._trace(
                ToolTrace(
                    name=spec.name,
                    input_payload=payload,
                    output_preview="",
                    latency_ms=(perf_counter() - start) * 1000.0,
                    status="error",
                    error=type(exc).__name__,
                )
            )
            raise

        self._trace(
            ToolTrace(
                name=spec.name,
                input_payload=payload,
                output_preview=output[:_PREVIEW_CHARS],
                latency_ms=(perf_counter() - start) * 1000.0,
            )
        )
        return output

    def _trace(self, trace: ToolTrace) -> None:
        event: dict[str, Any] = {"tool": trace.name, "latency_ms": trace.latency_ms, "status": trace.status}
        if trace.error is not None:
            event["error"] = trace.error
        try:
            self._telemetry.emit("tool_call", event)
        except Exception as exc:
            logger.warning("%s", DependencyDegraded("telemetry", "emit", str(exc)))
        if self._observer is not None:
            self._observer(trace)

"""Built-in tools exposing the prompt pipeline operations."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field

from promptsmith.domains import Domain, Tone
from promptsmith.pipeline.orchestrator import PromptOrchestrator
from promptsmith.serialization import to_jsonable
from promptsmith.tools.registry import ToolRegistry, ToolSpec
from promptsmith.types import Dimension


class ProcessToolInput(BaseModel):
    raw: str = Field(min_length=1, max_length=10_000)
    domain: Domain | None = None
    tone: Tone | None = None
    context: str | None = Field(default=None, max_length=2_000)
    variables: dict[str, str] = Field(default_factory=dict)


class EvaluateToolInput(BaseModel):
    text: str = Field(min_length=1, max_length=10_000)
    domain: Domain | None = None
    criteria: list[Dimension] | None = None


class CompareToolInput(BaseModel):
    variants: list[str] = Field(min_length=2, max_length=10)
    test_input: str | None = None
    domain: Domain | None = None


class ValidateToolInput(BaseModel):
    text: str = Field(min_length=1, max_length=10_000)
    domain: Domain | None = None


class SaveToolInput(BaseModel):
    text: str = Field(min_length=1, max_length=10_000)
    name: str = Field(min_length=1, max_length=200)
    domain: Domain | None = None
    tags: list[str] = Field(default_factory=list, max_length=20)
    description: str = Field(default="", max_length=1_000)


class SearchToolInput(BaseModel):
    query: str = ""
    domain: Domain | None = None
    limit: int = Field(default=10, ge=1, le=50)


class GetToolInput(BaseModel):
    id: str = Field(min_length=1)


class StatsToolInput(BaseModel):
    pass


def register_builtin_tools(registry: ToolRegistry, orchestrator: PromptOrchestrator) -> None:
    """Register the pipeline operations as tools.

    Tools:
    - `process_prompt`: full refinement pipeline for one instruction.
    - `evaluate_prompt`: score with per-factor breakdown and recommendations.
    - `compare_prompts`: score 2-10 variants and pick a winner.
    - `validate_prompt`: validator findings only.
    - `save_prompt` / `search_prompts` / `get_prompt`: saved-prompt store.
    - `prompt_stats`: store counts and telemetry summary.

    Every handler returns a JSON document.
    """

    def _process(input_data: ProcessToolInput) -> str:
        result = orchestrator.process(
            input_data.raw,
            domain=input_data.domain,
            tone=input_data.tone,
            context=input_data.context,
            variables=input_data.variables,
        )
        return _dumps(to_jsonable(result))

    def _evaluate(input_data: EvaluateToolInput) -> str:
        criteria = [dimension.value for dimension in input_data.criteria] if input_data.criteria else None
        result = orchestrator.evaluate(input_data.text, domain=input_data.domain, criteria=criteria)
        return _dumps(to_jsonable(result))

    def _compare(input_data: CompareToolInput) -> str:
        result = orchestrator.compare(
            input_data.variants,
            test_input=input_data.test_input,
            domain=input_data.domain,
        )
        return _dumps(to_jsonable(result))

    def _validate(input_data: ValidateToolInput) -> str:
        result = orchestrator.validate(input_data.text, domain=input_data.domain)
        return _dumps(to_jsonable(result))

    def _save(input_data: SaveToolInput) -> str:
        record = orchestrator.save(
            input_data.text,
            name=input_data.name,
            domain=input_data.domain,
            tags=input_data.tags,
            description=input_data.description,
        )
        return _dumps(to_jsonable(record))

    def _search(input_data: SearchToolInput) -> str:
        records = orchestrator.search(input_data.query, domain=input_data.domain, limit=input_data.limit)
        return _dumps({"items": [to_jsonable(record) for record in records]})

    def _get(input_data: GetToolInput) -> str:
        record = orchestrator.get(input_data.id)
        if record is None:
            return "NOT_FOUND"
        return _dumps(to_jsonable(record))

    def _stats(input_data: StatsToolInput) -> str:
        return _dumps(orchestrator.stats())

    registry.register(
        ToolSpec(
            name="process_prompt",
            description="Refine a raw instruction into a structured, scored prompt.",
            args_schema=ProcessToolInput,
            handler=_process,
            tags=["pipeline"],
        )
    )
    registry.register(
        ToolSpec(
            name="evaluate_prompt",
            description="Score a prompt and explain each quality dimension.",
            args_schema=EvaluateToolInput,
            handler=_evaluate,
            tags=["scoring"],
        )
    )
    registry.register(
        ToolSpec(
            name="compare_prompts",
            description="Compare prompt variants and select the best one.",
            args_schema=CompareToolInput,
            handler=_compare,
            tags=["scoring"],
        )
    )
    registry.register(
        ToolSpec(
            name="validate_prompt",
            description="Check a prompt for errors, warnings and improvement suggestions.",
            args_schema=ValidateToolInput,
            handler=_validate,
            tags=["validation"],
        )
    )
    registry.register(
        ToolSpec(
            name="save_prompt",
            description="Refine a prompt and save it to the prompt store.",
            args_schema=SaveToolInput,
            handler=_save,
            tags=["store"],
        )
    )
    registry.register(
        ToolSpec(
            name="search_prompts",
            description="Search saved prompts by keyword and domain.",
            args_schema=SearchToolInput,
            handler=_search,
            tags=["store"],
        )
    )
    registry.register(
        ToolSpec(
            name="get_prompt",
            description="Fetch a saved prompt by id.",
            args_schema=GetToolInput,
            handler=_get,
            tags=["store"],
        )
    )
    registry.register(
        ToolSpec(
            name="prompt_stats",
            description="Report saved-prompt counts and pipeline metrics.",
            args_schema=StatsToolInput,
            handler=_stats,
            tags=["metrics"],
        )
    )


def _dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True)

import json

import pytest
from pydantic import BaseModel, Field, ValidationError

from promptsmith.tools.builtin import register_builtin_tools
from promptsmith.tools.registry import ToolRegistry, ToolSpec


class EchoInput(BaseModel):
    value: int = Field(ge=1)


def _echo_spec() -> ToolSpec:
    def _handler(data: EchoInput) -> str:
        return str(data.value)

    return ToolSpec(
        name="echo",
        description="echo positive int",
        args_schema=EchoInput,
        handler=_handler,
    )


def test_tool_registry_validation() -> None:
    registry = ToolRegistry()
    registry.register(_echo_spec())

    assert registry.execute("echo", {"value": 3}) == "3"

    with pytest.raises(ValidationError):
        registry.execute("echo", {"value": 0})


def test_duplicate_tool_registration_rejected() -> None:
    registry = ToolRegistry()
    spec = _echo_spec()

    registry.register(spec)
    with pytest.raises(ValueError):
        registry.register(spec)


def test_unknown_tool_raises_key_error() -> None:
    with pytest.raises(KeyError):
        ToolRegistry().execute("missing", {})


def test_describe_exposes_input_schema() -> None:
    description = _echo_spec().describe()

    assert description["name"] == "echo"
    assert description["input_schema"]["properties"]["value"]["minimum"] == 1


def test_builtin_tools_are_registered(orchestrator) -> None:
    registry = ToolRegistry()
    register_builtin_tools(registry, orchestrator)

    names = [spec.name for spec in registry.specs()]
    assert names == [
        "process_prompt",
        "evaluate_prompt",
        "compare_prompts",
        "validate_prompt",
        "save_prompt",
        "search_prompts",
        "get_prompt",
        "prompt_stats",
    ]
    assert [tool.name for tool in registry.as_langchain_tools()] == names


def test_builtin_tools_return_json(orchestrator) -> None:
    registry = ToolRegistry()
    register_builtin_tools(registry, orchestrator)

    processed = json.loads(registry.execute("process_prompt", {"raw": "create a table for customers", "domain": "sql"}))
    assert processed["metadata"]["domain"] == "sql"
    assert processed["refined"].startswith("Design a database table for customers.")

    saved = json.loads(registry.execute("save_prompt", {"text": "create a table for customers", "name": "Customers"}))
    assert registry.execute("get_prompt", {"id": saved["id"]}) != "NOT_FOUND"
    assert registry.execute("get_prompt", {"id": "missing"}) == "NOT_FOUND"

    found = json.loads(registry.execute("search_prompts", {"query": "customers"}))
    assert [item["id"] for item in found["items"]] == [saved["id"]]


def test_builtin_tool_arguments_are_validated(orchestrator) -> None:
    registry = ToolRegistry()
    register_builtin_tools(registry, orchestrator)

    with pytest.raises(ValidationError):
        registry.execute("compare_prompts", {"variants": ["only one"]})
    with pytest.raises(ValidationError):
        registry.execute("process_prompt", {"raw": "write a poem", "domain": "astrology"})


def test_langchain_tool_invokes_registry(orchestrator) -> None:
    registry = ToolRegistry()
    register_builtin_tools(registry, orchestrator)
    tool = next(tool for tool in registry.as_langchain_tools() if tool.name == "validate_prompt")

    payload = json.loads(tool.invoke({"text": "Fix"}))

    assert payload["is_valid"] is False

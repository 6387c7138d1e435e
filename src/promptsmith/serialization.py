"""JSON round-trip for pipeline results via pydantic type adapters."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(model: type) -> TypeAdapter[Any]:
    return TypeAdapter(model)


def dump_json(value: Any) -> str:
    """Serialize a result dataclass (or any supported value) to a JSON string."""
    return _adapter(type(value)).dump_json(value).decode("utf-8")


def load_json(model: type[T], payload: str | bytes) -> T:
    """Rebuild a typed result from JSON produced by `dump_json`."""
    return _adapter(model).validate_json(payload)


def to_jsonable(value: Any) -> Any:
    """Convert a result dataclass to plain JSON-compatible python objects."""
    return _adapter(type(value)).dump_python(value, mode="json")

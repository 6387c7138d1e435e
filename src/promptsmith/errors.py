"""Exception taxonomy for the prompt pipeline.

Only `InvalidInput` escapes the pipeline operations. Rule and check faults are
raised and caught inside the component that owns them, then recorded on the
result. Store-backed operations surface `DependencyDegraded`.
"""

from __future__ import annotations


class PromptsmithError(Exception):
    """Base exception for all promptsmith errors."""


class InvalidInput(PromptsmithError):
    """Raised before the pipeline starts when the request is malformed."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"Invalid input for '{field}': {message}")


class RuleApplicationFault(PromptsmithError):
    """Raised when a single rule's pattern, replacement or predicate fails."""

    def __init__(self, rule_id: str, message: str, original_error: Exception | None = None) -> None:
        self.rule_id = rule_id
        self.message = message
        self.original_error = original_error
        super().__init__(f"Rule '{rule_id}' failed: {message}")


class ValidationFault(PromptsmithError):
    """Raised when a single validator check fails internally."""

    def __init__(self, check: str, message: str, original_error: Exception | None = None) -> None:
        self.check = check
        self.message = message
        self.original_error = original_error
        super().__init__(f"Validation check '{check}' failed: {message}")


class DependencyDegraded(PromptsmithError):
    """Raised when cache, store or telemetry fails or times out."""

    def __init__(self, dependency: str, operation: str, message: str) -> None:
        self.dependency = dependency
        self.operation = operation
        self.message = message
        super().__init__(f"{dependency}.{operation} degraded: {message}")

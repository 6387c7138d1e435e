"""Prompt refinement pipeline package."""

from .config import Settings
from .domains import Domain, Tone
from .errors import InvalidInput, PromptsmithError
from .pipeline.orchestrator import PromptOrchestrator

__all__ = ["Domain", "InvalidInput", "PromptOrchestrator", "PromptsmithError", "Settings", "Tone"]

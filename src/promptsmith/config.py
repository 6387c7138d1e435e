"""Configuration models for the prompt pipeline."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


class AnalyzerConfig(BaseModel):
    """Configures text cleaning and the complexity heuristics."""

    max_input_chars: int = Field(default=10_000, ge=100)
    length_basis_chars: int = Field(default=500, ge=1)
    sentence_basis_words: float = Field(default=25.0, gt=0.0)
    technical_density_boost: float = Field(default=5.0, gt=0.0)


class ValidationConfig(BaseModel):
    """Thresholds used by validator checks."""

    min_length: int = Field(default=10, ge=1)
    max_length: int = Field(default=5000, ge=100)
    min_words: int = Field(default=3, ge=1)
    max_ambiguity: float = Field(default=0.5, ge=0.0, le=1.0)
    min_readability: float = Field(default=0.3, ge=0.0, le=1.0)
    max_complexity: float = Field(default=0.85, ge=0.0, le=1.0)
    max_sentence_words: int = Field(default=35, ge=5)


class CacheConfig(BaseModel):
    """Configures cache TTL policy and in-memory capacity."""

    base_ttl_seconds: int = Field(default=3600, ge=1)
    min_ttl_multiplier: float = Field(default=0.5, ge=0.0, le=1.0)
    max_entries: int = Field(default=1024, ge=1)


class PipelineConfig(BaseModel):
    """Configures side-effect timeouts and result compilation."""

    dependency_timeout_seconds: float = Field(default=2.0, gt=0.0)
    side_effect_workers: int = Field(default=2, ge=1)
    cache_read_workers: int = Field(default=2, ge=1)
    max_pending_side_effects: int = Field(default=256, ge=1)
    max_suggestions: int = Field(default=5, ge=1)
    suggestion_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    version: str = "1.0.0"


class Settings(BaseModel):
    """Process-wide settings assembled from the environment."""

    store_path: str | None = None
    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        cache = CacheConfig()
        ttl = os.getenv("PROMPTSMITH_CACHE_TTL")
        if ttl:
            cache = CacheConfig(base_ttl_seconds=int(ttl))

        pipeline = PipelineConfig()
        timeout = os.getenv("PROMPTSMITH_DEPENDENCY_TIMEOUT")
        if timeout:
            pipeline = PipelineConfig(dependency_timeout_seconds=float(timeout))

        return cls(
            store_path=os.getenv("PROMPTSMITH_STORE_PATH") or None,
            cache=cache,
            pipeline=pipeline,
        )

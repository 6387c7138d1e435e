"""Closed domain and tone enumerations plus the vocabulary used for domain hints."""

from __future__ import annotations

from enum import Enum

from promptsmith.errors import InvalidInput


class Domain(str, Enum):
    GENERAL = "general"
    SQL = "sql"
    BRANDING = "branding"
    CINE = "cine"
    SAAS = "saas"
    DEVOPS = "devops"
    MOBILE = "mobile"
    WEB = "web"
    BACKEND = "backend"
    FRONTEND = "frontend"
    AI = "ai"
    GAMING = "gaming"
    CRYPTO = "crypto"
    EDUCATION = "education"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    LEGAL = "legal"


class Tone(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    TECHNICAL = "technical"
    CREATIVE = "creative"


# Trigger vocabulary per domain. A domain becomes a hint when at least one of
# its keywords appears as a whole word in the text.
DOMAIN_KEYWORDS: dict[Domain, tuple[str, ...]] = {
    Domain.SQL: (
        "sql", "table", "tables", "query", "queries", "database", "db", "select",
        "insert", "join", "schema", "index", "postgresql", "mysql", "sqlite",
        "tabla", "consulta",
    ),
    Domain.BRANDING: (
        "brand", "branding", "marketing", "campaign", "logo", "slogan", "tagline",
        "audience", "copy", "copywriting", "marca", "campaña",
    ),
    Domain.CINE: (
        "script", "screenplay", "film", "movie", "cinema", "scene", "dialogue",
        "character", "protagonist", "película", "guión", "escena",
    ),
    Domain.SAAS: (
        "saas", "subscription", "dashboard", "onboarding", "churn", "tenant",
        "pricing", "platform", "integration", "feature",
    ),
    Domain.DEVOPS: (
        "deploy", "deployment", "docker", "kubernetes", "k8s", "pipeline", "ci",
        "cd", "terraform", "infrastructure", "helm", "ansible", "monitoring",
    ),
    Domain.MOBILE: (
        "mobile", "ios", "android", "swift", "kotlin", "flutter", "smartphone",
        "tablet", "push",
    ),
    Domain.WEB: (
        "website", "web", "html", "css", "browser", "seo", "landing", "webpage",
    ),
    Domain.BACKEND: (
        "backend", "api", "endpoint", "server", "microservice", "rest", "graphql",
        "authentication", "middleware",
    ),
    Domain.FRONTEND: (
        "frontend", "react", "vue", "angular", "component", "ui", "css", "layout",
        "responsive",
    ),
    Domain.AI: (
        "ai", "model", "llm", "prompt", "embedding", "training", "dataset",
        "classifier", "neural", "inference",
    ),
    Domain.GAMING: (
        "game", "gaming", "player", "level", "gameplay", "unity", "unreal",
        "multiplayer", "quest",
    ),
    Domain.CRYPTO: (
        "crypto", "blockchain", "token", "wallet", "smart", "ethereum", "bitcoin",
        "defi", "nft",
    ),
    Domain.EDUCATION: (
        "lesson", "course", "student", "students", "curriculum", "teacher",
        "learning", "quiz", "syllabus",
    ),
    Domain.HEALTHCARE: (
        "patient", "patients", "clinical", "medical", "health", "diagnosis",
        "hospital", "hipaa", "treatment",
    ),
    Domain.FINANCE: (
        "finance", "financial", "budget", "revenue", "investment", "portfolio",
        "accounting", "forecast", "tax",
    ),
    Domain.LEGAL: (
        "contract", "legal", "clause", "compliance", "gdpr", "liability",
        "agreement", "jurisdiction", "regulation",
    ),
}


def parse_domain(value: str | Domain | None, *, default: Domain | None = Domain.GENERAL) -> Domain | None:
    """Resolve a caller-supplied domain tag, raising `InvalidInput` on unknown values."""
    if value is None:
        return default
    if isinstance(value, Domain):
        return value
    tag = str(value).strip().lower()
    if not tag:
        return default
    try:
        return Domain(tag)
    except ValueError as exc:
        allowed = ", ".join(d.value for d in Domain)
        raise InvalidInput("domain", f"unknown domain '{value}' (allowed: {allowed})") from exc


def parse_tone(value: str | Tone | None) -> Tone | None:
    if value is None:
        return None
    if isinstance(value, Tone):
        return value
    tag = str(value).strip().lower()
    if not tag:
        return None
    try:
        return Tone(tag)
    except ValueError as exc:
        allowed = ", ".join(t.value for t in Tone)
        raise InvalidInput("tone", f"unknown tone '{value}' (allowed: {allowed})") from exc

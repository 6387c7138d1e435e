"""SaaS product and platform rules."""

from __future__ import annotations

from promptsmith.domains import Domain
from promptsmith.rules.catalog import DomainProfile, RequiredElement, build_rules

_VAGUE = (
    ("saas.vague.pretty_app", r"\b(?:well-designed|bonit[oa])\s+(?:app|aplicación|application)\b", "user-friendly, scalable SaaS application", "Replace vague application wording"),
    ("saas.vague.good_feature", r"\b(?:high-quality|buen[oa])\s+(?:feature|función|característica)\b", "user-centric feature that solves a specific pain point", "Replace vague feature wording"),
    ("saas.vague.cool_dashboard", r"\b(?:impressive|cool)\s+(?:dashboard|panel)\b", "intuitive dashboard with actionable insights", "Replace vague dashboard wording"),
    ("saas.vague.easy_interface", r"\beasy\s+(?:interface|ui|interfaz)\b", "intuitive user interface with a minimal learning curve", "Replace vague interface wording"),
    ("saas.vague.simple_workflow", r"\bsimple\s+(?:workflow|proceso)\b", "streamlined workflow that reduces user friction", "Replace vague workflow wording"),
    ("saas.vague.powerful_tool", r"\bpowerful\s+(?:tool|herramienta)\b", "comprehensive solution with advanced capabilities", "Replace vague tool wording"),
)

_STRUCTURE = (
    ("saas.structure.build_app", r"^(?:build|create|make)\s+(?:an?\s+)?(?:app|software|platform)\b", "Design and develop a SaaS platform", "Frame the request as a SaaS platform"),
    ("saas.structure.need_system", r"^(?:need|want|require)\s+(?:a\s+)?(?:system|sistema)\b", "Seeking development of a scalable system", "Frame the request as a scalable system"),
    ("saas.structure.manage_data", r"\bmanage\s+(?:data|información)\b", "efficiently organize and leverage business data", "Make data management goals explicit"),
)

_ENHANCEMENTS = (
    (
        "saas.enhance.ux",
        r"\b(?:app|platform|software|interface)",
        r"\b(?:user\s+experience|usability|ux)\b",
        "Core UX Principles:\n- Intuitive navigation with consistent design patterns\n- Accessibility compliance (WCAG 2.1)\n- Fast loading times across devices",
        "Add core UX principles",
    ),
    (
        "saas.enhance.architecture",
        r"\b(?:platform|system|software|saas)",
        r"\b(?:architecture|infrastructure)\b",
        "Technical Foundation:\n- Cloud-native architecture with multi-tenant data isolation\n- API-first development for integrations\n- Monitoring and logging for operations",
        "Add technical foundation",
    ),
)

_PRACTICES = (
    (
        "saas.practice.business_model",
        r"\b(?:saas|subscription|business)",
        r"\b(?:revenue|pricing|mrr)\b",
        "SaaS Business Model:\n- Value-based pricing with clear tier differentiation\n- Track MRR, churn and customer lifetime value",
        "Add business model considerations",
    ),
    (
        "saas.practice.security",
        r"\b(?:platform|tenant|customer\s+data|integration)",
        r"\b(?:security|secure|compliance)\b",
        "Include authentication, role-based access control and encryption of customer data.",
        "Add security requirements",
    ),
)

SYSTEM_PROMPT = """You are a senior product manager and SaaS architect with extensive experience in:

**Product:**
- Discovery, user research and jobs-to-be-done
- Onboarding, activation and retention design
- Pricing, packaging and subscription models

**Architecture:**
- Multi-tenant cloud platforms and API-first design
- Security, compliance and data isolation
- Observability and operational excellence

Always connect features to user outcomes and business metrics."""

PROFILE = DomainProfile(
    domain=Domain.SAAS,
    description="SaaS products, platforms and subscription businesses",
    rules=build_rules(
        Domain.SAAS,
        vague=_VAGUE,
        structure=_STRUCTURE,
        enhancements=_ENHANCEMENTS,
        practices=_PRACTICES,
    ),
    required_elements=(
        RequiredElement("users", r"\b(?:users?|customers?|clients?|tenants?|teams?)\b", "who the product serves"),
        RequiredElement("feature", r"\b(?:features?|dashboard|workflow|integration|module|onboarding)\b", "the feature in scope"),
        RequiredElement("metric", r"\b(?:metrics?|kpis?|churn|retention|mrr|conversion|adoption)\b", "how success is measured"),
    ),
    system_prompt=SYSTEM_PROMPT,
)

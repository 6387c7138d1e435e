"""Infrastructure, delivery and operations rules."""

from __future__ import annotations

from promptsmith.domains import Domain
from promptsmith.rules.catalog import DomainProfile, RequiredElement, build_rules

_VAGUE = (
    ("devops.vague.pretty_deploy", r"\b(?:well-designed|bonit[oa])\s+(?:deploy|deployment|despliegue)\b", "automated, reliable deployment pipeline", "Replace vague deployment wording"),
    ("devops.vague.good_pipeline", r"\b(?:high-quality|buen[oa])\s+(?:pipeline|flujo)\b", "efficient CI/CD pipeline with comprehensive testing", "Replace vague pipeline wording"),
    ("devops.vague.fast_deploy", r"\bfast\s+(?:deploy|build|compilation)\b", "optimized deployment process with minimal downtime", "Replace vague speed wording"),
    ("devops.vague.secure_server", r"\bsecure\s+(?:server|servidor)\b", "hardened infrastructure following security best practices", "Replace vague security wording"),
    ("devops.vague.scalable_infra", r"\bscalable\s+(?:infrastructure|infraestructura)\b", "auto-scaling infrastructure with load balancing", "Replace vague scalability wording"),
    ("devops.vague.monitoring_system", r"\bmonitoring\s+(?:system|sistema)\b", "observability stack with metrics, logs and alerting", "Replace vague monitoring wording"),
)

_STRUCTURE = (
    ("devops.structure.setup_server", r"^(?:setup|set\s+up|configure|create)\s+(?:a\s+)?(?:server|infrastructure)\b", "Design and provision cloud infrastructure", "Frame the request as infrastructure provisioning"),
    ("devops.structure.automate_deploy", r"^(?:automate|automatizar)\s+(?:the\s+)?(?:deploy|deployment)s?\b", "Implement an automated deployment pipeline", "Frame the request as pipeline automation"),
    ("devops.structure.monitor_app", r"^(?:monitor|monitoring)\s+(?:the\s+)?(?:app|application)\b", "Establish comprehensive observability for the application", "Frame the request as observability"),
    ("devops.structure.docker_container", r"\bdocker\s+(?:container|contenedor)\b", "containerized application built with Docker", "Clarify container requirements"),
)

_ENHANCEMENTS = (
    (
        "devops.enhance.pipeline",
        r"\b(?:ci/cd|pipeline|jenkins|github\s+actions)",
        r"\b(?:stages?|quality\s+gates?)\b",
        "CI/CD Pipeline Requirements:\n- Build, test and deploy stages with quality gates\n- Automated rollback on failed health checks",
        "Add pipeline requirements",
    ),
    (
        "devops.enhance.containers",
        r"\b(?:kubernetes|k8s|container|docker)",
        r"\b(?:resource\s+limits|health\s*checks?|probes?)\b",
        "Container Orchestration:\n- Resource requests and limits for every workload\n- Liveness and readiness probes",
        "Add container orchestration requirements",
    ),
)

_PRACTICES = (
    (
        "devops.practice.best_practices",
        r"\b(?:deploy|pipeline|automation|devops)",
        r"\b(?:testing|quality|monitoring)\b",
        "DevOps Best Practices:\n- Infrastructure as Code with version control\n- Automated testing and quality gates\n- Observability with metrics, logs and traces",
        "Add DevOps best practices",
    ),
    (
        "devops.practice.security",
        r"\b(?:infrastructure|server|deploy|production)",
        r"\b(?:security|secure|compliance|hardened)\b",
        "Security Considerations:\n- Least-privilege IAM policies\n- Encryption at rest and in transit",
        "Add security considerations",
    ),
)

SYSTEM_PROMPT = """You are a senior DevOps engineer and Site Reliability Engineer with extensive experience in:

**Delivery:**
- CI/CD pipelines, release strategies and rollbacks
- Infrastructure as Code (Terraform, Helm, Ansible)
- Containers and orchestration (Docker, Kubernetes)

**Operations:**
- Observability with metrics, logs and traces
- Incident response and post-mortems
- Capacity planning and cost control

Always prefer automated, reproducible and observable solutions, and call out
security implications."""

PROFILE = DomainProfile(
    domain=Domain.DEVOPS,
    description="Infrastructure, CI/CD and operations",
    rules=build_rules(
        Domain.DEVOPS,
        vague=_VAGUE,
        structure=_STRUCTURE,
        enhancements=_ENHANCEMENTS,
        practices=_PRACTICES,
    ),
    required_elements=(
        RequiredElement("platform", r"\b(?:aws|gcp|azure|kubernetes|k8s|docker|cloud|on-prem|servers?)\b", "the target platform"),
        RequiredElement("environment", r"\b(?:production|staging|development|environments?)\b", "the environment in scope"),
        RequiredElement("reliability", r"\b(?:monitoring|observability|rollback|backup|alerting|sla|uptime)\b", "how reliability is ensured"),
    ),
    system_prompt=SYSTEM_PROMPT,
)

"""Rules for software engineering domains: mobile, web, backend, frontend, ai, gaming and crypto."""

from __future__ import annotations

from promptsmith.domains import Domain
from promptsmith.rules.catalog import DomainProfile, RequiredElement, build_rules

MOBILE = DomainProfile(
    domain=Domain.MOBILE,
    description="Native and cross-platform mobile applications",
    rules=build_rules(
        Domain.MOBILE,
        vague=(
            ("mobile.vague.pretty_app", r"\b(?:well-designed|bonit[oa])\s+(?:app|aplicación)\b", "polished mobile app following platform design guidelines", "Reference platform design guidelines"),
            ("mobile.vague.fast_app", r"\bfast\s+app\b", "responsive app with smooth 60 fps interactions", "Quantify app responsiveness"),
        ),
        structure=(
            ("mobile.structure.make_app", r"^(?:make|build|create)\s+(?:an?\s+)?(?:mobile\s+)?app\b", "Develop a mobile application", "Frame the request as mobile development"),
        ),
        enhancements=(
            ("mobile.enhance.platforms", r"\b(?:app|mobile)", r"\b(?:ios|android|flutter|react\s+native|cross-platform)\b", "Specify the target platforms (iOS, Android or cross-platform) and minimum OS versions.", "Ask for target platforms"),
            ("mobile.enhance.offline", r"\b(?:sync|data|offline|network)", r"\boffline\b", "Describe offline behavior and data synchronization.", "Ask for offline behavior"),
        ),
        practices=(
            ("mobile.practice.accessibility", r"\b(?:screen|ui|interface|app)", r"\baccessib", "Support dynamic type sizes and screen readers.", "Add accessibility guidance"),
        ),
    ),
    required_elements=(
        RequiredElement("platform", r"\b(?:ios|android|flutter|react\s+native|cross-platform|swift|kotlin)\b", "the target platform"),
        RequiredElement("screens", r"\b(?:screens?|views?|flows?|navigation|ui)\b", "the screens or flows in scope"),
    ),
    system_prompt=(
        "You are a senior mobile engineer experienced with Swift, Kotlin and cross-platform frameworks. "
        "Follow platform human interface guidelines, design for intermittent connectivity and "
        "keep battery and memory usage in check."
    ),
)

WEB = DomainProfile(
    domain=Domain.WEB,
    description="Websites and web applications",
    rules=build_rules(
        Domain.WEB,
        vague=(
            ("web.vague.pretty_site", r"\b(?:well-designed|bonit[oa])\s+(?:website|web|página|site)\b", "modern, responsive website with a clear visual hierarchy", "Replace vague site wording"),
            ("web.vague.fast_site", r"\bfast\s+(?:website|site|page)\b", "website meeting Core Web Vitals targets", "Quantify page performance"),
        ),
        structure=(
            ("web.structure.make_site", r"^(?:make|build|create)\s+(?:a\s+)?(?:website|web\s+page|landing\s+page)\b", "Design and build a website", "Frame the request as web development"),
        ),
        enhancements=(
            ("web.enhance.responsive", r"\b(?:website|page|site|landing)", r"\b(?:responsive|mobile)\b", "Ensure the layout is responsive across mobile, tablet and desktop breakpoints.", "Add responsive layout requirement"),
            ("web.enhance.seo", r"\b(?:website|landing|blog|site)", r"\bseo\b", "Include SEO basics: semantic HTML, meta tags and descriptive headings.", "Add SEO requirement"),
        ),
        practices=(
            ("web.practice.accessibility", r"\b(?:website|page|form|site)", r"\b(?:accessib|wcag)", "Meet WCAG 2.1 AA accessibility guidelines.", "Add accessibility guidance"),
        ),
    ),
    required_elements=(
        RequiredElement("pages", r"\b(?:pages?|sections?|landing|home|sitemap)\b", "the pages or sections"),
        RequiredElement("stack", r"\b(?:html|css|javascript|typescript|react|vue|next\.?js|wordpress)\b", "the technology stack"),
    ),
    system_prompt=(
        "You are a senior web developer who builds fast, accessible and search-friendly websites "
        "with semantic HTML, modern CSS and progressive enhancement."
    ),
)

BACKEND = DomainProfile(
    domain=Domain.BACKEND,
    description="APIs, services and server-side systems",
    rules=build_rules(
        Domain.BACKEND,
        vague=(
            ("backend.vague.good_api", r"\b(?:high-quality|buen[oa]|good)\s+api\b", "well-documented, versioned API", "Replace vague API wording"),
            ("backend.vague.fast_api", r"\bfast\s+(?:api|server|endpoint)s?\b", "low-latency service with defined p95 targets", "Quantify service latency"),
        ),
        structure=(
            ("backend.structure.make_api", r"^(?:make|build|create)\s+(?:an?\s+)?(?:api|backend|server)\b", "Design and implement a backend API", "Frame the request as API design"),
        ),
        enhancements=(
            ("backend.enhance.contract", r"\b(?:api|endpoints?)\b", r"\b(?:openapi|schema|contract|status\s+codes?)\b", "Define request and response schemas and HTTP status codes for each endpoint.", "Ask for an API contract"),
            ("backend.enhance.auth", r"\b(?:api|users?|login|endpoints?)\b", r"\b(?:auth|jwt|oauth|token)", "Specify the authentication and authorization model.", "Ask for an auth model"),
        ),
        practices=(
            ("backend.practice.errors", r"\b(?:api|service|server)\b", r"\b(?:error\s+handling|validation|logging)\b", "Include input validation, structured error responses and request logging.", "Add error handling guidance"),
        ),
    ),
    required_elements=(
        RequiredElement("interface", r"\b(?:api|endpoints?|routes?|rest|graphql|grpc)\b", "the service interface"),
        RequiredElement("data", r"\b(?:database|schema|models?|payloads?|json|storage)\b", "the data it handles"),
        RequiredElement("auth", r"\b(?:auth\w*|jwt|oauth|permissions?|roles?)\b", "how access is controlled"),
    ),
    system_prompt=(
        "You are a senior backend engineer who designs secure, observable and well-documented "
        "services. Favor explicit contracts, idempotent operations and clear error semantics."
    ),
)

FRONTEND = DomainProfile(
    domain=Domain.FRONTEND,
    description="User interfaces and client-side applications",
    rules=build_rules(
        Domain.FRONTEND,
        vague=(
            ("frontend.vague.pretty_ui", r"\b(?:well-designed|bonit[oa]|well-crafted)\s+(?:ui|interface|interfaz|component)\b", "accessible, consistent UI built from reusable components", "Replace vague UI wording"),
        ),
        structure=(
            ("frontend.structure.make_component", r"^(?:make|build|create)\s+(?:a\s+)?(?:component|ui|page)\b", "Implement a reusable UI component", "Frame the request as component work"),
        ),
        enhancements=(
            ("frontend.enhance.states", r"\b(?:component|form|page|ui)", r"\b(?:loading|empty|error)\s+states?\b", "Handle loading, empty and error states.", "Ask for UI states"),
            ("frontend.enhance.props", r"\bcomponents?\b", r"\b(?:props|inputs|api)\b", "Document the component props and emitted events.", "Ask for a component API"),
        ),
        practices=(
            ("frontend.practice.tests", r"\b(?:component|ui|form)", r"\btests?\b", "Include unit tests for the component behavior.", "Add testing guidance"),
        ),
    ),
    required_elements=(
        RequiredElement("framework", r"\b(?:react|vue|angular|svelte|solid|html|css)\b", "the UI framework"),
        RequiredElement("component", r"\b(?:components?|pages?|forms?|layouts?|views?)\b", "the UI element in scope"),
    ),
    system_prompt=(
        "You are a senior frontend engineer who builds accessible, performant interfaces from "
        "small, well-tested components with predictable state management."
    ),
)

AI = DomainProfile(
    domain=Domain.AI,
    description="Machine learning, language models and data science",
    rules=build_rules(
        Domain.AI,
        vague=(
            ("ai.vague.smart_model", r"\b(?:smart|intelligent|good)\s+(?:model|ai|bot)\b", "model evaluated against explicit quality metrics", "Replace vague model wording"),
        ),
        structure=(
            ("ai.structure.make_model", r"^(?:make|build|create|train)\s+(?:an?\s+)?(?:model|ai|classifier|chatbot)\b", "Develop a machine learning model", "Frame the request as model development"),
        ),
        enhancements=(
            ("ai.enhance.data", r"\b(?:model|train\w*|classifier|dataset)", r"\b(?:dataset|training\s+data|features?)\b", "Describe the training data, its size and how it is labeled.", "Ask for data description"),
            ("ai.enhance.metrics", r"\b(?:model|classifier|predict\w*)", r"\b(?:accuracy|f1|precision|recall|auc|metric)", "Define the evaluation metrics and the acceptance threshold.", "Ask for evaluation metrics"),
        ),
        practices=(
            ("ai.practice.bias", r"\b(?:model|predict\w*|classif\w*)", r"\b(?:bias|fairness)\b", "Assess bias and fairness across relevant user groups.", "Add fairness guidance"),
        ),
    ),
    required_elements=(
        RequiredElement("task", r"\b(?:classif\w*|predict\w*|generat\w*|summari[sz]\w*|detect\w*|recommend\w*|regression)\b", "the learning task"),
        RequiredElement("data", r"\b(?:data(?:set)?|corpus|features?|examples?)\b", "the data used"),
        RequiredElement("evaluation", r"\b(?:accuracy|f1|precision|recall|metrics?|evaluat\w*|benchmark)\b", "how quality is evaluated"),
    ),
    system_prompt=(
        "You are a senior machine learning engineer. Frame problems precisely, start from strong "
        "baselines, evaluate with held-out data and document model limitations."
    ),
)

GAMING = DomainProfile(
    domain=Domain.GAMING,
    description="Game design and development",
    rules=build_rules(
        Domain.GAMING,
        vague=(
            ("gaming.vague.fun_game", r"\b(?:fun|cool|impressive|well-designed)\s+game\b", "engaging game with a clear core loop", "Replace vague game wording"),
        ),
        structure=(
            ("gaming.structure.make_game", r"^(?:make|build|create)\s+(?:a\s+)?game\b", "Design a game", "Frame the request as game design"),
        ),
        enhancements=(
            ("gaming.enhance.loop", r"\bgame", r"\b(?:core\s+loop|mechanics?)\b", "Describe the core gameplay loop and key mechanics.", "Ask for core loop"),
            ("gaming.enhance.platform", r"\bgame", r"\b(?:pc|console|mobile|web|unity|unreal|godot)\b", "Specify the target platform and engine.", "Ask for platform and engine"),
        ),
        practices=(
            ("gaming.practice.progression", r"\b(?:game|level|player)", r"\b(?:progression|difficulty)\b", "Outline player progression and difficulty balancing.", "Add progression guidance"),
        ),
    ),
    required_elements=(
        RequiredElement("mechanics", r"\b(?:mechanics?|core\s+loop|gameplay|controls?)\b", "the gameplay mechanics"),
        RequiredElement("player", r"\b(?:players?|audience|single-player|multiplayer)\b", "the player experience"),
    ),
    system_prompt=(
        "You are an experienced game designer and developer. Focus on the core loop, player "
        "motivation and balanced progression, and keep scope achievable."
    ),
)

CRYPTO = DomainProfile(
    domain=Domain.CRYPTO,
    description="Blockchain, smart contracts and digital assets",
    rules=build_rules(
        Domain.CRYPTO,
        vague=(
            ("crypto.vague.secure_contract", r"\b(?:safe|secure|good)\s+(?:smart\s+)?contract\b", "audited smart contract following established security patterns", "Replace vague contract wording"),
        ),
        structure=(
            ("crypto.structure.make_token", r"^(?:make|build|create|launch)\s+(?:a\s+)?(?:token|coin|nft)\b", "Design a token contract", "Frame the request as contract design"),
        ),
        enhancements=(
            ("crypto.enhance.chain", r"\b(?:token|contract|nft|wallet|defi)", r"\b(?:ethereum|solana|polygon|chain|evm)\b", "Specify the target chain and token standard.", "Ask for chain and standard"),
            ("crypto.enhance.security", r"\b(?:contract|defi|wallet)", r"\b(?:audit|reentrancy|security)\b", "Address reentrancy, access control and upgrade risks.", "Ask for security review"),
        ),
        practices=(
            ("crypto.practice.compliance", r"\b(?:token|coin|sale|defi)", r"\b(?:compliance|kyc|regulat)", "Note regulatory and compliance considerations for the jurisdictions involved.", "Add compliance guidance"),
        ),
    ),
    required_elements=(
        RequiredElement("chain", r"\b(?:ethereum|solana|polygon|bitcoin|chain|evm|layer\s*2)\b", "the target chain"),
        RequiredElement("asset", r"\b(?:token|nft|contract|wallet|coin)s?\b", "the asset or contract"),
        RequiredElement("security", r"\b(?:audit|security|reentrancy|access\s+control)\b", "security expectations"),
    ),
    system_prompt=(
        "You are a blockchain engineer experienced with smart contract development and security "
        "audits. Prefer battle-tested standards and make trust assumptions explicit."
    ),
)

PROFILES: tuple[DomainProfile, ...] = (MOBILE, WEB, BACKEND, FRONTEND, AI, GAMING, CRYPTO)

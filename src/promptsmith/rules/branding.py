"""Brand strategy and marketing rules."""

from __future__ import annotations

from promptsmith.domains import Domain
from promptsmith.rules.catalog import DomainProfile, RequiredElement, build_rules

_VAGUE = (
    ("branding.vague.pretty_brand", r"\b(?:well-designed|bonit[oa])\s+(?:brand|marca|campaign|campaña)\b", "compelling and memorable brand identity", "Replace vague brand wording"),
    ("branding.vague.good_copy", r"\b(?:high-quality|buen[oa])\s+(?:copy|texto|content)\b", "engaging, conversion-focused copy", "Replace vague copy wording"),
    ("branding.vague.nice_logo", r"\b(?:well-crafted|nice)\s+(?:logo|design)\b", "professional, brand-aligned visual identity", "Replace vague visual identity wording"),
    ("branding.vague.attract_people", r"\battract\s+(?:people|gente|customers)\b", "engage the target audience and drive conversion", "Make audience goals explicit"),
    ("branding.vague.viral", r"\b(?:viral|popular)\b", "shareable and engaging", "Replace hype terms"),
    ("branding.vague.catchy_slogan", r"\bcatchy\s+(?:slogan|tagline)\b", "memorable slogan that reinforces brand values", "Tie slogans to brand values"),
)

_STRUCTURE = (
    ("branding.structure.make_brand", r"^(?:make|create|design)\s+(?:a\s+)?(?:brand|logo|campaign)\b", "Develop a comprehensive brand strategy for a brand", "Frame the request as a brand strategy"),
    ("branding.structure.need_marketing", r"^(?:need|want|require)\s+(?:marketing|branding)\b", "Seeking strategic marketing consultation for", "Frame the request as a consultation"),
    ("branding.structure.sell_more", r"\bsell\s+(?:more|products)\b", "increase conversion rates and customer engagement", "Turn sales goals into measurable outcomes"),
    ("branding.structure.get_famous", r"\bget\s+(?:famous|known)\b", "build brand awareness and market recognition", "Turn fame goals into awareness outcomes"),
)

_ENHANCEMENTS = (
    (
        "branding.enhance.audience",
        r"\b(?:brand|marketing|campaign)",
        r"\b(?:audience|target|demographic)",
        "Target Audience Considerations:\n- Define the primary demographic (age, income, lifestyle)\n- Identify key pain points and motivations\n- Specify preferred communication channels",
        "Add target audience considerations",
    ),
    (
        "branding.enhance.voice",
        r"\b(?:brand|messaging|copy)",
        r"\b(?:voice|tone|personality)",
        "Brand Voice Guidelines:\n- Define brand personality traits\n- Specify emotional tone and communication style\n- Keep the voice consistent across touchpoints",
        "Add brand voice guidelines",
    ),
    (
        "branding.enhance.positioning",
        r"\b(?:brand|product|launch)",
        r"\b(?:competitor|differentiat|position)",
        "Competitive Positioning:\n- Identify key competitors and their messaging\n- Define the unique value proposition",
        "Add competitive positioning",
    ),
)

_PRACTICES = (
    (
        "branding.practice.objectives",
        r"\b(?:campaign|marketing)",
        r"\b(?:objective|goal|metric|kpi)",
        "Campaign Objectives:\n- Define primary goals (awareness, conversion, retention)\n- Specify measurable KPIs and success metrics",
        "Add campaign objectives",
    ),
    (
        "branding.practice.channels",
        r"\b(?:marketing|campaign|content)",
        r"\b(?:channel|platform|distribution)",
        "Channel Strategy:\n- Select marketing channels (social, email, paid, organic)\n- Tailor content to each platform",
        "Add channel strategy",
    ),
    (
        "branding.practice.guidelines",
        r"\b(?:brand|visual|design)",
        r"\b(?:guideline|standard|consistency)",
        "Brand Guidelines:\n- Establish visual identity standards (colors, fonts, imagery)\n- Define logo usage and brand asset requirements",
        "Add brand guidelines",
    ),
)

SYSTEM_PROMPT = """You are a senior brand strategist and marketing expert with extensive experience in:

**Brand Strategy:**
- Brand positioning, architecture and identity systems
- Audience research, personas and segmentation
- Voice, tone and messaging frameworks

**Marketing Execution:**
- Integrated campaigns across paid, owned and earned channels
- Conversion-focused copywriting
- KPI definition and performance measurement

Always ground recommendations in the target audience, keep messaging consistent
with the brand voice, and state how success will be measured."""

PROFILE = DomainProfile(
    domain=Domain.BRANDING,
    description="Brand strategy, marketing campaigns and copywriting",
    rules=build_rules(
        Domain.BRANDING,
        vague=_VAGUE,
        structure=_STRUCTURE,
        enhancements=_ENHANCEMENTS,
        practices=_PRACTICES,
    ),
    required_elements=(
        RequiredElement("audience", r"\b(?:audience|customers?|demographic|persona|users?)\b", "who the message is for"),
        RequiredElement("voice", r"\b(?:voice|tone|personality|style)\b", "the brand voice or tone"),
        RequiredElement("goal", r"\b(?:goal|objective|kpi|metric|conversion|awareness)s?\b", "the campaign or brand goal"),
    ),
    system_prompt=SYSTEM_PROMPT,
)

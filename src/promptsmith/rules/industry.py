"""Rules for regulated and knowledge industries: education, healthcare, finance and legal."""

from __future__ import annotations

from promptsmith.domains import Domain
from promptsmith.rules.catalog import DomainProfile, RequiredElement, build_rules

EDUCATION = DomainProfile(
    domain=Domain.EDUCATION,
    description="Teaching materials, courses and assessments",
    rules=build_rules(
        Domain.EDUCATION,
        vague=(
            ("education.vague.good_lesson", r"\b(?:high-quality|good|well-designed|fun)\s+(?:lesson|class|clase|course)\b", "engaging lesson with clear learning objectives", "Replace vague lesson wording"),
        ),
        structure=(
            ("education.structure.make_lesson", r"^(?:make|create|prepare)\s+(?:a\s+)?(?:lesson|class|course|quiz)\b", "Design a lesson plan", "Frame the request as lesson design"),
        ),
        enhancements=(
            ("education.enhance.objectives", r"\b(?:lesson|course|class|curriculum)", r"\b(?:objectives?|outcomes?)\b", "State the learning objectives using measurable verbs.", "Ask for learning objectives"),
            ("education.enhance.level", r"\b(?:lesson|course|students?|quiz)", r"\b(?:grade|level|beginner|intermediate|advanced|age)\b", "Specify the learner level and prior knowledge.", "Ask for learner level"),
        ),
        practices=(
            ("education.practice.assessment", r"\b(?:lesson|course|unit)", r"\b(?:assessment|quiz|rubric)\b", "Include an assessment aligned with the objectives.", "Add assessment guidance"),
        ),
    ),
    required_elements=(
        RequiredElement("audience", r"\b(?:students?|learners?|grade|level|beginners?|age)\b", "who is learning"),
        RequiredElement("objectives", r"\b(?:objectives?|outcomes?|goals?)\b", "what they should learn"),
        RequiredElement("assessment", r"\b(?:assessment|quiz|exercises?|rubric|test)\b", "how learning is checked"),
    ),
    system_prompt=(
        "You are an experienced instructional designer. Align objectives, activities and "
        "assessment, and adapt material to the learners' level."
    ),
)

HEALTHCARE = DomainProfile(
    domain=Domain.HEALTHCARE,
    description="Clinical, medical and health information",
    rules=build_rules(
        Domain.HEALTHCARE,
        vague=(
            ("healthcare.vague.health_stuff", r"\bhealth\s+(?:components|elements|info)\b", "clinical information", "Replace vague health wording"),
        ),
        structure=(
            ("healthcare.structure.explain_condition", r"^(?:explain|tell\s+me\s+about)\s+", "Provide an evidence-based explanation of ", "Frame the request as evidence-based"),
        ),
        enhancements=(
            ("healthcare.enhance.audience", r"\b(?:patients?|clinical|medical|treatment|diagnosis)", r"\b(?:clinicians?|physicians?|lay|audience)\b", "Specify whether the audience is clinicians or patients.", "Ask for audience"),
            ("healthcare.enhance.evidence", r"\b(?:treatment|diagnosis|clinical|medical)", r"\b(?:evidence|guidelines?|sources?)\b", "Cite current clinical guidelines or peer-reviewed evidence.", "Ask for evidence"),
        ),
        practices=(
            ("healthcare.practice.privacy", r"\b(?:patients?|records?|data)", r"\b(?:hipaa|privacy|phi|gdpr)\b", "Protect patient privacy and comply with HIPAA or equivalent regulations.", "Add privacy guidance"),
            ("healthcare.practice.disclaimer", r"\b(?:treatment|diagnosis|symptoms?|medication)", r"\bdisclaimer\b", "Include a disclaimer that the content does not replace professional medical advice.", "Add medical disclaimer"),
        ),
    ),
    required_elements=(
        RequiredElement("audience", r"\b(?:patients?|clinicians?|physicians?|nurses?|caregivers?)\b", "the intended reader"),
        RequiredElement("evidence", r"\b(?:evidence|guidelines?|studies|sources?|research)\b", "the evidence base"),
        RequiredElement("safety", r"\b(?:disclaimer|privacy|hipaa|safety|contraindications?)\b", "safety or privacy constraints"),
    ),
    system_prompt=(
        "You are a clinical content specialist. Be accurate and evidence-based, state uncertainty "
        "clearly and never present information as a substitute for professional care."
    ),
)

FINANCE = DomainProfile(
    domain=Domain.FINANCE,
    description="Financial analysis, planning and reporting",
    rules=build_rules(
        Domain.FINANCE,
        vague=(
            ("finance.vague.good_investment", r"\b(?:high-quality|good|safe)\s+investments?\b", "investment matching a stated risk profile and horizon", "Replace vague investment wording"),
            ("finance.vague.make_money", r"\bmake\s+(?:more\s+)?money\b", "increase revenue against a defined target", "Replace vague revenue wording"),
        ),
        structure=(
            ("finance.structure.make_budget", r"^(?:make|create|build)\s+(?:a\s+)?(?:budget|forecast|report)\b", "Prepare a financial plan", "Frame the request as financial planning"),
        ),
        enhancements=(
            ("finance.enhance.period", r"\b(?:budget|forecast|revenue|report)", r"\b(?:quarter|month|year|annual|period|fy)\w*\b", "Specify the reporting period and currency.", "Ask for period and currency"),
            ("finance.enhance.assumptions", r"\b(?:forecast|projection|model|budget)", r"\bassumptions?\b", "List the key assumptions behind every projection.", "Ask for assumptions"),
        ),
        practices=(
            ("finance.practice.risk", r"\b(?:investment|portfolio|trading)", r"\brisk", "Describe the risks involved and note that this is not financial advice.", "Add risk disclosure"),
        ),
    ),
    required_elements=(
        RequiredElement("figures", r"\b(?:revenue|costs?|budget|cash\s+flow|profit|margin|\d+)\b", "the figures involved"),
        RequiredElement("period", r"\b(?:quarter\w*|month\w*|year\w*|annual|period|fy\d*)\b", "the time period"),
        RequiredElement("risk", r"\b(?:risks?|assumptions?|scenarios?|sensitivity)\b", "risks or assumptions"),
    ),
    system_prompt=(
        "You are a financial analyst. Show your calculations, state assumptions explicitly and "
        "distinguish facts from projections."
    ),
)

LEGAL = DomainProfile(
    domain=Domain.LEGAL,
    description="Contracts, compliance and legal research",
    rules=build_rules(
        Domain.LEGAL,
        vague=(
            ("legal.vague.simple_contract", r"\b(?:simple|basic|standard)\s+contract\b", "contract with clearly defined parties, obligations and remedies", "Replace vague contract wording"),
        ),
        structure=(
            ("legal.structure.write_contract", r"^(?:write|draft|make)\s+(?:a\s+)?(?:contract|agreement)\b", "Draft an agreement", "Frame the request as drafting"),
        ),
        enhancements=(
            ("legal.enhance.jurisdiction", r"\b(?:contract|agreement|clause|compliance|legal)", r"\b(?:jurisdiction|governing\s+law)\b", "Specify the governing law and jurisdiction.", "Ask for jurisdiction"),
            ("legal.enhance.parties", r"\b(?:contract|agreement)", r"\bparties\b", "Identify the parties and their obligations.", "Ask for parties"),
        ),
        practices=(
            ("legal.practice.disclaimer", r"\b(?:contract|legal|clause|liability)", r"\b(?:disclaimer|attorney|lawyer)\b", "Note that the draft should be reviewed by a qualified attorney.", "Add legal review disclaimer"),
        ),
    ),
    required_elements=(
        RequiredElement("parties", r"\b(?:parties|party|client|vendor|employer|employee|licensee|licensor)\b", "the parties involved"),
        RequiredElement("jurisdiction", r"\b(?:jurisdiction|governing\s+law|state\s+of|laws?\s+of|gdpr)\b", "the governing law"),
        RequiredElement("obligations", r"\b(?:obligations?|terms?|clauses?|liability|termination)\b", "the key terms"),
    ),
    system_prompt=(
        "You are a legal drafting assistant. Use precise, unambiguous language, define terms "
        "before use and flag anything that needs review by a qualified attorney."
    ),
)

PROFILES: tuple[DomainProfile, ...] = (EDUCATION, HEALTHCARE, FINANCE, LEGAL)

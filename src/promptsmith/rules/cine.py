"""Screenwriting and film production rules."""

from __future__ import annotations

from promptsmith.domains import Domain
from promptsmith.rules.catalog import DomainProfile, RequiredElement, build_rules

_VAGUE = (
    ("cine.vague.pretty_film", r"\b(?:well-designed|bonit[oa])\s+(?:película|film|movie|script)\b", "compelling cinematic narrative with strong character development", "Replace vague film wording"),
    ("cine.vague.good_script", r"\b(?:high-quality|buen[oa]?)\s+(?:guión|script|screenplay)\b", "well-structured screenplay with industry-standard formatting", "Replace vague script wording"),
    ("cine.vague.interesting_story", r"\binteresting\s+(?:story|historia)\b", "engaging narrative with a clear dramatic arc", "Make the narrative arc explicit"),
    ("cine.vague.cool_character", r"\b(?:impressive|cool)\s+(?:character|personaje)\b", "multi-dimensional character with clear motivations", "Replace vague character wording"),
    ("cine.vague.exciting_scene", r"\bexciting\s+(?:scene|escena)\b", "dramatically compelling scene with visual storytelling", "Replace vague scene wording"),
    ("cine.vague.good_dialogue", r"\bgood\s+(?:dialogue|diálogo)\b", "authentic dialogue that reveals character and advances the plot", "Replace vague dialogue wording"),
)

_STRUCTURE = (
    ("cine.structure.write_movie", r"^(?:write|create|make)\s+(?:a\s+)?(?:movie|film|script)\b", "Develop a screenplay", "Frame the request as screenplay development"),
    ("cine.structure.need_story", r"^(?:need|want|require)\s+(?:a\s+)?(?:story|historia)\b", "Seeking narrative development", "Frame the request as narrative development"),
    ("cine.structure.about_character", r"\babout\s+(?:a\s+)?(?:character|person|guy|girl)\b", "featuring a protagonist who", "Center the story on a protagonist"),
    ("cine.structure.with_genre", r"\bwith\s+(action|drama|comedy|romance)\b", r"in the \1 genre", "Name the genre explicitly"),
)

_ENHANCEMENTS = (
    (
        "cine.enhance.character",
        r"\b(?:character|protagonist|hero|villain|personaje)",
        r"\b(?:backstory|motivation|arc)\b",
        "Character Development Framework:\n- Backstory: character history and formative experiences\n- Motivation: clear wants, needs and internal conflicts\n- Character Arc: the transformation across the story",
        "Add character development framework",
    ),
    (
        "cine.enhance.visual",
        r"\b(?:scene|visual|cinematic|escena)",
        r"\bvisual\s+storytelling\b",
        "Visual Storytelling Elements:\n- Scene composition and visual metaphors\n- Camera movement and shot selection",
        "Add visual storytelling elements",
    ),
    (
        "cine.enhance.theme",
        r"\b(?:story|narrative|script|historia)",
        r"\b(?:theme|subtext|meaning)\b",
        "Thematic Development:\n- Central theme and universal message\n- Subtext in dialogue and character interactions",
        "Add thematic development",
    ),
)

_PRACTICES = (
    (
        "cine.practice.format",
        r"\b(?:script|screenplay|guión)",
        r"\b(?:format|standard|industry)",
        "Follow industry-standard screenplay format with scene headings, action lines and dialogue blocks.",
        "Add screenplay formatting standards",
    ),
    (
        "cine.practice.length",
        r"\b(?:short\s+film|cortometraje)\b",
        r"\b(?:minutes?|pages?)\b",
        "Keep the short film between 5 and 15 pages (roughly one page per minute).",
        "Add short film length guidance",
    ),
)

SYSTEM_PROMPT = """You are a professional screenwriter and story consultant with extensive experience in:

**Story Craft:**
- Three-act structure, sequences and turning points
- Character arcs, motivation and conflict
- Theme, subtext and dramatic irony

**Screenplay Practice:**
- Industry-standard formatting for features, shorts and series
- Scene construction and visual storytelling
- Dialogue that reveals character and advances the plot

Always keep the protagonist's goal and stakes clear, and show rather than tell."""

PROFILE = DomainProfile(
    domain=Domain.CINE,
    description="Screenwriting, story development and film production",
    rules=build_rules(
        Domain.CINE,
        vague=_VAGUE,
        structure=_STRUCTURE,
        enhancements=_ENHANCEMENTS,
        practices=_PRACTICES,
    ),
    required_elements=(
        RequiredElement("format", r"\b(?:feature|short|series|episode|screenplay|script|treatment|scene)s?\b", "the format being written"),
        RequiredElement("character", r"\b(?:character|protagonist|hero|antagonist|villain)s?\b", "who the story is about"),
        RequiredElement("genre", r"\b(?:genre|action|drama|comedy|romance|thriller|horror|documentary)\b", "the genre or tone"),
    ),
    system_prompt=SYSTEM_PROMPT,
)

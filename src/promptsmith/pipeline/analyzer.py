"""Structural and linguistic analysis of raw instruction text."""

from __future__ import annotations

import re
from collections import Counter

from promptsmith.config import AnalyzerConfig
from promptsmith.domains import DOMAIN_KEYWORDS, Domain
from promptsmith.errors import InvalidInput
from promptsmith.obs.telemetry import estimate_token_count
from promptsmith.types import Analysis, Entity, Intent, Token

_TOKEN_PATTERN = re.compile(r"\w+(?:['\-]\w+)*|[^\w\s]", flags=re.UNICODE)
_WORD_PATTERN = re.compile(r"\w", flags=re.UNICODE)
_SENTENCE_SPLIT = re.compile(r"(?<=[.!?。！？])\s+|\n+")
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_INLINE_SPACE = re.compile(r"[ \t]+")

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "has", "have",
        "he", "in", "is", "it", "its", "of", "on", "or", "that", "the", "to", "was",
        "were", "will", "with", "this", "these", "those", "then", "than", "so", "but",
        "el", "la", "los", "las", "de", "del", "en", "un", "una", "y", "o", "con", "para",
    }
)

VAGUE_TERMS = frozenset(
    {
        "good", "bad", "nice", "cool", "great", "awesome", "stuff", "things", "thing",
        "something", "anything", "some", "many", "few", "several", "various", "lots",
        "big", "small", "fast", "slow", "easy", "hard", "simple", "bonito", "bonita",
        "bueno", "buena", "malo", "mala", "cosas", "algo",
    }
)
INDEFINITE_PRONOUNS = frozenset({"it", "this", "these", "those", "they", "them", "that"})
HEDGE_WORDS = frozenset({"maybe", "perhaps", "probably", "possibly", "somewhat", "quizás", "tal"})
MODAL_VERBS = frozenset({"might", "could", "should", "would", "may", "must", "can", "shall"})

_DETERMINERS = frozenset({"a", "an", "the", "this", "that", "these", "those", "every", "each", "any", "el", "la", "los", "las", "un", "una"})
_PRONOUNS = frozenset({"i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them", "my", "your", "our", "their", "its"})
_PREPOSITIONS = frozenset({"in", "on", "at", "for", "of", "with", "by", "from", "to", "into", "about", "over", "under", "between", "through", "de", "en", "con", "para", "por"})
_CONJUNCTIONS = frozenset({"and", "or", "but", "because", "while", "although", "so", "if", "y", "o", "pero"})

ACTION_VERBS = frozenset(
    {
        "create", "generate", "make", "build", "write", "develop", "design", "implement",
        "analyze", "review", "evaluate", "assess", "examine", "check", "update", "modify",
        "change", "improve", "optimize", "refactor", "explain", "describe", "show",
        "demonstrate", "list", "summarize", "draft", "plan", "compare", "deploy",
        "configure", "fix", "debug", "translate", "convert", "define", "produce", "provide",
        "include", "ensure", "use", "add", "specify", "consider", "outline", "establish",
    }
)

_INTENT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("create", ("create", "generate", "make", "build", "write", "develop", "design")),
    ("modify", ("update", "change", "modify", "edit", "alter", "adjust", "improve")),
    ("analyze", ("analyze", "examine", "review", "assess", "evaluate", "check")),
    ("explain", ("explain", "describe", "tell", "show", "help", "guide")),
    ("debug", ("fix", "debug", "solve", "troubleshoot", "error", "issue")),
    ("optimize", ("optimize", "improve", "enhance", "refactor", "performance")),
)

_INTENT_SUBCATEGORIES: dict[str, tuple[str, ...]] = {
    "create": ("table", "function", "class", "component", "api", "query", "script"),
    "modify": ("refactor", "update", "style", "structure", "logic"),
    "analyze": ("performance", "security", "quality", "code", "data"),
    "explain": ("concept", "code", "process", "algorithm", "pattern"),
    "debug": ("error", "bug", "issue", "performance", "logic"),
    "optimize": ("performance", "memory", "speed", "efficiency", "size"),
}

# (label, pattern, confidence); earlier labels win on identical spans.
_ENTITY_PATTERNS: tuple[tuple[str, re.Pattern[str], float], ...] = (
    ("URL", re.compile(r"https?://\S+"), 0.95),
    ("TEMPLATE_VARIABLE", re.compile(r"\{\{\s*\w+\s*\}\}"), 0.95),
    ("VARIABLE", re.compile(r"\$[A-Za-z_]\w*"), 0.9),
    (
        "FILE",
        re.compile(r"\b\w+\.(?:js|ts|py|sql|html|css|java|cpp|php|rb|go|rs|json|ya?ml|md|csv)\b", re.IGNORECASE),
        0.9,
    ),
    (
        "DATABASE",
        re.compile(r"\b(?:PostgreSQL|Postgres|MySQL|MongoDB|Redis|SQLite|MariaDB|Oracle|SQL\s+Server|BigQuery|Snowflake)\b", re.IGNORECASE),
        0.9,
    ),
    (
        "TECHNOLOGY",
        re.compile(
            r"\b(?:React|Vue|Angular|Svelte|Node\.?js|Python|JavaScript|TypeScript|Java|Kotlin|Swift|Flutter|PHP|Ruby|Rust|Django|Flask|FastAPI|Express|GraphQL|REST)\b",
            re.IGNORECASE,
        ),
        0.85,
    ),
    (
        "PLATFORM",
        re.compile(r"\b(?:AWS|GCP|Azure|Docker|Kubernetes|Terraform|Helm|Ansible|Jenkins|GitHub\s+Actions|iOS|Android)\b", re.IGNORECASE),
        0.85,
    ),
    ("AUTH_TECH", re.compile(r"\b(?:OAuth2?|JWT|SAML|OpenID|SSO|2FA|MFA)\b", re.IGNORECASE), 0.9),
    (
        "QUANTITY",
        re.compile(
            r"\b\d+(?:[.,]\d+)?\s*(?:%|ms|seconds?|minutes?|hours?|days?|weeks?|months?|years?|rows?|users?|items?|words?|pages?|steps?|columns?|tables?|mb|gb|kb|px|k)(?!\w)",
            re.IGNORECASE,
        ),
        0.85,
    ),
    ("NUMBER", re.compile(r"\b\d+(?:\.\d+)*\b"), 0.7),
    ("ACRONYM", re.compile(r"\b[A-Z]{2,}\b"), 0.6),
)

_PROPER_NOUN = re.compile(r"(?<![.!?]\s)(?<!^)\b[A-Z][a-z]{2,}\b")

_TECHNICAL_TERM_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^[A-Z]{2,}$"),
    re.compile(r"^\w+\.(?:js|ts|py|sql|html|css|java)$", re.IGNORECASE),
    re.compile(r"^(?:api|http|https|json|xml|css|html|sql|nosql|rest|graphql|yaml|csv)$", re.IGNORECASE),
    re.compile(r"^(?:react|vue|angular|node|express|django|flask|fastapi)$", re.IGNORECASE),
    re.compile(r"^(?:docker|kubernetes|k8s|aws|gcp|azure|terraform|helm)$", re.IGNORECASE),
    re.compile(r"^(?:oauth2?|jwt|saml|sso|2fa|mfa)$", re.IGNORECASE),
    re.compile(r"^(?:postgresql|postgres|mysql|mongodb|redis|sqlite)$", re.IGNORECASE),
    re.compile(r"^(?:javascript|typescript|python|java|php|ruby|rust|kotlin|swift)$", re.IGNORECASE),
    re.compile(
        r"^(?:function|class|interface|component|method|endpoint|database|schema|table|index|query|pipeline|deployment|container|cluster|latency|throughput|webhook|migration|cache)$",
        re.IGNORECASE,
    ),
)

_VARIABLE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\{\{\s*(\w+)\s*\}\}"),
    re.compile(r"\$([A-Za-z_]\w*)"),
    re.compile(r"%([A-Za-z_]\w*)%"),
    re.compile(r"\[([A-Za-z_][\w ]{0,40})\]"),
    re.compile(r"<([A-Za-z_][\w ]{0,40})>"),
)

SPANISH_MARKERS = re.compile(
    r"\b(el|la|los|las|un|una|de|del|en|con|por|para|que|es|son|esta|muy|bonit[ao]|bueno|malo|hazme|dame|necesito|quiero)\b",
    re.IGNORECASE,
)
ENGLISH_MARKERS = re.compile(
    r"\b(the|a|an|and|or|but|in|on|at|to|for|of|with|by|is|are|was|were|good|bad|nice|need|want|please)\b",
    re.IGNORECASE,
)


class PromptAnalyzer:
    """Computes a deterministic `Analysis` snapshot for one text.

    The analyzer is a pure function of its input: it performs no I/O and keeps
    no state between calls, so a single instance can be shared across threads.
    """

    def __init__(self, config: AnalyzerConfig | None = None) -> None:
        self.config = config or AnalyzerConfig()

    def analyze(self, text: str) -> Analysis:
        """Analyze `text` and return its linguistic snapshot.

        Raises:
            InvalidInput: if `text` is not a string or is empty after cleaning.
        """
        if not isinstance(text, str):
            raise InvalidInput("text", f"expected a string, got {type(text).__name__}")
        cleaned = self.clean(text)
        if not cleaned:
            raise InvalidInput("text", "text must not be empty or whitespace-only")

        tokens = self._tokenize(cleaned)
        words = [token for token in tokens if token.pos != "PUNCT"]
        sentences = split_sentences(cleaned)
        entities = self._extract_entities(cleaned)
        technical_terms = self._technical_terms(words)
        technical_token_count = sum(1 for token in words if is_technical_term(token.text))

        return Analysis(
            tokens=tuple(tokens),
            entities=tuple(entities),
            intent=self._detect_intent(cleaned, words),
            complexity=self._complexity(cleaned, words, sentences, technical_token_count),
            ambiguity=self._ambiguity(cleaned, tokens, words, entities, technical_terms),
            readability=self._readability(cleaned, sentences),
            domain_hints=detect_domain_hints(words),
            technical_terms=tuple(technical_terms),
            technical_term_count=technical_token_count,
            variables=detect_variables(cleaned),
            language=self._detect_language(cleaned),
            word_count=len(words),
            sentence_count=len(sentences),
            estimated_tokens=estimate_token_count(cleaned),
        )

    def clean(self, text: str) -> str:
        cleaned = _CONTROL_CHARS.sub("", text)
        lines = [_INLINE_SPACE.sub(" ", line).strip() for line in cleaned.splitlines()]
        cleaned = "\n".join(lines).strip()
        cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
        return cleaned[: self.config.max_input_chars]

    def _tokenize(self, text: str) -> list[Token]:
        raw_tokens = _TOKEN_PATTERN.findall(text)
        tokens: list[Token] = []
        for index, raw in enumerate(raw_tokens):
            previous = raw_tokens[index - 1] if index > 0 else None
            tokens.append(
                Token(
                    text=raw,
                    pos=_tag(raw, previous),
                    lemma=_lemmatize(raw),
                    is_stop_word=raw.lower() in STOP_WORDS,
                )
            )
        return tokens

    @staticmethod
    def _extract_entities(text: str) -> list[Entity]:
        found: list[tuple[int, int, int, str, float]] = []
        for order, (label, pattern, confidence) in enumerate(_ENTITY_PATTERNS):
            for match in pattern.finditer(text):
                found.append((match.start(), match.end(), order, label, confidence))

        for match in _PROPER_NOUN.finditer(text):
            word = match.group(0)
            if word.lower() in STOP_WORDS or word.lower() in ACTION_VERBS:
                continue
            found.append((match.start(), match.end(), len(_ENTITY_PATTERNS), "PROPER_NOUN", 0.5))

        # Longest span first at each start; drop spans nested in a kept span.
        found.sort(key=lambda item: (item[0], -(item[1] - item[0]), item[2]))
        entities: list[Entity] = []
        covered_until = -1
        for start, end, _, label, confidence in found:
            if end <= covered_until:
                continue
            entities.append(
                Entity(text=text[start:end], label=label, start=start, end=end, confidence=confidence)
            )
            covered_until = max(covered_until, end)
        return entities

    @staticmethod
    def _detect_intent(text: str, words: list[Token]) -> Intent:
        lower_text = text.lower()
        word_set = {token.text.lower() for token in words}
        best_category = "create"
        best_confidence = 0.0

        for category, keywords in _INTENT_KEYWORDS:
            confidence = 0.2 * sum(1 for keyword in keywords if keyword in word_set)
            if lower_text.startswith(keywords[0]):
                confidence += 0.3
            if confidence > best_confidence:
                best_category = category
                best_confidence = confidence

        if best_confidence == 0.0:
            return Intent(category="unknown", confidence=0.0, subcategories=())

        subcategories = tuple(
            sub for sub in _INTENT_SUBCATEGORIES[best_category] if sub in word_set
        )
        return Intent(
            category=best_category,
            confidence=round(min(best_confidence, 1.0), 6),
            subcategories=subcategories,
        )

    def _complexity(
        self,
        text: str,
        words: list[Token],
        sentences: list[str],
        technical_token_count: int,
    ) -> float:
        if not words:
            return 0.0
        length_factor = min(len(text) / self.config.length_basis_chars, 1.0)
        avg_sentence_words = len(words) / max(1, len(sentences))
        sentence_factor = min(avg_sentence_words / self.config.sentence_basis_words, 1.0)
        uniqueness = len({token.lemma for token in words}) / len(words)
        technical_density = min(
            technical_token_count / len(words) * self.config.technical_density_boost, 1.0
        )
        complexity = (
            0.2 * length_factor
            + 0.3 * sentence_factor
            + 0.3 * uniqueness
            + 0.2 * technical_density
        )
        return _unit(complexity)

    @staticmethod
    def _ambiguity(
        text: str,
        tokens: list[Token],
        words: list[Token],
        entities: list[Entity],
        technical_terms: list[str],
    ) -> float:
        """Fraction of vague terms and pronouns left unresolved, scaled by density.

        A vague term is resolved when the word right after it belongs to a
        detected entity ("some PostgreSQL tables"). A pronoun is resolved when an
        entity or technical term appears before it in the text.
        """
        if not words:
            return 1.0

        offsets = _token_offsets(text, tokens)
        technical_lower = {term.lower() for term in technical_terms}
        first_anchor = min(
            [entity.start for entity in entities]
            + [
                offsets[i]
                for i, token in enumerate(tokens)
                if token.text.lower() in technical_lower
            ],
            default=len(text) + 1,
        )

        candidates = 0
        unresolved = 0
        for index, token in enumerate(tokens):
            lower = token.text.lower()
            following = tokens[index + 1] if index + 1 < len(tokens) else None

            if lower in INDEFINITE_PRONOUNS:
                if lower == "that" and following is not None and following.pos != "PUNCT":
                    continue
                if lower in {"this", "these", "those"} and not _is_standalone(following):
                    continue
                candidates += 1
                if offsets[index] <= first_anchor:
                    unresolved += 1
            elif lower in VAGUE_TERMS or lower in HEDGE_WORDS:
                candidates += 1
                if following is None or not _inside_entity(offsets[index + 1], entities):
                    unresolved += 1

        if candidates == 0:
            return 0.0
        density = min(1.0, 4.0 * candidates / len(words))
        return _unit((unresolved / candidates) * density)

    @staticmethod
    def _readability(text: str, sentences: list[str]) -> float:
        words = [word for word in text.split() if _WORD_PATTERN.search(word)]
        if not sentences or not words:
            return 0.0
        syllables = sum(count_syllables(word) for word in words)
        avg_sentence_length = len(words) / len(sentences)
        avg_syllables = syllables / len(words)
        flesch = 206.835 - 1.015 * avg_sentence_length - 84.6 * avg_syllables
        return _unit(flesch / 100.0)

    @staticmethod
    def _technical_terms(words: list[Token]) -> list[str]:
        seen: set[str] = set()
        terms: list[str] = []
        for token in words:
            key = token.text.lower()
            if key in seen or not is_technical_term(token.text):
                continue
            seen.add(key)
            terms.append(token.text)
        return terms

    @staticmethod
    def _detect_language(text: str) -> str:
        spanish = len(SPANISH_MARKERS.findall(text))
        english = len(ENGLISH_MARKERS.findall(text))
        if spanish > english:
            return "es"
        if english > spanish:
            return "en"
        return "unknown"


def split_sentences(text: str) -> list[str]:
    return [part.strip() for part in _SENTENCE_SPLIT.split(text) if part and part.strip()]


def is_technical_term(word: str) -> bool:
    return any(pattern.match(word) for pattern in _TECHNICAL_TERM_PATTERNS)


def detect_variables(text: str) -> tuple[str, ...]:
    """Return placeholder names in order of first appearance."""
    found: list[tuple[int, str]] = []
    for pattern in _VARIABLE_PATTERNS:
        for match in pattern.finditer(text):
            found.append((match.start(), match.group(1).strip()))
    names: list[str] = []
    for _, name in sorted(found):
        if name not in names:
            names.append(name)
    return tuple(names)


def detect_domain_hints(words: list[Token]) -> tuple[Domain, ...]:
    """Domains whose trigger vocabulary occurs, strongest first."""
    counts = Counter(token.text.lower() for token in words)
    scored: list[tuple[int, int, Domain]] = []
    for order, domain in enumerate(Domain):
        keywords = DOMAIN_KEYWORDS.get(domain, ())
        hits = sum(counts[keyword] for keyword in keywords)
        if hits:
            scored.append((-hits, order, domain))
    return tuple(domain for _, _, domain in sorted(scored))


def count_syllables(word: str) -> int:
    word = word.lower()
    if len(word) <= 3:
        return 1
    count = 0
    previous_vowel = False
    for char in word:
        is_vowel = char in "aeiouy"
        if is_vowel and not previous_vowel:
            count += 1
        previous_vowel = is_vowel
    if word.endswith("e"):
        count -= 1
    return max(1, count)


def _tag(word: str, previous: str | None) -> str:
    lower = word.lower()
    if not _WORD_PATTERN.match(word):
        return "PUNCT"
    if lower.replace(".", "").isdigit():
        return "NUM"
    if re.fullmatch(r"[A-Z]{2,}\d*", word):
        return "ACRONYM"
    if lower in _DETERMINERS:
        return "DET"
    if lower in _PRONOUNS:
        return "PRON"
    if lower in _PREPOSITIONS:
        return "PREP"
    if lower in _CONJUNCTIONS:
        return "CONJ"
    if lower in MODAL_VERBS:
        return "MODAL"
    if lower in ACTION_VERBS or (previous is not None and previous.lower() == "to" and lower.isalpha()):
        return "VERB"
    if lower.endswith("ly") and len(lower) > 4:
        return "ADV"
    if lower in VAGUE_TERMS or lower.endswith(("ful", "ous", "ive", "able", "ible", "al", "ic")):
        return "ADJ"
    if lower.endswith(("ing", "ed")) and len(lower) > 5:
        return "VERB"
    return "NOUN"


def _lemmatize(word: str) -> str:
    lower = word.lower()
    if not lower.isalpha() or len(lower) <= 3:
        return lower
    if lower.endswith("ies") and len(lower) > 4:
        return lower[:-3] + "y"
    if lower.endswith("sses"):
        return lower[:-2]
    if lower.endswith("ing") and len(lower) > 5:
        return lower[:-3]
    if lower.endswith("ed") and len(lower) > 4:
        return lower[:-2]
    if lower.endswith("s") and not lower.endswith("ss"):
        return lower[:-1]
    return lower


def _token_offsets(text: str, tokens: list[Token]) -> list[int]:
    offsets: list[int] = []
    cursor = 0
    for token in tokens:
        position = text.find(token.text, cursor)
        if position < 0:
            position = cursor
        offsets.append(position)
        cursor = position + len(token.text)
    return offsets


def _inside_entity(offset: int, entities: list[Entity]) -> bool:
    return any(entity.start <= offset < entity.end for entity in entities)


def _is_standalone(following: Token | None) -> bool:
    """A demonstrative is pronoun-like when no content word follows it."""
    if following is None:
        return True
    return following.pos in {"PUNCT", "PREP", "CONJ", "MODAL", "DET"} or following.is_stop_word


def _unit(value: float) -> float:
    return round(max(0.0, min(1.0, value)), 6)

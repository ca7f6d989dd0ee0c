"""Rule-based interpreter for free-text job queries.

Turns an utterance such as "jobs of cooking in delhi" into a structured
`ExtractedQuery(skills=["cook"], location="delhi")`.

Pipeline (each stage sees what earlier stages found):
1. Combined location+skill patterns ("jobs of X in Y", "Y jobs", ...)
2. Self-descriptive skill phrases ("I am good at X", "I can do X", ...)
3. Self-descriptive location phrases ("I live in X"), if no location yet
4. Skill left over from stage 1 disambiguation
5. Direct dictionary scan of every skill surface form
6. Semantic theme fallback ("outdoor" -> driving, gardening, ...), if no skills
7. Generic single-word fallback ("need a X"), if still no skills
8. Case-insensitive, order-preserving dedupe

Deterministic and side-effect free; unparseable input yields an empty query.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache

from models.schemas.extracted_query import ExtractedQuery
from services.query_vocabulary import DEFAULT_VOCABULARY, QueryVocabulary, normalize_phrase

logger = logging.getLogger(__name__)

# One or two lower-case words
_PHRASE = r"[a-z]+(?:\s+[a-z]+)?"
# Free text up to the end of the sentence
_CLAUSE = r"[^.!?\n]+"


@dataclass(frozen=True)
class LocationPattern:
    """A stage-1 template. Two-group patterns capture a skill/location pair
    in unknown order; one-group patterns capture a location candidate only.

    `gazetteer_only` patterns never yield a location outside the gazetteer.
    """
    name: str
    regex: re.Pattern
    gazetteer_only: bool = False

    @property
    def two_capture(self) -> bool:
        return self.regex.groups >= 2


LOCATION_PATTERNS: tuple[LocationPattern, ...] = (
    # "jobs of cooking in delhi"
    LocationPattern(
        "skill_then_location",
        re.compile(rf"\bjobs?\s+(?:of|for)\s+({_PHRASE})\s+(?:in|near|at|around)\s+({_PHRASE})"),
    ),
    # "jobs near delhi of cooking"
    LocationPattern(
        "location_then_skill",
        re.compile(rf"\bjobs?\s+(?:near|in|at|around)\s+({_PHRASE})\s+(?:of|for)\s+({_PHRASE})"),
    ),
    # "I live in mumbai", "cook in goa"; lookahead lets matches overlap
    LocationPattern(
        "preposition",
        re.compile(rf"\b(?=(?:in|at|near|around|for)\s+({_PHRASE}))"),
    ),
    # "delhi jobs", "pune work"
    LocationPattern(
        "location_jobs",
        re.compile(rf"\b({_PHRASE})\s+(?:jobs?|work|position)\b"),
        gazetteer_only=True,
    ),
    LocationPattern(
        "jobs_in",
        re.compile(rf"\bjobs?\s+in\s+({_PHRASE})"),
    ),
    LocationPattern(
        "jobs_near",
        re.compile(rf"\b(?:jobs?|work)\s+(?:near|in|at|around)\s+({_PHRASE})"),
    ),
)

SKILL_PHRASE_PATTERNS: tuple[re.Pattern, ...] = (
    # "I am good at X", "skilled with X"
    re.compile(
        rf"(?:\bi(?:\s+am|'m)\s+)?\b(?:good|great|skilled|experienced|proficient)"
        rf"\s+(?:at|in|with)\s+({_CLAUSE})"
    ),
    # "I can do X", "I know how to X"
    re.compile(rf"\bi\s+(?:can|know\s+how\s+to)\s+(?:do\s+)?({_CLAUSE})"),
    # "I have experience in X"
    re.compile(
        rf"\b(?:i\s+)?(?:have|had)\s+(?:experience|skills|expertise|knowledge)"
        rf"\s+(?:in|with|at)\s+({_CLAUSE})"
    ),
    # "I know X", "I learned X"
    re.compile(rf"\bi\s+(?:know|learned|learn)\s+(?:how\s+to\s+)?({_CLAUSE})"),
    # "I am a X", "I'm an X"
    re.compile(rf"\bi(?:\s+am|'m)\s+(?:a|an|the)\s+({_CLAUSE})"),
    # "my skills include X"
    re.compile(rf"\b(?:my\s+)?(?:skills|abilities|expertise)\s+(?:include|are|is)\s+({_CLAUSE})"),
)

LOCATION_PHRASE_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(rf"\bi(?:\s+(?:am|live|living)|'m)\s+(?:in|at|near|around|from)\s+({_PHRASE})"),
    re.compile(rf"\b(?:located|living|based|from)\s+(?:in|at|near)\s+({_PHRASE})"),
    re.compile(rf"\b(?:i\s+am|i'm)\s+from\s+({_PHRASE})"),
)

FALLBACK_SKILL_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\b(?:jobs?|work)\s+(?:of|as|for)\s+(\w+)"),
    re.compile(r"\b(?:need|want|looking|find)\s+(?:for\s+)?(?:an?\s+)?(\w+)"),
    re.compile(r"\b(?:jobs?|work|opportunity)\s+(?:in|for)\s+(\w+)"),
)

_LIST_SEPARATOR = re.compile(r"\s*,\s*|\s+(?:and|also)\s+")
_LEADING_CONJUNCTION = re.compile(r"^(?:and|also)\s+")
_TRAILING_FILLER = re.compile(r"\s+(?:work|jobs?|etc|and|also)\b.*$")
_LOCATION_SUFFIX = re.compile(r"(?:\s+(?:and|also)\b|\s*,).*$")
_LOCATION_TAIL = re.compile(r"\s+(?:in|at|near|around|from)\s+.*$")

# A place name never starts with one of these ("for a tailor", "for my house")
_DETERMINERS = frozenset({
    "a", "an", "the", "my", "your", "our", "his", "her", "their", "some", "any", "this", "that",
})

MIN_SKILL_LENGTH = 3
MAX_SKILL_LENGTH = 19
MIN_LOCATION_LENGTH = 3


@dataclass
class _Extraction:
    """Per-call accumulator threaded through the stages."""
    text: str
    skills: list[str] = field(default_factory=list)
    location: str | None = None
    incidental_skill: str | None = None

    def add_skill(self, skill: str | None) -> None:
        if skill and skill not in self.skills:
            self.skills.append(skill)


@dataclass(frozen=True)
class LocationHit:
    location: str
    skill: str | None
    in_gazetteer: bool


# ---------------------------------------------------------------------------
# Candidate helpers
# ---------------------------------------------------------------------------

def _trim_candidate(phrase: str | None, vocabulary: QueryVocabulary) -> str:
    """Normalize a captured phrase and cut it at its first stopword token."""
    if not phrase:
        return ""
    kept: list[str] = []
    for token in normalize_phrase(phrase).split(" "):
        if vocabulary.is_stopword(token):
            break
        kept.append(token)
    return " ".join(kept)


def _accept_skill(candidate: str | None, vocabulary: QueryVocabulary) -> str | None:
    """Map a candidate phrase to a canonical skill, or keep it verbatim.

    Unknown phrases survive as ad-hoc skills when they are of plausible
    length and are neither a known location nor a stopword.
    """
    if not candidate:
        return None
    cleaned = normalize_phrase(candidate).strip(" ,.;:")
    if len(cleaned) < MIN_SKILL_LENGTH:
        return None
    if vocabulary.is_location(cleaned) or vocabulary.is_stopword(cleaned):
        return None
    matched = vocabulary.canonical_for(cleaned) or vocabulary.match_skill(cleaned)
    if matched:
        return matched
    if len(cleaned) <= MAX_SKILL_LENGTH:
        return cleaned
    return None


def split_skill_phrase(phrase: str) -> list[str]:
    """Split "gardening, cooking and driving work" into clean candidates."""
    parts: list[str] = []
    for part in _LIST_SEPARATOR.split(phrase.strip()):
        part = _LEADING_CONJUNCTION.sub("", part.strip())
        part = _TRAILING_FILLER.sub("", part).strip(" ,.;:")
        if part:
            parts.append(part)
    return parts


def _drop_location_tail(part: str, vocabulary: QueryVocabulary) -> str:
    """Cut "stitching in delhi" back to "stitching"."""
    kept: list[str] = []
    for token in _LOCATION_TAIL.sub("", part).split():
        if vocabulary.is_location(token):
            break
        kept.append(token)
    return " ".join(kept)


def _skill_clause_starts(text: str) -> set[int]:
    """Offsets where a self-descriptive skill clause begins ("good at |tailoring")."""
    return {
        match.start(1)
        for pattern in SKILL_PHRASE_PATTERNS
        for match in pattern.finditer(text)
    }


def _disambiguate(
    first: str, second: str, vocabulary: QueryVocabulary
) -> tuple[str | None, str | None]:
    """Decide which of two captures is the location. Returns (location, skill)."""
    first_is_place = vocabulary.resolve_location(first) is not None
    second_is_place = vocabulary.resolve_location(second) is not None
    if second_is_place and not first_is_place:
        return second, first
    if first_is_place and not second_is_place:
        return first, second

    first_is_skill = vocabulary.looks_like_skill(first)
    second_is_skill = vocabulary.looks_like_skill(second)
    if first_is_skill and not second_is_skill:
        return second, first
    if second_is_skill and not first_is_skill:
        return first, second
    # Neither capture is identifiable: no location from this match
    return None, None


def _location_from_match(
    match: re.Match, pattern: LocationPattern, vocabulary: QueryVocabulary, gazetteer_only: bool
) -> LocationHit | None:
    if pattern.two_capture:
        first = _trim_candidate(match.group(1), vocabulary)
        second = _trim_candidate(match.group(2), vocabulary)
        candidate, skill = _disambiguate(first, second, vocabulary)
    else:
        candidate, skill = _trim_candidate(match.group(1), vocabulary), None
    if not candidate:
        return None

    resolved = vocabulary.resolve_location(candidate)
    if resolved is not None:
        if vocabulary.is_stopword(resolved) or vocabulary.looks_like_skill(resolved):
            return None
        return LocationHit(resolved, skill, in_gazetteer=True)

    if gazetteer_only:
        return None
    if vocabulary.is_stopword(candidate) or vocabulary.looks_like_skill(candidate):
        return None
    if candidate.split(" ")[0] in _DETERMINERS:
        return None
    if len(candidate) < MIN_LOCATION_LENGTH:
        return None
    return LocationHit(candidate, skill, in_gazetteer=False)


def match_location_pattern(
    text: str, pattern: LocationPattern, vocabulary: QueryVocabulary = DEFAULT_VOCABULARY
) -> LocationHit | None:
    """Apply one stage-1 template to lower-cased text.

    A gazetteer hit from any match wins; otherwise the first unknown place
    name found is used. A capture that opens a self-descriptive skill clause
    ("I am good at tailoring") only counts if it is a known city.
    """
    clause_starts = _skill_clause_starts(text)
    fallback: LocationHit | None = None
    for match in pattern.regex.finditer(text):
        gazetteer_only = pattern.gazetteer_only or match.start(1) in clause_starts
        hit = _location_from_match(match, pattern, vocabulary, gazetteer_only)
        if hit is None:
            continue
        if hit.in_gazetteer:
            return hit
        if fallback is None:
            fallback = hit
    return fallback


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------

def _stage_combined_patterns(state: _Extraction, vocabulary: QueryVocabulary) -> None:
    for pattern in LOCATION_PATTERNS:
        hit = match_location_pattern(state.text, pattern, vocabulary)
        if hit is not None:
            logger.debug("Location pattern %s matched: %s", pattern.name, hit.location)
            state.location = hit.location
            state.incidental_skill = hit.skill
            return


def _stage_skill_phrases(state: _Extraction, vocabulary: QueryVocabulary) -> None:
    for pattern in SKILL_PHRASE_PATTERNS:
        for match in pattern.finditer(state.text):
            for part in split_skill_phrase(match.group(1)):
                state.add_skill(_accept_skill(_drop_location_tail(part, vocabulary), vocabulary))


def _stage_location_phrases(state: _Extraction, vocabulary: QueryVocabulary) -> None:
    if state.location:
        return
    for pattern in LOCATION_PHRASE_PATTERNS:
        for match in pattern.finditer(state.text):
            cleaned = normalize_phrase(_LOCATION_SUFFIX.sub("", match.group(1)))
            # exact city only: "from delhi city" does not count
            if vocabulary.is_location(cleaned):
                state.location = cleaned
                return


def _stage_incidental_skill(state: _Extraction, vocabulary: QueryVocabulary) -> None:
    state.add_skill(_accept_skill(state.incidental_skill, vocabulary))


def _stage_dictionary_scan(state: _Extraction, vocabulary: QueryVocabulary) -> None:
    for form, canonical in vocabulary.surface_forms():
        if _surface_regex(form).search(state.text):
            state.add_skill(canonical)


def _stage_semantic_fallback(state: _Extraction, vocabulary: QueryVocabulary) -> None:
    if state.skills:
        return
    for theme, implied in vocabulary.semantic_categories:
        if theme in state.text:
            logger.debug("Semantic theme %r implies %s", theme, implied)
            state.skills.extend(implied)
            return


def _stage_generic_fallback(state: _Extraction, vocabulary: QueryVocabulary) -> None:
    if state.skills:
        return
    for pattern in FALLBACK_SKILL_PATTERNS:
        match = pattern.search(state.text)
        if not match:
            continue
        word = match.group(1).lower()
        if (
            not vocabulary.is_stopword(word)
            and not vocabulary.is_location(word)
            and word != state.location
            and len(word) >= MIN_LOCATION_LENGTH
        ):
            state.skills.append(word)
            return


@lru_cache(maxsize=512)
def _surface_regex(form: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(form)}\b", re.IGNORECASE)


def dedupe_skills(skills: list[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping first-seen order."""
    seen: set[str] = set()
    unique: list[str] = []
    for skill in skills:
        key = skill.lower()
        if key not in seen:
            seen.add(key)
            unique.append(key)
    return unique


# Ordered: earlier stages take precedence over later ones
STAGES = (
    ("combined_patterns", _stage_combined_patterns),
    ("skill_phrases", _stage_skill_phrases),
    ("location_phrases", _stage_location_phrases),
    ("incidental_skill", _stage_incidental_skill),
    ("dictionary_scan", _stage_dictionary_scan),
    ("semantic_fallback", _stage_semantic_fallback),
    ("generic_fallback", _stage_generic_fallback),
)


def extract(text: str, vocabulary: QueryVocabulary = DEFAULT_VOCABULARY) -> ExtractedQuery:
    """Extract requested skills and location from a free-text utterance.

    Never raises: empty or unparseable input returns an empty query.
    """
    if not isinstance(text, str) or not text.strip():
        return ExtractedQuery()

    state = _Extraction(text=text.lower().replace("’", "'"))
    try:
        for _name, stage in STAGES:
            stage(state, vocabulary)
    except Exception as e:
        logger.warning("Query interpretation failed, returning empty query: %s", e)
        return ExtractedQuery()

    query = ExtractedQuery(skills=dedupe_skills(state.skills), location=state.location)
    logger.debug("Interpreted %r -> skills=%s location=%s", text, query.skills, query.location)
    return query

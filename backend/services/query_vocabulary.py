"""Immutable vocabulary for the job query interpreter.

Holds the skill dictionary (canonical skill + surface forms), the semantic
theme map used as a last-resort skill source, the city gazetteer and the
query stopwords. Built once at import and shared read-only by every caller.
"""

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Stopwords: never a location, never an ad-hoc skill
# ---------------------------------------------------------------------------
QUERY_STOPWORDS: frozenset[str] = frozenset({
    "near", "in", "at", "around", "jobs", "job", "work", "position", "positions",
})

# ---------------------------------------------------------------------------
# Skill dictionary: canonical -> surface forms (canonical listed first)
# Order matters: it is the scan order for containment matching.
# ---------------------------------------------------------------------------
SKILL_SURFACE_FORMS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("gardening", ("gardening", "garden", "gardener")),
    ("driving", ("driving", "driver")),
    ("construction", ("construction", "construction worker")),
    ("cleaning", ("cleaning", "cleaner", "housekeeping")),
    ("electrician", ("electrician", "electrical", "electric")),
    ("plumber", ("plumber", "plumbing")),
    ("cook", ("cook", "cooking", "chef")),
    ("security", ("security", "guard")),
    ("delivery", ("delivery", "delivery driver")),
    ("helper", ("helper", "help")),
    ("painting", ("painting", "painter")),
    ("maintenance", ("maintenance", "maintenance worker")),
    ("labor", ("labor", "labour", "laborer", "labourer")),
    ("welder", ("welder", "welding")),
    ("carpenter", ("carpenter", "carpentry")),
    ("mason", ("mason", "masonry")),
    ("waiter", ("waiter", "waitress", "serving")),
    ("teacher", ("teacher", "teaching", "tutor")),
    ("supervisor", ("supervisor", "supervising")),
    ("nursing", ("nursing", "nurse", "caregiver")),
    ("childcare", ("childcare", "babysitter", "nanny")),
)

# ---------------------------------------------------------------------------
# Semantic themes: abstract word -> implied skills (fallback only)
# ---------------------------------------------------------------------------
SEMANTIC_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("activity", ("driving", "gardening", "construction", "delivery", "outdoor")),
    ("outdoor", ("driving", "gardening", "construction", "delivery", "outdoor")),
    ("environment", ("gardening", "cleaning", "construction")),
    ("physical", ("construction", "welder", "carpenter", "mason", "labour", "helper")),
    ("service", ("delivery", "waiter", "cook", "cleaning", "security")),
    ("technical", ("electrician", "plumber", "welder", "maintenance")),
    ("indoor", ("cook", "waiter", "cleaning", "electrician", "plumber")),
    ("field", ("driving", "delivery", "construction", "gardening")),
)

# City-level gazetteer
KNOWN_LOCATIONS: frozenset[str] = frozenset({
    "mumbai", "delhi", "bangalore", "pune", "hyderabad", "chennai",
    "kolkata", "ahmedabad", "jaipur", "lucknow", "kanpur", "nagpur", "indore", "thane",
    "bhopal", "visakhapatnam", "patna", "vadodara", "ghaziabad", "ludhiana", "agra",
    "nashik", "faridabad", "meerut", "rajkot", "varanasi", "srinagar", "amritsar",
})


def normalize_phrase(text: str) -> str:
    """Lower-case, trim and collapse internal whitespace."""
    return re.sub(r"\s+", " ", text.lower().strip())


@dataclass(frozen=True)
class SkillTerm:
    """A canonical skill plus every surface form that collapses into it."""
    canonical: str
    surface_forms: tuple[str, ...]

    @property
    def base_words(self) -> tuple[str, ...]:
        # first word of each surface form, used for containment matching
        return tuple(form.split(" ")[0] for form in self.surface_forms)


@dataclass(frozen=True)
class QueryVocabulary:
    """Read-only lookup tables consumed by the query interpreter.

    Construction validates the dictionary invariants: canonical skills are
    unique and each surface form belongs to exactly one canonical skill.
    """
    skill_terms: tuple[SkillTerm, ...]
    semantic_categories: tuple[tuple[str, tuple[str, ...]], ...]
    gazetteer: frozenset[str]
    stopwords: frozenset[str] = QUERY_STOPWORDS
    _surface_index: dict[str, str] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        canonicals: set[str] = set()
        index: dict[str, str] = {}
        for term in self.skill_terms:
            if term.canonical in canonicals:
                raise ValueError(f"Duplicate canonical skill: {term.canonical}")
            canonicals.add(term.canonical)
            for form in term.surface_forms:
                owner = index.get(form)
                if owner is not None and owner != term.canonical:
                    raise ValueError(
                        f"Surface form {form!r} maps to both {owner!r} and {term.canonical!r}"
                    )
                index[form] = term.canonical
        self._surface_index.update(index)

    # --- skills ---

    def surface_forms(self) -> list[tuple[str, str]]:
        """All (surface form, canonical) pairs in scan order."""
        return [
            (form, term.canonical)
            for term in self.skill_terms
            for form in term.surface_forms
        ]

    def canonical_for(self, surface: str) -> str | None:
        return self._surface_index.get(normalize_phrase(surface))

    def match_skill(self, phrase: str) -> str | None:
        """Resolve a free phrase to a canonical skill by containment.

        A surface form matches when its first word occurs inside the phrase
        or the phrase occurs inside that first word. The first hit in scan
        order wins, so "cooking" resolves through "cook".
        """
        candidate = normalize_phrase(phrase)
        if not candidate:
            return None
        for term in self.skill_terms:
            for base in term.base_words:
                if base in candidate or candidate in base:
                    return term.canonical
        return None

    def looks_like_skill(self, phrase: str) -> bool:
        return self.match_skill(phrase) is not None

    # --- locations ---

    def is_location(self, phrase: str) -> bool:
        return normalize_phrase(phrase) in self.gazetteer

    def resolve_location(self, phrase: str) -> str | None:
        """Return the gazetteer entry for a phrase or for its first member token."""
        candidate = normalize_phrase(phrase)
        if candidate in self.gazetteer:
            return candidate
        for token in candidate.split(" "):
            if token in self.gazetteer:
                return token
        return None

    # --- misc ---

    def is_stopword(self, word: str) -> bool:
        return normalize_phrase(word) in self.stopwords


def build_default_vocabulary() -> QueryVocabulary:
    vocabulary = QueryVocabulary(
        skill_terms=tuple(
            SkillTerm(canonical=canonical, surface_forms=forms)
            for canonical, forms in SKILL_SURFACE_FORMS
        ),
        semantic_categories=SEMANTIC_CATEGORIES,
        gazetteer=KNOWN_LOCATIONS,
    )
    logger.debug(
        "Query vocabulary built: %d skills, %d themes, %d locations",
        len(vocabulary.skill_terms),
        len(vocabulary.semantic_categories),
        len(vocabulary.gazetteer),
    )
    return vocabulary


DEFAULT_VOCABULARY = build_default_vocabulary()

"""Named surface-pattern rules used by the extractors.

Entity matchers turn text into typed candidate spans; relation templates turn
text into (subject, object) phrase pairs. Both are plain data so new types can
be registered by passing a different tuple to the extractors.

Matcher order is significant: the entity extractor keeps the first span per
normalized label, so an earlier matcher decides the type of a label that
several matchers recognize.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Protocol

from .models import EntityType

_CAP = r"[A-Z][a-z]+"
_CAP_PHRASE = rf"{_CAP}(?:[ \t]+{_CAP})*"
_PHRASE = r"\w+(?:\s+\w+)*"

ORGANIZATION_KEYWORDS: tuple[str, ...] = (
    "University",
    "Corp",
    "Inc",
    "Ltd",
    "Company",
    "Organization",
    "Institute",
    "Association",
    "Foundation",
)

EVENT_KEYWORDS: tuple[str, ...] = (
    "Conference",
    "Summit",
    "Meeting",
    "Workshop",
    "Symposium",
    "Congress",
)


class EntityMatcher(Protocol):
    name: str
    entity_type: EntityType

    def find(self, text: str) -> Iterator[str]: ...


@dataclass(frozen=True, slots=True)
class RegexMatcher:
    """Yields one span per regex match.

    `group` selects the captured part that is kept (e.g. the phrase after a
    preposition). Spans matching `exclude` are skipped.
    """

    name: str
    entity_type: EntityType
    pattern: re.Pattern[str]
    group: int | str = 0
    exclude: re.Pattern[str] | None = None

    def find(self, text: str) -> Iterator[str]:
        for m in self.pattern.finditer(text):
            span = m.group(self.group)
            if not span:
                continue
            if self.exclude is not None and self.exclude.search(span):
                continue
            yield span


def _alternation(words: Iterable[str]) -> str:
    return "|".join(re.escape(w) for w in words)


def keyword_matcher(name: str, entity_type: EntityType, keywords: Iterable[str]) -> RegexMatcher:
    """Span from any capitalized words before a keyword through to the next boundary.

    Keywords match case-insensitively; the boundary is `.`, `,`, a newline or
    the end of the text.
    """
    pattern = re.compile(rf"(?:\b{_CAP}[ \t]+)*\b(?i:{_alternation(keywords)})\b[^.,\n]*")
    return RegexMatcher(name=name, entity_type=entity_type, pattern=pattern)


PERSON = RegexMatcher(
    name="person",
    entity_type="person",
    pattern=re.compile(rf"\b{_CAP}(?:[ \t]+{_CAP})+\b"),
    exclude=re.compile(rf"\b(?:{_alternation(ORGANIZATION_KEYWORDS + EVENT_KEYWORDS)})\b"),
)

ORGANIZATION = keyword_matcher("organization", "organization", ORGANIZATION_KEYWORDS)

LOCATION = RegexMatcher(
    name="location",
    entity_type="location",
    pattern=re.compile(rf"\b(?:in|at|from|to)[ \t]+({_CAP_PHRASE})\b"),
    group=1,
)

CONCEPT = RegexMatcher(
    name="concept",
    entity_type="concept",
    pattern=re.compile(rf"\b{_CAP_PHRASE}(?=\s+(?:is|are|means|refers\s+to)\b)"),
)

EVENT = keyword_matcher("event", "event", EVENT_KEYWORDS)

DEFAULT_ENTITY_MATCHERS: tuple[EntityMatcher, ...] = (PERSON, ORGANIZATION, LOCATION, CONCEPT, EVENT)


@dataclass(frozen=True, slots=True)
class RelationTemplate:
    """Two-argument pattern; `name` doubles as the relationship type tag."""

    name: str
    pattern: re.Pattern[str]

    def find(self, text: str) -> Iterator[tuple[str, str]]:
        for m in self.pattern.finditer(text):
            yield m.group("subject"), m.group("object")


def relation_template(name: str, connective: str) -> RelationTemplate:
    """Build `<subject> <connective> <object>` where both sides are word runs."""
    pattern = re.compile(rf"\b(?P<subject>{_PHRASE})\s+{connective}\s+(?P<object>{_PHRASE})")
    return RelationTemplate(name=name, pattern=pattern)


IS_A = relation_template("is-a", r"(?:is|are)(?:\s+(?:a|an|the))?")
WORKS_AT = relation_template("works-at", r"(?:works|worked)\s+(?:at|for|with)")
FOUNDED = relation_template("founded", r"(?:founded|established|created)")
LOCATED_IN = relation_template("located-in", r"(?:located|situated)\s+in")
COLLABORATES_WITH = relation_template("collaborates-with", r"(?:collaborates|collaborated)\s+with")
AUTHORED = relation_template("authored", r"(?:published|wrote|authored)")

DEFAULT_RELATION_TEMPLATES: tuple[RelationTemplate, ...] = (
    IS_A,
    WORKS_AT,
    FOUNDED,
    LOCATED_IN,
    COLLABORATES_WITH,
    AUTHORED,
)

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from textgraph.settings import settings

from .matchers import DEFAULT_ENTITY_MATCHERS, DEFAULT_RELATION_TEMPLATES, EntityMatcher, RelationTemplate
from .models import Entity, Relationship
from .scoring import ConfidenceScorer, default_scorer

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def entity_id(label: str) -> str:
    """Stable id for a label: lowercase, non-alphanumeric runs -> '-', trimmed."""
    return _NON_ALNUM.sub("-", label.lower()).strip("-")


def relationship_id(from_id: str, to_id: str, rel_type: str) -> str:
    """`from--to--type`; entity ids never contain `--`, so distinct triples never collide."""
    return f"{from_id}--{to_id}--{entity_id(rel_type)}"


def relationship_label(rel_type: str) -> str:
    return re.sub(r"[-_]+", " ", rel_type).strip()


@dataclass(slots=True)
class EntityExtractor:
    """Runs the matcher rules over one document's text.

    Output order follows matcher order, then match order within a matcher.
    Labels are deduplicated per document by their normalized id; the first
    span wins and fixes the entity type.
    """

    matchers: Sequence[EntityMatcher] = DEFAULT_ENTITY_MATCHERS
    scorer: ConfidenceScorer = field(default_factory=default_scorer)
    min_label_len: int = field(default_factory=lambda: settings.min_label_len)

    def extract(self, text: str, source: str | None = None) -> list[Entity]:
        if not text or not text.strip():
            return []

        entities: dict[str, Entity] = {}
        for matcher in self.matchers:
            for span in matcher.find(text):
                label = span.strip()
                if len(label) < self.min_label_len:
                    continue
                eid = entity_id(label)
                if not eid or eid in entities:
                    continue
                entities[eid] = Entity(
                    id=eid,
                    label=label,
                    type=matcher.entity_type,
                    source=source,
                    confidence=self.scorer.score(label, matcher.entity_type),
                )

        logger.debug("extracted %d entities from %r", len(entities), source)
        return list(entities.values())


@dataclass(slots=True)
class RelationshipExtractor:
    """Links entities the text connects through a relation template.

    Both captured phrases must resolve, by exact normalized label, to distinct
    entities of the same document; anything else is dropped.
    """

    templates: Sequence[RelationTemplate] = DEFAULT_RELATION_TEMPLATES
    scorer: ConfidenceScorer = field(default_factory=default_scorer)

    def extract(
        self, text: str, entities: Iterable[Entity], source: str | None = None
    ) -> list[Relationship]:
        if not text or not text.strip():
            return []

        lookup: dict[str, Entity] = {}
        for e in entities:
            lookup.setdefault(entity_id(e.label), e)
        if len(lookup) < 2:
            return []

        rels: dict[str, Relationship] = {}
        for template in self.templates:
            for subject, obj in template.find(text):
                src = lookup.get(entity_id(subject.strip()))
                dst = lookup.get(entity_id(obj.strip()))
                if src is None or dst is None:
                    logger.debug("unresolved %s match: %r -> %r", template.name, subject, obj)
                    continue
                if src.id == dst.id:
                    continue
                rid = relationship_id(src.id, dst.id, template.name)
                if rid in rels:
                    continue
                rels[rid] = Relationship(
                    id=rid,
                    from_id=src.id,
                    to_id=dst.id,
                    type=template.name,
                    label=relationship_label(template.name),
                    source=source,
                    confidence=self.scorer.score(rid, template.name),
                )

        return list(rels.values())

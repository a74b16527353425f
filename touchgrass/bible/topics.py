"""
Topic → verse collections with ratings.

Used both for the openbible.info topic list (read-only) and for the user's
bookmark tags (mutable, persisted through settings). Data is keyed by OSIS
strings so ranges from the topic files survive a load/save round trip.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from touchgrass.exceptions import InvalidReferenceError

from .verse_ref import VerseRef

logger = logging.getLogger(__name__)

# {"faith": [["Heb.11.1", 12], ["Rom.10.17", 8]]}; plain OSIS strings are accepted too
TopicsData = Mapping[str, Iterable[Any]]


def _pairs(refs: Iterable[Any]) -> Iterable[tuple[str, int]]:
    for ref in refs:
        if isinstance(ref, str):
            yield ref, 0
        else:
            osis, rating = ref[0], ref[1] if len(ref) > 1 else 0
            yield str(osis), int(rating)


class BibleTopics:
    """Ordered mapping of topic names to rated verse references."""

    def __init__(self, data: TopicsData | None = None):
        self._topics: dict[str, dict[str, int]] = {}
        if data:
            self.add_data(data)

    def add_data(self, data: TopicsData) -> None:
        """Merge topics into this collection; ratings for existing refs are overwritten."""
        for topic, refs in data.items():
            existing = self._topics.setdefault(topic, {})
            for osis, rating in _pairs(refs):
                existing[osis] = rating

    def get(self, topic: str) -> list[VerseRef]:
        """Verses of a topic in stored order. Unparseable entries are skipped."""
        verses = []
        for osis in self._topics.get(topic, {}):
            try:
                verses.append(VerseRef.from_osis(osis))
            except InvalidReferenceError as e:
                logger.debug(f"Skipping reference in topic {topic!r}: {e}")
        return verses

    def has(self, topic: str) -> bool:
        return topic in self._topics

    def contains(self, topic: str, verse: VerseRef) -> bool:
        return verse.to_osis() in self._topics.get(topic, {})

    def set(self, topic: str, *refs: VerseRef) -> None:
        self._topics[topic] = {ref.to_osis(): 0 for ref in refs}

    def add(self, topic: str, *refs: VerseRef) -> None:
        existing = self._topics.setdefault(topic, {})
        for ref in refs:
            existing.setdefault(ref.to_osis(), 0)

    def remove(self, topic: str, *refs: VerseRef) -> None:
        """Remove verses from a topic; the topic goes away once empty."""
        existing = self._topics.get(topic)
        if existing is None:
            return
        for ref in refs:
            existing.pop(ref.to_osis(), None)
        if not existing:
            del self._topics[topic]

    def delete(self, topic: str) -> None:
        self._topics.pop(topic, None)

    @property
    def topic_names(self) -> list[str]:
        return list(self._topics)

    def add_to_history(self, verse: VerseRef, today: date | None = None) -> str:
        """File ``verse`` under today's ISO date. Returns the tag used."""
        tag = (today or date.today()).isoformat()
        self.add(tag, verse)
        return tag

    def to_json(self) -> dict[str, list[list[Any]]]:
        return {
            topic: [[osis, rating] for osis, rating in refs.items()]
            for topic, refs in self._topics.items()
        }

    def __len__(self) -> int:
        return len(self._topics)

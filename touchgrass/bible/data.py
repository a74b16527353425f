"""
Bible data context handed to every scripture category.

Text files map book names to chapters, with index 0 unused at both levels:

    {"GENESIS": [[], ["", "In the beginning ...", "And the earth ..."]]}

Cross references map an OSIS verse to ``[[osis, votes], ...]``; topic files
map a topic name to ``[[osis, rating], ...]``.
"""

import json
import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from touchgrass.config.constants import (
    BUNDLED_DATA_DIR,
    CROSS_REFERENCES_FILENAME,
    DEFAULT_TRANSLATION,
    TOPICS_FILENAME,
    TOUCHGRASS_DATA_DIR_ENV,
    TRANSLATION_FILES,
)
from touchgrass.exceptions import DataLoadError, InvalidReferenceError

from .topics import BibleTopics, TopicsData
from .verse_ref import BOOKS_OF_THE_BIBLE, VerseRef

logger = logging.getLogger(__name__)

BibleText = Mapping[str, list[list[str]]]


class BibleData:
    """Translations, cross references, topics and the user's bookmarks."""

    def __init__(
        self,
        translations: Mapping[str, BibleText],
        cross_references: Mapping[str, list[Any]] | None = None,
        topics: BibleTopics | None = None,
        bookmarks: BibleTopics | None = None,
        default_translation: str = DEFAULT_TRANSLATION,
    ):
        self.translations = dict(translations)
        self.cross_refs = dict(cross_references or {})
        self.topics = topics if topics is not None else BibleTopics()
        self.bookmarks = bookmarks if bookmarks is not None else BibleTopics()
        self.default_translation = default_translation

    def _bible(self, translation: str | None) -> BibleText:
        return self.translations.get(translation or self.default_translation, {})

    def books(self, translation: str | None = None) -> list[str]:
        """Books present in a translation, in canonical order."""
        bible = self._bible(translation)
        canonical = [book for book in BOOKS_OF_THE_BIBLE if book in bible]
        extra = [book for book in bible if book not in BOOKS_OF_THE_BIBLE]
        return canonical + extra

    def chapter_count(self, book: str, translation: str | None = None) -> int:
        chapters = self._bible(translation).get(book, [])
        return max(len(chapters) - 1, 0)

    def verse_count(self, book: str, chapter: int, translation: str | None = None) -> int:
        return len(self.chapter(book, chapter, translation))

    def chapter(self, book: str, chapter: int, translation: str | None = None) -> list[str]:
        """Verse texts of a chapter; element 0 is verse 1."""
        chapters = self._bible(translation).get(book, [])
        if not 0 < chapter < len(chapters):
            return []
        return list(chapters[chapter][1:])

    def text(self, ref: VerseRef, translation: str | None = None) -> str:
        """Verse text, or "" when the translation lacks the verse."""
        chapters = self._bible(translation).get(ref.book, [])
        if not 0 < ref.chapter < len(chapters):
            return ""
        verses = chapters[ref.chapter]
        if not 0 < ref.verse < len(verses):
            return ""
        return verses[ref.verse]

    def has_verse(self, ref: VerseRef, translation: str | None = None) -> bool:
        return bool(self.text(ref, translation))

    def iter_verses(self, translation: str | None = None) -> Iterator[tuple[VerseRef, str]]:
        """Every verse in canonical order."""
        bible = self._bible(translation)
        for book in self.books(translation):
            chapters = bible[book]
            for chapter in range(1, len(chapters)):
                verses = chapters[chapter]
                for verse in range(1, len(verses)):
                    yield VerseRef(book, chapter, verse), verses[verse]

    def cross_references(self, ref: VerseRef) -> list[VerseRef]:
        """Cross references of a verse, strongest first as stored."""
        refs = []
        for entry in self.cross_refs.get(ref.to_osis(), []):
            osis = entry[0] if isinstance(entry, (list, tuple)) else entry
            try:
                refs.append(VerseRef.from_osis(str(osis)))
            except InvalidReferenceError as e:
                logger.debug(f"Skipping cross reference of {ref}: {e}")
        return refs

    @classmethod
    def load(
        cls,
        data_dir: Path | None = None,
        bookmarks: TopicsData | None = None,
        default_translation: str = DEFAULT_TRANSLATION,
    ) -> "BibleData":
        """
        Load translations, cross references and topics from a directory.

        Args:
            data_dir: Directory with the JSON files; defaults to
                ``$TOUCHGRASS_DATA_DIR`` or the bundled sample data
            bookmarks: The user's bookmark tags
            default_translation: Translation used when none is given

        Raises:
            DataLoadError: a translation file is missing or malformed
        """
        directory = resolve_data_dir(data_dir)
        translations = {}
        for name, filename in TRANSLATION_FILES.items():
            path = directory / filename
            if path.exists():
                translations[name] = _read_json(path)
        if default_translation not in translations:
            raise DataLoadError(
                "Translation not found",
                path=str(directory / TRANSLATION_FILES.get(default_translation, "")),
                translation=default_translation,
            )

        cross_refs = _read_optional_json(directory / CROSS_REFERENCES_FILENAME)
        topics = _read_optional_json(directory / TOPICS_FILENAME)
        logger.info(
            f"Loaded {len(translations)} translation(s), {len(cross_refs)} cross references, "
            f"{len(topics)} topics from {directory}"
        )
        return cls(
            translations,
            cross_refs,
            BibleTopics(topics),
            BibleTopics(bookmarks or {}),
            default_translation=default_translation,
        )


def resolve_data_dir(data_dir: Path | None = None) -> Path:
    """Explicit directory, then ``$TOUCHGRASS_DATA_DIR``, then the bundled sample."""
    if data_dir is not None:
        return Path(data_dir)
    env_dir = os.environ.get(TOUCHGRASS_DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    return BUNDLED_DATA_DIR


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DataLoadError("Cannot read data file", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise DataLoadError("Invalid JSON in data file", path=str(path)) from e


def _read_optional_json(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.warning(f"Optional data file missing: {path}")
        return {}
    return _read_json(path)

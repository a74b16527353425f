"""
Scripture categories for the command palette.

Each category reads the shared ``BibleData`` handed to it at construction and
navigates only by returning patches that name other categories by key.
Verse rows always drill into the cross references of that verse; choosing a
verse closes the palette with the verse in the final state.
"""

from __future__ import annotations

import logging
from typing import Any

from touchgrass.palette.category import Category, CloseWith, InvokeResult, RenderInfo, StatePatch
from touchgrass.palette.state import PaletteState

from .data import BibleData
from .state import SPECIFICITY_BOOK, SPECIFICITY_CHAPTER, SPECIFICITY_VERSE
from .verse_ref import VerseRef

logger = logging.getLogger(__name__)

BOOKMARK_VERSES = "bookmark-verses"
CROSS_REFERENCES = "cross-references"
GO_TO_VERSE = "go-to-verse"
BIBLE_SEARCH = "bible-search"
TOPICS = "topics"
BOOKMARKS = "bookmarks"


def _verse_patch(verse: VerseRef) -> dict[str, Any]:
    return {"active_category": CROSS_REFERENCES, "verse": verse, "specificity": SPECIFICITY_BOOK}


class BibleCategory(Category[Any]):
    """Shared helpers for categories backed by ``BibleData``."""

    data: BibleData

    def __init__(self, data: BibleData, secondary: Category | None = None):
        super().__init__(data, secondary)

    def verse_text(self, verse: VerseRef) -> str:
        return self.data.text(verse)

    def match_verses(self, query: str, verses: list[VerseRef]) -> list[VerseRef]:
        return self.match(query, verses, str, self.verse_text)

    def describe_verse(self, verse: VerseRef) -> tuple[RenderInfo, StatePatch]:
        info = RenderInfo(title=verse.title(), description=self.verse_text(verse), detail=True)
        return info, _verse_patch(verse)

    def choose_verse(self, verse: VerseRef) -> CloseWith:
        return CloseWith(_verse_patch(verse))


class VerseListCategory(BibleCategory):
    """Verses saved under the current bookmark tag."""

    key = BOOKMARK_VERSES
    name = "Current Bookmark tag"
    description = "Verses saved under the current bookmark tag"

    def __init__(self, data: BibleData, secondary: Category | None = None):
        super().__init__(data, secondary)
        self.verses: list[VerseRef] = []

    def trigger(self, state: PaletteState) -> None:
        tag = state.get("tag", "")
        self.title = f"Bookmark tag: {tag}"
        self.verses = self.data.bookmarks.get(tag)

    def list(self, query: str) -> list[VerseRef]:
        return self.match_verses(query, self.verses)

    def describe(self, candidate: VerseRef) -> tuple[RenderInfo, StatePatch]:
        return self.describe_verse(candidate)

    def invoke(self, candidate: VerseRef) -> InvokeResult:
        return self.choose_verse(candidate)


class CrossRefCategory(VerseListCategory):
    """Treasury of Scripture Knowledge cross references of the focused verse."""

    key = CROSS_REFERENCES
    name = "Cross References (TSK+)"
    description = "Verses related to the current verse"
    siblings = (GO_TO_VERSE,)

    def trigger(self, state: PaletteState) -> None:
        verse = state.get("verse")
        if verse is None:
            self.verses = []
            self.title = self.name
            return
        self.verses = self.data.cross_references(verse)
        self.title = f"Cross References for {verse.title()}"


class GoToVerseCategory(BibleCategory):
    """
    Book, then chapter, then verse.

    The level comes from ``state.specificity`` while this category is active;
    anywhere else the category starts over at the book list.
    """

    key = GO_TO_VERSE
    name = "Go To Verse"
    description = "Pick a book, a chapter and a verse"

    def __init__(self, data: BibleData, secondary: Category | None = None):
        super().__init__(data, secondary)
        self.level = SPECIFICITY_BOOK
        self.refs: list[VerseRef] = []

    def trigger(self, state: PaletteState) -> None:
        verse: VerseRef | None = state.get("verse")
        level = state.get("specificity", SPECIFICITY_BOOK)
        if state.active_category != self.key or verse is None:
            level = SPECIFICITY_BOOK
        self.level = level

        if level == SPECIFICITY_CHAPTER:
            self.title = f"Go To Verse: {verse.book.title()}"
            self.refs = [
                VerseRef(verse.book, chapter, 1)
                for chapter in range(1, self.data.chapter_count(verse.book) + 1)
            ]
        elif level == SPECIFICITY_VERSE:
            self.title = f"Go To Verse: {verse.book.title()} {verse.chapter}"
            self.refs = [
                VerseRef(verse.book, verse.chapter, number)
                for number in range(1, self.data.verse_count(verse.book, verse.chapter) + 1)
            ]
        else:
            self.title = self.name
            self.refs = [VerseRef(book, 1, 1) for book in self.data.books()]

    def list(self, query: str) -> list[VerseRef]:
        if self.level == SPECIFICITY_CHAPTER:
            return self.match(query, self.refs, lambda ref: str(ref.chapter))
        if self.level == SPECIFICITY_VERSE:
            return self.match(query, self.refs, lambda ref: str(ref.verse), self.verse_text)
        return self.match(query, self.refs, lambda ref: ref.book)

    def describe(self, candidate: VerseRef) -> tuple[RenderInfo, StatePatch]:
        if self.level == SPECIFICITY_BOOK:
            info = RenderInfo(title=candidate.book.title(), detail=True)
            return info, self._drill_patch(candidate)
        if self.level == SPECIFICITY_CHAPTER:
            info = RenderInfo(title=f"{candidate.book.title()} {candidate.chapter}", detail=True)
            return info, self._drill_patch(candidate)
        return self.describe_verse(candidate)

    def invoke(self, candidate: VerseRef) -> InvokeResult:
        if self.level < SPECIFICITY_VERSE:
            return self._drill_patch(candidate)
        return self.choose_verse(candidate)

    def _drill_patch(self, candidate: VerseRef) -> dict[str, Any]:
        return {"active_category": self.key, "verse": candidate, "specificity": self.level + 1}


class BibleSearchCategory(BibleCategory):
    """Case-insensitive full-text search of the current translation."""

    key = BIBLE_SEARCH
    name = "Bible Search"
    description = "Search the text of the Bible"

    def __init__(self, data: BibleData, secondary: Category | None = None):
        super().__init__(data, secondary)
        self.max_results = 0

    def trigger(self, state: PaletteState) -> None:
        self.title = self.name
        self.max_results = state.max_results

    def list(self, query: str) -> list[VerseRef]:
        if not query:
            return []
        needle = query.lower()
        results = []
        for ref, text in self.data.iter_verses():
            if needle in text.lower():
                results.append(ref)
                if len(results) >= self.max_results:
                    break
        return results

    def describe(self, candidate: VerseRef) -> tuple[RenderInfo, StatePatch]:
        return self.describe_verse(candidate)

    def invoke(self, candidate: VerseRef) -> InvokeResult:
        return self.choose_verse(candidate)


class TopicsCategory(BibleCategory):
    """Topic names from openbible.info, or the verses of the chosen topic."""

    key = TOPICS
    name = "Topics (www.openbible.info)"
    description = "Browse verses by topic"

    def __init__(self, data: BibleData, secondary: Category | None = None):
        super().__init__(data, secondary)
        self.topic = ""
        self.entries: list[Any] = []

    def trigger(self, state: PaletteState) -> None:
        topic = state.get("topic", "") if state.active_category == self.key else ""
        self.topic = topic
        if topic:
            self.title = f"Topic: {topic.title()}"
            self.entries = self.data.topics.get(topic)
        else:
            self.title = self.name
            self.entries = self.data.topics.topic_names

    def list(self, query: str) -> list[Any]:
        if self.topic:
            return self.match_verses(query, self.entries)
        if not query:
            return []
        matches = self.match(query, self.entries, str)
        return matches or self.match_fuzzy(query, self.entries, str)

    def describe(self, candidate: Any) -> tuple[RenderInfo, StatePatch]:
        if isinstance(candidate, str):
            info = RenderInfo(title=candidate.title(), detail=True)
            return info, {"active_category": self.key, "topic": candidate}
        return self.describe_verse(candidate)

    def invoke(self, candidate: Any) -> InvokeResult:
        if isinstance(candidate, str):
            return {"active_category": self.key, "topic": candidate}
        return self.choose_verse(candidate)


class BookmarksCategory(BibleCategory):
    """The user's bookmark tags."""

    key = BOOKMARKS
    name = "Bookmarks"
    description = "Your saved bookmark tags"

    def __init__(self, data: BibleData, secondary: Category | None = None):
        super().__init__(data, secondary)
        self.tags: list[str] = []

    def trigger(self, state: PaletteState) -> None:
        self.title = self.name
        self.tags = self.data.bookmarks.topic_names

    def list(self, query: str) -> list[str]:
        matches = self.match(query, self.tags, str)
        return matches or self.match_fuzzy(query, self.tags, str)

    def describe(self, candidate: str) -> tuple[RenderInfo, StatePatch]:
        info = RenderInfo(title=candidate.title(), detail=True)
        return info, {"active_category": BOOKMARK_VERSES, "tag": candidate}

    def invoke(self, candidate: str) -> InvokeResult:
        return {"active_category": BOOKMARK_VERSES, "tag": candidate}


SCRIPTURE_CATEGORIES: tuple[type[BibleCategory], ...] = (
    VerseListCategory,
    CrossRefCategory,
    BookmarksCategory,
    GoToVerseCategory,
    TopicsCategory,
    BibleSearchCategory,
)


def register_bible_categories(controller) -> list[Category]:
    """Register every scripture category on ``controller`` in display order."""
    registered = [controller.add_category(category) for category in SCRIPTURE_CATEGORIES]
    logger.debug(f"Registered {len(registered)} scripture categories")
    return registered

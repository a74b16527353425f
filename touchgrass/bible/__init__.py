"""
Scripture domain for the command palette.

Provides:
- VerseRef: book/chapter/verse references and OSIS parsing
- BibleData / BibleTopics: translations, cross references, topics, bookmarks
- BiblePaletteState: palette state with verse, specificity, topic and tag
- Scripture categories and app commands, assembled by build_palette
"""

from .categories import (
    BIBLE_SEARCH,
    BOOKMARK_VERSES,
    BOOKMARKS,
    CROSS_REFERENCES,
    GO_TO_VERSE,
    TOPICS,
    BibleSearchCategory,
    BookmarksCategory,
    CrossRefCategory,
    GoToVerseCategory,
    TopicsCategory,
    VerseListCategory,
    register_bible_categories,
)
from .commands import register_app_commands
from .data import BibleData
from .palette import build_palette
from .state import BiblePaletteState
from .topics import BibleTopics
from .verse_ref import VerseRef

__all__ = [
    "BIBLE_SEARCH",
    "BOOKMARKS",
    "BOOKMARK_VERSES",
    "CROSS_REFERENCES",
    "GO_TO_VERSE",
    "TOPICS",
    "BibleData",
    "BiblePaletteState",
    "BibleSearchCategory",
    "BibleTopics",
    "BookmarksCategory",
    "CrossRefCategory",
    "GoToVerseCategory",
    "TopicsCategory",
    "VerseListCategory",
    "VerseRef",
    "build_palette",
    "register_app_commands",
    "register_bible_categories",
]

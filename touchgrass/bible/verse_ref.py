"""
Verse references and the book canon.

Book names follow the upper-case keys of the bible text files ("1 CORINTHIANS");
OSIS codes ("1Cor.13.4") are what cross-reference and topic files use.
"""

import re
from dataclasses import dataclass

from touchgrass.exceptions import InvalidReferenceError

BOOKS_OF_THE_BIBLE: tuple[str, ...] = (
    "GENESIS", "EXODUS", "LEVITICUS", "NUMBERS", "DEUTERONOMY", "JOSHUA", "JUDGES",
    "RUTH", "1 SAMUEL", "2 SAMUEL", "1 KINGS", "2 KINGS", "1 CHRONICLES",
    "2 CHRONICLES", "EZRA", "NEHEMIAH", "ESTHER", "JOB", "PSALMS", "PROVERBS",
    "ECCLESIASTES", "SONG OF SOLOMON", "ISAIAH", "JEREMIAH", "LAMENTATIONS",
    "EZEKIEL", "DANIEL", "HOSEA", "JOEL", "AMOS", "OBADIAH", "JONAH", "MICAH",
    "NAHUM", "HABAKKUK", "ZEPHANIAH", "HAGGAI", "ZECHARIAH", "MALACHI",
    "MATTHEW", "MARK", "LUKE", "JOHN", "ACTS", "ROMANS", "1 CORINTHIANS",
    "2 CORINTHIANS", "GALATIANS", "EPHESIANS", "PHILIPPIANS", "COLOSSIANS",
    "1 THESSALONIANS", "2 THESSALONIANS", "1 TIMOTHY", "2 TIMOTHY", "TITUS",
    "PHILEMON", "HEBREWS", "JAMES", "1 PETER", "2 PETER", "1 JOHN", "2 JOHN",
    "3 JOHN", "JUDE", "REVELATION",
)  # fmt: skip

BOOK_SHORT_NAMES: tuple[str, ...] = (
    "Gen", "Exod", "Lev", "Num", "Deut", "Josh", "Judg", "Ruth", "1Sam", "2Sam",
    "1Kgs", "2Kgs", "1Chr", "2Chr", "Ezra", "Neh", "Esth", "Job", "Ps", "Prov",
    "Eccl", "Song", "Isa", "Jer", "Lam", "Ezek", "Dan", "Hos", "Joel", "Amos",
    "Obad", "Jonah", "Mic", "Nah", "Hab", "Zeph", "Hag", "Zech", "Mal", "Matt",
    "Mark", "Luke", "John", "Acts", "Rom", "1Cor", "2Cor", "Gal", "Eph", "Phil",
    "Col", "1Thess", "2Thess", "1Tim", "2Tim", "Titus", "Phlm", "Heb", "Jas",
    "1Pet", "2Pet", "1John", "2John", "3John", "Jude", "Rev",
)  # fmt: skip

_BOOK_INDEX = {book: i for i, book in enumerate(BOOKS_OF_THE_BIBLE)}
_SHORT_INDEX = {short: i for i, short in enumerate(BOOK_SHORT_NAMES)}

# "John 3:16", "1 cor 13", "Ps 23:2"
_REFERENCE_RE = re.compile(r"^\s*(?P<book>.+?)\s+(?P<chapter>\d+)(?::(?P<verse>\d+))?\s*$")


def resolve_book(name: str) -> str:
    """Canonical book name for a full name, OSIS code or unique prefix."""
    upper = name.strip().upper()
    if upper in _BOOK_INDEX:
        return upper
    for short, index in _SHORT_INDEX.items():
        if short.upper() == upper.replace(" ", ""):
            return BOOKS_OF_THE_BIBLE[index]
    matches = [book for book in BOOKS_OF_THE_BIBLE if book.startswith(upper)]
    if len(matches) == 1:
        return matches[0]
    raise InvalidReferenceError("Unknown book", reference=name)


@dataclass(frozen=True, order=True)
class VerseRef:
    """A single verse: book, chapter and verse number."""

    book: str
    chapter: int
    verse: int

    def __str__(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"

    def title(self) -> str:
        """Display form: "1 Corinthians 13:4"."""
        return str(self).title()

    @property
    def book_index(self) -> int:
        return _BOOK_INDEX.get(self.book, -1)

    def to_osis(self) -> str:
        index = self.book_index
        code = BOOK_SHORT_NAMES[index] if index >= 0 else self.book
        return f"{code}.{self.chapter}.{self.verse}"

    def is_same(self, other: "VerseRef | None") -> bool:
        return other is not None and self == other

    @classmethod
    def from_osis(cls, osis: str) -> "VerseRef":
        """
        Parse an OSIS reference. For a range ("Rev.13.1-Rev.13.18") the start
        verse is returned; a missing verse means verse 1.

        Raises:
            InvalidReferenceError: unknown book code or malformed numbers
        """
        start = osis.split("-")[0]
        parts = start.split(".")
        code = parts[0]
        if code not in _SHORT_INDEX:
            raise InvalidReferenceError("Invalid book code", reference=osis)
        try:
            chapter = int(parts[1]) if len(parts) > 1 else 1
            verse = int(parts[2]) if len(parts) > 2 else 1
        except ValueError as e:
            raise InvalidReferenceError("Invalid chapter or verse", reference=osis) from e
        return cls(BOOKS_OF_THE_BIBLE[_SHORT_INDEX[code]], chapter, verse)

    @classmethod
    def parse(cls, text: str) -> "VerseRef":
        """
        Parse a human reference like "John 3:16" or "1 cor 13".

        Raises:
            InvalidReferenceError: if the text is not a reference
        """
        match = _REFERENCE_RE.match(text)
        if not match:
            raise InvalidReferenceError("Expected 'Book Chapter[:Verse]'", reference=text)
        book = resolve_book(match.group("book"))
        verse = match.group("verse")
        return cls(book, int(match.group("chapter")), int(verse) if verse else 1)


DEFAULT_VERSE = VerseRef("GENESIS", 1, 1)

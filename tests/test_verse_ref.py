"""Tests for verse references and book resolution."""

import pytest

from touchgrass.bible.verse_ref import (
    BOOK_SHORT_NAMES,
    BOOKS_OF_THE_BIBLE,
    DEFAULT_VERSE,
    VerseRef,
    resolve_book,
)
from touchgrass.exceptions import InvalidReferenceError


def test_canon_sizes():
    assert len(BOOKS_OF_THE_BIBLE) == 66
    assert len(BOOK_SHORT_NAMES) == 66


class TestResolveBook:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("genesis", "GENESIS"),
            ("Gen", "GENESIS"),
            ("1 cor", "1 CORINTHIANS"),
            ("1Cor", "1 CORINTHIANS"),
            ("Phil", "PHILIPPIANS"),
            ("Song", "SONG OF SOLOMON"),
            ("revel", "REVELATION"),
        ],
    )
    def test_resolves(self, name, expected):
        assert resolve_book(name) == expected

    @pytest.mark.parametrize("name", ["Ph", "Nowhere", ""])
    def test_ambiguous_or_unknown(self, name):
        with pytest.raises(InvalidReferenceError):
            resolve_book(name)


class TestVerseRef:
    def test_str_and_title(self):
        ref = VerseRef("1 CORINTHIANS", 13, 4)
        assert str(ref) == "1 CORINTHIANS 13:4"
        assert ref.title() == "1 Corinthians 13:4"

    def test_to_osis(self):
        assert VerseRef("PSALMS", 23, 2).to_osis() == "Ps.23.2"
        assert VerseRef("1 JOHN", 1, 1).to_osis() == "1John.1.1"

    def test_ordering_and_equality(self):
        assert VerseRef("GENESIS", 1, 2) < VerseRef("GENESIS", 2, 1)
        assert VerseRef("JOHN", 3, 16) == VerseRef("JOHN", 3, 16)
        assert VerseRef("JOHN", 3, 16).is_same(VerseRef("JOHN", 3, 16))
        assert not VerseRef("JOHN", 3, 16).is_same(None)

    def test_book_index(self):
        assert VerseRef("GENESIS", 1, 1).book_index == 0
        assert VerseRef("REVELATION", 1, 1).book_index == 65
        assert VerseRef("APOCRYPHA", 1, 1).book_index == -1

    def test_default_verse(self):
        assert DEFAULT_VERSE == VerseRef("GENESIS", 1, 1)


class TestFromOsis:
    def test_simple(self):
        assert VerseRef.from_osis("John.3.16") == VerseRef("JOHN", 3, 16)

    def test_range_uses_start(self):
        assert VerseRef.from_osis("Rev.13.1-Rev.13.18") == VerseRef("REVELATION", 13, 1)

    def test_missing_parts_default_to_one(self):
        assert VerseRef.from_osis("Gen.2") == VerseRef("GENESIS", 2, 1)
        assert VerseRef.from_osis("Jude") == VerseRef("JUDE", 1, 1)

    def test_round_trip_through_osis(self):
        ref = VerseRef("SONG OF SOLOMON", 2, 4)
        assert VerseRef.from_osis(ref.to_osis()) == ref

    @pytest.mark.parametrize("osis", ["Xyz.1.1", "Gen.a.1", "Gen.1.b"])
    def test_invalid(self, osis):
        with pytest.raises(InvalidReferenceError):
            VerseRef.from_osis(osis)


class TestParse:
    def test_book_chapter_verse(self):
        assert VerseRef.parse("John 3:16") == VerseRef("JOHN", 3, 16)

    def test_book_chapter(self):
        assert VerseRef.parse("1 cor 13") == VerseRef("1 CORINTHIANS", 13, 1)

    def test_short_code(self):
        assert VerseRef.parse("Ps 23:2") == VerseRef("PSALMS", 23, 2)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            VerseRef.parse("not a reference")

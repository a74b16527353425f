"""Shared pytest fixtures for touchgrass tests."""

from pathlib import Path

import pytest

from touchgrass.bible.data import BibleData
from touchgrass.bible.palette import build_palette
from touchgrass.bible.topics import BibleTopics
from touchgrass.config.settings import Settings

KJV_SAMPLE = {
    "GENESIS": [
        [],
        [
            "",
            "In the beginning God created the heaven and the earth.",
            "And the earth was without form, and void; and darkness was upon the face of the deep.",
            "And God said, Let there be light: and there was light.",
        ],
        ["", "Thus the heavens and the earth were finished, and all the host of them."],
    ],
    "JOHN": [
        [],
        [
            "",
            "In the beginning was the Word, and the Word was with God, and the Word was God.",
            "The same was in the beginning with God.",
            "All things were made by him; and without him was not any thing made that was made.",
        ],
    ],
}

CROSS_REFERENCES_SAMPLE = {
    "Gen.1.1": [["John.1.1", 50], ["John.1.3", 40], ["Nope.1.1", 1]],
    "John.1.1": [["Gen.1.1", 50]],
}

TOPICS_SAMPLE = {
    "creation": [["Gen.1.1", 20], ["John.1.3", 10]],
    "light": [["Gen.1.3", 12]],
    "word": [["John.1.1", 5]],
}

BOOKMARKS_SAMPLE = {
    "Start Up Verses": [["Gen.1.1", 0], ["John.1.1", 0]],
    "Favourites": [["John.1.3", 0]],
}


@pytest.fixture
def bible_data() -> BibleData:
    """Two books, a few cross references, three topics and two bookmark tags."""
    return BibleData(
        {"KJV": KJV_SAMPLE},
        CROSS_REFERENCES_SAMPLE,
        BibleTopics(TOPICS_SAMPLE),
        BibleTopics(BOOKMARKS_SAMPLE),
    )


@pytest.fixture
def settings(bible_data: BibleData) -> Settings:
    return Settings({"bookmarks": bible_data.bookmarks.to_json()})


@pytest.fixture
def palette(bible_data: BibleData, settings: Settings, tmp_path: Path):
    """Scripture palette over the sample data, exporting into tmp_path."""
    return build_palette(bible_data, settings, export_dir=tmp_path)

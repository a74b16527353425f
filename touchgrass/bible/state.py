"""Palette state with the reader's domain fields."""

from dataclasses import dataclass, field

from touchgrass.config.constants import DEFAULT_BOOKMARK_TAG
from touchgrass.exceptions import InvalidStateError
from touchgrass.palette.state import PaletteState

from .verse_ref import DEFAULT_VERSE, VerseRef

# Go To Verse levels
SPECIFICITY_BOOK = 0
SPECIFICITY_CHAPTER = 1
SPECIFICITY_VERSE = 2


@dataclass(frozen=True)
class BiblePaletteState(PaletteState):
    """Adds the focused verse, Go To Verse level, topic and bookmark tag."""

    verse: VerseRef = field(default=DEFAULT_VERSE)
    specificity: int = SPECIFICITY_BOOK
    topic: str = ""
    tag: str = DEFAULT_BOOKMARK_TAG

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.verse is None:
            object.__setattr__(self, "verse", DEFAULT_VERSE)
        if not self.tag:
            object.__setattr__(self, "tag", DEFAULT_BOOKMARK_TAG)
        if self.topic is None:
            object.__setattr__(self, "topic", "")
        if not SPECIFICITY_BOOK <= self.specificity <= SPECIFICITY_VERSE:
            raise InvalidStateError("specificity out of range", specificity=self.specificity)

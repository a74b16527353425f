"""
Candidate matching for palette categories.

Both filters take the query, the candidate sequence, and one or more
extractors ordered from the most exact field to the most lenient one
(e.g. a reference before the verse text). A candidate is emitted at most
once, credited to the first extractor that matches it.
"""

from collections.abc import Callable, Sequence
from typing import TypeVar

from rapidfuzz.distance import Levenshtein

from touchgrass.config.constants import FUZZY_THRESHOLD_RATIO

T = TypeVar("T")

Extractor = Callable[[T], str]


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings."""
    return Levenshtein.distance(a, b)


def _require_extractors(extractors: tuple) -> None:
    if not extractors:
        raise ValueError("At least one extractor is required")


def filter_candidates(query: str, candidates: Sequence[T], *extractors: Extractor) -> list[T]:
    """
    Substring filter across several fields.

    Args:
        query: Text typed by the user. Empty means no filtering.
        candidates: Items to filter, in display order
        extractors: Field accessors in priority order

    Returns:
        Matches grouped by the extractor that first matched them,
        each group in candidate order.
    """
    _require_extractors(extractors)
    if not query:
        return list(candidates)

    needle = query.lower()
    matched = [False] * len(candidates)
    results: list[T] = []

    for extract in extractors:
        for index, candidate in enumerate(candidates):
            if matched[index]:
                continue
            if needle in extract(candidate).lower():
                matched[index] = True
                results.append(candidate)

    return results


def filter_fuzzy(
    query: str,
    candidates: Sequence[T],
    *extractors: Extractor,
    ratio: float = FUZZY_THRESHOLD_RATIO,
) -> list[T]:
    """
    Edit-distance filter across several fields.

    A candidate is accepted by an extractor when the distance between the
    lowercased query and the lowercased field is below ``ratio * len(query)``.
    Within one extractor, accepted candidates are ordered by ascending
    distance (ties keep candidate order).
    """
    _require_extractors(extractors)
    if not query:
        return list(candidates)

    needle = query.lower()
    threshold = ratio * len(query)
    matched = [False] * len(candidates)
    results: list[T] = []

    for extract in extractors:
        accepted: list[tuple[int, int]] = []
        for index, candidate in enumerate(candidates):
            if matched[index]:
                continue
            distance = edit_distance(needle, extract(candidate).lower())
            if distance < threshold:
                matched[index] = True
                accepted.append((distance, index))
        accepted.sort()
        results.extend(candidates[index] for _, index in accepted)

    return results

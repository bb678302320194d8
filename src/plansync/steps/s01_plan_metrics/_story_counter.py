"""Module B: Habitable story count from level markers."""

from __future__ import annotations

from typing import Iterable, Sequence

from plansync.core.contracts import LevelMarker

# Level names containing any of these (case-insensitive substring) are not stories
STORY_EXCLUDE_KEYWORDS: tuple[str, ...] = ("roof", "foundation", "base", "plate")


def is_habitable_level(name: str, exclude_keywords: Sequence[str] = STORY_EXCLUDE_KEYWORDS) -> bool:
    lowered = name.lower()
    return not any(keyword.lower() in lowered for keyword in exclude_keywords)


def count_stories(
    levels: Iterable[LevelMarker],
    exclude_keywords: Sequence[str] = STORY_EXCLUDE_KEYWORDS,
) -> int:
    """Count levels whose names match none of the exclusion keywords."""
    return sum(1 for level in levels if is_habitable_level(level.name, exclude_keywords))

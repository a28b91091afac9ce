"""
Catalog Service - course browsing and learning roadmaps.

Filters mirror the catalog page: free-text search over title and
description, plus exact category / provider where ``All`` (or empty) means
no filter. Results are split into internal and external partitions.
"""

from __future__ import annotations

import copy

from luma.core.exceptions import NotFoundError
from luma.data.mock_data import CATEGORIES, COURSES, PROVIDERS, ROADMAP_TRACKS

ALL = "All"


def _matches(course: dict, term: str, category: str | None, provider: str | None) -> bool:
    if term and term not in course["title"].lower() and term not in course["description"].lower():
        return False
    if category and category != ALL and course["category"] != category:
        return False
    if provider and provider != ALL and course["provider"] != provider:
        return False
    return True


def search_courses(search: str | None = None, category: str | None = None, provider: str | None = None) -> dict:
    term = (search or "").strip().lower()
    matched = [copy.deepcopy(c) for c in COURSES if _matches(c, term, category, provider)]
    internal = [c for c in matched if not c["is_external"]]
    external = [c for c in matched if c["is_external"]]
    return {
        "items": matched,
        "internal": internal,
        "external": external,
        "counts": {"all": len(matched), "internal": len(internal), "external": len(external)},
        "filters": {"categories": list(CATEGORIES), "providers": list(PROVIDERS)},
    }


def get_course(course_id: str) -> dict:
    for course in COURSES:
        if course["id"] == str(course_id):
            return copy.deepcopy(course)
    raise NotFoundError(resource="Course", resource_id=course_id)


def get_roadmap(track_id: str) -> dict:
    track = ROADMAP_TRACKS.get(track_id)
    if track is None:
        raise NotFoundError(resource="RoadmapTrack", resource_id=track_id)
    return copy.deepcopy(track)


def list_roadmaps() -> list[dict]:
    return [
        {k: v for k, v in track.items() if k != "checkpoints"} | {"checkpoint_count": len(track["checkpoints"])}
        for track in ROADMAP_TRACKS.values()
    ]

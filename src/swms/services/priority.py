"""Complaint priority scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..config import settings
from ..models.domain import Bin, Coordinate
from .geospatial import haversine_m


@dataclass(slots=True)
class PriorityWeights:
    base_score: int = field(default_factory=lambda: settings.priority_base_score)
    keyword_bonus: int = field(default_factory=lambda: settings.priority_keyword_bonus)
    proximity_bonus: int = field(default_factory=lambda: settings.priority_proximity_bonus)
    proximity_radius_m: float = field(default_factory=lambda: settings.priority_proximity_radius_m)
    keywords: Sequence[str] = field(default_factory=lambda: settings.priority_keywords)


def mentions_sensitive_zone(description: Optional[str], keywords: Iterable[str]) -> bool:
    if not description:
        return False
    text = description.lower()
    return any(keyword.lower() in text for keyword in keywords)


def near_overflow_bin(location: Optional[Coordinate], overflow_bins: Iterable[Bin], radius_m: float) -> bool:
    if location is None:
        return False
    for candidate in overflow_bins:
        if candidate.status != "overflow":
            continue
        if haversine_m(location, candidate.location) <= radius_m:
            return True
    return False


def score_complaint(
    description: Optional[str],
    location: Optional[Coordinate],
    overflow_bins: Iterable[Bin] = (),
    weights: PriorityWeights | None = None,
) -> int:
    """Urgency score for a new complaint.

    Starts at the base score, adds the keyword bonus when the description names a
    sensitive zone, and adds the proximity bonus once when the location lies within
    the radius of any overflowing bin. A missing description or location just
    skips the corresponding bonus.
    """

    weights = weights or PriorityWeights()
    score = weights.base_score
    if mentions_sensitive_zone(description, weights.keywords):
        score += weights.keyword_bonus
    if near_overflow_bin(location, overflow_bins, weights.proximity_radius_m):
        score += weights.proximity_bonus
    return max(score, 0)

from src.swms.models.domain import Bin, Coordinate
from src.swms.services.priority import PriorityWeights, score_complaint


def _bin(bin_id: str, lat: float, lng: float, fill_level: int, status: str) -> Bin:
    return Bin(
        id=bin_id,
        name=f"Bin {bin_id}",
        location=Coordinate(lat=lat, lng=lng),
        fill_level=fill_level,
        status=status,
    )


SCHOOL_AREA = Coordinate(lat=12.9716, lng=77.5946)
# Roughly 110 m north of SCHOOL_AREA
NEARBY_OVERFLOW = _bin("B1", 12.9726, 77.5946, 97, "overflow")
FAR_OVERFLOW = _bin("B2", 13.0716, 77.5946, 99, "overflow")


def test_keyword_only_scores_three():
    score = score_complaint("Overflow near the school", SCHOOL_AREA, [FAR_OVERFLOW])

    assert score == 3


def test_keyword_and_nearby_overflow_bin_scores_six():
    score = score_complaint("Garbage piling up outside the hospital", SCHOOL_AREA, [NEARBY_OVERFLOW])

    assert score == 6


def test_proximity_bonus_applies_once():
    second_nearby = _bin("B3", 12.9720, 77.5950, 96, "overflow")

    score = score_complaint("Smelly street corner", SCHOOL_AREA, [NEARBY_OVERFLOW, second_nearby])

    assert score == 4


def test_keyword_match_is_case_insensitive():
    assert score_complaint("Trash behind the MOSQUE", None) == 3


def test_only_overflowing_bins_count_for_proximity():
    full_bin = _bin("B4", 12.9726, 77.5946, 85, "full")

    assert score_complaint("Dirty lane", SCHOOL_AREA, [full_bin]) == 1


def test_missing_description_and_location_fall_back_to_base_score():
    assert score_complaint(None, None, [NEARBY_OVERFLOW]) == 1


def test_score_is_monotonic_in_keywords_and_nearby_overflow():
    plain = score_complaint("Overflowing bin", SCHOOL_AREA, [])
    with_keyword = score_complaint("Overflowing bin by the market", SCHOOL_AREA, [])
    with_both = score_complaint("Overflowing bin by the market", SCHOOL_AREA, [NEARBY_OVERFLOW])

    assert plain <= with_keyword <= with_both


def test_weights_are_adjustable():
    weights = PriorityWeights(
        base_score=0,
        keyword_bonus=5,
        proximity_bonus=10,
        proximity_radius_m=50,
        keywords=("park",),
    )

    # NEARBY_OVERFLOW is ~110 m away: outside a 50 m radius
    assert score_complaint("Litter in the park", SCHOOL_AREA, [NEARBY_OVERFLOW], weights) == 5
    assert score_complaint("Near the school", SCHOOL_AREA, [NEARBY_OVERFLOW], weights) == 0

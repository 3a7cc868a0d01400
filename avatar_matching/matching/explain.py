"""
Human-readable presentation of match results.

Presentation layers use these helpers instead of re-implementing the tier
logic, so labels and colors always agree with the classifier.
"""

from typing import Dict, List, Optional

from ..catalog import get_attribute_label
from .schema import MatchQuality, MatchResult
from .scoring import DEFAULT_QUALITY_THRESHOLDS, QualityThresholds, classify_quality

NO_MATCH_EXPLANATION = "No matching features"

# Caps for explain_match
MAX_EXPLAINED_FEATURES = 3
MAX_PARTIAL_FEATURES = 2

QUALITY_LABELS: Dict[MatchQuality, str] = {
    MatchQuality.EXCELLENT: "Excellent",
    MatchQuality.GOOD: "Good",
    MatchQuality.FAIR: "Fair",
    MatchQuality.POOR: "Poor",
}

QUALITY_COLORS: Dict[MatchQuality, str] = {
    MatchQuality.EXCELLENT: "#34C759",
    MatchQuality.GOOD: "#FF6B47",
    MatchQuality.FAIR: "#FF9500",
    MatchQuality.POOR: "#8E8E93",
}


def join_features(features: List[str]) -> str:
    """
    Join feature labels into a sentence with English list grammar.

    Examples:
        ["A"] -> "A matches"
        ["A", "B"] -> "A and B match"
        ["A", "B", "C"] -> "A, B, and C match"
    """
    if not features:
        return NO_MATCH_EXPLANATION
    if len(features) == 1:
        return f"{features[0]} matches"
    if len(features) == 2:
        return f"{features[0]} and {features[1]} match"
    return f"{', '.join(features[:-1])}, and {features[-1]} match"


def explain_match(result: MatchResult) -> str:
    """
    Describe the strongest shared features of a match.

    Exact matches come first, then at most two partial matches labelled
    "similar ...", capped at three features in total.

    Args:
        result: Match result to explain

    Returns:
        Short sentence such as "skin tone, hair color, and similar hairstyle match"
    """
    breakdown = result.breakdown
    if not breakdown.matching_attributes and not breakdown.partial_match_attributes:
        return NO_MATCH_EXPLANATION

    features = [get_attribute_label(attr) for attr in breakdown.matching_attributes]
    features += [
        f"similar {get_attribute_label(attr)}"
        for attr in breakdown.partial_match_attributes[:MAX_PARTIAL_FEATURES]
    ]
    return join_features(features[:MAX_EXPLAINED_FEATURES])


def get_quality_label(quality: MatchQuality) -> str:
    return QUALITY_LABELS[MatchQuality(quality)]


def get_match_description(result: MatchResult) -> str:
    """Short description such as "87% match - Excellent"."""
    return f"{result.score}% match - {get_quality_label(result.quality)}"


def get_match_quality_color(quality: MatchQuality) -> str:
    """Display color (hex) for a quality tier."""
    return QUALITY_COLORS[MatchQuality(quality)]


def get_match_score_color(
    score: float,
    thresholds: Optional[QualityThresholds] = None
) -> str:
    """Display color (hex) for a raw score, using the tier thresholds."""
    return get_match_quality_color(classify_quality(score, thresholds or DEFAULT_QUALITY_THRESHOLDS))

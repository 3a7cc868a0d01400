"""
Avatar matching engine.

This module provides the single-pair pipeline (normalize, compare,
aggregate, compose) and the batch and presentation operations built on it.
"""

from .schema import (
    AVATAR_SCHEMA_VERSION,
    MatchQuality,
    MatchBreakdown,
    MatchResult,
    ScoredPost,
    StoredAvatar,
)
from .normalization import normalize, extract_config
from .comparator import GroupScore, compare_attribute, aggregate_group
from .scoring import (
    DEFAULT_MATCH_THRESHOLD,
    DEFAULT_MATCHING_CONFIG,
    DEFAULT_QUALITY_THRESHOLDS,
    MatchingConfig,
    QualityThresholds,
    classify_quality,
    compare_avatars,
    quick_match,
    resolve_config,
    round_score,
)
from .batch import (
    filter_matching_posts,
    get_posts_with_match_scores,
    get_match_summary,
    get_primary_match_count,
    is_valid_for_matching,
)
from .explain import (
    explain_match,
    get_quality_label,
    get_match_description,
    get_match_quality_color,
    get_match_score_color,
)

__all__ = [
    "AVATAR_SCHEMA_VERSION",
    "MatchQuality",
    "MatchBreakdown",
    "MatchResult",
    "ScoredPost",
    "StoredAvatar",
    "normalize",
    "extract_config",
    "GroupScore",
    "compare_attribute",
    "aggregate_group",
    "DEFAULT_MATCH_THRESHOLD",
    "DEFAULT_MATCHING_CONFIG",
    "DEFAULT_QUALITY_THRESHOLDS",
    "MatchingConfig",
    "QualityThresholds",
    "classify_quality",
    "compare_avatars",
    "quick_match",
    "resolve_config",
    "round_score",
    "filter_matching_posts",
    "get_posts_with_match_scores",
    "get_match_summary",
    "get_primary_match_count",
    "is_valid_for_matching",
    "explain_match",
    "get_quality_label",
    "get_match_description",
    "get_match_quality_color",
    "get_match_score_color",
]

"""
Score composition and classification for avatar matching.

This module combines the primary and secondary group scores into the final
match score, classifies it into a quality tier, and decides pass/fail.

Scoring Formula:
    score = round(primary_score * primary_weight + secondary_score * secondary_weight)

Two independent cut-offs are applied to the score:
- Quality tiers (excellent >= 85, good >= 70, fair >= 50, else poor)
- The match threshold (default 60)

They are deliberately not merged: a "fair" result between 50 and 60 fails
the default threshold but passes a lowered one.
"""

import json
import logging
import math
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Union

from ..catalog import PRIMARY_ATTRIBUTES, SECONDARY_ATTRIBUTES
from .comparator import aggregate_group
from .normalization import normalize
from .schema import MatchBreakdown, MatchQuality, MatchResult

logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 60

# Advisory bounds for caller-chosen thresholds
MIN_MATCH_THRESHOLD = 30
MAX_MATCH_THRESHOLD = 95


@dataclass(frozen=True)
class QualityThresholds:
    """
    Minimum scores for each quality tier.

    Attributes:
        excellent: Minimum score for "excellent"
        good: Minimum score for "good"
        fair: Minimum score for "fair" (anything lower is "poor")
    """
    excellent: float = 85
    good: float = 70
    fair: float = 50

    def validate(self) -> None:
        """Validate that tiers are ordered and within [0, 100]."""
        if not (0 <= self.fair < self.good < self.excellent <= 100):
            raise ValueError(
                f"Quality thresholds must satisfy 0 <= fair < good < excellent <= 100, "
                f"got fair={self.fair}, good={self.good}, excellent={self.excellent}"
            )


DEFAULT_QUALITY_THRESHOLDS = QualityThresholds()


@dataclass(frozen=True)
class MatchingConfig:
    """
    Configuration for avatar matching.

    Attributes:
        primary_weight: Weight of the primary group score
        secondary_weight: Weight of the secondary group score
        threshold: Default minimum score to count as a match (0-100)
        use_fuzzy_matching: Whether related values earn partial credit
        quality_thresholds: Tier boundaries used for classification

    The weights are expected to sum to 1.0 so the score stays in [0, 100];
    this is the caller's responsibility and is only warned about.
    """
    primary_weight: float = 0.6
    secondary_weight: float = 0.4
    threshold: float = DEFAULT_MATCH_THRESHOLD
    use_fuzzy_matching: bool = True
    quality_thresholds: QualityThresholds = field(default_factory=QualityThresholds)

    def validate(self) -> None:
        """Validate configuration values."""
        for name in ("primary_weight", "secondary_weight"):
            value = getattr(self, name)
            if not 0 <= value <= 1:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if not 0 <= self.threshold <= 100:
            raise ValueError(f"threshold must be in [0, 100], got {self.threshold}")
        self.quality_thresholds.validate()

        weight_sum = self.primary_weight + self.secondary_weight
        if abs(weight_sum - 1.0) > 0.01:
            logger.warning(
                f"Matching weights sum to {weight_sum:.3f}, scores may leave [0, 100]"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "MatchingConfig":
        """Create from dictionary, filling unspecified fields with defaults."""
        values = dict(d)
        thresholds = values.pop("quality_thresholds", None)
        config = cls(**values)
        if thresholds is not None:
            if not isinstance(thresholds, QualityThresholds):
                thresholds = QualityThresholds(**thresholds)
            config = replace(config, quality_thresholds=thresholds)
        config.validate()
        return config

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchingConfig":
        """Create from main config dictionary."""
        matching_config = config.get("matching", {})
        thresholds_config = matching_config.get("quality_thresholds", {})

        matching = cls(
            primary_weight=matching_config.get("primary_weight", 0.6),
            secondary_weight=matching_config.get("secondary_weight", 0.4),
            threshold=matching_config.get("threshold", DEFAULT_MATCH_THRESHOLD),
            use_fuzzy_matching=matching_config.get("use_fuzzy_matching", True),
            quality_thresholds=QualityThresholds(
                excellent=thresholds_config.get("excellent", 85),
                good=thresholds_config.get("good", 70),
                fair=thresholds_config.get("fair", 50),
            ),
        )
        matching.validate()
        return matching

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved matching config to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "MatchingConfig":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)


DEFAULT_MATCHING_CONFIG = MatchingConfig()

ConfigLike = Union[MatchingConfig, Mapping[str, Any], None]


def resolve_config(config: ConfigLike = None) -> MatchingConfig:
    """
    Turn an optional config or a mapping of overrides into a MatchingConfig.

    Overrides are applied on top of the defaults without validation, so a
    comparison never fails because of a caller-supplied weighting.
    """
    if config is None:
        return DEFAULT_MATCHING_CONFIG
    if isinstance(config, MatchingConfig):
        return config

    overrides = dict(config)
    thresholds = overrides.get("quality_thresholds")
    if isinstance(thresholds, Mapping):
        overrides["quality_thresholds"] = replace(DEFAULT_QUALITY_THRESHOLDS, **thresholds)
    return replace(DEFAULT_MATCHING_CONFIG, **overrides)


def round_score(value: float) -> int:
    """Round half up to the nearest integer."""
    return int(math.floor(value + 0.5))


def classify_quality(
    score: float,
    thresholds: QualityThresholds = DEFAULT_QUALITY_THRESHOLDS
) -> MatchQuality:
    """
    Map a score to its quality tier.

    Args:
        score: Final match score
        thresholds: Tier boundaries

    Returns:
        MatchQuality tier
    """
    if score >= thresholds.excellent:
        return MatchQuality.EXCELLENT
    if score >= thresholds.good:
        return MatchQuality.GOOD
    if score >= thresholds.fair:
        return MatchQuality.FAIR
    return MatchQuality.POOR


def compare_avatars(
    target: Any,
    candidate: Any,
    threshold: Optional[float] = None,
    config: ConfigLike = None
) -> MatchResult:
    """
    Compare two avatar descriptors and compute the match result.

    Args:
        target: Descriptor from the producer's post (partial, stored, or None)
        candidate: The consumer's own descriptor (partial, stored, or None)
        threshold: Minimum score to count as a match (default: config threshold, 60)
        config: MatchingConfig or mapping of overrides

    Returns:
        MatchResult with score, quality tier, match decision and breakdown
    """
    matching = resolve_config(config)
    if threshold is None:
        threshold = matching.threshold

    normalized_target = normalize(target)
    normalized_candidate = normalize(candidate)

    primary = aggregate_group(
        normalized_target, normalized_candidate, PRIMARY_ATTRIBUTES, matching.use_fuzzy_matching
    )
    secondary = aggregate_group(
        normalized_target, normalized_candidate, SECONDARY_ATTRIBUTES, matching.use_fuzzy_matching
    )

    final_score = round_score(
        primary.score * matching.primary_weight + secondary.score * matching.secondary_weight
    )

    logger.debug(
        f"Compared avatars: primary={primary.score:.1f}, secondary={secondary.score:.1f}, "
        f"score={final_score}"
    )

    return MatchResult(
        score=final_score,
        quality=classify_quality(final_score, matching.quality_thresholds),
        is_match=final_score >= threshold,
        breakdown=MatchBreakdown(
            primary_score=round_score(primary.score),
            secondary_score=round_score(secondary.score),
            matching_attributes=tuple(primary.matching + secondary.matching),
            partial_match_attributes=tuple(primary.partial + secondary.partial),
            non_matching_attributes=tuple(primary.non_matching + secondary.non_matching),
        ),
    )


def quick_match(
    target: Any,
    candidate: Any,
    threshold: Optional[float] = None,
    config: ConfigLike = None
) -> bool:
    """
    Decide match/no-match, skipping the secondary pass when it cannot matter.

    The primary group is scored first. The secondary score can only move the
    final score between the two extremes secondary=0 and secondary=100; if
    both extremes land on the same side of the threshold the answer is
    already known. The bounds come from the supplied weights, so the result
    always equals ``compare_avatars(...).is_match``.

    Args:
        target: Descriptor from the producer's post
        candidate: The consumer's own descriptor
        threshold: Minimum score to count as a match (default: config threshold, 60)
        config: MatchingConfig or mapping of overrides

    Returns:
        True if the pair matches
    """
    matching = resolve_config(config)
    if threshold is None:
        threshold = matching.threshold

    primary = aggregate_group(
        normalize(target), normalize(candidate), PRIMARY_ATTRIBUTES, matching.use_fuzzy_matching
    )

    weighted_primary = primary.score * matching.primary_weight
    secondary_span = 100 * matching.secondary_weight
    lowest = round_score(weighted_primary + min(0.0, secondary_span))
    highest = round_score(weighted_primary + max(0.0, secondary_span))

    if lowest >= threshold:
        return True
    if highest < threshold:
        return False

    return compare_avatars(target, candidate, threshold, matching).is_match

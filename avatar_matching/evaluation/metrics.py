"""
Behaviour evaluation for the matching engine.

There are no ground-truth compatibility labels, so evaluation documents how
the engine behaves on generated pairs:
1. Score and quality distribution
2. Sanity checks (monotonicity: more shared attributes should give higher scores)
3. Property checks (determinism, self-match, symmetry, bounds, quick-match
   agreement, threshold monotonicity, normalization idempotence)

This module DOES NOT claim that scores predict real-world recognition.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.stats import spearmanr

from ..catalog import ALL_ATTRIBUTES
from ..matching import (
    MatchQuality,
    MatchResult,
    compare_avatars,
    normalize,
    quick_match,
    resolve_config,
    round_score,
)
from ..matching.scoring import ConfigLike

logger = logging.getLogger(__name__)

DEFAULT_QUANTILES = (0.1, 0.25, 0.5, 0.75, 0.9)

# Stop collecting failing pair indices after this many
MAX_RECORDED_FAILURES = 10


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 40.0, "p50": 71.0, "p90": 96.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class MonotonicityCheck:
    """Results of monotonicity sanity check."""
    correlation_with_agreement: float
    is_monotonic: bool
    n_violations: int
    violation_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "correlation_with_agreement": float(self.correlation_with_agreement),
            "is_monotonic": bool(self.is_monotonic),
            "n_violations": int(self.n_violations),
            "violation_rate": float(self.violation_rate)
        }


@dataclass
class PropertyCheckResult:
    """Outcome of one behavioural property over a set of pairs."""
    name: str
    n_checked: int
    n_failures: int
    failing_pairs: List[int] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.n_failures == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "passed": self.passed,
            "n_checked": int(self.n_checked),
            "n_failures": int(self.n_failures),
            "failing_pairs": [int(i) for i in self.failing_pairs],
        }


@dataclass
class EvaluationReport:
    """
    Complete behaviour report for a matching configuration.

    Contains distribution statistics, sanity checks and property checks.
    """
    name: str
    n_pairs: int
    distribution_stats: ScoreDistributionStats
    quality_counts: Dict[str, int] = field(default_factory=dict)
    match_rates: Dict[str, float] = field(default_factory=dict)
    monotonicity_check: Optional[MonotonicityCheck] = None
    property_checks: List[PropertyCheckResult] = field(default_factory=list)
    config: Dict[str, Any] = field(default_factory=dict)

    @property
    def all_properties_hold(self) -> bool:
        return all(check.passed for check in self.property_checks)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "name": self.name,
            "n_pairs": int(self.n_pairs),
            "distribution_stats": self.distribution_stats.to_dict(),
            "quality_counts": {k: int(v) for k, v in self.quality_counts.items()},
            "match_rates": {k: float(v) for k, v in self.match_rates.items()},
            "property_checks": [check.to_dict() for check in self.property_checks],
            "config": self.config,
        }
        if self.monotonicity_check:
            result["monotonicity_check"] = self.monotonicity_check.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved evaluation report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Evaluation Report: {self.name} ({self.n_pairs} pairs)",
            "=" * 50,
            "",
            "Score Distribution:",
            f"  Mean: {self.distribution_stats.mean:.2f}",
            f"  Std:  {self.distribution_stats.std:.2f}",
            f"  Min:  {self.distribution_stats.min:.0f}",
            f"  Max:  {self.distribution_stats.max:.0f}",
        ]

        for q_name, q_value in self.distribution_stats.quantiles.items():
            lines.append(f"  {q_name}: {q_value:.1f}")

        if self.quality_counts:
            lines.extend(["", "Quality Tiers:"])
            for quality, count in self.quality_counts.items():
                lines.append(f"  {quality}: {count}")

        if self.match_rates:
            lines.extend(["", "Match Rate by Threshold:"])
            for threshold, rate in self.match_rates.items():
                lines.append(f"  >= {threshold}: {rate:.2%}")

        if self.monotonicity_check:
            lines.extend([
                "",
                "Monotonicity Check:",
                f"  Correlation with agreement: {self.monotonicity_check.correlation_with_agreement:.4f}",
                f"  Is monotonic: {self.monotonicity_check.is_monotonic}",
                f"  Violation rate: {self.monotonicity_check.violation_rate:.2%}",
            ])

        if self.property_checks:
            lines.extend(["", "Property Checks:"])
            for check in self.property_checks:
                status = "PASS" if check.passed else "FAIL"
                lines.append(f"  [{status}] {check.name} ({check.n_failures}/{check.n_checked} failures)")

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: Sequence[float],
    quantiles: Sequence[float] = DEFAULT_QUANTILES
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Match scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution statistics of an empty score list")

    quantile_dict = {
        f"p{int(q * 100)}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def exact_agreement(result: MatchResult) -> float:
    """Fraction of attributes that matched exactly."""
    return len(result.breakdown.matching_attributes) / len(ALL_ATTRIBUTES)


def sanity_check_monotonicity(
    scores: Sequence[float],
    agreement: Sequence[float],
    threshold: float = 0.5
) -> MonotonicityCheck:
    """
    Check that scores rise with the fraction of exactly matching attributes.

    Partial matches and the primary/secondary weights mean the relation is
    not strictly monotonic, so this is a rank-correlation sanity check.

    Args:
        scores: Final match scores
        agreement: Fraction of exactly matching attributes per pair
        threshold: Correlation threshold for "is_monotonic" flag

    Returns:
        MonotonicityCheck instance
    """
    scores = np.asarray(scores, dtype=float)
    agreement = np.asarray(agreement, dtype=float)

    if len(scores) < 2 or np.all(scores == scores[0]) or np.all(agreement == agreement[0]):
        logger.warning("Not enough variation for a monotonicity check")
        correlation = 0.0
    else:
        correlation, _ = spearmanr(agreement, scores)

    # Violation: agreement increases but score decreases (or vice versa)
    limit = min(len(scores), 1000)
    agreement_diff = agreement[:limit][None, :] - agreement[:limit][:, None]
    score_diff = scores[:limit][None, :] - scores[:limit][:, None]
    upper = np.triu_indices(limit, k=1)
    n_comparisons = len(upper[0])
    n_violations = int(np.sum((agreement_diff * score_diff)[upper] < 0))

    violation_rate = n_violations / n_comparisons if n_comparisons > 0 else 0.0

    return MonotonicityCheck(
        correlation_with_agreement=float(correlation),
        is_monotonic=bool(correlation >= threshold),
        n_violations=n_violations,
        violation_rate=violation_rate
    )


def _check_property(
    name: str,
    pairs: Sequence[Tuple[Any, Any]],
    holds: Callable[[Any, Any], bool]
) -> PropertyCheckResult:
    result = PropertyCheckResult(name=name, n_checked=len(pairs), n_failures=0)
    for idx, (target, candidate) in enumerate(pairs):
        if not holds(target, candidate):
            result.n_failures += 1
            if len(result.failing_pairs) < MAX_RECORDED_FAILURES:
                result.failing_pairs.append(idx)

    if result.passed:
        logger.debug(f"Property {name} held on {result.n_checked} pairs")
    else:
        logger.warning(f"Property {name} failed on {result.n_failures}/{result.n_checked} pairs")
    return result


def run_property_checks(
    pairs: Sequence[Tuple[Any, Any]],
    thresholds: Sequence[float] = (30, 45, 60, 75, 90),
    config: ConfigLike = None
) -> List[PropertyCheckResult]:
    """
    Check the engine's behavioural guarantees on a set of pairs.

    Args:
        pairs: (target, candidate) descriptor pairs
        thresholds: Thresholds used for the agreement and monotonicity checks
        config: MatchingConfig or mapping of overrides

    Returns:
        One PropertyCheckResult per property
    """
    matching = resolve_config(config)
    thresholds = sorted(thresholds)
    self_score = round_score(100 * matching.primary_weight + 100 * matching.secondary_weight)

    def deterministic(target, candidate):
        return compare_avatars(target, candidate, config=matching) == \
            compare_avatars(target, candidate, config=matching)

    def self_match(target, candidate):
        result = compare_avatars(target, target, config=matching)
        return (
            result.score == self_score
            and len(result.breakdown.matching_attributes) == len(ALL_ATTRIBUTES)
        )

    def symmetric(target, candidate):
        return compare_avatars(target, candidate, config=matching).score == \
            compare_avatars(candidate, target, config=matching).score

    def bounded(target, candidate):
        score = compare_avatars(target, candidate, config=matching).score
        return isinstance(score, int) and 0 <= score <= 100

    def quick_match_agrees(target, candidate):
        return all(
            quick_match(target, candidate, t, matching)
            == compare_avatars(target, candidate, t, matching).is_match
            for t in thresholds
        )

    def threshold_monotonic(target, candidate):
        decisions = [compare_avatars(target, candidate, t, matching).is_match for t in thresholds]
        # Once a higher threshold matches, every lower one must match too
        return all(not higher or lower for lower, higher in zip(decisions, decisions[1:]))

    def idempotent(target, candidate):
        return all(normalize(normalize(d)) == normalize(d) for d in (target, candidate))

    checks = [
        ("determinism", deterministic),
        ("self_match", self_match),
        ("symmetry", symmetric),
        ("bounds", bounded),
        ("quick_match_agreement", quick_match_agrees),
        ("threshold_monotonicity", threshold_monotonic),
        ("normalization_idempotence", idempotent),
    ]
    return [_check_property(name, pairs, holds) for name, holds in checks]


def create_evaluation_report(
    name: str,
    pairs: Sequence[Tuple[Any, Any]],
    thresholds: Sequence[float] = (30, 45, 60, 75, 90),
    config: ConfigLike = None,
    quantiles: Sequence[float] = DEFAULT_QUANTILES,
    include_property_checks: bool = True
) -> EvaluationReport:
    """
    Create a comprehensive behaviour report.

    Args:
        name: Name for the report
        pairs: (target, candidate) descriptor pairs
        thresholds: Thresholds for match rates and property checks
        config: MatchingConfig or mapping of overrides
        quantiles: Quantiles for distribution stats
        include_property_checks: Whether to run the property checks

    Returns:
        EvaluationReport instance
    """
    matching = resolve_config(config)
    logger.info(f"Evaluating {len(pairs)} pairs")

    results = [compare_avatars(target, candidate, config=matching) for target, candidate in pairs]
    frame = pd.DataFrame({
        "score": [r.score for r in results],
        "quality": [r.quality.value for r in results],
        "agreement": [exact_agreement(r) for r in results],
    })

    distribution_stats = compute_score_distribution_stats(frame["score"].to_numpy(), quantiles)

    counts = frame["quality"].value_counts()
    quality_counts = {q.value: int(counts.get(q.value, 0)) for q in MatchQuality}

    match_rates = {
        str(t): float((frame["score"] >= t).mean())
        for t in sorted(thresholds)
    }

    monotonicity_check = sanity_check_monotonicity(
        frame["score"].to_numpy(), frame["agreement"].to_numpy()
    )

    property_checks = []
    if include_property_checks:
        property_checks = run_property_checks(pairs, thresholds, matching)

    return EvaluationReport(
        name=name,
        n_pairs=len(pairs),
        distribution_stats=distribution_stats,
        quality_counts=quality_counts,
        match_rates=match_rates,
        monotonicity_check=monotonicity_check,
        property_checks=property_checks,
        config=matching.to_dict(),
    )

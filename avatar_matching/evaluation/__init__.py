"""Behaviour evaluation for the matching engine."""

from .metrics import (
    ScoreDistributionStats,
    MonotonicityCheck,
    PropertyCheckResult,
    EvaluationReport,
    compute_score_distribution_stats,
    exact_agreement,
    sanity_check_monotonicity,
    run_property_checks,
    create_evaluation_report,
)

__all__ = [
    "ScoreDistributionStats",
    "MonotonicityCheck",
    "PropertyCheckResult",
    "EvaluationReport",
    "compute_score_distribution_stats",
    "exact_agreement",
    "sanity_check_monotonicity",
    "run_property_checks",
    "create_evaluation_report",
]

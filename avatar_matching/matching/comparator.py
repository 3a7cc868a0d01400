"""
Attribute comparison and group aggregation.

Each attribute pair is scored on a three-level scale rather than a
continuous distance, which keeps every score explainable ("why did we
match?") without per-attribute distance tuning:

- Exact (case-insensitive) match: 1.0
- Related values (same similarity group, fuzzy matching on): 0.7
- Anything else: 0.0

A group score is the mean attribute score of a set of attributes,
expressed as a percentage.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence

from ..catalog import PARTIAL_MATCH_SCORE, are_related, attribute_name

logger = logging.getLogger(__name__)

EXACT_MATCH_SCORE = 1.0
NO_MATCH_SCORE = 0.0


@dataclass
class GroupScore:
    """
    Aggregated comparison of one attribute set.

    Attributes:
        score: Mean attribute score as a percentage (0-100, unrounded)
        matching: Attributes scoring 1.0
        partial: Attributes scoring strictly between 0 and 1
        non_matching: Attributes scoring 0
    """
    score: float = 0.0
    matching: List[str] = field(default_factory=list)
    partial: List[str] = field(default_factory=list)
    non_matching: List[str] = field(default_factory=list)


def compare_attribute(
    attribute: Any,
    target_value: Any,
    candidate_value: Any,
    use_fuzzy: bool = True
) -> float:
    """
    Score one attribute pair.

    Args:
        attribute: Attribute name or AvatarAttribute member
        target_value: Value from the producer's description
        candidate_value: Value from the consumer's own avatar
        use_fuzzy: Whether related values earn partial credit

    Returns:
        1.0 for an exact match, 0.7 for related values, otherwise 0.0
    """
    if str(target_value).lower() == str(candidate_value).lower():
        return EXACT_MATCH_SCORE

    if use_fuzzy and are_related(attribute, target_value, candidate_value):
        return PARTIAL_MATCH_SCORE

    return NO_MATCH_SCORE


def aggregate_group(
    target: Mapping[str, Any],
    candidate: Mapping[str, Any],
    attributes: Sequence[Any],
    use_fuzzy: bool = True
) -> GroupScore:
    """
    Compare a set of attributes and bucket each one.

    Both descriptors are expected to be normalized. Bucket lists keep the
    iteration order of ``attributes``.

    Args:
        target: Normalized target descriptor
        candidate: Normalized candidate descriptor
        attributes: Attribute set to score
        use_fuzzy: Whether related values earn partial credit

    Returns:
        GroupScore with the percentage and the three buckets
    """
    result = GroupScore()
    if not attributes:
        return result

    total = 0.0
    for attr in attributes:
        name = attribute_name(attr)
        attr_score = compare_attribute(name, target.get(name), candidate.get(name), use_fuzzy)

        if attr_score >= EXACT_MATCH_SCORE:
            result.matching.append(name)
        elif attr_score > NO_MATCH_SCORE:
            result.partial.append(name)
        else:
            result.non_matching.append(name)

        total += attr_score

    result.score = (total / len(attributes)) * 100
    return result

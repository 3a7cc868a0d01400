"""
Batch matching of posts against one consumer descriptor.

Posts are generic records: any mapping or object exposing a target
descriptor under ``avatar_key`` (default "target_avatar"). Nothing else
about a post is read. A post without a descriptor is compared as the
all-default avatar rather than rejected, so one malformed record cannot
break the ranking of a whole collection.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, TypeVar

from ..catalog import ALL_ATTRIBUTES, PRIMARY_ATTRIBUTES, attribute_name, get_attribute_similarity
from .normalization import _is_missing, extract_config, normalize
from .schema import ScoredPost
from .scoring import ConfigLike, compare_avatars, round_score

logger = logging.getLogger(__name__)

DEFAULT_AVATAR_KEY = "target_avatar"

# Similarity needed for an attribute to count in match summaries
SUMMARY_SIMILARITY_CUTOFF = 0.5

PostT = TypeVar("PostT")


def get_target_avatar(post: Any, avatar_key: str = DEFAULT_AVATAR_KEY) -> Any:
    """Read the target descriptor from a mapping or object post."""
    if isinstance(post, Mapping):
        return post.get(avatar_key)
    return getattr(post, avatar_key, None)


def get_posts_with_match_scores(
    candidate: Any,
    posts: Optional[Iterable[PostT]],
    config: ConfigLike = None,
    avatar_key: str = DEFAULT_AVATAR_KEY
) -> List[ScoredPost]:
    """
    Score every post against the candidate descriptor.

    Args:
        candidate: The consumer's own descriptor
        posts: Posts carrying an optional target descriptor
        config: MatchingConfig or mapping of overrides
        avatar_key: Key/attribute holding each post's target descriptor

    Returns:
        ScoredPost list sorted by descending score; ties keep input order
    """
    if not posts:
        return []

    scored = [
        ScoredPost(post, compare_avatars(get_target_avatar(post, avatar_key), candidate, config=config))
        for post in posts
    ]
    # sorted() is stable, so tied posts keep their input order
    scored = sorted(scored, key=lambda item: -item.match.score)

    logger.debug(f"Scored {len(scored)} posts")
    return scored


def filter_matching_posts(
    candidate: Any,
    posts: Optional[Iterable[PostT]],
    threshold: Optional[float] = None,
    config: ConfigLike = None,
    avatar_key: str = DEFAULT_AVATAR_KEY
) -> List[PostT]:
    """
    Keep only posts whose target descriptor matches the candidate.

    Args:
        candidate: The consumer's own descriptor
        posts: Posts carrying an optional target descriptor
        threshold: Minimum score to count as a match (default: config threshold, 60)
        config: MatchingConfig or mapping of overrides
        avatar_key: Key/attribute holding each post's target descriptor

    Returns:
        Matching posts sorted by descending score; ties keep input order
    """
    if not posts:
        return []

    scored = [
        (post, compare_avatars(get_target_avatar(post, avatar_key), candidate, threshold, config))
        for post in posts
    ]
    matches = [(post, result) for post, result in scored if result.is_match]
    matches.sort(key=lambda item: -item[1].score)

    logger.debug(f"{len(matches)} of {len(scored)} posts matched")
    return [post for post, _ in matches]


def _count_similar(target: Dict[str, Any], candidate: Dict[str, Any], attributes: Iterable[str]) -> int:
    return sum(
        1 for attr in attributes
        if get_attribute_similarity(attr, target[attr], candidate[attr]) >= SUMMARY_SIMILARITY_CUTOFF
    )


def get_match_summary(target: Any, candidate: Any) -> Dict[str, int]:
    """
    Count attributes that match exactly or through a similarity group.

    Useful for copy such as "14 of 19 features match (74%)".

    Returns:
        Dictionary with match_count, total and percentage
    """
    normalized_target = normalize(target)
    normalized_candidate = normalize(candidate)
    total = len(ALL_ATTRIBUTES)
    match_count = _count_similar(normalized_target, normalized_candidate, ALL_ATTRIBUTES)

    return {
        "match_count": match_count,
        "total": total,
        "percentage": round_score(match_count / total * 100),
    }


def get_primary_match_count(target: Any, candidate: Any) -> Dict[str, int]:
    """Count primary attributes that match exactly or through a similarity group."""
    normalized_target = normalize(target)
    normalized_candidate = normalize(candidate)

    return {
        "match_count": _count_similar(normalized_target, normalized_candidate, PRIMARY_ATTRIBUTES),
        "total": len(PRIMARY_ATTRIBUTES),
    }


def is_valid_for_matching(avatar: Any) -> bool:
    """
    Check that a descriptor carries enough data to be worth matching.

    A descriptor qualifies when it exists and defines every primary attribute
    itself (before defaults are applied).
    """
    if avatar is None:
        return False

    supplied = {attribute_name(k): v for k, v in extract_config(avatar).items()}
    return all(not _is_missing(supplied.get(attr)) for attr in PRIMARY_ATTRIBUTES)

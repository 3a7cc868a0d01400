"""
Similarity groups for fuzzy attribute matching.

Two values in the same group of the same attribute are "related": a producer
who saw "darkBrown" hair and a consumer who picked "black" should get
partial, not zero, credit. Groups are always scoped to one attribute, and a
value may sit in several groups of that attribute (e.g. bodyShape "average").
"""

import logging
from typing import Any, Dict, FrozenSet, List, Tuple

from .attributes import attribute_name

logger = logging.getLogger(__name__)

# Score for two related (same group) but not identical values
PARTIAL_MATCH_SCORE = 0.7

_HAIR_COLOR_GROUPS = [
    ["black", "darkBrown"],
    ["brown", "lightBrown"],
    ["auburn", "red"],
    ["blonde", "strawberry"],
    ["platinum", "white"],
    ["gray", "white"],
]

SIMILARITY_GROUPS: Dict[str, List[List[str]]] = {
    "skinTone": [
        ["fair1", "fair2"],
        ["light1", "light2"],
        ["medium1", "medium2"],
        ["olive1", "olive2"],
        ["brown1", "brown2"],
        ["dark1", "dark2"],
    ],
    "hairColor": _HAIR_COLOR_GROUPS,
    # Same palette as hairColor
    "facialHairColor": _HAIR_COLOR_GROUPS,
    "hairStyle": [
        ["bald", "shaved", "buzzCut"],
        ["crew", "fade", "undercut"],
        ["slickBack", "sidePart", "pompadour"],
        ["longStraight", "longWavy"],
        ["afro", "afroSmall", "coils"],
        ["ponytail", "bun"],
        ["bobShort", "bobLong", "bobLayered", "pixie"],
        ["hijab", "turban", "headwrap"],
    ],
    "facialHair": [
        ["none"],
        ["stubble", "soulPatch"],
        ["goatee", "vandyke"],
        ["shortBeard", "mediumBeard", "longBeard", "fullBeard"],
        ["mustache", "handlebar"],
    ],
    "bodyShape": [
        ["slim", "average"],
        ["average", "athletic"],
        ["athletic", "muscular"],
        ["average", "plus"],
    ],
    "glasses": [
        ["none"],
        ["reading", "round", "square", "cat"],
        ["aviator", "aviatorSun"],
        ["sunglasses", "aviatorSun", "sport"],
    ],
}

# Lower-cased lookup form, built once
_GROUP_INDEX: Dict[str, Tuple[FrozenSet[str], ...]] = {
    attr: tuple(frozenset(v.lower() for v in group) for group in groups)
    for attr, groups in SIMILARITY_GROUPS.items()
}


def has_similarity_table(attr: Any) -> bool:
    """Whether fuzzy matching is defined for this attribute."""
    return attribute_name(attr) in _GROUP_INDEX


def are_related(attr: Any, value_a: Any, value_b: Any) -> bool:
    """
    Check whether two values share a similarity group of one attribute.

    Membership is case-insensitive. Attributes without a table never
    have related values.

    Args:
        attr: Attribute name or AvatarAttribute member
        value_a: First value
        value_b: Second value

    Returns:
        True if both values appear together in at least one group
    """
    groups = _GROUP_INDEX.get(attribute_name(attr))
    if not groups:
        return False

    a = str(value_a).lower()
    b = str(value_b).lower()
    return any(a in group and b in group for group in groups)


def get_attribute_similarity(attr: Any, value_a: Any, value_b: Any) -> float:
    """Similarity of two values: 1.0 identical, 0.7 related, 0.0 otherwise."""
    if str(value_a).lower() == str(value_b).lower():
        return 1.0
    if are_related(attr, value_a, value_b):
        return PARTIAL_MATCH_SCORE
    return 0.0

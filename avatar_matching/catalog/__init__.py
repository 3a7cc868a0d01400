"""Attribute catalog and similarity tables for avatar descriptors."""

from .attributes import (
    AvatarAttribute,
    AttributeCategory,
    ALL_ATTRIBUTES,
    ATTRIBUTE_VALUES,
    ATTRIBUTE_LABELS,
    DEFAULT_AVATAR_CONFIG,
    PRIMARY_ATTRIBUTES,
    SECONDARY_ATTRIBUTES,
    attribute_name,
    primary_attributes,
    secondary_attributes,
    default_value,
    attribute_category,
    is_valid_attribute_value,
    validate_avatar_config,
    get_attribute_label,
    format_value_label,
    validate_catalog,
)
from .similarity import (
    SIMILARITY_GROUPS,
    PARTIAL_MATCH_SCORE,
    has_similarity_table,
    are_related,
    get_attribute_similarity,
)

__all__ = [
    "AvatarAttribute",
    "AttributeCategory",
    "ALL_ATTRIBUTES",
    "ATTRIBUTE_VALUES",
    "ATTRIBUTE_LABELS",
    "DEFAULT_AVATAR_CONFIG",
    "PRIMARY_ATTRIBUTES",
    "SECONDARY_ATTRIBUTES",
    "attribute_name",
    "primary_attributes",
    "secondary_attributes",
    "default_value",
    "attribute_category",
    "is_valid_attribute_value",
    "validate_avatar_config",
    "get_attribute_label",
    "format_value_label",
    "validate_catalog",
    "SIMILARITY_GROUPS",
    "PARTIAL_MATCH_SCORE",
    "has_similarity_table",
    "are_related",
    "get_attribute_similarity",
]

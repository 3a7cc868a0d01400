"""
Attribute domain catalog for avatar descriptors.

This module is the single source of truth for:
- The closed set of avatar attribute names
- The legal values of each attribute
- The default descriptor used to fill gaps in partial input
- The primary/secondary partition used by the matching weights

All tables are flat dictionaries keyed by attribute name. Attribute
behaviour (default, category, similarity table) is always a lookup,
never a per-attribute class.
"""

import logging
import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple

logger = logging.getLogger(__name__)


class AvatarAttribute(str, Enum):
    """Avatar attribute names (values are the wire names)."""
    SKIN_TONE = "skinTone"
    HAIR_COLOR = "hairColor"
    HAIR_STYLE = "hairStyle"
    FACIAL_HAIR = "facialHair"
    FACIAL_HAIR_COLOR = "facialHairColor"
    FACE_SHAPE = "faceShape"
    EYE_SHAPE = "eyeShape"
    EYE_COLOR = "eyeColor"
    EYEBROW_STYLE = "eyebrowStyle"
    NOSE_SHAPE = "noseShape"
    MOUTH_EXPRESSION = "mouthExpression"
    BODY_SHAPE = "bodyShape"
    HEIGHT_CATEGORY = "heightCategory"
    TOP_TYPE = "topType"
    TOP_COLOR = "topColor"
    BOTTOM_TYPE = "bottomType"
    BOTTOM_COLOR = "bottomColor"
    GLASSES = "glasses"
    HEADWEAR = "headwear"


class AttributeCategory(str, Enum):
    """Discriminative weight class of an attribute."""
    PRIMARY = "primary"      # Identity defining: skin, hair, face, eyes, body
    SECONDARY = "secondary"  # Clothing, accessories, expression


ALL_ATTRIBUTES: Tuple[str, ...] = tuple(attr.value for attr in AvatarAttribute)

# =============================================================================
# VALUE ENUMERATIONS
# =============================================================================

SKIN_TONES = (
    "fair1", "fair2", "light1", "light2", "medium1", "medium2",
    "olive1", "olive2", "brown1", "brown2", "dark1", "dark2",
)

HAIR_COLORS = (
    "black", "darkBrown", "brown", "lightBrown", "auburn", "red", "strawberry",
    "blonde", "platinum", "gray", "white", "blue", "purple", "pink", "green",
)

HAIR_STYLES = (
    # Bald/shaved
    "bald", "shaved", "buzzCut",
    # Short
    "crew", "fade", "undercut", "spiky", "textured", "caesar",
    # Medium
    "slickBack", "sidePart", "quiff", "pompadour", "messyMedium", "curtains",
    # Long
    "longStraight", "longWavy", "longCurly", "ponytail", "bun", "braids", "halfUp",
    # Textured/natural
    "afro", "afroSmall", "coils", "locs", "twists", "cornrows",
    # Bobs
    "bobShort", "bobLong", "bobLayered", "pixie",
    # Head coverings
    "hijab", "turban", "headwrap", "durag",
    # Bangs
    "straightBangs", "sideBangs", "curlyBangs",
)

FACIAL_HAIR_TYPES = (
    "none", "stubble", "goatee", "vandyke", "shortBeard", "mediumBeard",
    "longBeard", "fullBeard", "mustache", "handlebar", "soulPatch", "chinStrap",
)

FACE_SHAPES = ("oval", "round", "square", "heart", "oblong", "diamond")

EYE_SHAPES = (
    "almond", "round", "monolid", "hooded", "downturned", "upturned", "wide", "close",
)

EYE_COLORS = (
    "brown", "hazel", "amber", "green", "blue", "gray", "lightBlue", "darkBrown", "violet",
)

EYEBROW_STYLES = (
    "natural", "thick", "thin", "arched", "straight", "rounded", "angledUp", "angledDown",
)

NOSE_SHAPES = (
    "straight", "roman", "button", "snub", "wide", "narrow", "hooked", "flat",
)

MOUTH_TYPES = (
    "neutral", "smile", "smileOpen", "smirk", "serious", "slight", "pursed",
    "openMouth", "frown", "thinking",
)

BODY_SHAPES = ("slim", "average", "athletic", "plus", "muscular")

HEIGHT_CATEGORIES = ("short", "average", "tall")

CLOTHING_TOPS = (
    "tshirt", "tshirtVneck", "polo", "buttonUp", "blouse", "sweater", "hoodie",
    "jacket", "blazer", "tank", "crop", "turtleneck", "cardigan", "dress", "overall",
)

CLOTHING_BOTTOMS = (
    "jeans", "pants", "shorts", "skirt", "skirtLong", "leggings", "sweatpants", "slacks",
)

CLOTHING_COLORS = (
    "black", "white", "gray", "navy", "blue", "lightBlue", "red", "burgundy",
    "pink", "purple", "green", "olive", "brown", "tan", "beige", "orange",
    "yellow", "teal", "coral", "cream",
)

GLASSES_TYPES = (
    "none", "reading", "round", "square", "aviator", "cat", "sunglasses",
    "aviatorSun", "sport",
)

HEADWEAR_TYPES = (
    "none", "cap", "beanie", "fedora", "bucket", "snapback", "visor",
    "bandana", "headband", "beret",
)

ATTRIBUTE_VALUES: Dict[str, Tuple[str, ...]] = {
    AvatarAttribute.SKIN_TONE.value: SKIN_TONES,
    AvatarAttribute.HAIR_COLOR.value: HAIR_COLORS,
    AvatarAttribute.HAIR_STYLE.value: HAIR_STYLES,
    AvatarAttribute.FACIAL_HAIR.value: FACIAL_HAIR_TYPES,
    AvatarAttribute.FACIAL_HAIR_COLOR.value: HAIR_COLORS,
    AvatarAttribute.FACE_SHAPE.value: FACE_SHAPES,
    AvatarAttribute.EYE_SHAPE.value: EYE_SHAPES,
    AvatarAttribute.EYE_COLOR.value: EYE_COLORS,
    AvatarAttribute.EYEBROW_STYLE.value: EYEBROW_STYLES,
    AvatarAttribute.NOSE_SHAPE.value: NOSE_SHAPES,
    AvatarAttribute.MOUTH_EXPRESSION.value: MOUTH_TYPES,
    AvatarAttribute.BODY_SHAPE.value: BODY_SHAPES,
    AvatarAttribute.HEIGHT_CATEGORY.value: HEIGHT_CATEGORIES,
    AvatarAttribute.TOP_TYPE.value: CLOTHING_TOPS,
    AvatarAttribute.TOP_COLOR.value: CLOTHING_COLORS,
    AvatarAttribute.BOTTOM_TYPE.value: CLOTHING_BOTTOMS,
    AvatarAttribute.BOTTOM_COLOR.value: CLOTHING_COLORS,
    AvatarAttribute.GLASSES.value: GLASSES_TYPES,
    AvatarAttribute.HEADWEAR.value: HEADWEAR_TYPES,
}

# =============================================================================
# DEFAULT DESCRIPTOR
# =============================================================================

# A neutral, average-looking avatar
DEFAULT_AVATAR_CONFIG: Dict[str, str] = {
    # Face
    "skinTone": "medium1",
    "faceShape": "oval",
    # Hair
    "hairStyle": "sidePart",
    "hairColor": "brown",
    "facialHair": "none",
    "facialHairColor": "brown",
    # Eyes
    "eyeShape": "almond",
    "eyeColor": "brown",
    "eyebrowStyle": "natural",
    # Features
    "noseShape": "straight",
    "mouthExpression": "neutral",
    # Body
    "bodyShape": "average",
    "heightCategory": "average",
    # Outfit
    "topType": "tshirt",
    "topColor": "blue",
    "bottomType": "jeans",
    "bottomColor": "navy",
    # Accessories
    "glasses": "none",
    "headwear": "none",
}

# =============================================================================
# PRIMARY / SECONDARY PARTITION
# =============================================================================

PRIMARY_ATTRIBUTES: Tuple[str, ...] = (
    "skinTone",
    "hairColor",
    "hairStyle",
    "facialHair",
    "facialHairColor",
    "faceShape",
    "eyeShape",
    "eyeColor",
    "bodyShape",
)

SECONDARY_ATTRIBUTES: Tuple[str, ...] = (
    "eyebrowStyle",
    "noseShape",
    "mouthExpression",
    "heightCategory",
    "topType",
    "topColor",
    "bottomType",
    "bottomColor",
    "glasses",
    "headwear",
)

ATTRIBUTE_CATEGORIES: Dict[str, AttributeCategory] = {
    **{attr: AttributeCategory.PRIMARY for attr in PRIMARY_ATTRIBUTES},
    **{attr: AttributeCategory.SECONDARY for attr in SECONDARY_ATTRIBUTES},
}

ATTRIBUTE_LABELS: Dict[str, str] = {
    "skinTone": "skin tone",
    "hairColor": "hair color",
    "hairStyle": "hairstyle",
    "facialHair": "facial hair",
    "facialHairColor": "facial hair color",
    "faceShape": "face shape",
    "eyeShape": "eye shape",
    "eyeColor": "eye color",
    "eyebrowStyle": "eyebrow style",
    "noseShape": "nose shape",
    "mouthExpression": "expression",
    "bodyShape": "body type",
    "heightCategory": "height",
    "topType": "top style",
    "topColor": "top color",
    "bottomType": "bottom style",
    "bottomColor": "bottom color",
    "glasses": "glasses",
    "headwear": "headwear",
}


def attribute_name(attr: Any) -> str:
    """Return the plain string name for an attribute (enum member or str)."""
    if isinstance(attr, AvatarAttribute):
        return attr.value
    return str(attr)


def primary_attributes() -> Tuple[str, ...]:
    """Primary (identity defining) attributes, in scoring order."""
    return PRIMARY_ATTRIBUTES


def secondary_attributes() -> Tuple[str, ...]:
    """Secondary (clothing, accessories, expression) attributes, in scoring order."""
    return SECONDARY_ATTRIBUTES


def default_value(attr: Any) -> str:
    """
    Get the catalog default value for an attribute.

    Args:
        attr: Attribute name or AvatarAttribute member

    Returns:
        Default value token

    Raises:
        KeyError: If the attribute is not in the catalog
    """
    return DEFAULT_AVATAR_CONFIG[attribute_name(attr)]


def attribute_category(attr: Any) -> AttributeCategory:
    """Get the primary/secondary category of an attribute."""
    return ATTRIBUTE_CATEGORIES[attribute_name(attr)]


def is_valid_attribute_value(attr: Any, value: Any) -> bool:
    """Check that a value is a legal token for the given attribute."""
    if not isinstance(value, str):
        return False
    return value in ATTRIBUTE_VALUES.get(attribute_name(attr), ())


def validate_avatar_config(config: Mapping[str, Any]) -> List[str]:
    """
    Validate a complete avatar descriptor against the catalog.

    Normalization does not validate caller values; this is the opt-in check
    for collaborators that want to reject malformed descriptors up front.

    Args:
        config: Attribute -> value mapping

    Returns:
        List of issues (empty if valid)
    """
    issues = []
    keys = {attribute_name(k) for k in config.keys()}

    for attr in ALL_ATTRIBUTES:
        if attr not in keys:
            issues.append(f"Missing attribute: {attr}")

    for key, value in config.items():
        name = attribute_name(key)
        if name not in ATTRIBUTE_VALUES:
            issues.append(f"Unknown attribute: {name}")
        elif not is_valid_attribute_value(name, value):
            issues.append(f"Invalid value for {name}: {value!r}")

    return issues


def get_attribute_label(attr: Any) -> str:
    """Human-readable attribute name, e.g. "hair color"."""
    name = attribute_name(attr)
    return ATTRIBUTE_LABELS.get(name, format_value_label(name).lower())


def format_value_label(value: str) -> str:
    """
    Format a camelCase value token as a Title Case label.

    Examples: "darkBrown" -> "Dark Brown", "fair1" -> "Fair 1"
    """
    with_spaces = re.sub(r"([0-9]+)", r" \1", value)
    with_spaces = re.sub(r"([A-Z])", r" \1", with_spaces)
    with_spaces = with_spaces.strip()
    return with_spaces[:1].upper() + with_spaces[1:]


def validate_catalog() -> List[str]:
    """
    Check the catalog tables for internal consistency.

    Every attribute needs a legal default value and exactly one category,
    and the two category sets must be disjoint and cover all attributes.

    Returns:
        List of issues (empty if consistent)
    """
    issues = []
    all_attrs = set(ALL_ATTRIBUTES)
    primary = set(PRIMARY_ATTRIBUTES)
    secondary = set(SECONDARY_ATTRIBUTES)

    for attr in ALL_ATTRIBUTES:
        if attr not in ATTRIBUTE_VALUES:
            issues.append(f"No value enumeration for {attr}")
        if attr not in DEFAULT_AVATAR_CONFIG:
            issues.append(f"No default value for {attr}")
        elif not is_valid_attribute_value(attr, DEFAULT_AVATAR_CONFIG[attr]):
            issues.append(f"Default for {attr} is not a legal value")
        if attr not in ATTRIBUTE_LABELS:
            issues.append(f"No label for {attr}")

    overlap = primary & secondary
    if overlap:
        issues.append(f"Attributes in both categories: {sorted(overlap)}")
    uncovered = all_attrs - (primary | secondary)
    if uncovered:
        issues.append(f"Attributes without a category: {sorted(uncovered)}")
    foreign = (primary | secondary) - all_attrs
    if foreign:
        issues.append(f"Unknown attributes in categories: {sorted(foreign)}")
    if len(PRIMARY_ATTRIBUTES) != len(primary) or len(SECONDARY_ATTRIBUTES) != len(secondary):
        issues.append("Duplicate attribute in a category list")

    return issues


_catalog_issues = validate_catalog()
if _catalog_issues:
    raise RuntimeError(f"Inconsistent attribute catalog: {_catalog_issues}")

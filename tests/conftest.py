"""Shared fixtures for the avatar matching tests."""
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from avatar_matching.catalog import DEFAULT_AVATAR_CONFIG
from avatar_matching.generation import AvatarGenerator


@pytest.fixture
def config_path():
    return PROJECT_ROOT / "configs" / "config.yaml"


@pytest.fixture
def default_avatar():
    return dict(DEFAULT_AVATAR_CONFIG)


@pytest.fixture
def secondary_opposite(default_avatar):
    """Default primary attributes, every secondary attribute unrelated to the default."""
    return dict(
        default_avatar,
        eyebrowStyle="thick",
        noseShape="roman",
        mouthExpression="smile",
        heightCategory="tall",
        topType="hoodie",
        topColor="red",
        bottomType="shorts",
        bottomColor="black",
        glasses="reading",
        headwear="cap",
    )


@pytest.fixture
def opposite_avatar(secondary_opposite):
    """Shares nothing with the default avatar, not even a similarity group."""
    return dict(
        secondary_opposite,
        skinTone="dark2",
        hairColor="blonde",
        hairStyle="afro",
        facialHair="fullBeard",
        facialHairColor="blonde",
        faceShape="square",
        eyeShape="monolid",
        eyeColor="blue",
        bodyShape="muscular",
    )


@pytest.fixture
def generated_pairs():
    return AvatarGenerator(random_seed=7).generate_pairs(60, max_changes=12)

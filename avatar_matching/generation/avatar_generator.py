"""
Synthetic avatar generation for evaluation.

This module draws random avatar descriptors from the attribute catalog and
builds (target, candidate) pairs with a controlled number of differences.

Key Design Decisions:
- Every drawn value is a legal catalog token
- Facial hair, glasses and headwear are mostly "none", like real avatars
- Facial hair color follows hair color when facial hair is present
- Reproducible given a random seed
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..catalog import ALL_ATTRIBUTES, ATTRIBUTE_VALUES, DEFAULT_AVATAR_CONFIG, attribute_name
from ..matching import StoredAvatar, normalize

logger = logging.getLogger(__name__)

FACIAL_HAIR_PROBABILITY = 0.5
GLASSES_PROBABILITY = 0.2
HEADWEAR_PROBABILITY = 0.15

AvatarPair = Tuple[Dict[str, str], Dict[str, str]]


class AvatarGenerator:
    """
    Generator for random avatar descriptors and descriptor pairs.

    Attributes:
        random_state: Numpy RandomState for reproducibility
    """

    def __init__(self, random_seed: Optional[int] = None):
        """
        Initialize the avatar generator.

        Args:
            random_seed: Random seed for reproducibility
        """
        self.random_state = np.random.RandomState(random_seed)

    def _choice(self, values: Sequence[str]) -> str:
        return values[self.random_state.randint(len(values))]

    def _optional_choice(self, attr: str, probability: float) -> str:
        """Draw a non-"none" value with the given probability, else "none"."""
        if self.random_state.rand() < probability:
            return self._choice([v for v in ATTRIBUTE_VALUES[attr] if v != "none"])
        return "none"

    def random_avatar(self) -> Dict[str, str]:
        """
        Draw a complete random descriptor.

        Returns:
            Attribute -> value dictionary covering every attribute
        """
        avatar = {attr: self._choice(ATTRIBUTE_VALUES[attr]) for attr in ALL_ATTRIBUTES}

        avatar["facialHair"] = self._optional_choice("facialHair", FACIAL_HAIR_PROBABILITY)
        avatar["glasses"] = self._optional_choice("glasses", GLASSES_PROBABILITY)
        avatar["headwear"] = self._optional_choice("headwear", HEADWEAR_PROBABILITY)

        if avatar["facialHair"] != "none":
            avatar["facialHairColor"] = avatar["hairColor"]
        else:
            avatar["facialHairColor"] = DEFAULT_AVATAR_CONFIG["facialHairColor"]

        return avatar

    def random_avatar_with_constraints(self, constraints: Mapping[Any, Any]) -> Dict[str, str]:
        """
        Draw a random descriptor with some attributes fixed.

        Args:
            constraints: Attribute -> value pairs that override the random draw

        Returns:
            Complete descriptor
        """
        avatar = self.random_avatar()
        for key, value in constraints.items():
            name = attribute_name(key)
            if name in ATTRIBUTE_VALUES and value is not None:
                avatar[name] = value
        return avatar

    def random_stored_avatar(self) -> StoredAvatar:
        """Wrap a random descriptor in a stored avatar record."""
        return StoredAvatar.create(self.random_avatar())

    def perturb(self, avatar: Mapping[str, str], n_changes: int) -> Dict[str, str]:
        """
        Copy a descriptor and re-draw some of its attributes.

        Args:
            avatar: Descriptor to start from (normalized first)
            n_changes: Number of distinct attributes to change

        Returns:
            New descriptor differing from the input in exactly
            min(n_changes, 19) attributes
        """
        result = normalize(avatar)
        n_changes = max(0, min(n_changes, len(ALL_ATTRIBUTES)))

        changed = self.random_state.choice(len(ALL_ATTRIBUTES), size=n_changes, replace=False)
        for idx in changed:
            attr = ALL_ATTRIBUTES[idx]
            alternatives = [v for v in ATTRIBUTE_VALUES[attr] if v != result[attr]]
            result[attr] = self._choice(alternatives)

        return result

    def generate_pairs(self, n_pairs: int, max_changes: int = 8) -> List[AvatarPair]:
        """
        Generate (target, candidate) pairs with a spread of similarity.

        Each candidate is a perturbation of its target with a uniformly drawn
        number of changes in [0, max_changes].

        Args:
            n_pairs: Number of pairs to generate
            max_changes: Largest number of attributes changed in a pair

        Returns:
            List of (target, candidate) descriptor tuples
        """
        max_changes = max(0, min(max_changes, len(ALL_ATTRIBUTES)))
        logger.info(f"Generating {n_pairs} avatar pairs with up to {max_changes} changes")

        pairs = []
        for _ in range(n_pairs):
            target = self.random_avatar()
            n_changes = self.random_state.randint(0, max_changes + 1)
            pairs.append((target, self.perturb(target, n_changes)))

        logger.info(f"Generated {len(pairs)} pairs")
        return pairs

"""
Data loading functions for avatar descriptors and posts.

This module reads descriptors and posts handed over by storage
collaborators as files. No normalization is done here; that's handled by
the matching module.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from ..catalog import ALL_ATTRIBUTES
from ..matching.batch import DEFAULT_AVATAR_KEY

logger = logging.getLogger(__name__)


def _check_file(filepath: str, kind: str) -> Path:
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {filepath}")
    if path.stat().st_size == 0:
        raise ValueError(f"{kind} file is empty: {filepath}")
    return path


def _row_to_descriptor(row: pd.Series) -> Dict[str, str]:
    """Attribute columns of a row; blank cells are left out."""
    return {
        attr: row[attr] for attr in ALL_ATTRIBUTES
        if attr in row.index and pd.notna(row[attr])
    }


def load_avatar(filepath: str) -> Dict[str, Any]:
    """
    Load a single avatar descriptor from JSON.

    The file may hold a plain attribute mapping or a stored avatar record
    (with a "config" mapping); both are accepted by the matcher.

    Args:
        filepath: Path to the JSON file

    Returns:
        Descriptor dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a JSON object
    """
    _check_file(filepath, "Avatar")

    logger.info(f"Loading avatar from {filepath}")
    with open(filepath, "r") as f:
        avatar = json.load(f)

    if not isinstance(avatar, dict):
        raise ValueError(f"Avatar file must contain a JSON object: {filepath}")
    return avatar


def load_avatars_csv(filepath: str, delimiter: str = ",") -> List[Dict[str, str]]:
    """
    Load avatar descriptors from CSV, one row per avatar.

    Columns named after catalog attributes are read; blank cells are
    missing attributes and other columns are ignored.

    Args:
        filepath: Path to the CSV file
        delimiter: Field delimiter (default: comma)

    Returns:
        List of (possibly partial) descriptors

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or has no attribute columns
    """
    _check_file(filepath, "Avatar CSV")

    logger.info(f"Loading avatars from {filepath}")
    df = pd.read_csv(filepath, sep=delimiter, dtype=str)

    attribute_columns = [c for c in df.columns if c in ALL_ATTRIBUTES]
    if not attribute_columns:
        raise ValueError(f"No avatar attribute columns in {filepath}")

    avatars = [_row_to_descriptor(row) for _, row in df.iterrows()]
    logger.info(f"Loaded {len(avatars)} avatars with {len(attribute_columns)} attribute columns")
    return avatars


def load_posts(
    filepath: str,
    avatar_key: str = DEFAULT_AVATAR_KEY,
    delimiter: str = ","
) -> List[Dict[str, Any]]:
    """
    Load posts from a JSON list or a CSV file.

    JSON posts are returned as-is. In a CSV, attribute columns are gathered
    into the post's ``avatar_key`` descriptor (blank cells are missing
    attributes) and every other column becomes a plain post field.

    Args:
        filepath: Path to a .json or .csv file
        avatar_key: Post field that holds the target descriptor
        delimiter: CSV field delimiter (default: comma)

    Returns:
        List of post dictionaries

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or has an unexpected shape
    """
    path = _check_file(filepath, "Posts")
    logger.info(f"Loading posts from {filepath}")

    if path.suffix.lower() == ".json":
        with open(filepath, "r") as f:
            posts = json.load(f)
        if not isinstance(posts, list):
            raise ValueError(f"Posts file must contain a JSON list: {filepath}")
    else:
        df = pd.read_csv(filepath, sep=delimiter, dtype=str)
        other_columns = [c for c in df.columns if c not in ALL_ATTRIBUTES]

        posts = []
        for _, row in df.iterrows():
            post = {c: row[c] for c in other_columns if pd.notna(row[c])}
            post[avatar_key] = _row_to_descriptor(row)
            posts.append(post)

    logger.info(f"Loaded {len(posts)} posts")
    return posts

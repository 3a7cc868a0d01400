"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that the matching settings are coherent.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)

# Advisory range for the match threshold
MIN_MATCH_THRESHOLD = 30
MAX_MATCH_THRESHOLD = 95


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in ["global", "matching"]:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    if "matching" in config:
        matching = config["matching"] or {}

        w_primary = matching.get("primary_weight", 0.6)
        w_secondary = matching.get("secondary_weight", 0.4)
        for name, value in [("primary_weight", w_primary), ("secondary_weight", w_secondary)]:
            if not 0 <= value <= 1:
                issues.append(f"matching.{name} must be in [0, 1], got {value}")
        if abs(w_primary + w_secondary - 1.0) > 0.01:
            issues.append(f"Matching weights don't sum to 1: {w_primary} + {w_secondary}")

        threshold = matching.get("threshold", 60)
        if not MIN_MATCH_THRESHOLD <= threshold <= MAX_MATCH_THRESHOLD:
            issues.append(
                f"matching.threshold {threshold} is outside the recommended range "
                f"[{MIN_MATCH_THRESHOLD}, {MAX_MATCH_THRESHOLD}]"
            )

        tiers = matching.get("quality_thresholds", {})
        excellent = tiers.get("excellent", 85)
        good = tiers.get("good", 70)
        fair = tiers.get("fair", 50)
        if not (0 <= fair < good < excellent <= 100):
            issues.append(
                f"Quality thresholds must be ordered fair < good < excellent within [0, 100], "
                f"got {fair}/{good}/{excellent}"
            )

    if "evaluation" in config:
        n_pairs = config["evaluation"].get("n_pairs", 500)
        if n_pairs < 1:
            issues.append(f"evaluation.n_pairs must be positive, got {n_pairs}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "matching.quality_thresholds.excellent")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value

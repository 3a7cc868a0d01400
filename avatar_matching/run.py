"""
Command line runner for the avatar matching engine.

Usage:
    python -m avatar_matching.run --config configs/config.yaml rank \\
        --candidate me.json --posts posts.json [--threshold 60] [--all]
    python -m avatar_matching.run --config configs/config.yaml evaluate \\
        [--n-pairs 500] [--seed 42]

Commands:
- rank: score every post against the candidate's own avatar and list the
  matches (or all posts with --all) best first
- evaluate: generate synthetic pairs and report score distribution,
  sanity checks and property checks
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load and validate the configuration, falling back to defaults.

    Args:
        config_path: Path to the configuration YAML file

    Returns:
        Configuration dictionary (empty if the file doesn't exist)
    """
    from .configs import load_config, validate_config

    try:
        config = load_config(config_path)
    except FileNotFoundError as e:
        logger.warning(f"{e}; using built-in defaults")
        return {}

    issues = validate_config(config)
    for issue in issues:
        logger.warning(f"Config issue: {issue}")

    setup_logging(config.get("global", {}).get("log_level", "INFO"))
    return config


def rank_posts(
    config: Dict[str, Any],
    candidate_path: str,
    posts_path: str,
    threshold: Optional[float] = None,
    include_all: bool = False
) -> List[Dict[str, Any]]:
    """
    Rank posts for one candidate.

    Args:
        config: Configuration dictionary
        candidate_path: JSON file with the candidate's own descriptor
        posts_path: JSON or CSV file with posts
        threshold: Match threshold (overrides config)
        include_all: Include posts below the threshold

    Returns:
        Ranked entries with the post, score, quality, match flag and explanation
    """
    from .configs import get_config_value
    from .data_loading import load_avatar, load_posts
    from .matching import (
        MatchingConfig,
        explain_match,
        get_match_description,
        get_posts_with_match_scores,
    )

    matching = MatchingConfig.from_config(config)
    avatar_key = get_config_value(config, "batch.avatar_key", "target_avatar")
    if threshold is None:
        threshold = matching.threshold

    candidate = load_avatar(candidate_path)
    posts = load_posts(posts_path, avatar_key=avatar_key)

    logger.info(f"Ranking {len(posts)} posts (threshold {threshold})")
    scored = get_posts_with_match_scores(candidate, posts, config=matching, avatar_key=avatar_key)

    ranked = []
    for post, result in scored:
        is_match = result.score >= threshold
        if not include_all and not is_match:
            continue
        ranked.append({
            "post": post,
            "score": result.score,
            "quality": result.quality.value,
            "is_match": is_match,
            "description": get_match_description(result),
            "explanation": explain_match(result),
        })
        logger.info(f"  {get_match_description(result)}: {explain_match(result)}")

    logger.info(f"{sum(1 for r in ranked if r['is_match'])} of {len(posts)} posts matched")
    return ranked


def run_evaluation(
    config: Dict[str, Any],
    n_pairs: Optional[int] = None,
    seed: Optional[int] = None
):
    """
    Evaluate matching behaviour on generated pairs.

    Args:
        config: Configuration dictionary
        n_pairs: Number of pairs (overrides config)
        seed: Random seed (overrides config)

    Returns:
        EvaluationReport instance
    """
    from .configs import get_config_value
    from .evaluation import create_evaluation_report
    from .generation import AvatarGenerator
    from .matching import MatchingConfig

    matching = MatchingConfig.from_config(config)
    if n_pairs is None:
        n_pairs = get_config_value(config, "evaluation.n_pairs", 500)
    if seed is None:
        seed = get_config_value(config, "global.random_seed", 42)
    max_changes = get_config_value(config, "evaluation.max_changes", 8)
    thresholds = get_config_value(config, "evaluation.thresholds", [30, 45, 60, 75, 90])

    logger.info("=" * 60)
    logger.info("AVATAR MATCHING EVALUATION")
    logger.info("=" * 60)

    generator = AvatarGenerator(random_seed=seed)
    pairs = generator.generate_pairs(n_pairs, max_changes=max_changes)

    report = create_evaluation_report(
        f"avatar_matching_seed{seed}", pairs, thresholds=thresholds, config=matching
    )
    logger.info("\n" + report.summary())
    return report


def _write_json(data: Any, filepath: str) -> None:
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w") as f:
        json.dump(data, f, indent=2)
    logger.info(f"Wrote {filepath}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Avatar compatibility matching engine"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    rank = subparsers.add_parser("rank", help="Rank posts for a candidate avatar")
    rank.add_argument("--candidate", type=str, required=True, help="Candidate avatar JSON file")
    rank.add_argument("--posts", type=str, required=True, help="Posts JSON or CSV file")
    rank.add_argument(
        "--threshold", type=float, default=None, help="Match threshold (overrides config)"
    )
    rank.add_argument("--all", action="store_true", help="Include posts below the threshold")
    rank.add_argument("--output", type=str, default=None, help="Write ranking to this JSON file")

    evaluate = subparsers.add_parser("evaluate", help="Evaluate matching on generated pairs")
    evaluate.add_argument("--n-pairs", type=int, default=None, help="Number of pairs (overrides config)")
    evaluate.add_argument("--seed", type=int, default=None, help="Random seed (overrides config)")
    evaluate.add_argument("--output", type=str, default=None, help="Write report to this JSON file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)

    try:
        config = load_run_config(args.config)

        if args.command == "rank":
            ranked = rank_posts(
                config, args.candidate, args.posts,
                threshold=args.threshold, include_all=args.all
            )
            if args.output:
                _write_json(ranked, args.output)
            return 0

        report = run_evaluation(config, n_pairs=args.n_pairs, seed=args.seed)
        if args.output:
            Path(args.output).parent.mkdir(parents=True, exist_ok=True)
            report.save(args.output)
        if not report.all_properties_hold:
            logger.error("Evaluation found property violations!")
            return 1
        logger.info("Evaluation completed successfully!")
        return 0
    except Exception as e:
        logger.exception(f"Command {args.command} failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

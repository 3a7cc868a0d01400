"""
Value types produced and consumed by the matching engine.

Results are frozen snapshots created fresh for every comparison; nothing
in the engine mutates them after construction.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple

# Increment on breaking changes to the descriptor layout
AVATAR_SCHEMA_VERSION = 1


class MatchQuality(str, Enum):
    """Quality tier derived from the final score."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass(frozen=True)
class MatchBreakdown:
    """
    Per-group detail behind a match score.

    Attributes:
        primary_score: Rounded primary group percentage (0-100)
        secondary_score: Rounded secondary group percentage (0-100)
        matching_attributes: Attributes with an exact match
        partial_match_attributes: Attributes matched through a similarity group
        non_matching_attributes: Attributes with no credit
    """
    primary_score: int
    secondary_score: int
    matching_attributes: Tuple[str, ...] = ()
    partial_match_attributes: Tuple[str, ...] = ()
    non_matching_attributes: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "primary_score": self.primary_score,
            "secondary_score": self.secondary_score,
            "matching_attributes": list(self.matching_attributes),
            "partial_match_attributes": list(self.partial_match_attributes),
            "non_matching_attributes": list(self.non_matching_attributes),
        }


@dataclass(frozen=True)
class MatchResult:
    """
    Result of comparing a target descriptor with a candidate descriptor.

    Attributes:
        score: Weighted final score, integer in [0, 100]
        quality: Quality tier of the score
        is_match: Whether the score reached the match threshold
        breakdown: Group scores and attribute buckets
    """
    score: int
    quality: MatchQuality
    is_match: bool
    breakdown: MatchBreakdown

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "score": self.score,
            "quality": self.quality.value,
            "is_match": self.is_match,
            "breakdown": self.breakdown.to_dict(),
        }


class ScoredPost(NamedTuple):
    """A post paired with its match result."""
    post: Any
    match: MatchResult


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class StoredAvatar:
    """
    Avatar descriptor as persisted by the storage collaborator.

    Attributes:
        id: Unique identifier
        config: Attribute -> value mapping
        version: Descriptor schema version, for migrations
        created_at: Creation timestamp (ISO 8601)
        updated_at: Last modified timestamp (ISO 8601)
    """
    id: str
    config: Dict[str, str]
    version: int = AVATAR_SCHEMA_VERSION
    created_at: str = field(default_factory=_utc_now)
    updated_at: str = field(default_factory=_utc_now)

    def __post_init__(self):
        """Validate the wrapped config."""
        if not isinstance(self.config, dict):
            raise ValueError(f"config must be a dict, got {type(self.config)}")

    @classmethod
    def create(cls, config: Dict[str, str], avatar_id: Optional[str] = None) -> "StoredAvatar":
        """Wrap a descriptor in a new stored record."""
        now = _utc_now()
        return cls(
            id=avatar_id or uuid.uuid4().hex,
            config=dict(config),
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "config": dict(self.config),
            "version": self.version,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredAvatar":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            config=dict(data["config"]),
            version=data.get("version", AVATAR_SCHEMA_VERSION),
            created_at=data.get("created_at", _utc_now()),
            updated_at=data.get("updated_at", _utc_now()),
        )

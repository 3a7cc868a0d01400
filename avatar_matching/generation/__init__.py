"""Synthetic avatar generation."""

from .avatar_generator import AvatarGenerator, AvatarPair

__all__ = ["AvatarGenerator", "AvatarPair"]

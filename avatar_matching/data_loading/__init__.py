"""Data loading for avatar descriptors and posts."""

from .loaders import load_avatar, load_avatars_csv, load_posts

__all__ = ["load_avatar", "load_avatars_csv", "load_posts"]

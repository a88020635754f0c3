"""Data models for build_manifest pipeline stage."""

from dataclasses import dataclass


@dataclass
class PostEntry:
    """Summary of one generated post for the site manifest."""
    slug: str
    title: str
    description: str
    date: str
    url: str

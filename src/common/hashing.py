"""Hashing utilities."""

import hashlib


def generate_record_id(url: str, title: str = "") -> str:
    """Generate a stable record ID from the URL, or the title when there is no URL."""
    base = url or title
    return "n-" + hashlib.sha256(base.encode("utf-8")).hexdigest()[:16]

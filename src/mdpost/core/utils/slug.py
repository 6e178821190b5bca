"""Slug generation for output file names"""

import re


def slugify(text: str, default: str = "note") -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug; `default` if nothing remains."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-') or default

"""General utility functions and helper classes."""

import re
from datetime import date

from .constants import RELEASE_DATE_FORMAT


def format_release_date(value: date) -> str:
    """Format a date as `5 April 2025` (no leading zero on the day)."""
    return RELEASE_DATE_FORMAT.format(day=value.day, month=value.strftime("%B"), year=value.year)


def slugify_version(short_version: str) -> str:
    """Slugify a short version for use in branch names (`2025.03.1` -> `2025-03-1`)."""
    slug = re.sub(r"[^0-9A-Za-z]+", "-", short_version)
    return slug.strip("-")


def generate_branch_name(short_version: str, prefix: str) -> str:
    """Generate a branch name like 'auto-release-notes/2025-03-1'."""
    return f"{prefix}/{slugify_version(short_version)}"

"""Unit tests for utility helper functions: format_release_date, slugify_version and generate_branch_name."""

from datetime import date

import pytest

from release_notes_publisher.utils.helpers import format_release_date, generate_branch_name, slugify_version


@pytest.mark.parametrize(
    "value,expected",
    [
        (date(2025, 4, 5), "5 April 2025"),
        (date(2024, 12, 31), "31 December 2024"),
        (date(2025, 1, 1), "1 January 2025"),
    ],
)
def test_format_release_date(value: date, expected: str) -> None:
    """Test the release date layout without a leading zero on the day."""
    assert format_release_date(value) == expected


@pytest.mark.parametrize(
    "short_version,expected",
    [
        ("2025.03", "2025-03"),
        ("2025.03.1", "2025-03-1"),
        (".2025..03.", "2025-03"),
    ],
)
def test_slugify_version(short_version: str, expected: str) -> None:
    """Test slugify_version with various inputs."""
    assert slugify_version(short_version) == expected


@pytest.mark.parametrize(
    "short_version,prefix,expected",
    [
        ("2025.03", "auto-release-notes", "auto-release-notes/2025-03"),
        ("2025.03.2", "release-notes", "release-notes/2025-03-2"),
    ],
)
def test_generate_branch_name(short_version: str, prefix: str, expected: str) -> None:
    """Test generate_branch_name with various versions and prefixes."""
    assert generate_branch_name(short_version, prefix) == expected

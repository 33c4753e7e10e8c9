# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone

from slugify import slugify as python_slugify


# =============================================================================
# Time Utilities
# =============================================================================

def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime.

    Timestamps are stored without tzinfo so SQLite, PostgreSQL and MySQL
    all round-trip the same value.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_timestamp(value: datetime) -> str:
    """
    Render a stored UTC timestamp in the API's ISO-8601 form.

    Example:
        format_timestamp(datetime(2024, 1, 15, 10, 30))  # "2024-01-15T10:30:00.000Z"
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


# =============================================================================
# Slug Utilities
# =============================================================================

# Width of the articles.slug column
MAX_SLUG_LENGTH = 255

DEFAULT_SLUG = "article"


def slugify(value: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """
    Turn a title into a URL-safe slug.

    Non-ASCII letters are transliterated, everything else that is not
    alphanumeric collapses into single hyphens, and the result is cut to
    max_length without leaving a trailing hyphen.

    Example:
        slugify("A B C")            # "a-b-c"
        slugify("Crème brûlée")     # "creme-brulee"
        slugify("Привет мир")       # "privet-mir"
    """
    slug = python_slugify(value, max_length=max_length)
    return slug or DEFAULT_SLUG

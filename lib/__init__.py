# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable infrastructure:
# - database.py: Async SQLAlchemy engine and session factory
# - entities.py: ORM entities and association tables
# - seed.py: Sample data for local development
# - utils.py: Shared utilities (timestamps, slugs)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import Database, normalize_database_url
from lib.utils import format_timestamp, slugify, utcnow

__all__ = [
    # Database
    "Database",
    "normalize_database_url",
    # Utils
    "format_timestamp",
    "slugify",
    "utcnow",
]

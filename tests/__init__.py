# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Conduit API:
# - test_security.py: Password hashing and token tests
# - test_utils.py: Slug, timestamp and database URL helpers
# - test_models.py: Unit tests for Pydantic model validation
# - test_users.py / test_profiles.py / test_articles.py / test_comments.py:
#   API tests against an in-memory SQLite database
# - test_app.py: Health checks, error envelopes and seeding
#
# Run tests with: pytest
# =============================================================================

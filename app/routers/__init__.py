# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: Registration, login and current-user endpoints
# - profiles.py: Profile and follow endpoints
# - articles.py: Article CRUD, listing, feed and favorites
# - comments.py: Article comment endpoints
# - tags.py: Tag listing
#
# Each router is mounted in main.py under the /api prefix.
# =============================================================================

from . import health
from . import users
from . import profiles
from . import articles
from . import comments
from . import tags

__all__ = [
    "health",
    "users",
    "profiles",
    "articles",
    "comments",
    "tags",
]

# =============================================================================
# core/models/profile.py - Profile Schemas
# =============================================================================
# A profile is the public view of a user. It is embedded as "author" in
# articles and comments, and returned on its own by /profiles/{username}.
# "following" is relative to whoever is asking (false when anonymous).
# =============================================================================

from typing import Optional

from .base import ConduitModel


class Profile(ConduitModel):
    """
    Example:
        {
            "username": "jake",
            "bio": "I work at statefarm",
            "image": "https://api.realworld.io/images/smiley-cyrus.jpg",
            "following": false
        }
    """

    username: str
    bio: Optional[str] = None
    image: Optional[str] = None
    following: bool = False


class ProfileEnvelope(ConduitModel):
    profile: Profile

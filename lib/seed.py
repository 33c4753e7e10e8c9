# =============================================================================
# lib/seed.py - Sample Data
# =============================================================================
# Fills an empty database with a small, coherent data set for local
# development and demos: three users who follow and favorite each other's
# articles, with tags and comments.
#
# Usage:
#   async with database.session() as session:
#       await empty_all_tables(session)
#       await populate_seeds(session)
#
# Run automatically at startup when SEED_DATABASE=true.
# =============================================================================

import logging
from datetime import timedelta

from sqlalchemy import delete, insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.security import hash_password
from lib.entities import (
    Article,
    Comment,
    Tag,
    User,
    article_tags,
    favorites,
    follows,
)
from lib.utils import slugify, utcnow

logger = logging.getLogger(__name__)

SEED_PASSWORD = "password123"

SEED_USERS = [
    {"username": "jake", "email": "jake@jake.jake", "bio": "I work at statefarm", "image": None},
    {"username": "jane", "email": "jane@conduit.dev", "bio": "Writes about the web", "image": None},
    {"username": "john", "email": "john@conduit.dev", "bio": None, "image": None},
]

SEED_ARTICLES = [
    {
        "author": "jake",
        "title": "How to train your dragon",
        "description": "Ever wonder how?",
        "body": "It takes a Jacobian",
        "tags": ["dragons", "training"],
    },
    {
        "author": "jake",
        "title": "Welcome to Conduit",
        "description": "What this place is about",
        "body": "Conduit is a Medium clone built on the RealWorld API.",
        "tags": ["welcome"],
    },
    {
        "author": "jane",
        "title": "Async Python in practice",
        "description": "Notes from running an async API",
        "body": "Await the database, not the CPU.",
        "tags": ["python", "async"],
    },
    {
        "author": "john",
        "title": "First post",
        "description": "Hello world",
        "body": "Nothing to see yet.",
        "tags": [],
    },
]

# (author, article title, body)
SEED_COMMENTS = [
    ("jane", "How to train your dragon", "Great read!"),
    ("john", "How to train your dragon", "Where do I get a dragon?"),
    ("jake", "Async Python in practice", "Bookmarked."),
]

# (follower, followed)
SEED_FOLLOWS = [
    ("jane", "jake"),
    ("john", "jake"),
    ("jake", "jane"),
]

# (user, article title)
SEED_FAVORITES = [
    ("jane", "How to train your dragon"),
    ("john", "How to train your dragon"),
    ("jake", "Async Python in practice"),
]


async def empty_all_tables(session: AsyncSession) -> None:
    """
    Delete every row from every table, children first.

    The caller decides when to commit.
    """
    for statement in (
        delete(article_tags),
        delete(favorites),
        delete(follows),
        delete(Comment),
        delete(Article),
        delete(Tag),
        delete(User),
    ):
        await session.execute(statement)
    logger.info("Emptied all tables")


async def populate_seeds(session: AsyncSession) -> None:
    """
    Insert the sample data set. Expects empty tables.

    The caller decides when to commit.
    """
    password_hash = hash_password(SEED_PASSWORD)
    users = {
        data["username"]: User(password_hash=password_hash, **data)
        for data in SEED_USERS
    }
    session.add_all(users.values())

    tags: dict[str, Tag] = {}
    articles: dict[str, Article] = {}
    # Oldest first so the listing order matches SEED_ARTICLES reversed
    start = utcnow() - timedelta(minutes=len(SEED_ARTICLES))
    for position, data in enumerate(SEED_ARTICLES):
        created_at = start + timedelta(minutes=position)
        article = Article(
            slug=slugify(data["title"]),
            title=data["title"],
            description=data["description"],
            body=data["body"],
            author=users[data["author"]],
            created_at=created_at,
            updated_at=created_at,
            tags=[tags.setdefault(name, Tag(name=name)) for name in data["tags"]],
        )
        articles[data["title"]] = article
    session.add_all(articles.values())

    # Comments and association rows need the generated ids
    await session.flush()

    session.add_all(
        Comment(body=body, article_id=articles[title].id, author=users[author])
        for author, title, body in SEED_COMMENTS
    )

    await session.execute(
        insert(follows),
        [
            {"follower_id": users[follower].id, "followed_id": users[followed].id}
            for follower, followed in SEED_FOLLOWS
        ],
    )
    await session.execute(
        insert(favorites),
        [
            {"user_id": users[username].id, "article_id": articles[title].id}
            for username, title in SEED_FAVORITES
        ],
    )

    logger.info(
        f"Seeded {len(users)} users, {len(articles)} articles, "
        f"{len(SEED_COMMENTS)} comments, {len(tags)} tags"
    )

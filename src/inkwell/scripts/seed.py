# src/inkwell/scripts/seed.py
"""Populate an empty database with demo users, posts, comments and votes."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkwell.core.settings import settings
from inkwell.db.session import SessionLocal, create_tables
from inkwell.models import User
from inkwell.services import comment_service, post_service, user_service
from inkwell.services.voting import get_vote_service

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
DEMO_USERS = ("john_doe", "jane_doe", "jack_doe")

# (author, title, perex, content, [(commenter, comment text, upvotes)])
DEMO_POSTS = (
    (
        "john_doe",
        "First Post",
        "A short summary of the first post.",
        "This is the content of the first post.",
        [("jane_doe", "Great post!", 5), ("jack_doe", "Thanks for sharing!", 3)],
    ),
    (
        "john_doe",
        "Second Post",
        "A short summary of the second post.",
        "This is the content of the second post.",
        [("jane_doe", "Interesting read!", 2)],
    ),
    (
        "jane_doe",
        "Only Post by Jane",
        "A short summary of Jane's post.",
        "This is Jane's single post, with enough text to be valid.",
        [("john_doe", "Nice post, Jane!", 4)],
    ),
)


def seed(db: Session) -> None:
    """Create the demo data set.

    Comment scores are reached by casting real upvotes from distinct demo
    addresses so the cached score always matches the vote ledger.
    """
    users = {
        name: user_service.create_user(db, name, DEMO_PASSWORD) for name in DEMO_USERS
    }
    votes = get_vote_service(db)

    for author, title, perex, content, comments in DEMO_POSTS:
        post = post_service.create_post(
            db, users[author], title=title, perex=perex, content=content
        )
        for commenter, text, upvotes in comments:
            comment = comment_service.create_comment(
                db, users[commenter], post_id=post.id, content=text
            )
            for n in range(upvotes):
                votes.apply_vote(comment.id, "upvote", f"198.51.100.{n + 1}")

    db.commit()


def main() -> None:
    logging.basicConfig(level=settings.log_level.upper())
    create_tables()
    with SessionLocal() as db:
        if db.scalar(select(User.id).limit(1)) is not None:
            logger.info("Database already contains users; skipping seed")
            return
        seed(db)
    logger.info("Database seeded successfully")


if __name__ == "__main__":
    main()

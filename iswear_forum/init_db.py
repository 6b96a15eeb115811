"""Create tables and seed the default categories."""

import logging

from iswear_forum.database import Base, SessionLocal, engine
import iswear_forum.models  # noqa: F401  registers every model on Base.metadata
from iswear_forum.crud.category import crud_category
from iswear_forum.crud.user_session import crud_user_session

logger = logging.getLogger(__name__)


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = crud_category.seed_categories(db)
        purged = crud_user_session.purge_expired(db)
        logger.info(f"Database ready: {created} categories seeded, {purged} expired sessions purged")
    finally:
        db.close()


def main():
    init_db()
    print("Tables created and categories seeded")


if __name__ == "__main__":
    main()

from iswear_forum.database import Base, engine
from iswear_forum.models import (  # noqa: F401
    user,
    category,
    thread,
    post,
    notification,
    profile_comment,
    user_session,
)

print("Creating database tables...")
Base.metadata.create_all(bind=engine)
print("All tables created successfully!")

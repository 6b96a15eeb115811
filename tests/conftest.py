import os
import tempfile

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="forum-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from iswear_forum.core.security import get_password_hash
from iswear_forum.crud import crud_category
from iswear_forum.database import Base, get_db
from iswear_forum.main import app
from iswear_forum.models import Category, Post, Thread, User, UserRole, UserStatus

PASSWORD = "hunter22"


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def client(session_factory, db):
    crud_category.seed_categories(db)

    def _get_test_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db):
    def _make_user(
        username,
        role=UserRole.MEMBER,
        status=UserStatus.APPROVED,
        is_banned=False,
        password=PASSWORD,
    ):
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=get_password_hash(password),
            role=role.value,
            status=status.value,
            is_banned=is_banned,
            application_reason="testing",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_category(db):
    def _make_category(name, position):
        category = Category(name=name, description=f"{name} board", position=position)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    return _make_category


@pytest.fixture()
def make_thread(db):
    """Thread plus its opening post, plus `replies` extra posts."""

    def _make_thread(category, author_id, title="thread", replies=0, created_at=None):
        fields = dict(category_id=category.id, author_id=author_id, title=title, content=f"{title} body")
        if created_at is not None:
            fields["created_at"] = created_at
        thread = Thread(**fields)
        db.add(thread)
        db.flush()
        db.add(Post(thread_id=thread.id, author_id=author_id, content=thread.content))
        for i in range(replies):
            db.add(Post(thread_id=thread.id, author_id=author_id, content=f"reply {i}"))
        db.commit()
        db.refresh(thread)
        return thread

    return _make_thread


@pytest.fixture()
def login_as(client):
    def _login_as(username, password=PASSWORD):
        response = client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return response

    return _login_as

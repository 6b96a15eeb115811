"""Data access and view assembly."""

from datetime import datetime, timedelta

import pytest

from iswear_forum.core.exceptions import ConflictError, NotFoundError
from iswear_forum.crud import crud_category, crud_post, crud_thread, crud_user
from iswear_forum.models import Notification, Post, Thread, UserRole, UserStatus
from iswear_forum.services.views import GHOST_AUTHOR_ID, GHOST_AUTHOR_NAME, reply_counts


def _dump(model):
    return model.model_dump(by_alias=True)


def test_get_user_with_invalid_id_is_none(db, make_user):
    make_user("alice")
    assert crud_user.get(db, "abc") is None
    assert crud_user.get(db, -1) is None
    assert crud_user.get(db, 0) is None
    assert crud_user.get(db, 12345) is None


def test_lookup_by_username_and_email(db, make_user):
    alice = make_user("alice")
    assert crud_user.get_by_username(db, "alice").id == alice.id
    assert crud_user.get_by_email(db, "alice@example.com").id == alice.id
    assert crud_user.get_by_username(db, "nobody") is None
    assert crud_user.get_by_email(db, None) is None


def test_list_users_never_exposes_password_hash(db, make_user):
    make_user("alice")
    make_user("bob")
    users = [_dump(u) for u in crud_user.list_users(db)]
    assert [u["username"] for u in users] == ["alice", "bob"]
    assert all("passwordHash" not in u and "password_hash" not in u for u in users)


def test_create_user_rejects_duplicate_username(db, make_user):
    make_user("alice")
    with pytest.raises(ConflictError):
        crud_user.create_user(
            db,
            fields={"username": "alice", "email": "x@example.com", "password_hash": "h.s"},
        )
    assert crud_user.get_count(db) == 1


def test_update_user_missing_row_raises(db):
    with pytest.raises(NotFoundError):
        crud_user.update_user(db, user_id=42, obj_in={"bio": "hi"})


def test_update_user_ignores_password_hash(db, make_user):
    user = make_user("alice")
    before = user.password_hash
    updated = crud_user.update_user(db, user_id=user.id, obj_in={"bio": "hello", "password_hash": "x"})
    assert updated.bio == "hello"
    assert updated.password_hash == before


def test_reply_count_is_posts_minus_one_floored_at_zero(db, make_user, make_category, make_thread):
    user = make_user("alice")
    cat = make_category("Lobby", 1)
    busy = make_thread(cat, user.id, replies=3)
    quiet = make_thread(cat, user.id)
    empty = Thread(category_id=cat.id, author_id=user.id, title="no posts", content="x")
    db.add(empty)
    db.commit()

    counts = reply_counts(db, [busy.id, quiet.id, empty.id])
    assert counts == {busy.id: 3, quiet.id: 0, empty.id: 0}


def test_categories_ordered_by_position_with_five_newest_threads(db, make_user, make_category, make_thread):
    user = make_user("alice")
    second = make_category("Second", 2)
    first = make_category("First", 1)
    base = datetime(2024, 1, 1)
    for i in range(7):
        make_thread(first, user.id, title=f"t{i}", created_at=base + timedelta(hours=i))

    categories = crud_category.get_categories(db)
    assert [c.name for c in categories] == ["First", "Second"]
    assert [t.title for t in categories[0].threads] == ["t6", "t5", "t4", "t3", "t2"]
    assert categories[1].threads == []


def test_get_category_returns_every_thread(db, make_user, make_category, make_thread):
    user = make_user("alice")
    cat = make_category("Lobby", 1)
    base = datetime(2024, 1, 1)
    for i in range(7):
        make_thread(cat, user.id, title=f"t{i}", created_at=base + timedelta(hours=i))

    category = crud_category.get_category(db, cat.id)
    assert len(category.threads) == 7
    assert category.threads[0].title == "t6"
    assert crud_category.get_category(db, "nope") is None
    assert crud_category.get_by_name(db, "lobby").id == cat.id


def test_equal_timestamps_break_ties_by_id(db, make_user, make_category, make_thread):
    user = make_user("alice")
    cat = make_category("Lobby", 1)
    same = datetime(2024, 1, 1)
    older = make_thread(cat, user.id, title="a", created_at=same)
    newer = make_thread(cat, user.id, title="b", created_at=same)

    threads = crud_category.get_category(db, cat.id).threads
    assert [t.id for t in threads] == [newer.id, older.id]


def test_thread_view_has_safe_authors_and_oldest_first_posts(db, make_user, make_category, make_thread):
    alice = make_user("alice")
    bob = make_user("bob")
    cat = make_category("Lobby", 1)
    thread = make_thread(cat, alice.id, title="hello")
    crud_post.create_post(db, author_id=bob.id, thread_id=thread.id, content="first reply")

    view = crud_thread.get_thread(db, thread.id)
    assert view.category.name == "Lobby"
    assert view.reply_count == 1
    assert [p.author.username for p in view.posts] == ["alice", "bob"]

    payload = _dump(view)
    assert "passwordHash" not in payload["author"]
    assert all("passwordHash" not in p["author"] for p in payload["posts"])


def test_missing_author_becomes_ghost(db, make_category, make_thread):
    cat = make_category("Lobby", 1)
    thread = make_thread(cat, 999, title="orphan")

    listing = crud_category.get_category(db, cat.id)
    ghost = listing.threads[0].author
    assert ghost.id == GHOST_AUTHOR_ID
    assert ghost.username == GHOST_AUTHOR_NAME
    assert ghost.role == UserRole.MEMBER
    assert ghost.status == UserStatus.APPROVED
    assert crud_thread.get_thread(db, thread.id).posts[0].author.username == GHOST_AUTHOR_NAME


def test_create_thread_also_creates_opening_post(db, make_user, make_category):
    user = make_user("alice")
    cat = make_category("Lobby", 1)
    thread, opening = crud_thread.create_thread(
        db, author_id=user.id, title="T", content="C", category_id=cat.id
    )
    assert opening.thread_id == thread.id

    page = crud_thread.get_thread(db, thread.id)
    assert page.title == "T"
    assert page.content == "C"
    assert len(page.posts) == 1
    assert page.posts[0].id == opening.id
    assert page.posts[0].content == "C"
    assert page.reply_count == 0


def test_create_thread_in_unknown_category_raises(db, make_user):
    user = make_user("alice")
    with pytest.raises(NotFoundError):
        crud_thread.create_thread(db, author_id=user.id, title="t", content="b", category_id=77)
    assert crud_thread.get_count(db) == 0


def test_create_post_in_unknown_thread_raises(db, make_user):
    user = make_user("alice")
    with pytest.raises(NotFoundError):
        crud_post.create_post(db, author_id=user.id, thread_id=77, content="hi")


def test_delete_thread_removes_posts_and_notifications(db, make_user, make_category, make_thread):
    alice = make_user("alice")
    bob = make_user("bob")
    cat = make_category("Lobby", 1)
    thread = make_thread(cat, alice.id, replies=2)
    post_id = db.query(Post.id).filter(Post.thread_id == thread.id).first()[0]
    db.add(Notification(user_id=bob.id, from_user_id=alice.id, thread_id=thread.id, post_id=post_id))
    db.commit()

    thread_id = thread.id

    assert crud_thread.delete_thread(db, thread_id=thread_id) == thread_id

    assert crud_thread.get_thread(db, thread_id) is None
    assert db.query(Post).filter(Post.thread_id == thread_id).count() == 0
    assert db.query(Notification).count() == 0
    with pytest.raises(NotFoundError):
        crud_thread.delete_thread(db, thread_id=thread_id)


def test_seed_categories_is_idempotent(db):
    assert crud_category.seed_categories(db) > 0
    assert crud_category.seed_categories(db) == 0
    positions = [c.position for c in crud_category.get_categories(db)]
    assert positions == sorted(positions)


def test_search_matches_case_insensitively(db, make_user, make_category, make_thread):
    make_user("NeonRunner")
    alice = make_user("alice")
    cat = make_category("Lobby", 1)
    make_thread(cat, alice.id, title="Overclocking my 486")

    assert [u.username for u in crud_user.search(db, query="neon")] == ["NeonRunner"]
    assert [t.title for t in crud_thread.search(db, query="OVERCLOCK")] == ["Overclocking my 486"]


def test_count_online_uses_last_seen(db, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    crud_user.update_user(db, user_id=bob.id, obj_in={"last_seen": datetime.utcnow() - timedelta(hours=2)})
    crud_user.touch_last_seen(db, user_id=alice.id)
    assert crud_user.count_online(db, window_seconds=300) == 1

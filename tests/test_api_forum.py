from fastapi.testclient import TestClient

from iswear_forum import main
from iswear_forum.models import Category, UserRole, UserStatus


def _first_category(client):
    return client.get("/api/categories").json()[0]


def test_categories_listing_is_ordered_and_public(client):
    response = client.get("/api/categories")
    assert response.status_code == 200
    positions = [c["position"] for c in response.json()]
    assert positions == sorted(positions)
    assert all(c["threads"] == [] for c in response.json())


def test_category_lookup_by_id_or_name(client):
    category = _first_category(client)
    by_id = client.get(f"/api/categories/{category['id']}")
    by_name = client.get(f"/api/categories/{category['name'].lower()}")
    assert by_id.status_code == 200
    assert by_name.json()["id"] == category["id"]
    assert client.get("/api/categories/9999").status_code == 404
    assert client.get("/api/categories/no-such-board").status_code == 404


def test_create_thread_and_reply(client, make_user, login_as):
    make_user("alice")
    login_as("alice")
    category = _first_category(client)

    created = client.post(
        "/api/threads",
        json={"title": "First!", "content": "opening post", "categoryId": category["id"]},
    )
    assert created.status_code == 201
    thread_id = created.json()["id"]

    reply = client.post("/api/posts", json={"threadId": thread_id, "content": "a reply"})
    assert reply.status_code == 201

    page = client.get(f"/api/threads/{thread_id}").json()
    assert page["replyCount"] == 1
    assert [p["content"] for p in page["posts"]] == ["opening post", "a reply"]
    assert page["category"]["id"] == category["id"]
    assert page["author"]["username"] == "alice"
    assert "passwordHash" not in page["author"]

    listing = client.get(f"/api/categories/{category['id']}").json()
    assert listing["threads"][0]["replyCount"] == 1


def test_thread_not_found(client):
    assert client.get("/api/threads/424242").status_code == 404
    assert client.get("/api/threads/abc").status_code == 404


def test_anonymous_cannot_post(client):
    category = _first_category(client)
    response = client.post(
        "/api/threads", json={"title": "x", "content": "y", "categoryId": category["id"]}
    )
    assert response.status_code == 401


def test_pending_and_banned_users_cannot_post(client, make_user, login_as):
    make_user("pending", status=UserStatus.PENDING)
    make_user("banned", is_banned=True)
    category = _first_category(client)
    payload = {"title": "x", "content": "y", "categoryId": category["id"]}

    for username in ("pending", "banned"):
        login_as(username)
        assert client.post("/api/threads", json=payload).status_code == 403


def test_reply_to_missing_thread_is_404(client, make_user, login_as):
    make_user("alice")
    login_as("alice")
    response = client.post("/api/posts", json={"threadId": 999, "content": "hello?"})
    assert response.status_code == 404


def test_only_owner_or_staff_deletes_thread(client, db, make_user, make_thread, login_as):
    alice = make_user("alice")
    make_user("bob")
    make_user("mod", role=UserRole.MODERATOR)
    category = db.query(Category).first()
    first = make_thread(category, alice.id, replies=1)
    second = make_thread(category, alice.id)
    first_id, second_id = first.id, second.id

    login_as("bob")
    assert client.delete(f"/api/threads/{first_id}").status_code == 403

    login_as("alice")
    assert client.delete(f"/api/threads/{first_id}").status_code == 204
    assert client.get(f"/api/threads/{first_id}").status_code == 404

    login_as("mod")
    assert client.delete(f"/api/threads/{second_id}").status_code == 204
    assert client.delete(f"/api/threads/{second_id}").status_code == 404


def test_post_delete_by_owner(client, make_user, login_as):
    make_user("alice")
    make_user("bob")
    login_as("alice")
    category = _first_category(client)
    thread_id = client.post(
        "/api/threads", json={"title": "t", "content": "c", "categoryId": category["id"]}
    ).json()["id"]

    login_as("bob")
    post_id = client.post("/api/posts", json={"threadId": thread_id, "content": "mine"}).json()["id"]

    login_as("alice")
    assert client.delete(f"/api/posts/{post_id}").status_code == 403

    login_as("bob")
    assert client.delete(f"/api/posts/{post_id}").status_code == 204
    assert client.get(f"/api/threads/{thread_id}").json()["replyCount"] == 0


def test_stats_and_search(client, make_user, login_as):
    make_user("alice")
    login_as("alice")
    category = _first_category(client)
    client.post(
        "/api/threads",
        json={"title": "Modem noises", "content": "56k forever", "categoryId": category["id"]},
    )

    stats = client.get("/api/stats").json()
    assert stats == {"userCount": 1, "threadCount": 1, "onlineUsers": 1}

    found = client.get("/api/search", params={"q": "modem"}).json()
    assert [t["title"] for t in found["threads"]] == ["Modem noises"]
    assert client.get("/api/search", params={"q": "ALI"}).json()["users"][0]["username"] == "alice"
    assert client.get("/api/search").json() == {"threads": [], "users": []}


def test_user_profiles(client, make_user, login_as):
    alice = make_user("alice")
    bob = make_user("bob")

    assert client.get("/api/users").status_code == 401
    profile = client.get(f"/api/users/{alice.id}").json()
    assert profile["username"] == "alice"
    assert profile["avatarUrl"].endswith("seed=alice")
    assert client.get("/api/users/9999").status_code == 404

    login_as("alice")
    users = client.get("/api/users").json()
    assert len(users) == 2
    assert all("passwordHash" not in u and "password_hash" not in u for u in users)

    updated = client.patch(f"/api/users/{alice.id}", json={"bio": "hi", "icq": "424242"})
    assert updated.status_code == 200
    assert updated.json()["bio"] == "hi"
    assert client.patch(f"/api/users/{bob.id}", json={"bio": "pwned"}).status_code == 403


def test_profile_views_and_comments(client, make_user, login_as):
    alice = make_user("alice")
    make_user("bob")

    first = client.get(f"/api/profile/{alice.id}").json()
    second = client.get(f"/api/profile/{alice.id}").json()
    assert second["views"] == first["views"] + 1

    assert client.post(f"/api/profile/{alice.id}/comments", json={"content": "hey"}).status_code == 401

    login_as("bob")
    created = client.post(f"/api/profile/{alice.id}/comments", json={"content": "nice page"})
    assert created.status_code == 201
    assert created.json()["author"]["username"] == "bob"
    assert client.post("/api/profile/9999/comments", json={"content": "x"}).status_code == 404

    comments = client.get(f"/api/profile/{alice.id}/comments").json()
    assert [c["content"] for c in comments] == ["nice page"]
    assert "passwordHash" not in comments[0]["author"]


def test_user_threads(client, make_user, login_as):
    alice = make_user("alice")
    login_as("alice")
    category = _first_category(client)
    client.post("/api/threads", json={"title": "one", "content": "c", "categoryId": category["id"]})

    threads = client.get(f"/api/users/{alice.id}/threads").json()
    assert [t["title"] for t in threads] == ["one"]


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_search_treats_wildcards_literally(client, make_user, login_as):
    make_user("alice")
    make_user("n30n_runner")
    login_as("alice")
    category = _first_category(client)
    client.post("/api/threads", json={"title": "100% legit", "content": "c", "categoryId": category["id"]})
    client.post("/api/threads", json={"title": "plain", "content": "c", "categoryId": category["id"]})

    underscore = client.get("/api/search", params={"q": "_"}).json()
    assert [u["username"] for u in underscore["users"]] == ["n30n_runner"]
    assert underscore["threads"] == []

    percent = client.get("/api/search", params={"q": "%"}).json()
    assert percent["users"] == []
    assert [t["title"] for t in percent["threads"]] == ["100% legit"]


def test_startup_seeds_through_lifespan(client, monkeypatch):
    calls = []
    monkeypatch.setattr(main, "init_db", lambda: calls.append("seeded"))
    with TestClient(main.app) as started:
        assert started.get("/health").status_code == 200
    assert calls == ["seeded"]

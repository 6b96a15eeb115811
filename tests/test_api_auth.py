from iswear_forum.config import settings
from iswear_forum.models import UserSession

REGISTRATION = {
    "username": "n30n_runner",
    "email": "runner@example.com",
    "password": "h4ckth3pl4n3t",
    "icq": "12345678",
    "applicationReason": "Old BBS regular",
}


def test_register_logs_in_as_pending(client):
    response = client.post("/api/register", json=REGISTRATION)
    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "n30n_runner"
    assert body["status"] == "PENDING"
    assert body["sessionState"] == "PENDING_APPROVAL"
    assert "passwordHash" not in body
    assert settings.SESSION_COOKIE_NAME in response.cookies

    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.json()["sessionState"] == "PENDING_APPROVAL"


def test_register_duplicate_is_conflict(client):
    assert client.post("/api/register", json=REGISTRATION).status_code == 201
    response = client.post("/api/register", json=REGISTRATION)
    assert response.status_code == 409
    assert "message" in response.json()


def test_register_validation_error_is_400(client):
    response = client.post("/api/register", json={**REGISTRATION, "username": "a b"})
    assert response.status_code == 400
    assert "message" in response.json()


def test_login_wrong_password_is_401(client, make_user):
    make_user("alice")
    response = client.post("/api/login", json={"username": "alice", "password": "nope"})
    assert response.status_code == 401


def test_login_and_current_user(client, make_user, login_as):
    make_user("alice")
    body = login_as("alice").json()
    assert body["sessionState"] == "AUTHENTICATED"

    me = client.get("/api/user").json()
    assert me["username"] == "alice"
    assert "passwordHash" not in me


def test_current_user_without_session_is_401(client):
    assert client.get("/api/user").status_code == 401


def test_logout_is_idempotent(client, make_user, login_as):
    make_user("alice")
    login_as("alice")

    assert client.post("/api/logout").status_code == 200
    assert client.get("/api/user").status_code == 401
    assert client.post("/api/logout").status_code == 200


def test_garbage_cookie_is_anonymous(client):
    client.cookies.set(settings.SESSION_COOKIE_NAME, "not-a-token")
    assert client.get("/api/user").status_code == 401
    assert client.get("/api/categories").status_code == 200


def test_relogin_replaces_the_cookie_session(client, db, make_user, login_as):
    alice = make_user("alice")
    login_as("alice")
    login_as("alice")

    assert db.query(UserSession).filter(UserSession.user_id == alice.id).count() == 1
    assert client.get("/api/user").json()["username"] == "alice"

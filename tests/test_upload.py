from pathlib import Path

from iswear_forum.config import settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def test_upload_requires_session(client):
    response = client.post("/api/upload", files={"file": ("a.txt", b"hello", "text/plain")})
    assert response.status_code == 401


def test_upload_png_and_text(client, make_user, login_as):
    make_user("alice")
    login_as("alice")

    png = client.post("/api/upload", files={"file": ("screen shot.png", PNG_BYTES, "image/png")})
    assert png.status_code == 201
    body = png.json()
    assert body["url"].startswith(settings.UPLOAD_URL_PREFIX + "/")
    assert body["url"].endswith(".png")
    assert (Path(settings.UPLOAD_DIR) / body["fileName"]).read_bytes() == PNG_BYTES

    txt = client.post("/api/upload", files={"file": ("notes.TXT", "héllo".encode("utf-8"), "text/plain")})
    assert txt.status_code == 201
    assert txt.json()["url"].endswith(".txt")


def test_upload_rejects_bad_files(client, make_user, login_as):
    make_user("alice")
    login_as("alice")

    cases = [
        ("evil.exe", b"MZ...", "application/octet-stream"),
        ("fake.png", b"not a png at all", "image/png"),
        ("latin1.txt", b"\xff\xfe\xfa", "text/plain"),
        ("empty.txt", b"", "text/plain"),
    ]
    for name, content, mime in cases:
        response = client.post("/api/upload", files={"file": (name, content, mime)})
        assert response.status_code == 400, name
        assert "message" in response.json()

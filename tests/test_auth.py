import time
import uuid
from app.database import SessionLocal
from app.models.user import User


def test_register_and_login_success(client):
    email = f"test_{uuid.uuid4().hex}@example.com"
    password = "correct_horse_battery_staple"

    r = client.post("/auth/register", json={"name": "alice", "email": email, "password": password})
    assert r.status_code == 201
    body = r.json()
    assert body["statusCode"] == 201
    assert body["data"]["email"] == email
    assert body["data"]["name"] == "alice"
    assert "_id" in body["data"]
    assert "password" not in body["data"]

    r2 = client.post("/auth/login", json={"email": email, "password": password})
    assert r2.status_code == 200
    assert "token" in r2.json()


def test_register_duplicate_email(client):
    email = f"dup_{uuid.uuid4().hex[:8]}@example.com"
    r = client.post("/auth/register", json={"name": "a", "email": email, "password": "pw"})
    assert r.status_code == 201

    r = client.post("/auth/register", json={"name": "b", "email": email, "password": "other"})
    assert r.status_code == 400
    assert r.json() == {"statusCode": 400, "message": "Email already exists"}


def test_register_password_too_long(client):
    email = f"test_{uuid.uuid4().hex}@example.com"
    r = client.post("/auth/register", json={"name": "long", "email": email, "password": "a" * 100})
    assert r.status_code == 400
    message = r.json()["message"].lower()
    assert "password" in message and "too long" in message


def test_register_invalid_email(client):
    r = client.post("/auth/register", json={"name": "x", "email": "not_an_email", "password": "Pass123!"})
    assert r.status_code == 400
    assert r.json()["statusCode"] == 400


def test_login_wrong_password(client, make_user):
    user, _ = make_user("bob")
    r = client.post("/auth/login", json={"email": user["email"], "password": "WrongPass123!"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials"


def test_task_routes_require_token(client):
    for method, path in [
        ("post", "/tasks/register"),
        ("get", "/tasks/getTasks"),
        ("get", "/tasks/getTask/abc"),
        ("delete", "/tasks/delete/abc"),
        ("patch", "/tasks/status/abc"),
        ("patch", "/tasks/update/abc"),
        ("post", "/tasks/import"),
        ("get", "/tasks/export"),
    ]:
        r = getattr(client, method)(path)
        assert r.status_code == 401, path
        assert r.json() == {"statusCode": 401, "message": "Unauthorized request"}


def test_invalid_token_rejected(client):
    r = client.get("/tasks/getTasks", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid token"


def test_token_query_param_accepted(client, make_user):
    _, headers = make_user("carol")
    token = headers["Authorization"].split()[1]
    r = client.get(f"/tasks/getTasks?token={token}")
    assert r.status_code == 200


def test_token_for_deleted_user_rejected(client, make_user):
    user, headers = make_user("gone")
    db = SessionLocal()
    try:
        db.query(User).filter(User.id == user["_id"]).delete()
        db.commit()
    finally:
        db.close()

    r = client.get("/tasks/getTasks", headers=headers)
    assert r.status_code == 401


def test_token_expiration(client, make_user):
    import app.config
    original_expire = app.config.ACCESS_TOKEN_EXPIRE_MINUTES
    try:
        app.config.ACCESS_TOKEN_EXPIRE_MINUTES = 1 / 60  # 1 second
        _, headers = make_user("dave")

        r = client.get("/tasks/getTasks", headers=headers)
        assert r.status_code == 200

        time.sleep(2)
        r = client.get("/tasks/getTasks", headers=headers)
        assert r.status_code == 401
        assert "expired" in r.json()["message"].lower()
    finally:
        app.config.ACCESS_TOKEN_EXPIRE_MINUTES = original_expire


def test_update_fcm_token(client, make_user, db):
    user, headers = make_user("erin")
    r = client.patch("/auth/fcm-token", json={"fcmToken": "device-123"}, headers=headers)
    assert r.status_code == 200

    stored = db.get(User, user["_id"])
    assert stored.fcm_token == "device-123"

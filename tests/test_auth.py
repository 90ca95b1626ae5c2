import pytest
from flask.testing import FlaskClient
from flask_jwt_extended import decode_token

from buzzinga.extensions import db
from buzzinga.models.user import User
from buzzinga.domain.exceptions import Forbidden, Unauthenticated, ValidationError
from buzzinga.application.auth import authenticate, register_user


def test_register_hashes_password_and_normalizes_email(app) -> None:
    user = register_user(email="  Editor@Example.com ", password="secret123", name="Ed")

    assert user.email == "editor@example.com"
    assert user.role == "EDITOR"
    assert user.password_hash != "secret123"
    assert user.check_password("secret123")


@pytest.mark.parametrize(
    "email,password",
    [
        ("not-an-email", "secret123"),
        ("short@example.com", "12345"),
        (None, "secret123"),
    ],
)
def test_register_rejects_invalid_credentials(app, email, password) -> None:
    with pytest.raises(ValidationError):
        register_user(email=email, password=password)


def test_register_rejects_existing_email(author: User) -> None:
    with pytest.raises(ValidationError) as exc_info:
        register_user(email="AUTHOR@example.com", password="another1")

    assert exc_info.value.message == "User already exists"


def test_authenticate_issues_tokens_with_role(app, make_user) -> None:
    admin = make_user(email="admin@example.com", role="ADMIN")

    user, tokens = authenticate(email="admin@example.com", password="secret123")

    assert user.id == admin.id
    claims = decode_token(tokens["token"])
    assert claims["sub"] == admin.id
    assert claims["role"] == "ADMIN"
    assert decode_token(tokens["refreshToken"])["type"] == "refresh"


def test_authenticate_rejects_wrong_password(author: User) -> None:
    with pytest.raises(Unauthenticated) as exc_info:
        authenticate(email="author@example.com", password="wrong-password")

    assert exc_info.value.message == "Invalid credentials"


@pytest.mark.parametrize("email", ["not-an-email", "  AUTHOR@example.com  x", 42])
def test_authenticate_answers_malformed_email_like_any_failed_login(author: User, email) -> None:
    with pytest.raises(Unauthenticated) as exc_info:
        authenticate(email=email, password="secret123")

    assert exc_info.value.message == "Invalid credentials"


def test_authenticate_trims_and_lowercases_email(author: User) -> None:
    user, _ = authenticate(email="  Author@Example.com ", password="secret123")

    assert user.id == author.id


def test_authenticate_rejects_disabled_user(author: User) -> None:
    author.is_active = False
    db.session.commit()

    with pytest.raises(Forbidden):
        authenticate(email="author@example.com", password="secret123")


def test_register_endpoint(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "new@example.com", "password": "secret123", "name": "New"},
    )

    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["user"]["email"] == "new@example.com"
    assert data["user"]["role"] == "EDITOR"
    assert "passwordHash" not in data["user"]
    assert data["token"]
    assert data["refreshToken"]


def test_login_then_me(client: FlaskClient, author: User) -> None:
    login = client.post(
        "/api/v1/auth/login",
        json={"email": "author@example.com", "password": "secret123"},
    )
    assert login.status_code == 200
    token = login.get_json()["data"]["token"]

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert me.status_code == 200
    assert me.get_json()["data"]["id"] == author.id


def test_login_with_bad_password_is_unauthenticated(client: FlaskClient, author: User) -> None:
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "author@example.com", "password": "nope-nope"},
    )

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "message": "Invalid credentials"}


def test_login_with_malformed_email_is_unauthenticated(client: FlaskClient, author: User) -> None:
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "not-an-email", "password": "secret123"},
    )

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "message": "Invalid credentials"}


def test_disabled_user_token_is_rejected(client: FlaskClient, author: User, auth_headers) -> None:
    author.is_active = False
    db.session.commit()

    response = client.get("/api/v1/auth/me", headers=auth_headers)

    assert response.status_code == 401

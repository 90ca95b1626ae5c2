from typing import Callable, Dict, Generator
import pytest
from flask import Flask
from flask.testing import FlaskClient
from flask_jwt_extended import create_access_token

from buzzinga import create_app
from buzzinga.extensions import db
from buzzinga.models.user import User
from buzzinga.application.auth import register_user


@pytest.fixture
def app(tmp_path) -> Generator[Flask, None, None]:
    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture
def make_user(app: Flask) -> Callable[..., User]:
    def _make_user(
        email: str = "author@example.com",
        password: str = "secret123",
        name: str = "Author One",
        role: str = "EDITOR",
    ) -> User:
        return register_user(email=email, password=password, name=name, role=role)

    return _make_user


@pytest.fixture
def author(make_user: Callable[..., User]) -> User:
    return make_user()


@pytest.fixture
def other_author(make_user: Callable[..., User]) -> User:
    return make_user(email="second@example.com", name="Author Two")


@pytest.fixture
def headers_for(app: Flask) -> Callable[[User], Dict[str, str]]:
    def _headers_for(user: User) -> Dict[str, str]:
        token = create_access_token(identity=user.id, additional_claims={"role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers_for


@pytest.fixture
def auth_headers(author: User, headers_for: Callable[[User], Dict[str, str]]) -> Dict[str, str]:
    return headers_for(author)

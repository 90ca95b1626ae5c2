import logging
from typing import Any, Dict, Optional, Tuple
from flask_jwt_extended import create_access_token, create_refresh_token
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from buzzinga.extensions import db
from buzzinga.models.user import ROLES, User
from buzzinga.domain.exceptions import Forbidden, Unauthenticated, ValidationError
from buzzinga.utils.transaction import transactional

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _normalize_email(email) -> str:
    if not isinstance(email, str) or "@" not in email:
        raise ValidationError("A valid email is required")
    return email.strip().lower()


def find_user_by_email(email: str) -> Optional[User]:
    return db.session.execute(
        select(User).where(func.lower(User.email) == email.lower())
    ).scalar_one_or_none()


def issue_tokens(user: User) -> Dict[str, str]:
    claims = {"role": user.role}
    return {
        "token": create_access_token(identity=user.id, additional_claims=claims),
        "refreshToken": create_refresh_token(identity=user.id, additional_claims=claims),
    }


def register_user(
    *,
    email: Any,
    password: Any,
    name: Optional[str] = None,
    role: str = "EDITOR",
) -> User:
    email = _normalize_email(email)

    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    if role not in ROLES:
        raise ValidationError(f"Invalid role: {role}")

    user = User()
    user.email = email
    user.name = name
    user.role = role
    user.set_password(password)

    try:
        with transactional():
            if find_user_by_email(email) is not None:
                raise ValidationError("User already exists")

            db.session.add(user)
            db.session.flush()

    except IntegrityError as exc:
        raise ValidationError("User already exists") from exc

    logger.info("User registered id=%s role=%s", user.id, role)
    return user


def authenticate(*, email: Any, password: Any) -> Tuple[User, Dict[str, str]]:
    if not email or not password:
        raise ValidationError("Email and password required")

    # No format check here: every failed login gets the same answer
    user = None
    if isinstance(email, str):
        user = find_user_by_email(email.strip().lower())

    if user is None or not isinstance(password, str) or not user.check_password(password):
        logger.warning("Failed login attempt")
        raise Unauthenticated("Invalid credentials")

    if not user.is_active:
        raise Forbidden("User account disabled")

    return user, issue_tokens(user)

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from buzzinga.extensions import db
from buzzinga.models.menu import Menu
from buzzinga.domain.exceptions import NotFound, Unauthenticated, ValidationError
from buzzinga.domain.invariants.slug import assert_slug_available, assert_slug_value
from buzzinga.utils.transaction import transactional
from .slugs import translate_slug_violation

logger = logging.getLogger(__name__)


def _assert_items(items) -> None:
    if not isinstance(items, list):
        raise ValidationError("Menu items must be a list")


def list_menus() -> List[Menu]:
    return list(
        db.session.execute(select(Menu).order_by(Menu.updated_at.desc())).scalars()
    )


def get_menu(*, menu_id: str) -> Menu:
    menu = db.session.get(Menu, menu_id)
    if menu is None:
        raise NotFound("menu")
    return menu


def create_menu(*, author_id: Optional[str], data: Dict[str, Any]) -> Menu:
    if not author_id:
        raise Unauthenticated()

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required")

    slug = assert_slug_value(data.get("slug"))
    items = data.get("items") or []
    _assert_items(items)

    menu = Menu()
    menu.author_id = author_id
    menu.name = name
    menu.slug = slug
    menu.location = data.get("location")
    menu.items = items

    try:
        with transactional():
            assert_slug_available(Menu, slug, resource="menu")
            db.session.add(menu)
            db.session.flush()

    except IntegrityError as exc:
        error = translate_slug_violation(exc, resource="menu", slug=slug)
        if error is None:
            raise
        raise error from exc

    logger.info("Menu created id=%s slug=%s", menu.id, slug)
    return menu


def update_menu(*, menu_id: str, data: Dict[str, Any]) -> Menu:
    menu = get_menu(menu_id=menu_id)

    slug = data.get("slug")
    if slug:
        assert_slug_value(slug)

    if data.get("items"):
        _assert_items(data["items"])

    try:
        with transactional():
            if slug and slug != menu.slug:
                assert_slug_available(Menu, slug, resource="menu", exclude_id=menu.id)

            for field in ("name", "slug", "items"):
                if data.get(field):
                    setattr(menu, field, data[field])

            if "location" in data:
                menu.location = data["location"]

            db.session.flush()

    except IntegrityError as exc:
        error = translate_slug_violation(exc, resource="menu", slug=slug)
        if error is None:
            raise
        raise error from exc

    except StaleDataError as exc:
        raise NotFound("menu") from exc

    logger.info("Menu updated id=%s", menu_id)
    return menu


def delete_menu(*, menu_id: str) -> None:
    with transactional():
        deleted = db.session.execute(delete(Menu).where(Menu.id == menu_id)).rowcount
        if not deleted:
            raise NotFound("menu")

    logger.info("Menu deleted id=%s", menu_id)

import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from buzzinga.extensions import db
from buzzinga.models.form import Form, FormResponse
from buzzinga.domain.exceptions import NotFound, Unauthenticated, ValidationError
from buzzinga.domain.invariants.slug import assert_slug_available, assert_slug_value
from buzzinga.utils.pagination import paginate_offset
from buzzinga.utils.transaction import transactional
from .slugs import translate_slug_violation

logger = logging.getLogger(__name__)


def _assert_shape(data: Dict[str, Any]) -> None:
    if data.get("fields") and not isinstance(data["fields"], list):
        raise ValidationError("Form fields must be a list")

    if data.get("settings") and not isinstance(data["settings"], dict):
        raise ValidationError("Form settings must be an object")


def _response_count():
    return (
        select(func.count(FormResponse.id))
        .where(FormResponse.form_id == Form.id)
        .correlate(Form)
        .scalar_subquery()
    )


def list_forms() -> List[Tuple[Form, int]]:
    rows = db.session.execute(
        select(Form, _response_count()).order_by(Form.updated_at.desc())
    ).all()
    return [(form, count) for form, count in rows]


def get_form(*, form_id: str) -> Form:
    form = db.session.get(Form, form_id)
    if form is None:
        raise NotFound("form")
    return form


def count_responses(*, form_id: str) -> int:
    return db.session.execute(
        select(func.count(FormResponse.id)).where(FormResponse.form_id == form_id)
    ).scalar_one()


def create_form(*, author_id: Optional[str], data: Dict[str, Any]) -> Form:
    if not author_id:
        raise Unauthenticated()

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required")

    slug = assert_slug_value(data.get("slug"))
    _assert_shape(data)

    form = Form()
    form.author_id = author_id
    form.name = name
    form.slug = slug
    form.description = data.get("description")
    form.fields = data.get("fields") or []
    form.settings = data.get("settings") or {}

    try:
        with transactional():
            assert_slug_available(Form, slug, resource="form")
            db.session.add(form)
            db.session.flush()

    except IntegrityError as exc:
        error = translate_slug_violation(exc, resource="form", slug=slug)
        if error is None:
            raise
        raise error from exc

    logger.info("Form created id=%s slug=%s", form.id, slug)
    return form


def update_form(*, form_id: str, data: Dict[str, Any]) -> Form:
    form = get_form(form_id=form_id)

    slug = data.get("slug")
    if slug:
        assert_slug_value(slug)
    _assert_shape(data)

    try:
        with transactional():
            if slug and slug != form.slug:
                assert_slug_available(Form, slug, resource="form", exclude_id=form.id)

            for field in ("name", "slug", "fields", "settings"):
                if data.get(field):
                    setattr(form, field, data[field])

            if "description" in data:
                form.description = data["description"]

            db.session.flush()

    except IntegrityError as exc:
        error = translate_slug_violation(exc, resource="form", slug=slug)
        if error is None:
            raise
        raise error from exc

    except StaleDataError as exc:
        raise NotFound("form") from exc

    logger.info("Form updated id=%s", form_id)
    return form


def delete_form(*, form_id: str) -> None:
    with transactional():
        db.session.execute(delete(FormResponse).where(FormResponse.form_id == form_id))
        deleted = db.session.execute(delete(Form).where(Form.id == form_id)).rowcount
        if not deleted:
            raise NotFound("form")

    logger.info("Form deleted id=%s", form_id)


def list_responses(*, form_id: str, limit: int, offset: int) -> Tuple[List[FormResponse], int]:
    get_form(form_id=form_id)

    stmt = (
        select(FormResponse)
        .where(FormResponse.form_id == form_id)
        .order_by(FormResponse.created_at.desc(), FormResponse.id.desc())
    )
    return paginate_offset(stmt, limit=limit, offset=offset)


def submit_response(
    *,
    form_id: str,
    data: Any,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> FormResponse:
    """Public submission; the body is stored as-is."""
    form = get_form(form_id=form_id)

    if not isinstance(data, dict):
        raise ValidationError("Response body must be a JSON object")

    response = FormResponse()
    response.form_id = form.id
    response.data = data
    response.ip_address = ip_address
    response.user_agent = user_agent[:512] if user_agent else None

    with transactional():
        db.session.add(response)
        db.session.flush()

    logger.info("Form response submitted form=%s response=%s", form_id, response.id)
    return response

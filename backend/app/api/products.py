import json

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import FORM_MEDIA_TYPES, body_media_type, is_json_media_type, require_role
from app.core.config import settings
from app.core.db import get_db
from app.core.errors import IdentifierOutOfRange, NormalizationError, NotFound, PersistenceFailure, StoreError
from app.core.logging import get_logger
from app.models.user import Role
from app.schemas.product import LIST_FIELDS, ProductDetail, ProductForm, ProductListItem
from app.services import catalog
from app.services.normalizer import (
    MAX_INTEGER,
    build_create_payload,
    build_update_payload,
    parse_identifier,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

require_editor = require_role(Role.EMPLOYEE)

# largest OFFSET the store accepts (signed 64-bit)
MAX_OFFSET = 2 ** 63 - 1


class BadPagination(StoreError):
    status_code = 400
    message = "Unable to find products"


def _parse_count(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw else default
    except ValueError:
        raise BadPagination()
    if not 1 <= value <= MAX_INTEGER:
        raise BadPagination()
    return value


def get_pagination_params(page: str | None, limit: str | None) -> tuple[int, int | None]:
    """
    Returns (limit, offset). The page only matters when the offset is applied;
    otherwise it is ignored entirely, as existing clients expect.
    """
    limit_num = _parse_count(limit, 10)
    if not settings.PAGINATION_APPLY_OFFSET:
        return limit_num, None
    offset = (_parse_count(page, 1) - 1) * limit_num
    if offset > MAX_OFFSET:
        raise BadPagination()
    return limit_num, offset


async def read_product_form(request: Request) -> ProductForm:
    """Accept the product fields as JSON or as (urlencoded / multipart) form data."""
    media_type = body_media_type(request)
    if is_json_media_type(media_type):
        try:
            data = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise NormalizationError("body", "is not valid JSON")
        if not isinstance(data, dict):
            raise NormalizationError("body", "must be an object")
    elif media_type in FORM_MEDIA_TYPES or not media_type:
        form = await request.form()
        data = {
            key: form.getlist(key) if key in LIST_FIELDS else form.get(key)
            for key in form.keys()
        }
    else:
        raise NormalizationError("body", "unsupported content type")

    try:
        return ProductForm.model_validate(data)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "body"
        raise NormalizationError(field, error["msg"])


@router.get("", response_model=list[ProductListItem])
def list_products(page: str | None = None, limit: str | None = None, db: Session = Depends(get_db)):
    limit_num, offset = get_pagination_params(page, limit)
    return catalog.list_products(db, limit=limit_num, offset=offset)


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(product_id: str, db: Session = Depends(get_db)):
    try:
        pid = parse_identifier(product_id)
    except IdentifierOutOfRange:
        # numeric but unstorable: no row can match it
        raise NotFound()
    product = catalog.get_product(db, pid)
    if not product:
        raise NotFound()
    return product


@router.post("/create", status_code=201, response_model=ProductDetail)
def create_product(
    _editor=Depends(require_editor),
    form: ProductForm = Depends(read_product_form),
    db: Session = Depends(get_db),
):
    payload = build_create_payload(form)
    try:
        return catalog.create_product(db, payload)
    except SQLAlchemyError:
        logger.exception("Internal Server Error. Product not Created")
        raise PersistenceFailure()


@router.post("/{product_id}", status_code=201, response_model=ProductDetail)
def update_product(
    product_id: str,
    _editor=Depends(require_editor),
    form: ProductForm = Depends(read_product_form),
    db: Session = Depends(get_db),
):
    pid = parse_identifier(product_id)
    payload = build_update_payload(form, pid)
    try:
        return catalog.update_product(db, pid, payload)
    except SQLAlchemyError:
        logger.exception("Unable to Modify product %s", pid)
        raise PersistenceFailure()


@router.delete("/{product_id}", response_model=ProductDetail)
def delete_product(
    product_id: str,
    _editor=Depends(require_editor),
    db: Session = Depends(get_db),
):
    pid = parse_identifier(product_id)
    # a missing row is not special-cased; the store error surfaces as a 500
    return catalog.delete_product(db, pid)

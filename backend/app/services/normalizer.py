"""
Turns loosely-typed product input into typed persistence payloads.

Create payloads require the full product; update payloads only carry the
fields the caller actually supplied, so relations and optional columns that
were left out are never touched.
"""
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from app.core.errors import IdentifierOutOfRange, InvalidIdentifier, NormalizationError
from app.models.product import PLACEHOLDER_IMAGE
from app.schemas.product import ProductCreate, ProductForm, ProductUpdate

CENTS = Decimal("0.01")

# bounds of the 32-bit INTEGER id columns
MIN_INTEGER = -(2 ** 31)
MAX_INTEGER = 2 ** 31 - 1


def parse_identifier(raw) -> int:
    """Numeric coercion of an id; integral values within the column range only."""
    if isinstance(raw, bool):
        raise InvalidIdentifier()
    if isinstance(raw, int):
        value = raw
    else:
        try:
            number = float(str(raw).strip())
        except (TypeError, ValueError):
            raise InvalidIdentifier()
        if not math.isfinite(number) or not number.is_integer():
            raise InvalidIdentifier()
        value = int(number)
    if not MIN_INTEGER <= value <= MAX_INTEGER:
        raise IdentifierOutOfRange()
    return value


def parse_checkbox(raw) -> bool:
    return raw == "on"


def parse_price(raw, field: str) -> Decimal:
    try:
        value = Decimal(str(raw).strip())
        if value.is_finite():
            return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        pass
    raise NormalizationError(field, "must be a decimal number")


def parse_package(raw: str) -> list[int]:
    sizes = []
    for token in raw.split(","):
        token = token.strip()
        try:
            sizes.append(int(token))
        except ValueError:
            raise NormalizationError("productPackage", f"contains a non-integer value {token!r}")
    return sizes


def _require(value, field: str):
    if value is None:
        raise NormalizationError(field, "is required")
    return value


def build_create_payload(form: ProductForm) -> ProductCreate:
    product_id = _require(form.product_id, "productID")
    try:
        product_id = parse_identifier(product_id)
    except InvalidIdentifier:
        raise NormalizationError("productID", "must be a number")

    return ProductCreate(
        id=product_id,
        title=_require(form.title, "productTitle"),
        in_stock=parse_checkbox(form.in_stock),
        unit_price=parse_price(_require(form.unit_price, "productUnitPrice"), "productUnitPrice"),
        case_price=parse_price(_require(form.case_price, "productCasePrice"), "productCasePrice"),
        package=parse_package(_require(form.package, "productPackage")),
        description=form.description,
        image=form.image_url or PLACEHOLDER_IMAGE,
        video_url=form.video_url,
        brand=_require(form.brand, "productBrand"),
        category=_require(form.category, "productCategory"),
        colors=form.colors,
        effects=form.effects,
    )


def build_update_payload(form: ProductForm, product_id: int) -> ProductUpdate:
    if form.product_id is not None:
        try:
            supplied = parse_identifier(form.product_id)
        except InvalidIdentifier:
            raise NormalizationError("productID", "must be a number")
        if supplied != product_id:
            raise NormalizationError("productID", "cannot change a product's id")

    # a missing unit price is written as zero; existing clients depend on it
    changes = {
        "in_stock": parse_checkbox(form.in_stock),
        "unit_price": parse_price(form.unit_price or "0", "productUnitPrice"),
    }
    if form.title is not None:
        changes["title"] = form.title
    if form.case_price is not None:
        changes["case_price"] = parse_price(form.case_price, "productCasePrice")
    if form.package is not None:
        changes["package"] = parse_package(form.package)
    if form.description is not None:
        changes["description"] = form.description
    if form.image_url is not None:
        changes["image"] = form.image_url
    if form.video_url is not None:
        changes["video_url"] = form.video_url
    if form.brand is not None:
        changes["brand"] = form.brand
    if form.category is not None:
        changes["category"] = form.category
    if form.colors:
        changes["colors"] = form.colors
    if form.effects:
        changes["effects"] = form.effects

    return ProductUpdate(**changes)

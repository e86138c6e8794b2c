from sqlalchemy.orm import Session, selectinload

from app.core.logging import get_logger
from app.models.product import Product
from app.models.reference import Brand, Category, Color, Effect
from app.schemas.product import ProductCreate, ProductDetail, ProductUpdate

logger = get_logger(__name__)

_EXPANDED = (
    selectinload(Product.brand),
    selectinload(Product.category),
    selectinload(Product.colors),
    selectinload(Product.effects),
)


def _by_name(db: Session, model, name: str):
    # raises NoResultFound for unknown names; callers report it as a persistence failure
    return db.query(model).filter_by(name=name).one()


def _connect_all(db: Session, model, names: list[str], current: list) -> None:
    linked = {row.name for row in current}
    for name in names:
        if name not in linked:
            current.append(_by_name(db, model, name))
            linked.add(name)


def list_products(db: Session, limit: int, offset: int | None = None) -> list[Product]:
    query = db.query(Product).options(*_EXPANDED).order_by(Product.id.asc())
    if offset:
        query = query.offset(offset)
    return query.limit(limit).all()


def get_product(db: Session, product_id: int) -> Product | None:
    return (
        db.query(Product)
        .options(*_EXPANDED)
        .filter_by(id=product_id)
        .first()
    )


def create_product(db: Session, data: ProductCreate) -> Product:
    try:
        product = Product(
            id=data.id,
            title=data.title,
            in_stock=data.in_stock,
            unit_price=data.unit_price,
            case_price=data.case_price,
            package=data.package,
            description=data.description,
            image=data.image,
            video_url=data.video_url,
            brand=_by_name(db, Brand, data.brand),
            category=_by_name(db, Category, data.category),
        )
        _connect_all(db, Color, data.colors, product.colors)
        _connect_all(db, Effect, data.effects, product.effects)
        db.add(product)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(product)
    logger.info("Created product %s", product.id)
    return product


def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
    changes = data.model_dump(exclude_unset=True)
    try:
        product = db.query(Product).filter_by(id=product_id).one()

        brand = changes.pop("brand", None)
        category = changes.pop("category", None)
        colors = changes.pop("colors", None)
        effects = changes.pop("effects", None)

        for field, value in changes.items():
            setattr(product, field, value)
        if brand is not None:
            product.brand = _by_name(db, Brand, brand)
        if category is not None:
            product.category = _by_name(db, Category, category)
        if colors:
            _connect_all(db, Color, colors, product.colors)
        if effects:
            _connect_all(db, Effect, effects, product.effects)

        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(product)
    logger.info("Updated product %s: %s", product_id, ", ".join(sorted(data.model_fields_set)))
    return product


def delete_product(db: Session, product_id: int) -> ProductDetail:
    """
    Delete without an existence pre-check; a missing row raises NoResultFound.
    Returns a snapshot of the row as it was before deletion.
    """
    product = (
        db.query(Product)
        .options(*_EXPANDED)
        .filter_by(id=product_id)
        .one()
    )
    snapshot = ProductDetail.model_validate(product)
    db.delete(product)
    db.commit()
    logger.info("Deleted product %s", product_id)
    return snapshot

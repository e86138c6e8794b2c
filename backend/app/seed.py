from decimal import Decimal

from sqlalchemy.orm import Session

from app.core.db import Base, engine, SessionLocal
import app.models  # noqa
from app.models.product import Product
from app.models.reference import Brand, Category, Color, Effect
from app.models.user import Role, User
from app.services.auth import hash_password

BRANDS = ["Dominator", "Brothers", "Winda", "Cutting Edge"]
CATEGORIES = ["500 Gram Cakes", "200 Gram Cakes", "Fountains", "Roman Candles", "Novelties"]
COLORS = ["Red", "Green", "Blue", "Gold", "Silver", "Purple", "White"]
EFFECTS = ["Crackle", "Strobe", "Peony", "Willow", "Palm", "Whistle", "Brocade"]

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-password"
MEMBER_EMAIL = "member@example.com"
MEMBER_PASSWORD = "member-password"


def reset_db(db: Session):
    # Drops & recreates all tables (development only)
    db.close()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def seed_reference_data(db: Session):
    db.add_all([Brand(name=n) for n in BRANDS])
    db.add_all([Category(name=n) for n in CATEGORIES])
    db.add_all([Color(name=n) for n in COLORS])
    db.add_all([Effect(name=n) for n in EFFECTS])
    db.flush()


def seed_users(db: Session):
    db.add_all([
        User(email=ADMIN_EMAIL, hashed_password=hash_password(ADMIN_PASSWORD), role=Role.ADMIN),
        User(email=MEMBER_EMAIL, hashed_password=hash_password(MEMBER_PASSWORD), role=Role.MEMBER),
    ])


def seed_products(db: Session):
    def one(model, name):
        return db.query(model).filter_by(name=name).one()

    def many(model, names):
        return [one(model, n) for n in names]

    products = [
        Product(
            id=101,
            title="Night Hawk",
            in_stock=True,
            unit_price=Decimal("49.99"),
            case_price=Decimal("180.00"),
            package=[4, 1],
            description="25 shot barrage of red and green peonies finishing in a crackling willow.",
            brand=one(Brand, "Dominator"),
            category=one(Category, "500 Gram Cakes"),
            colors=many(Color, ["Red", "Green"]),
            effects=many(Effect, ["Peony", "Crackle", "Willow"]),
        ),
        Product(
            id=102,
            title="Silver Storm",
            in_stock=True,
            unit_price=Decimal("24.50"),
            case_price=Decimal("88.00"),
            package=[6, 1],
            description="Strobing silver palms with a brocade crown.",
            brand=one(Brand, "Brothers"),
            category=one(Category, "200 Gram Cakes"),
            colors=many(Color, ["Silver", "White"]),
            effects=many(Effect, ["Strobe", "Palm", "Brocade"]),
        ),
        Product(
            id=103,
            title="Golden Fountain",
            in_stock=False,
            unit_price=Decimal("9.99"),
            case_price=Decimal("96.00"),
            package=[12, 1],
            description="Forty seconds of gold sparks and whistles.",
            video_url="https://example.com/videos/golden-fountain",
            brand=one(Brand, "Winda"),
            category=one(Category, "Fountains"),
            colors=many(Color, ["Gold"]),
            effects=many(Effect, ["Whistle"]),
        ),
        Product(
            id=104,
            title="Purple Reign",
            in_stock=True,
            unit_price=Decimal("14.75"),
            case_price=Decimal("140.00"),
            package=[12, 4],
            description="Ten ball roman candle of purple stars.",
            brand=one(Brand, "Cutting Edge"),
            category=one(Category, "Roman Candles"),
            colors=many(Color, ["Purple"]),
            effects=[],
        ),
    ]
    db.add_all(products)


def main():
    db = SessionLocal()
    try:
        reset_db(db)
        seed_reference_data(db)
        seed_users(db)
        seed_products(db)
        db.commit()

        print("Seed complete.")
        print("Try:")
        print("- GET /products?limit=2")
        print("- GET /products/101")
        print(f"- log in at /login as {ADMIN_EMAIL} / {ADMIN_PASSWORD}")
        print(f"- or as {MEMBER_EMAIL} / {MEMBER_PASSWORD}")
    finally:
        db.close()


if __name__ == "__main__":
    main()

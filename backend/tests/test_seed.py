from app.models import Brand, Color, Effect, Product, Role, User
from app.seed import ADMIN_EMAIL, ADMIN_PASSWORD, BRANDS, COLORS, EFFECTS, seed_products, seed_users
from app.services.auth import verify_password


def test_reference_tables_are_seeded(db):
    assert sorted(b.name for b in db.query(Brand)) == sorted(BRANDS)
    assert db.query(Color).count() == len(COLORS)
    assert db.query(Effect).count() == len(EFFECTS)


def test_seed_products_links_relations(db):
    seed_products(db)
    db.commit()

    products = db.query(Product).order_by(Product.id).all()
    assert [p.id for p in products] == [101, 102, 103, 104]
    assert products[0].brand.name == "Dominator"
    assert [c.name for c in products[1].colors] == ["Silver", "White"]
    assert products[3].effects == []


def test_seed_users_hash_passwords(db):
    seed_users(db)
    db.commit()

    admin = db.query(User).filter_by(email=ADMIN_EMAIL).one()
    assert admin.role == Role.ADMIN
    assert verify_password(ADMIN_PASSWORD, admin.hashed_password)
    assert db.query(User).filter_by(role=Role.MEMBER).count() == 1

from app.models.reference import Brand, Category, Color, Effect
from app.models.product import Product, product_colors, product_effects
from app.models.user import Role, User

__all__ = [
    "Brand",
    "Category",
    "Color",
    "Effect",
    "Product",
    "product_colors",
    "product_effects",
    "Role",
    "User",
]

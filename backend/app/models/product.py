from decimal import Decimal

from sqlalchemy import Column, ForeignKey, Integer, JSON, Numeric, Boolean, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.db import Base
from app.models.reference import Brand, Category, Color, Effect

PLACEHOLDER_IMAGE = "placeholder"

product_colors = Table(
    "product_colors",
    Base.metadata,
    Column("product_id", ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("color_id", ForeignKey("colors.id", ondelete="CASCADE"), primary_key=True),
)

product_effects = Table(
    "product_effects",
    Base.metadata,
    Column("product_id", ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("effect_id", ForeignKey("effects.id", ondelete="CASCADE"), primary_key=True),
)


class Product(Base):
    __tablename__ = "products"

    # ids are supplied by the catalog owner, never generated
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(200), index=True)
    in_stock: Mapped[bool] = mapped_column(Boolean, default=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    case_price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    package: Mapped[list[int]] = mapped_column(JSON, default=list)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str] = mapped_column(String(500), default=PLACEHOLDER_IMAGE)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    brand_id: Mapped[int] = mapped_column(ForeignKey("brands.id"), index=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), index=True)

    brand: Mapped[Brand] = relationship("Brand")
    category: Mapped[Category] = relationship("Category")
    colors: Mapped[list[Color]] = relationship(
        "Color", secondary=product_colors, order_by="Color.id"
    )
    effects: Mapped[list[Effect]] = relationship(
        "Effect", secondary=product_effects, order_by="Effect.id"
    )

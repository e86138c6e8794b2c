from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from app.models.product import PLACEHOLDER_IMAGE

LIST_FIELDS = ("productColors", "productEffects")


class ProductForm(BaseModel):
    """
    Raw product fields exactly as a form or JSON client sends them.
    Every scalar is either absent (None) or a non-blank string; blanks count as absent.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True, extra="ignore")

    product_id: str | None = Field(None, alias="productID")
    title: str | None = Field(None, alias="productTitle")
    in_stock: str | None = Field(None, alias="productInStock")
    category: str | None = Field(None, alias="productCategory")
    brand: str | None = Field(None, alias="productBrand")
    package: str | None = Field(None, alias="productPackage")
    case_price: str | None = Field(None, alias="productCasePrice")
    unit_price: str | None = Field(None, alias="productUnitPrice")
    description: str | None = Field(None, alias="productDescription")
    image_url: str | None = Field(None, alias="productImageURL")
    video_url: str | None = Field(None, alias="productVideoURL")
    colors: list[str] = Field(default_factory=list, alias="productColors")
    effects: list[str] = Field(default_factory=list, alias="productEffects")

    @field_validator("in_stock", mode="before")
    @classmethod
    def _checkbox_from_json(cls, value):
        if isinstance(value, bool):
            return "on" if value else None
        return value

    @field_validator("package", mode="before")
    @classmethod
    def _package_from_json(cls, value):
        if isinstance(value, (list, tuple)):
            return ",".join(str(v) for v in value)
        return value

    @field_validator(
        "product_id", "title", "category", "brand", "package", "case_price",
        "unit_price", "description", "image_url", "video_url",
        mode="after",
    )
    @classmethod
    def _blank_is_absent(cls, value: str | None):
        if value is None or not value.strip():
            return None
        return value

    @field_validator("colors", "effects", mode="before")
    @classmethod
    def _listify(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("colors", "effects", mode="after")
    @classmethod
    def _drop_blank_names(cls, value: list[str]):
        return [name for name in value if name.strip()]


class ProductCreate(BaseModel):
    id: int
    title: str
    in_stock: bool = False
    unit_price: Decimal
    case_price: Decimal
    package: list[int]
    description: str | None = None
    image: str = PLACEHOLDER_IMAGE
    video_url: str | None = None
    brand: str
    category: str
    colors: list[str] = []
    effects: list[str] = []


class ProductUpdate(BaseModel):
    """Partial update; only fields that were explicitly set are written."""

    title: str | None = None
    in_stock: bool | None = None
    unit_price: Decimal | None = None
    case_price: Decimal | None = None
    package: list[int] | None = None
    description: str | None = None
    image: str | None = None
    video_url: str | None = None
    brand: str | None = None
    category: str | None = None
    colors: list[str] | None = None
    effects: list[str] | None = None


class NameRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str


class NamedEntity(NameRef):
    id: int


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    in_stock: bool = Field(serialization_alias="inStock")
    unit_price: Decimal = Field(serialization_alias="unitPrice")
    case_price: Decimal = Field(serialization_alias="casePrice")
    package: list[int]
    description: str | None = None
    image: str
    video_url: str | None = Field(None, serialization_alias="videoURL")
    brand: NameRef
    category: NameRef

    @field_serializer("unit_price", "case_price")
    def _money(self, value: Decimal) -> str:
        return f"{value:.2f}"


class ProductListItem(ProductOut):
    colors: list[NameRef] = []
    effects: list[NameRef] = []


class ProductDetail(ProductOut):
    colors: list[NamedEntity] = []
    effects: list[NamedEntity] = []

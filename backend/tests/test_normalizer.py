from decimal import Decimal

import pytest

from app.core.errors import IdentifierOutOfRange, InvalidIdentifier, NormalizationError
from app.schemas.product import ProductForm
from app.services.normalizer import (
    MAX_INTEGER,
    MIN_INTEGER,
    build_create_payload,
    build_update_payload,
    parse_checkbox,
    parse_identifier,
    parse_package,
    parse_price,
)


def full_form(**overrides) -> ProductForm:
    data = {
        "productID": "501",
        "productTitle": "Blue Thunder",
        "productInStock": "on",
        "productCategory": "Fountains",
        "productBrand": "Winda",
        "productPackage": "12,1",
        "productCasePrice": "96",
        "productUnitPrice": "9.5",
        "productDescription": "Blue sparks",
        "productVideoURL": "https://example.com/v/1",
        "productColors": ["Blue"],
        "productEffects": ["Crackle", "Strobe"],
    }
    data.update(overrides)
    return ProductForm.model_validate(data)


@pytest.mark.parametrize("raw, expected", [("12", 12), (" 7 ", 7), ("7.0", 7), (42, 42)])
def test_parse_identifier_accepts_numbers(raw, expected):
    assert parse_identifier(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "1.5", "", "nan", "inf", "12abc", None, True])
def test_parse_identifier_rejects_non_numbers(raw):
    with pytest.raises(InvalidIdentifier):
        parse_identifier(raw)


@pytest.mark.parametrize("raw", [str(MAX_INTEGER), str(MIN_INTEGER), MAX_INTEGER])
def test_parse_identifier_accepts_column_bounds(raw):
    assert parse_identifier(raw) == int(raw)


@pytest.mark.parametrize("raw", ["100000000000000000000", str(MAX_INTEGER + 1), str(MIN_INTEGER - 1), "1e30", 2 ** 40])
def test_parse_identifier_flags_values_beyond_column_range(raw):
    with pytest.raises(IdentifierOutOfRange):
        parse_identifier(raw)


def test_create_payload_rejects_id_beyond_column_range():
    with pytest.raises(NormalizationError) as exc_info:
        build_create_payload(full_form(productID="100000000000000000000"))
    assert exc_info.value.field == "productID"



def test_checkbox_only_on_is_true():
    assert parse_checkbox("on") is True
    assert parse_checkbox("off") is False
    assert parse_checkbox("true") is False
    assert parse_checkbox(None) is False


@pytest.mark.parametrize("raw, expected", [
    ("5", "5.00"),
    ("5.1", "5.10"),
    ("2.345", "2.35"),
    ("2.344", "2.34"),
    (" 19.999 ", "20.00"),
])
def test_parse_price_has_two_decimals(raw, expected):
    value = parse_price(raw, "productUnitPrice")
    assert value == Decimal(expected)
    assert str(value) == expected


@pytest.mark.parametrize("raw", ["abc", "NaN", "Infinity", ""])
def test_parse_price_rejects_garbage(raw):
    with pytest.raises(NormalizationError) as exc:
        parse_price(raw, "productCasePrice")
    assert exc.value.field == "productCasePrice"


def test_parse_package_keeps_order():
    assert parse_package("4, 1,12") == [4, 1, 12]


@pytest.mark.parametrize("raw", ["4,x", "4,,1", "1.5"])
def test_parse_package_malformed_token(raw):
    with pytest.raises(NormalizationError) as exc:
        parse_package(raw)
    assert exc.value.field == "productPackage"


def test_form_treats_blank_as_absent_and_coerces_json_types():
    form = ProductForm.model_validate({
        "productID": 7,
        "productTitle": "  ",
        "productInStock": True,
        "productPackage": [6, 1],
        "productColors": "Red",
        "productEffects": None,
    })
    assert form.product_id == "7"
    assert form.title is None
    assert form.in_stock == "on"
    assert form.package == "6,1"
    assert form.colors == ["Red"]
    assert form.effects == []


def test_create_payload_is_fully_typed():
    payload = build_create_payload(full_form())

    assert payload.id == 501
    assert payload.in_stock is True
    assert payload.unit_price == Decimal("9.50")
    assert payload.case_price == Decimal("96.00")
    assert payload.package == [12, 1]
    assert payload.brand == "Winda"
    assert payload.category == "Fountains"
    assert payload.colors == ["Blue"]
    assert payload.effects == ["Crackle", "Strobe"]


def test_create_payload_defaults_image_to_placeholder():
    assert build_create_payload(full_form()).image == "placeholder"
    assert build_create_payload(full_form(productImageURL="https://img/1.png")).image == "https://img/1.png"


def test_create_payload_without_checkbox_is_out_of_stock():
    assert build_create_payload(full_form(productInStock=None)).in_stock is False


@pytest.mark.parametrize("field", [
    "productID", "productTitle", "productUnitPrice", "productCasePrice",
    "productPackage", "productBrand", "productCategory",
])
def test_create_payload_required_fields(field):
    with pytest.raises(NormalizationError) as exc:
        build_create_payload(full_form(**{field: None}))
    assert exc.value.field == field


def test_create_payload_non_numeric_product_id():
    with pytest.raises(NormalizationError) as exc:
        build_create_payload(full_form(productID="abc"))
    assert exc.value.field == "productID"


def test_update_payload_only_carries_supplied_fields():
    form = ProductForm.model_validate({"productTitle": "Renamed", "productColors": []})
    payload = build_update_payload(form, 501)
    changes = payload.model_dump(exclude_unset=True)

    assert changes == {
        "title": "Renamed",
        "in_stock": False,
        "unit_price": Decimal("0.00"),
    }


def test_update_payload_missing_unit_price_defaults_to_zero():
    payload = build_update_payload(ProductForm(), 501)
    assert payload.unit_price == Decimal("0.00")


def test_update_payload_connects_named_relations():
    payload = build_update_payload(full_form(), 501)
    assert payload.brand == "Winda"
    assert payload.category == "Fountains"
    assert payload.colors == ["Blue"]
    assert payload.case_price == Decimal("96.00")


def test_update_payload_refuses_id_change():
    with pytest.raises(NormalizationError) as exc:
        build_update_payload(full_form(productID="999"), 501)
    assert exc.value.field == "productID"

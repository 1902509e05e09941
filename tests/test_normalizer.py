# tests/test_normalizer.py
import pytest

from bazar.models import Product
from bazar.normalizer import normalize


RAW_SHAPES = [
    {},
    {"id": "1", "name": "Shirt", "price": 20, "stock": 5},
    {"id": 7, "title": "Backpack", "price": 109.95, "category": "bags", "rating": {"rate": 3.9, "count": 120}},
    {"_id": "abc", "name": "", "title": "Mug", "quantity": "4", "category": {"_id": "c9", "name": "Kitchen"}},
    {"id": "2", "name": "Hat", "images": "not-a-list", "oldPrice": "12.5", "isNew": 1},
    {"name": "Scarf", "title": None, "price": "cheap", "images": ("a.jpg", "b.jpg"), "createdAt": "2026-01-01"},
]


def test_name_falls_back_to_title_and_title_to_name():
    assert normalize({"title": "Backpack"}).name == "Backpack"
    assert normalize({"name": "", "title": "Mug"}).name == "Mug"
    assert normalize({"name": "Hat"}).title == "Hat"
    p = normalize({"name": "Hat", "title": "Hat | SEO"})
    assert (p.name, p.title) == ("Hat", "Hat | SEO")


def test_stock_prefers_stock_then_quantity_then_zero():
    assert normalize({"stock": 3, "quantity": 9}).stock == 3
    assert normalize({"quantity": 9}).stock == 9
    assert normalize({}).stock == 0


def test_category_reference():
    assert normalize({"categoryId": "c1", "category": {"id": "c2"}}).category_id == "c1"
    assert normalize({"category": {"id": 5, "name": "Shoes"}}).category_id == "5"
    assert normalize({"category": {"_id": "m1"}}).category_id == "m1"
    p = normalize({"category": "bags"})
    assert p.category_id == ""
    # a plain category name still passes through for display
    assert p.to_wire()["category"] == "bags"


def test_images_must_be_a_sequence():
    assert normalize({"images": ["a", "b"]}).images == ["a", "b"]
    assert normalize({"images": "a"}).images == []
    assert normalize({}).images == []


def test_ids_are_strings_and_legacy_id_is_accepted():
    assert normalize({"id": 3}).id == "3"
    p = normalize({"_id": "1712000000000"})
    assert p.id == "1712000000000"
    assert "_id" not in p.to_wire()


def test_unknown_fields_pass_through():
    p = normalize({"id": "1", "name": "x", "rating": {"rate": 4.5}, "sku": "X-1"})
    wire = p.to_wire()
    assert wire["rating"] == {"rate": 4.5}
    assert wire["sku"] == "X-1"


def test_old_price_is_not_checked_against_price():
    p = normalize({"name": "x", "price": 30, "oldPrice": 10})
    assert p.old_price == 10
    assert p.price == 30


def test_bad_numbers_do_not_raise():
    p = normalize({"price": "cheap", "stock": "lots", "oldPrice": "n/a"})
    assert p.price == 0
    assert p.stock == 0
    assert p.old_price is None


@pytest.mark.parametrize("raw", RAW_SHAPES)
def test_name_present_when_any_source_present(raw):
    p = normalize(raw)
    if raw.get("name") or raw.get("title"):
        assert p.name


@pytest.mark.parametrize("raw", RAW_SHAPES)
def test_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once
    assert normalize(once.to_wire()) == once


def test_returns_product():
    assert isinstance(normalize({"name": "x"}), Product)


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), "Infinity", "NaN", 10 ** 400])
def test_non_finite_numbers_fall_back(value):
    p = normalize({"name": "x", "price": value, "stock": value, "oldPrice": value})
    assert p.price == 0
    assert p.stock == 0
    assert p.old_price is None
    assert normalize({"name": "x", "quantity": value}).stock == 0


def test_negative_numbers_are_clamped():
    p = normalize({"name": "x", "price": -5, "stock": -3})
    assert p.price == 0
    assert p.stock == 0
    assert normalize({"quantity": "-7"}).stock == 0
    assert normalize(p) == p

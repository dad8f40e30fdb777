"""Application tests for catalogue listing, search and the combo seed picker."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalogue.browsing import (
    combo_by_slug,
    eligible_seeds,
    featured_products,
    list_categories,
    list_products,
    product_by_slug,
)


@pytest.fixture()
def catalogue(make_category, make_product):
    autos = make_category(name="Automáticas", slug="automaticas")
    make_category(name="Feminizadas", slug="feminizadas")
    make_product(name="Northern Lights Auto", price=120.0, category_id=autos, description="Clássica indica")
    make_product(name="Amnesia Auto", price=90.0, category_id=autos, is_promo=True, original_price=110.0)
    make_product(name="Zkittlez", price=150.0, is_new=True, display_order=1)
    make_product(
        name="Combo Autos",
        price=200.0,
        is_combo=True,
        combo_seed_type="automaticas",
    )


class TestListing:
    def test_by_category(self, catalogue):
        names = {p.name for p in list_products(category_slug="automaticas")}
        assert names == {"Northern Lights Auto", "Amnesia Auto"}

    def test_unknown_category_is_empty(self, catalogue):
        assert list_products(category_slug="nao-existe") == []

    def test_search_matches_name_and_description(self, catalogue):
        assert [p.name for p in list_products(search="AMNESIA")] == ["Amnesia Auto"]
        assert [p.name for p in list_products(search="indica")] == ["Northern Lights Auto"]

    def test_sort_by_price(self, catalogue):
        prices = [p.price for p in list_products(sort="price-asc")]
        assert prices == sorted(prices)
        prices = [p.price for p in list_products(sort="price-desc")]
        assert prices == sorted(prices, reverse=True)

    def test_sort_by_name(self, catalogue):
        assert [p.name for p in list_products(sort="name")][0] == "Amnesia Auto"

    def test_invalid_sort(self, catalogue):
        with pytest.raises(ValidationError):
            list_products(sort="popularity")

    def test_featured(self, catalogue):
        assert [p.name for p in featured_products()] == ["Amnesia Auto", "Zkittlez"]

    def test_categories_by_name(self, catalogue):
        assert [c.name for c in list_categories()] == ["Automáticas", "Feminizadas"]


class TestLookup:
    def test_product_by_slug(self, catalogue):
        assert product_by_slug("zkittlez").name == "Zkittlez"

    def test_unknown_slug(self, catalogue):
        with pytest.raises(ObjectNotFoundError):
            product_by_slug("nao-existe")

    def test_combo_by_slug_rejects_regular_products(self, catalogue):
        with pytest.raises(ObjectNotFoundError):
            combo_by_slug("zkittlez")

    def test_eligible_seeds(self, catalogue):
        combo = combo_by_slug("combo-autos")
        assert [p.name for p in eligible_seeds(combo)] == ["Amnesia Auto", "Northern Lights Auto"]

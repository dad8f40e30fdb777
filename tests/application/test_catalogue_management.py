"""Application tests for category, product and about-page management."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalogue.about.about import UpdateAboutContent, current_about
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import DeleteCategory, UpdateCategory
from storefront.catalogue.product.management import DeleteProduct, UpdateProduct
from storefront.catalogue.product.product import Product


def _product(product_id):
    return current_domain.repository_for(Product).get(product_id)


class TestCategoryManagement:
    def test_create_derives_slug_from_name(self, make_category):
        category_id = make_category(name="Auto Florescentes")
        category = current_domain.repository_for(Category).get(category_id)
        assert category.slug == "auto-florescentes"

    def test_duplicate_slug_rejected(self, make_category):
        make_category(name="Automáticas", slug="automaticas")
        with pytest.raises(ValidationError) as exc:
            make_category(name="Outra", slug="automaticas")
        assert "slug" in exc.value.messages

    def test_update_keeps_unspecified_fields(self, make_category):
        category_id = make_category(name="Automáticas", description="Ciclo curto")
        current_domain.process(UpdateCategory(category_id=category_id, name="Autos"), asynchronous=False)

        category = current_domain.repository_for(Category).get(category_id)
        assert category.name == "Autos"
        assert category.description == "Ciclo curto"

    def test_update_to_taken_slug_rejected(self, make_category):
        make_category(name="Automáticas")
        other = make_category(name="Feminizadas")
        with pytest.raises(ValidationError):
            current_domain.process(UpdateCategory(category_id=other, slug="automaticas"), asynchronous=False)

    def test_delete_detaches_products(self, make_category, make_product):
        category_id = make_category()
        product_id = make_product(category_id=category_id)

        current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Category).get(category_id)
        assert _product(product_id).category_id is None


class TestProductManagement:
    def test_create_with_unknown_category(self, make_product):
        with pytest.raises(ObjectNotFoundError):
            make_product(category_id="missing-category")

    def test_duplicate_slug_rejected(self, make_product):
        make_product(name="Gorilla Glue Auto")
        with pytest.raises(ValidationError) as exc:
            make_product(name="Gorilla Glue Auto")
        assert "slug" in exc.value.messages

    def test_partial_update_leaves_other_fields(self, make_product):
        product_id = make_product(price=100.0, stock=10)
        current_domain.process(
            UpdateProduct(product_id=product_id, changes=json.dumps({"stock": 4})),
            asynchronous=False,
        )

        product = _product(product_id)
        assert product.stock == 4
        assert product.price == 100.0

    def test_update_with_null_clears_field(self, make_product):
        product_id = make_product(price=80.0, original_price=100.0)
        current_domain.process(
            UpdateProduct(product_id=product_id, changes=json.dumps({"original_price": None})),
            asynchronous=False,
        )
        assert _product(product_id).original_price is None
        assert _product(product_id).has_discount is False

    def test_update_rejects_unknown_fields(self, make_product):
        product_id = make_product()
        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                UpdateProduct(product_id=product_id, changes=json.dumps({"colour": "green"})),
                asynchronous=False,
            )
        assert "changes" in exc.value.messages

    def test_update_rejects_malformed_changes(self, make_product):
        product_id = make_product()
        with pytest.raises(ValidationError):
            current_domain.process(UpdateProduct(product_id=product_id, changes="[1, 2]"), asynchronous=False)

    def test_delete(self, make_product):
        product_id = make_product()
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            _product(product_id)


class TestAboutContent:
    def test_first_write_creates_record(self):
        current_domain.process(UpdateAboutContent(content="Bancos de sementes desde 2015"), asynchronous=False)

        about = current_about()
        assert about.title == "Sobre nós"
        assert about.content == "Bancos de sementes desde 2015"

    def test_later_writes_update_single_record(self):
        first_id = current_domain.process(UpdateAboutContent(title="Quem somos"), asynchronous=False)
        second_id = current_domain.process(UpdateAboutContent(mission="Qualidade"), asynchronous=False)

        assert first_id == second_id
        about = current_about()
        assert about.title == "Quem somos"
        assert about.mission == "Qualidade"

    def test_nothing_before_first_write(self):
        assert current_about() is None

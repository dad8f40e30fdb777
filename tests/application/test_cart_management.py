"""Application tests for cart commands, including combo seed selection."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalogue.product.management import UpdateProduct
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.management import (
    AddComboToCart,
    AddToCart,
    ClearCart,
    RemoveFromCart,
    UpdateCartQuantity,
)

SESSION = "sess-cart-001"


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _cart():
    return current_domain.repository_for(ShoppingCart).find_by_session(SESSION)


class TestAddToCart:
    def test_first_add_starts_cart_with_snapshot(self, make_product):
        product_id = make_product(name="Gorilla Glue Auto", price=100.0, stock=10)

        assert _process(AddToCart(session_id=SESSION, product_id=product_id, quantity=2)) == 2

        item = _cart().items[0]
        assert item.product_name == "Gorilla Glue Auto"
        assert item.unit_price == 100.0
        assert item.image == "https://cdn.example.com/gorilla-glue-auto.jpg"

    def test_repeat_add_merges_and_clips_to_stock(self, make_product):
        product_id = make_product(stock=5)
        _process(AddToCart(session_id=SESSION, product_id=product_id, quantity=3))
        assert _process(AddToCart(session_id=SESSION, product_id=product_id, quantity=4)) == 5
        assert len(_cart().items) == 1

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _process(AddToCart(session_id=SESSION, product_id="missing", quantity=1))

    def test_out_of_stock_product(self, make_product):
        product_id = make_product(stock=0)
        with pytest.raises(ValidationError):
            _process(AddToCart(session_id=SESSION, product_id=product_id, quantity=1))

    def test_sessions_have_separate_carts(self, make_product):
        product_id = make_product()
        _process(AddToCart(session_id=SESSION, product_id=product_id, quantity=1))
        _process(AddToCart(session_id="sess-cart-002", product_id=product_id, quantity=2))

        assert _cart().item_count == 1
        other = current_domain.repository_for(ShoppingCart).find_by_session("sess-cart-002")
        assert other.item_count == 2


class TestChangingTheCart:
    def test_update_quantity(self, make_product):
        product_id = make_product(stock=10)
        _process(AddToCart(session_id=SESSION, product_id=product_id, quantity=1))
        assert _process(UpdateCartQuantity(session_id=SESSION, product_id=product_id, quantity=6)) == 6

    def test_update_clips_to_current_stock(self, make_product):
        product_id = make_product(stock=10)
        _process(AddToCart(session_id=SESSION, product_id=product_id, quantity=1))
        _process(UpdateProduct(product_id=product_id, changes=json.dumps({"stock": 2})))

        assert _process(UpdateCartQuantity(session_id=SESSION, product_id=product_id, quantity=5)) == 2
        assert _cart().items[0].stock == 2

    def test_update_rejected_once_sold_out(self, make_product):
        product_id = make_product(stock=10)
        _process(AddToCart(session_id=SESSION, product_id=product_id, quantity=1))
        _process(UpdateProduct(product_id=product_id, changes=json.dumps({"stock": 0})))

        with pytest.raises(ValidationError) as exc:
            _process(UpdateCartQuantity(session_id=SESSION, product_id=product_id, quantity=3))

        assert "product_id" in exc.value.messages
        assert _cart().items[0].quantity == 1

    def test_zero_quantity_removes_item(self, make_product):
        product_id = make_product()
        _process(AddToCart(session_id=SESSION, product_id=product_id, quantity=1))
        _process(UpdateCartQuantity(session_id=SESSION, product_id=product_id, quantity=0))
        assert _cart().is_empty

    def test_update_on_unknown_session(self, make_product):
        with pytest.raises(ValidationError):
            _process(UpdateCartQuantity(session_id="nobody", product_id=make_product(), quantity=1))

    def test_remove(self, make_product):
        keep = make_product(name="Keep")
        drop = make_product(name="Drop")
        _process(AddToCart(session_id=SESSION, product_id=keep, quantity=1))
        _process(AddToCart(session_id=SESSION, product_id=drop, quantity=1))

        _process(RemoveFromCart(session_id=SESSION, product_id=drop))

        assert [item.product_name for item in _cart().items] == ["Keep"]

    def test_clear(self, make_product):
        _process(AddToCart(session_id=SESSION, product_id=make_product(), quantity=2))
        _process(ClearCart(session_id=SESSION))
        assert _cart().is_empty

    def test_clear_without_cart_is_a_no_op(self):
        _process(ClearCart(session_id="never-used"))
        assert current_domain.repository_for(ShoppingCart).find_by_session("never-used") is None


@pytest.fixture()
def combo_setup(make_category, make_product):
    category_id = make_category(name="Automáticas", slug="automaticas")
    seeds = [
        make_product(name=name, price=40.0, stock=5, category_id=category_id)
        for name in ("Amnesia Auto", "Blueberry Auto", "Critical Auto", "Dark Devil Auto")
    ]
    sold_out = make_product(name="Sold Out Auto", price=40.0, stock=0, category_id=category_id)
    combo = make_product(
        name="Combo 3 Autos",
        price=99.0,
        stock=5,
        is_combo=True,
        combo_seed_type="automaticas",
        combo_quantity=3,
    )
    return {"combo": combo, "seeds": seeds, "sold_out": sold_out}


class TestAddComboToCart:
    def test_valid_pick_adds_combo_with_note(self, combo_setup):
        picked = combo_setup["seeds"][:3]
        _process(AddComboToCart(session_id=SESSION, combo_id=combo_setup["combo"], seed_ids=json.dumps(picked)))

        item = _cart().items[0]
        assert item.product_name == "Combo 3 Autos"
        assert item.quantity == 1
        assert item.selection_note == "Sementes selecionadas: Amnesia Auto, Blueberry Auto, Critical Auto"

    def test_wrong_count_rejected(self, combo_setup):
        with pytest.raises(ValidationError) as exc:
            _process(
                AddComboToCart(
                    session_id=SESSION,
                    combo_id=combo_setup["combo"],
                    seed_ids=json.dumps(combo_setup["seeds"][:2]),
                )
            )
        assert "seed_ids" in exc.value.messages

    def test_duplicate_seed_rejected(self, combo_setup):
        first = combo_setup["seeds"][0]
        with pytest.raises(ValidationError):
            _process(
                AddComboToCart(
                    session_id=SESSION,
                    combo_id=combo_setup["combo"],
                    seed_ids=json.dumps([first, first, combo_setup["seeds"][1]]),
                )
            )

    def test_out_of_stock_seed_rejected(self, combo_setup):
        picked = combo_setup["seeds"][:2] + [combo_setup["sold_out"]]
        with pytest.raises(ValidationError):
            _process(AddComboToCart(session_id=SESSION, combo_id=combo_setup["combo"], seed_ids=json.dumps(picked)))

    def test_regular_product_is_not_a_combo(self, combo_setup):
        with pytest.raises(ValidationError) as exc:
            _process(
                AddComboToCart(
                    session_id=SESSION,
                    combo_id=combo_setup["seeds"][0],
                    seed_ids=json.dumps(combo_setup["seeds"][1:]),
                )
            )
        assert "product_id" in exc.value.messages

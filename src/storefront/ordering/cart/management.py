"""Cart management: commands and handler.

Carts are addressed by the client session id; the first command for a session
starts its cart.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.combo import select_seeds, selection_note


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    session_id = String(required=True, max_length=255)


@storefront.command(part_of="ShoppingCart")
class AddComboToCart:
    session_id = String(required=True, max_length=255)
    combo_id = Identifier(required=True)
    seed_ids = Text(required=True)  # JSON array of product ids


def _existing_cart(repo, session_id):
    cart = repo.find_by_session(session_id)
    if cart is None:
        raise ValidationError({"product_id": ["Item not found in cart"]})
    return cart


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)
        quantity = cart.add_item(
            product_id=str(product.id),
            name=product.name,
            price=product.price,
            stock=product.stock,
            quantity=command.quantity,
            image=product.primary_image,
        )
        repo.add(cart)
        return quantity

    @handle(AddComboToCart)
    def add_combo_to_cart(self, command):
        try:
            seed_ids = json.loads(command.seed_ids)
        except json.JSONDecodeError:
            raise ValidationError({"seed_ids": ["Seed ids must be a JSON array"]}) from None
        if not isinstance(seed_ids, list):
            raise ValidationError({"seed_ids": ["Seed ids must be a JSON array"]})

        combo = current_domain.repository_for(Product).get(command.combo_id)
        seeds = select_seeds(combo, seed_ids)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)
        quantity = cart.add_item(
            product_id=str(combo.id),
            name=combo.name,
            price=combo.price,
            stock=combo.stock,
            quantity=1,
            image=combo.primary_image,
            selection_note=selection_note(seeds),
        )
        repo.add(cart)
        return quantity

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _existing_cart(repo, command.session_id)
        stock = None
        if command.quantity > 0 and cart.find_item(command.product_id) is not None:
            stock = current_domain.repository_for(Product).get(command.product_id).stock
        quantity = cart.update_quantity(command.product_id, command.quantity, stock=stock)
        repo.add(cart)
        return quantity

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _existing_cart(repo, command.session_id)
        cart.remove_item(command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_by_session(command.session_id)
        if cart is None or cart.is_empty:
            return
        cart.clear()
        repo.add(cart)

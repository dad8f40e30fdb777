"""Seed selection rules for combo products."""

from protean.exceptions import ValidationError

from storefront.catalogue.browsing import eligible_seeds
from storefront.catalogue.product.product import Product

SELECTION_PREFIX = "Sementes selecionadas: "


def select_seeds(combo: Product, seed_ids: list[str]) -> list[Product]:
    """Validate a customer's seed pick for ``combo`` and return the chosen seeds.

    The pick must contain exactly ``combo_quantity`` distinct products, all of
    them eligible for the combo.
    """
    if not combo.is_combo:
        raise ValidationError({"product_id": [f"'{combo.name}' is not a combo"]})

    required = combo.combo_quantity
    distinct = list(dict.fromkeys(str(seed_id) for seed_id in seed_ids))
    if len(distinct) != len(seed_ids):
        raise ValidationError({"seed_ids": ["Each seed can only be selected once"]})
    if len(distinct) != required:
        raise ValidationError({"seed_ids": [f"Select exactly {required} seeds for this combo"]})

    eligible = {str(seed.id): seed for seed in eligible_seeds(combo)}
    unavailable = [seed_id for seed_id in distinct if seed_id not in eligible]
    if unavailable:
        raise ValidationError({"seed_ids": [f"Seeds not available for this combo: {', '.join(unavailable)}"]})

    return [eligible[seed_id] for seed_id in distinct]


def selection_note(seeds: list[Product]) -> str:
    return SELECTION_PREFIX + ", ".join(seed.name for seed in seeds)

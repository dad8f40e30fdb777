"""URL-safe slugs for products and categories."""

import re
import unicodedata

from protean.exceptions import ValidationError

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(value: str) -> str:
    """Lowercase, strip accents and collapse everything else into single hyphens.

    >>> slugify("Combo Automáticas 3x")
    'combo-automaticas-3x'
    """
    normalized = unicodedata.normalize("NFD", value.lower())
    ascii_only = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]+", "-", ascii_only).strip("-")


def check_slug(slug: str | None, field: str = "slug") -> None:
    """Raise a field-scoped ValidationError when ``slug`` is not URL-safe."""
    if not slug:
        return
    if not _SLUG_PATTERN.match(slug):
        raise ValidationError(
            {field: ["Slug must contain only lowercase alphanumeric characters separated by single hyphens"]}
        )

"""Storefront: catalogue, cart, checkout and back-office for an online seed shop."""

__version__ = "0.1.0"

"""Storefront: catalogue, carts, orders and the checkout/payment lifecycle."""

"""Storefront API package."""

from storefront.api.errors import register_storefront_exception_handlers
from storefront.api.routes import (
    address_router,
    admin_router,
    cart_router,
    gateway_router,
    order_router,
    product_router,
    review_router,
)

routers = [
    cart_router,
    order_router,
    admin_router,
    product_router,
    address_router,
    review_router,
    gateway_router,
]

__all__ = ["register_storefront_exception_handlers", "routers"]

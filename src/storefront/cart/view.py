"""Read side of the cart: lines joined to the live catalogue.

Reading never modifies the cart. Lines whose product has gone are left
out of the result and stay in storage until the cart is reconciled.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product


def get_cart(user_id) -> dict:
    cart = current_domain.repository_for(ShoppingCart).get_for_user(user_id)
    products = current_domain.repository_for(Product)

    items = []
    for item in cart.items:
        try:
            product = products.get(item.product_id)
        except ObjectNotFoundError:
            continue
        items.append(
            {
                "product_id": str(product.id),
                "title": product.title,
                "image": product.image,
                "price": product.price,
                "sale_price": product.sale_price,
                "quantity": item.quantity,
            }
        )

    return {
        "cart_id": str(cart.id),
        "user_id": str(cart.user_id),
        "items": items,
        "updated_at": cart.updated_at.isoformat() if cart.updated_at else None,
    }

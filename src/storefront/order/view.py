"""Read side of orders, shaped for the REST API."""

from protean.utils.globals import current_domain

from storefront.order.order import Order


def order_to_dict(order: Order) -> dict:
    address = order.address
    return {
        "order_id": str(order.id),
        "user_id": str(order.user_id),
        "cart_id": str(order.cart_id) if order.cart_id else None,
        "items": [
            {
                "product_id": str(item.product_id),
                "title": item.title,
                "image": item.image,
                "price": item.price,
                "sale_price": item.sale_price,
                "quantity": item.quantity,
            }
            for item in order.items
        ],
        "address": {
            "address_id": str(address.address_id) if address.address_id else None,
            "address": address.address,
            "city": address.city,
            "pincode": address.pincode,
            "phone": address.phone,
            "notes": address.notes,
        }
        if address
        else None,
        "payment_method": order.payment_method,
        "total_amount": order.total_amount,
        "currency": order.currency,
        "settlement_amount": order.settlement_amount,
        "settlement_currency": order.settlement_currency,
        "order_status": order.order_status,
        "payment_status": order.payment_status,
        "payment_id": order.payment_id,
        "payer_id": order.payer_id,
        "order_date": order.order_date.isoformat() if order.order_date else None,
        "order_update_date": order.order_update_date.isoformat() if order.order_update_date else None,
    }


def list_orders(user_id) -> list[dict]:
    return [order_to_dict(o) for o in current_domain.repository_for(Order).for_user(user_id)]


def list_all_orders() -> list[dict]:
    return [order_to_dict(o) for o in current_domain.repository_for(Order).everything()]


def order_details(order_id) -> dict:
    return order_to_dict(current_domain.repository_for(Order).get(order_id))

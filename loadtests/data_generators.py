"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the Storefront API's Pydantic request
schemas and stay within their bounds (non-negative prices, quantity >= 1,
rating 1..5).
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")


def shopper_id() -> str:
    """Shopper ids are opaque strings owned by the identity provider."""
    return f"user-lt-{uuid.uuid4().hex[:8]}"


# ---------- Catalogue ----------


def product_data(stock: int | None = None) -> dict:
    price = round(random.uniform(99, 4999), 2)
    on_sale = random.random() < 0.3
    return {
        "title": fake.catch_phrase()[:100],
        "description": fake.paragraph(nb_sentences=2),
        "category": random.choice(["men", "women", "kids", "accessories", "footwear"]),
        "need": random.choice(["casual", "festive", "office", "party", "sports"]),
        "brand": fake.company()[:50],
        "image": fake.image_url(),
        "price": price,
        "sale_price": round(price * random.uniform(0.6, 0.9), 2) if on_sale else 0.0,
        "total_stock": stock if stock is not None else random.randint(50, 500),
    }


# ---------- Cart ----------


def cart_item_data(user_id: str, product_id: str) -> dict:
    return {
        "user_id": user_id,
        "product_id": product_id,
        "quantity": random.randint(1, 3),
    }


# ---------- Addresses ----------


def address_data(user_id: str) -> dict:
    return {
        "user_id": user_id,
        "address": fake.street_address()[:200],
        "city": fake.city()[:100],
        "pincode": fake.postcode(),
        "phone": fake.msisdn()[:10],
        "notes": random.choice([None, "Leave at the door", "Call before delivery"]),
    }


# ---------- Orders ----------


def order_data(user_id: str, cart: dict, address: dict) -> dict:
    """Build the /order/create body from a fetched cart and a saved address."""
    return {
        "user_id": user_id,
        "cart_id": cart["cart_id"],
        "cart_items": [
            {
                "product_id": item["product_id"],
                "title": item["title"],
                "image": item.get("image"),
                "price": item["price"],
                "sale_price": item["sale_price"],
                "quantity": item["quantity"],
            }
            for item in cart["items"]
        ],
        "address_info": {
            "address_id": address.get("address_id"),
            "address": address["address"],
            "city": address["city"],
            "pincode": address["pincode"],
            "phone": address["phone"],
            "notes": address.get("notes"),
        },
        "payment_method": "paypal",
    }


def capture_data(order_id: str) -> dict:
    """Values the payer's browser would bring back from the approval redirect."""
    return {
        "order_id": order_id,
        "payment_id": f"PAYID-LT-{uuid.uuid4().hex[:12].upper()}",
        "payer_id": f"PAYER-{uuid.uuid4().hex[:10].upper()}",
    }


# ---------- Reviews ----------


def review_data(user_id: str, product_id: str) -> dict:
    return {
        "product_id": product_id,
        "user_id": user_id,
        "user_name": fake.name()[:100],
        "message": fake.sentence(nb_words=12),
        "rating": random.randint(1, 5),
    }

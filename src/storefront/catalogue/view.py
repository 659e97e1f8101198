"""Read side of the catalogue: a single product, filtered listings and keyword search."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.catalogue.product import Product

DEFAULT_SORT = "price-lowtohigh"

_SORT_ORDERS = {
    "price-lowtohigh": "price",
    "price-hightolow": "-price",
    "title-atoz": "title",
    "title-ztoa": "-title",
}

_SEARCHABLE_FIELDS = ("title", "description", "category", "need")


def product_to_dict(product: Product) -> dict:
    return {
        "product_id": str(product.id),
        "title": product.title,
        "description": product.description,
        "category": product.category,
        "need": product.need,
        "brand": product.brand,
        "image": product.image,
        "price": product.price,
        "sale_price": product.sale_price,
        "total_stock": product.total_stock,
        "average_review": product.average_review,
    }


def get_product(product_id) -> dict:
    return product_to_dict(current_domain.repository_for(Product).get(product_id))


def list_products(categories=None, needs=None, sort_by=DEFAULT_SORT) -> list[dict]:
    """Products in any of ``categories`` and any of ``needs``; an empty filter matches everything.

    Unknown ``sort_by`` values fall back to price, lowest first.
    """
    query = current_domain.repository_for(Product)._dao.query
    if categories:
        query = query.filter(category__in=list(categories))
    if needs:
        query = query.filter(need__in=list(needs))

    order = _SORT_ORDERS.get(sort_by, _SORT_ORDERS[DEFAULT_SORT])
    return [product_to_dict(p) for p in query.order_by(order).all().items]


def search_products(keyword) -> list[dict]:
    """Case-insensitive substring match on title, description, category and need."""
    if not isinstance(keyword, str) or not keyword.strip():
        raise ValidationError({"keyword": ["Keyword is required and must be a string"]})

    keyword = keyword.strip()
    criteria = Q()
    for field_name in _SEARCHABLE_FIELDS:
        criteria |= Q(**{f"{field_name}__icontains": keyword})

    products = current_domain.repository_for(Product)._dao.query.filter(criteria).all().items
    # Unset fields stringify to "None" in the memory lookup
    return [
        product_to_dict(p)
        for p in products
        if any(keyword.lower() in (getattr(p, name) or "").lower() for name in _SEARCHABLE_FIELDS)
    ]

"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    title = String(required=True)
    price = Float(required=True)
    sale_price = Float()
    total_stock = Integer(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockDecremented:
    """Stock was taken out of a product by a captured order."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)


@storefront.event(part_of="Product")
class AverageReviewRecalculated:
    """The mean review rating of a product changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    average_review = Float(required=True)
    review_count = Integer(required=True)

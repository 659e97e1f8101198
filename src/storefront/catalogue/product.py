"""Product aggregate: the catalogue record checkout reads prices from and capture takes stock out of."""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Integer, String, Text

from storefront.catalogue.events import AverageReviewRecalculated, ProductAdded, StockDecremented
from storefront.domain import storefront
from storefront.exceptions import InsufficientStockError


@storefront.aggregate
class Product:
    title = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    need = String(max_length=100)  # Use case the product is shopped for
    brand = String(max_length=100)
    image = String(max_length=1024)
    price = Float(required=True, min_value=0.0)
    sale_price = Float(default=0.0, min_value=0.0)  # 0 means not on sale
    total_stock = Integer(default=0, min_value=0)
    average_review = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def add(
        cls,
        title,
        price,
        total_stock=0,
        sale_price=0.0,
        description=None,
        category=None,
        need=None,
        brand=None,
        image=None,
    ):
        now = datetime.now(UTC)
        product = cls(
            title=title,
            description=description,
            category=category,
            need=need,
            brand=brand,
            image=image,
            price=price,
            sale_price=sale_price or 0.0,
            total_stock=total_stock,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                title=title,
                price=price,
                sale_price=product.sale_price,
                total_stock=total_stock,
                added_at=now,
            )
        )
        return product

    def has_stock_for(self, quantity):
        return (self.total_stock or 0) >= quantity

    def decrement_stock(self, quantity):
        """Take ``quantity`` units out of stock; never lets stock go negative."""
        previous = self.total_stock or 0
        if quantity > previous:
            raise InsufficientStockError(
                {"total_stock": [f"Not enough stock for {self.title}: {previous} left, {quantity} requested"]}
            )

        self.total_stock = previous - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.total_stock,
            )
        )

    def record_average_review(self, ratings):
        """Recompute the mean rating from every rating the product has received."""
        ratings = list(ratings)
        self.average_review = sum(ratings) / len(ratings) if ratings else 0.0
        self.updated_at = datetime.now(UTC)

        self.raise_(
            AverageReviewRecalculated(
                product_id=str(self.id),
                average_review=self.average_review,
                review_count=len(ratings),
            )
        )

"""Catalogue management: adding and removing products."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    title = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    sale_price = Float(default=0.0, min_value=0.0)
    total_stock = Integer(default=0, min_value=0)
    description = Text()
    category = String(max_length=100)
    need = String(max_length=100)
    brand = String(max_length=100)
    image = String(max_length=1024)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            title=command.title,
            price=command.price,
            sale_price=command.sale_price,
            total_stock=command.total_stock,
            description=command.description,
            category=command.category,
            need=command.need,
            brand=command.brand,
            image=command.image,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("Product removed from catalogue", product_id=str(command.product_id))

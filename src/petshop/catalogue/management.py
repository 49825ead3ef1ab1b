"""Product management: admin commands and their handler."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from petshop.catalogue.product import Product
from petshop.domain import petshop

logger = structlog.get_logger(__name__)


def _images(raw):
    if raw is None:
        return None
    return json.loads(raw) if isinstance(raw, str) else raw


@petshop.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    description: Text()
    brand: String(max_length=100)
    price: Float(required=True)
    original_price: Float()
    stock_quantity: Integer(default=0)
    low_stock_threshold: Integer()
    section: String(required=True)
    category: String(required=True)
    state: String()
    images: Text()  # JSON: list of {url, alt_text, is_primary, display_order}


@petshop.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    description: Text()
    brand: String(max_length=100)
    price: Float(required=True)
    original_price: Float()
    stock_quantity: Integer(default=0)
    low_stock_threshold: Integer()
    section: String(required=True)
    category: String(required=True)
    state: String()
    images: Text()


@petshop.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@petshop.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            brand=command.brand,
            price=command.price,
            original_price=command.original_price,
            stock_quantity=command.stock_quantity or 0,
            low_stock_threshold=command.low_stock_threshold,
            section=command.section,
            category=command.category,
            state=command.state,
            images=_images(command.images),
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)

        product.update(
            name=command.name,
            description=command.description,
            brand=command.brand,
            price=command.price,
            original_price=command.original_price,
            stock_quantity=command.stock_quantity or 0,
            low_stock_threshold=command.low_stock_threshold,
            section=command.section,
            category=command.category,
            state=command.state,
            images=_images(command.images),
        )
        repo.add(product)
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)
        product.deactivate()
        repo.add(product)
        logger.info("Product deactivated", product_id=str(product.id))

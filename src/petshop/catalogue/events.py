"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from petshop.domain import petshop


@petshop.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    stock_quantity: Integer(required=True)
    created_at: DateTime(required=True)


@petshop.event(part_of="Product")
class ProductUpdated:
    """An admin overwrote the product's details."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    stock_quantity: Integer(required=True)
    updated_at: DateTime(required=True)


@petshop.event(part_of="Product")
class ProductDeactivated:
    """The product was soft-deleted and no longer shows in the shop."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@petshop.event(part_of="Product")
class LowStockDetected:
    """Stock fell to or below the product's reorder threshold."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    stock_quantity: Integer(required=True)
    low_stock_threshold: Integer(required=True)

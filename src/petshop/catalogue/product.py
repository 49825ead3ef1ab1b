"""Product aggregate root with its Image entity.

Products are soft-deleted (``is_active=False``) rather than removed, so that
order lines and reviews keep pointing at a real record. Stock can never go
negative: checkout decrements through ``decrement_stock`` and the field's
``min_value`` rejects anything below zero.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Integer,
    String,
    Text,
)

from petshop.domain import petshop

DEFAULT_LOW_STOCK_THRESHOLD = 10


class AnimalSection(Enum):
    CATS = "Cats"
    DOGS = "Dogs"
    OTHER = "Other"


class ProductCategory(Enum):
    TOYS = "Toys"
    FOOD = "Food"
    LITTERS = "Litters"
    MEDICINES = "Medicines"
    ACCESSORIES = "Accessories"
    GROOMING = "Grooming"


class ProductState(Enum):
    OUT_OF_STOCK = "OutOfStock"
    IN_STOCK = "InStock"
    NEW_PRODUCT = "NewProduct"


@petshop.entity(part_of="Product")
class ProductImage:
    """Product image entity."""

    url: String(required=True, max_length=500)
    alt_text: String(max_length=255)
    is_primary: Boolean(default=False)
    display_order: Integer(default=0)


def build_images(images, product_name):
    """Turn raw image dicts into ProductImage entities.

    The first image becomes primary when none is flagged, display order
    defaults to position and alt text defaults to the product name.
    """
    images = images or []
    has_primary = any(img.get("is_primary") for img in images)

    entities = []
    for position, img in enumerate(images):
        entities.append(
            ProductImage(
                url=img["url"],
                alt_text=img.get("alt_text") or product_name,
                is_primary=bool(img.get("is_primary")) or (not has_primary and position == 0),
                display_order=img.get("display_order") or position + 1,
            )
        )
    return entities


@petshop.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=200)
    description: Text()
    brand: String(max_length=100)
    price: Float(required=True, min_value=0.01)
    original_price: Float(min_value=0.01)
    stock_quantity: Integer(required=True, min_value=0, default=0)
    low_stock_threshold: Integer(min_value=0, default=DEFAULT_LOW_STOCK_THRESHOLD)
    section: String(choices=AnimalSection, required=True)
    category: String(choices=ProductCategory, required=True)
    state: String(choices=ProductState, default=ProductState.NEW_PRODUCT.value)
    is_active: Boolean(default=True)
    images: HasMany(ProductImage)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock_quantity is not None and self.stock_quantity < 0:
            raise ValidationError({"stock_quantity": ["Stock quantity cannot be negative"]})

    @property
    def primary_image_url(self):
        primary = next((img for img in self.images if img.is_primary), None)
        if primary is None and self.images:
            primary = sorted(self.images, key=lambda img: img.display_order or 0)[0]
        return primary.url if primary else None

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= (self.low_stock_threshold or 0)

    @classmethod
    def create(
        cls,
        name,
        price,
        section,
        category,
        description=None,
        brand=None,
        original_price=None,
        stock_quantity=0,
        low_stock_threshold=None,
        state=None,
        images=None,
    ):
        from petshop.catalogue.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            brand=brand,
            price=price,
            original_price=original_price,
            stock_quantity=stock_quantity,
            low_stock_threshold=(
                DEFAULT_LOW_STOCK_THRESHOLD if low_stock_threshold is None else low_stock_threshold
            ),
            section=section,
            category=category,
            state=state or ProductState.NEW_PRODUCT.value,
            is_active=True,
            images=build_images(images, name),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                price=price,
                stock_quantity=stock_quantity,
                created_at=now,
            )
        )
        return product

    def update(
        self,
        name,
        price,
        section,
        category,
        description=None,
        brand=None,
        original_price=None,
        stock_quantity=0,
        low_stock_threshold=None,
        state=None,
        images=None,
    ):
        """Overwrite the product's details. Images are replaced only when supplied."""
        from petshop.catalogue.events import ProductUpdated

        with atomic_change(self):
            self.name = name
            self.description = description
            self.brand = brand
            self.price = price
            self.original_price = original_price
            self.stock_quantity = stock_quantity
            if low_stock_threshold is not None:
                self.low_stock_threshold = low_stock_threshold
            self.section = section
            self.category = category
            if state is not None:
                self.state = state

            if images is not None:
                for image in list(self.images):
                    self.remove_images(image)
                for image in build_images(images, name):
                    self.add_images(image)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                stock_quantity=self.stock_quantity,
                updated_at=self.updated_at,
            )
        )

    def deactivate(self):
        from petshop.catalogue.events import ProductDeactivated

        if not self.is_active:
            return

        self.is_active = False
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDeactivated(product_id=self.id, deactivated_at=self.updated_at))

    def decrement_stock(self, quantity):
        """Take ``quantity`` units out of stock, refusing to go below zero."""
        from petshop.catalogue.events import LowStockDetected

        if quantity > self.stock_quantity:
            raise ValidationError(
                {"stock_quantity": [f"Cannot remove {quantity} units, only {self.stock_quantity} in stock"]}
            )

        self.stock_quantity -= quantity
        if self.stock_quantity == 0:
            self.state = ProductState.OUT_OF_STOCK.value
        self.updated_at = datetime.now(UTC)

        if self.is_low_stock:
            self.raise_(
                LowStockDetected(
                    product_id=self.id,
                    name=self.name,
                    stock_quantity=self.stock_quantity,
                    low_stock_threshold=self.low_stock_threshold,
                )
            )

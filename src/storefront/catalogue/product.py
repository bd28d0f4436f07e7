"""Product aggregate root: price, stock and the derived rating."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.catalogue.events import (
    ProductCreated,
    ProductRatingRecomputed,
    StockReserved,
)
from storefront.domain import storefront
from storefront.errors import InsufficientStock, InvalidInput


def mean_rating(ratings) -> float:
    """Arithmetic mean of review ratings; 0 for a product nobody has reviewed."""
    ratings = list(ratings)
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


@storefront.aggregate
class Product:
    title = String(required=True, max_length=255)
    description = Text(required=True)
    image = String(max_length=500)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(min_value=0, default=0)
    rating = Float(min_value=0.0, max_value=5.0, default=0.0)
    review_count = Integer(min_value=0, default=0)
    created_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.quantity is not None and self.quantity < 0:
            raise ValidationError({"quantity": ["Stock cannot be negative"]})

    @classmethod
    def create(cls, title, description, price, quantity=0, image=None):
        if price is None or price < 0:
            raise InvalidInput("Price cannot be negative")
        if quantity is None or quantity < 0:
            raise InvalidInput("Quantity cannot be negative")

        now = datetime.now(UTC)
        product = cls(
            title=title,
            description=description,
            image=image,
            price=price,
            quantity=quantity,
            rating=0.0,
            review_count=0,
            created_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                title=title,
                price=price,
                quantity=quantity,
                created_at=now,
            )
        )
        return product

    def reserve(self, quantity):
        """Take ``quantity`` units out of stock, refusing to go below zero."""
        if quantity is None or quantity < 1:
            raise InvalidInput("Quantity must be at least 1")
        if self.quantity < quantity:
            raise InsufficientStock(str(self.id), requested=quantity, available=self.quantity)

        self.quantity -= quantity

        self.raise_(
            StockReserved(
                product_id=str(self.id),
                quantity=quantity,
                remaining=self.quantity,
                reserved_at=datetime.now(UTC),
            )
        )

    def apply_ratings(self, ratings):
        """Replace the rating with the mean of the product's full review set."""
        ratings = list(ratings)
        self.rating = mean_rating(ratings)
        self.review_count = len(ratings)

        self.raise_(
            ProductRatingRecomputed(
                product_id=str(self.id),
                rating=self.rating,
                review_count=self.review_count,
            )
        )

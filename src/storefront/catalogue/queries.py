"""Catalogue read views: single product, paged listing, title search."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.errors import InvalidInput, NotFound
from storefront.utils.repository import fetch_all

DEFAULT_PAGE_SIZE = 12


def product_summary(product):
    return {
        "id": str(product.id),
        "title": product.title,
        "description": product.description,
        "image": product.image,
        "price": product.price,
        "quantity": product.quantity,
        "rating": product.rating,
        "review_count": product.review_count,
    }


def get_product(product_id):
    try:
        product = current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise NotFound("Product not found") from None
    return product_summary(product)


def list_products(page=1, page_size=DEFAULT_PAGE_SIZE):
    if page is None or page < 1:
        raise InvalidInput("Page number must be 1 or greater")
    if page_size is None or page_size < 1:
        raise InvalidInput("Page size must be 1 or greater")

    products = fetch_all(Product)
    products = sorted(products, key=lambda product: product.created_at, reverse=True)

    start = (page - 1) * page_size
    selected = products[start : start + page_size]
    if not selected:
        raise NotFound("No products found")

    return {
        "products": [product_summary(product) for product in selected],
        "page": page,
        "page_size": page_size,
        "total": len(products),
    }


def search_products(title):
    """Products whose title contains ``title``, ignoring case."""
    needle = (title or "").strip().lower()
    if not needle:
        raise InvalidInput("Please enter a product name")

    products = fetch_all(Product)
    matches = [product for product in products if needle in product.title.lower()]
    if not matches:
        raise NotFound("No products found")
    return [product_summary(product) for product in sorted(matches, key=lambda product: product.title.lower())]

"""
Read-only product catalog.

The portal only reads products; catalog maintenance happens elsewhere.
The default catalog ships the wholesale line-up shown on the catalog page.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from core.exceptions import ProductNotFoundError
from models.product import Product, StockStatus


MEDIA_LIBRARY_SIZE = 10
"""Number of marketing media slots offered on the media step."""


DEFAULT_PRODUCTS = (
    Product(
        product_id=1,
        name="Red Apple Kush",
        price=420,
        category="Hybrid",
        description="A crisp, sweet flavor profile with a powerful relaxing finish.",
        stock=StockStatus.IN_STOCK,
    ),
    Product(
        product_id=2,
        name="Blue Dream Premium",
        price=380,
        category="Sativa",
        description="Berry aroma with a gentle cerebral invigoration.",
        stock=StockStatus.LIMITED,
    ),
    Product(
        product_id=3,
        name="Purple Haze v2",
        price=450,
        category="Sativa",
        description="Classic earthy tones with high-energy creative effects.",
        stock=StockStatus.IN_STOCK,
    ),
    Product(
        product_id=4,
        name="OG Fire Breath",
        price=500,
        category="Indica",
        description="Our signature heavy hitter. Fiery orange hairs and deep relaxation.",
        stock=StockStatus.NEW_ARRIVAL,
    ),
)


class ProductCatalog:
    """In-memory product lookup keyed by product id."""

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: Dict[int, Product] = {}
        for product in (DEFAULT_PRODUCTS if products is None else products):
            if product.product_id in self._products:
                raise ValueError(f"Duplicate product id in catalog: {product.product_id}")
            self._products[product.product_id] = product

    def get_product(self, product_id) -> Product:
        """
        Look up a product.

        Raises:
            ProductNotFoundError: If no product has this id
        """
        try:
            key = int(product_id)
        except (TypeError, ValueError):
            raise ProductNotFoundError(product_id)

        product = self._products.get(key)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def list_products(self) -> List[Product]:
        """All products in catalog order."""
        return list(self._products.values())

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id) -> bool:
        return product_id in self._products

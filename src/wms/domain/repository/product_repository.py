"""Abstract repository for the Product catalog.

Defined in the domain layer so the domain never depends on infrastructure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its id, or None if not found."""

    @abstractmethod
    def search(
        self, term: str | None, limit: int, in_stock_only: bool = False
    ) -> list[Product]:
        """Return up to *limit* products matching *term*, in store order.

        A blank or missing term returns the first *limit* products.
        With *in_stock_only* products with no on-hand quantity are skipped.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def replace_all(self, products: list[Product]) -> None:
        """Clear the catalog and store *products* in its place."""

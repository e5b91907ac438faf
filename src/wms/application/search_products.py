"""Application service: Search Products use case (query)."""

from __future__ import annotations

from wms.application.dto import ProductDTO
from wms.domain.repository.product_repository import ProductRepository

DEFAULT_SEARCH_LIMIT = 20


class SearchProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        self._product_repo = product_repo
        self._limit = limit

    def handle(self, term: str | None = None, in_stock_only: bool = False) -> list[ProductDTO]:
        """Substring search over name, product code and barcode.

        Read-only; a blank term lists the first products of the catalog.
        """
        term = term.strip() if term else None
        products = self._product_repo.search(term, self._limit, in_stock_only=in_stock_only)
        return [ProductDTO.from_product(p) for p in products]

"""Application service: Import Catalog use case.

Bulk replacement of the product collection from one or more CSV exports
with the header ``id,name,product_code,barcode,price,quantity,availability``.
Every file is parsed before the repository is touched, so a bad file
leaves the previous catalog in place.
"""

from __future__ import annotations

import csv
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from wms.domain.exceptions import StorageError
from wms.domain.model.product import Product
from wms.domain.model.value_objects import Money
from wms.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ImportCatalogHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, paths: list[Path]) -> int:
        """Replace the catalog with the products found in *paths*.

        Missing files are skipped. Returns the number of products stored.
        """
        products: list[Product] = []
        for path in paths:
            if not path.exists():
                logger.warning("Catalog file %s not found, skipping", path)
                continue
            logger.info("Reading catalog file %s", path)
            products.extend(self._read(path))

        if not products:
            logger.warning("No products found to import; catalog left unchanged")
            return 0

        self._product_repo.replace_all(products)
        logger.info("Imported %d products", len(products))
        return len(products)

    def _read(self, path: Path) -> list[Product]:
        try:
            with path.open(newline="", encoding="utf-8-sig") as fh:
                rows = list(csv.DictReader(fh))
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise StorageError(f"Cannot read catalog file {path}: {exc}") from exc

        products = []
        for row in rows:
            product = self._to_product(row)
            if product is None:
                logger.debug("Skipping row without id or barcode in %s: %r", path, row)
                continue
            products.append(product)
        return products

    @staticmethod
    def _to_product(row: dict[str, str | None]) -> Product | None:
        def text(key: str) -> str:
            return (row.get(key) or "").strip()

        barcode = text("barcode")
        product_id = text("id") or barcode
        if not product_id:
            return None

        return Product(
            id=product_id,
            name=text("name"),
            product_code=text("product_code"),
            barcode=barcode,
            price=_parse_price(text("price")),
            quantity=_parse_quantity(text("quantity")),
            available=(text("availability") or "true").lower() == "true",
        )


def _parse_price(raw: str) -> Money:
    """Unparsable or negative prices become zero, as in the source exports."""
    try:
        amount = Decimal(raw.replace(",", "."))
    except InvalidOperation:
        return Money.zero()
    if not amount.is_finite() or amount < 0:
        return Money.zero()
    return Money(amount)


def _parse_quantity(raw: str) -> int:
    """Decimal quantities are truncated; unparsable or negative ones become zero."""
    try:
        amount = Decimal(raw.replace(",", "."))
    except InvalidOperation:
        return 0
    if not amount.is_finite():
        return 0
    return max(int(amount), 0)

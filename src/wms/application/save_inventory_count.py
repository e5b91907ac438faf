"""Application service: Save Inventory Count use case.

Builds the stocktake sheet from the counted lines. Expected quantities
come from the catalog's on-hand quantity at the moment of saving; custom
barcodes are expected to be absent (0).
"""

from __future__ import annotations

import logging

from wms.application.dto import CountLineSpec, InventoryCountDTO
from wms.domain.exceptions import NotFoundError
from wms.domain.model.inventory import InventoryCount
from wms.domain.repository.inventory_repository import InventoryCountRepository
from wms.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class SaveInventoryCountHandler:

    def __init__(
        self,
        count_repo: InventoryCountRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._count_repo = count_repo
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        line_specs: list[CountLineSpec],
        count_id: str | None = None,
        author: str | None = None,
    ) -> InventoryCountDTO:
        count = InventoryCount.create(name, author=author)
        # Lines already on the sheet keep the on-hand quantity seen when
        # they were first counted.
        previous_expected: dict[str, int] = {}

        if count_id is not None:
            existing = self._count_repo.get_by_id(count_id)
            if existing is None:
                raise NotFoundError(f"Inventory count {count_id} not found")
            count.id = existing.id
            count.created_at = existing.created_at
            count.author = author or existing.author
            previous_expected = {line.line_id: line.expected for line in existing.lines}

        for spec in line_specs:
            if spec.product_id is None:
                count.count_custom(spec.barcode, spec.counted)
                continue
            product = self._product_repo.get_by_id(spec.product_id)
            if product is None:
                raise NotFoundError(f"Product not found: '{spec.product_id}'")
            count.count_product(
                product, spec.counted, expected=previous_expected.get(product.id)
            )

        self._count_repo.save(count)
        logger.info(
            "Inventory count %s '%s' saved (%d lines, %d discrepancies)",
            count.id, count.name, len(count.lines), len(count.discrepancies),
        )
        return InventoryCountDTO.from_count(count)

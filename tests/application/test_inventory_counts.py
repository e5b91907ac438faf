"""Integration tests for the inventory count use cases."""

import pytest

from wms.application.dto import CountLineSpec
from wms.application.save_inventory_count import SaveInventoryCountHandler
from wms.application.show_inventory_count import (
    DeleteInventoryCountHandler,
    ListInventoryCountsHandler,
    ShowInventoryCountHandler,
)
from wms.domain.exceptions import NotFoundError, ValidationError
from tests.factories import make_product
from tests.fakes import FakeInventoryCountRepository, FakeProductRepository


def _setup():
    count_repo = FakeInventoryCountRepository()
    product_repo = FakeProductRepository([
        make_product(id="1", name="Hinge", quantity=10),
        make_product(id="2", name="Bolt", barcode="5902", quantity=3),
    ])
    return SaveInventoryCountHandler(count_repo, product_repo), count_repo


class TestSaveInventoryCount:

    def test_expected_comes_from_catalog(self):
        handler, _ = _setup()
        dto = handler.handle("Aisle 1", [CountLineSpec(8, product_id="1"), CountLineSpec(3, product_id="2")])

        assert dto.id == "INV-1"
        assert [(line.line_id, line.counted, line.expected) for line in dto.lines] == [
            ("1", 8, 10),
            ("2", 3, 3),
        ]
        assert [line.line_id for line in dto.discrepancies] == ["1"]
        assert dto.discrepancies[0].difference == -2

    def test_custom_barcode_expected_absent(self):
        handler, _ = _setup()
        dto = handler.handle("Aisle 2", [CountLineSpec(2, barcode="777")])
        line = dto.lines[0]
        assert (line.line_id, line.name, line.expected, line.is_custom) == ("custom-777", "EAN: 777", 0, True)

    def test_repeated_product_merges(self):
        handler, _ = _setup()
        dto = handler.handle("Aisle 1", [CountLineSpec(4, product_id="1"), CountLineSpec(6, product_id="1")])
        assert [(line.line_id, line.counted) for line in dto.lines] == [("1", 10)]
        assert dto.discrepancies == []

    def test_unknown_product(self):
        handler, count_repo = _setup()
        with pytest.raises(NotFoundError, match="9"):
            handler.handle("Aisle 1", [CountLineSpec(1, product_id="9")])
        assert count_repo.list_all() == []

    def test_name_required(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError):
            handler.handle("  ", [])

    def test_resave_keeps_identity(self):
        handler, count_repo = _setup()
        first = handler.handle("Aisle 1", [CountLineSpec(1, product_id="1")], author="ala")
        second = handler.handle("Aisle 1b", [CountLineSpec(2, product_id="2")], count_id=first.id)

        assert second.id == first.id
        assert second.created_at == first.created_at
        assert second.author == "ala"
        assert [line.line_id for line in second.lines] == ["2"]
        assert len(count_repo.list_all()) == 1

    def test_resave_keeps_expected_of_lines_already_counted(self):
        count_repo = FakeInventoryCountRepository()
        product_repo = FakeProductRepository([make_product(id="1", quantity=10)])
        handler = SaveInventoryCountHandler(count_repo, product_repo)
        first = handler.handle("Aisle 1", [CountLineSpec(8, product_id="1")])

        product_repo.replace_all([
            make_product(id="1", quantity=4),
            make_product(id="2", name="Bolt", quantity=3),
        ])
        second = handler.handle(
            "Aisle 1",
            [CountLineSpec(8, product_id="1"), CountLineSpec(1, product_id="2")],
            count_id=first.id,
        )

        assert [(line.line_id, line.expected) for line in second.lines] == [("1", 10), ("2", 3)]

    def test_resave_unknown_id(self):
        handler, _ = _setup()
        with pytest.raises(NotFoundError):
            handler.handle("Aisle 1", [], count_id="INV-42")


class TestInventoryQueries:

    def test_show_list_delete(self):
        handler, count_repo = _setup()
        first = handler.handle("First", [])
        second = handler.handle("Second", [])

        assert ShowInventoryCountHandler(count_repo).handle(first.id).name == "First"
        listed = ListInventoryCountsHandler(count_repo).handle()
        assert {c.id for c in listed} == {first.id, second.id}

        DeleteInventoryCountHandler(count_repo).handle(first.id)
        assert [c.id for c in ListInventoryCountsHandler(count_repo).handle()] == [second.id]

    def test_missing(self):
        count_repo = FakeInventoryCountRepository()
        with pytest.raises(NotFoundError):
            ShowInventoryCountHandler(count_repo).handle("INV-1")
        with pytest.raises(NotFoundError):
            DeleteInventoryCountHandler(count_repo).handle("INV-1")

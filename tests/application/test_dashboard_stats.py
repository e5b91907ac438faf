"""Integration tests for the DashboardStats query."""

from wms.application.dashboard_stats import DashboardStatsHandler
from wms.domain.model.order import Order
from wms.domain.model.picking import PickRecord
from tests.factories import make_line, make_product
from tests.fakes import FakeOrderRepository, FakeProductRepository


def _save(repo: FakeOrderRepository, customer: str, *lines, complete: bool = False) -> None:
    order = Order(id=None, customer_name=customer, lines=list(lines))
    repo.save(order)
    if complete:
        order.complete([PickRecord(line.line_id, line.quantity.value, line.quantity.value) for line in lines])
        repo.save(order)


def test_counts_and_rankings():
    order_repo = FakeOrderRepository()
    _save(order_repo, "Alice", make_line("A", 5), make_line("B", 1))
    _save(order_repo, "Bob", make_line("B", 2), complete=True)
    _save(order_repo, "Alice", make_line("C", 3), complete=True)
    product_repo = FakeProductRepository([make_product(id="1"), make_product(id="2")])

    stats = DashboardStatsHandler(order_repo, product_repo).handle()

    assert (stats.product_count, stats.pending_orders, stats.completed_orders) == (2, 1, 2)
    assert [(e.name, e.count) for e in stats.top_products] == [
        ("Product A", 5),
        ("Product B", 3),
        ("Product C", 3),
    ]
    assert [(e.name, e.count) for e in stats.top_customers] == [("Alice", 2), ("Bob", 1)]


def test_rankings_capped():
    order_repo = FakeOrderRepository()
    for i in range(4):
        _save(order_repo, f"Customer {i}", make_line(str(i), i + 1))

    stats = DashboardStatsHandler(order_repo, FakeProductRepository(), top_n=2).handle()

    assert [e.name for e in stats.top_products] == ["Product 3", "Product 2"]
    assert len(stats.top_customers) == 2


def test_empty_stores():
    stats = DashboardStatsHandler(FakeOrderRepository(), FakeProductRepository()).handle()
    assert (stats.product_count, stats.pending_orders, stats.completed_orders) == (0, 0, 0)
    assert stats.top_products == []
    assert stats.top_customers == []

"""Integration tests for the CompleteOrder use case."""

import pytest

from wms.application.complete_order import CompleteOrderHandler
from wms.domain.exceptions import (
    AlreadyCompletedError,
    NotFoundError,
    UnknownLineError,
    ValidationError,
)
from wms.domain.model.order import OrderStatus
from wms.domain.model.picking import PickRecord
from wms.domain.service.picking_reconciler import PickingSession
from tests.factories import make_line, make_order
from tests.fakes import FakeOrderRepository


def _setup() -> tuple[CompleteOrderHandler, FakeOrderRepository, str]:
    order_repo = FakeOrderRepository()
    order = make_order(make_line("A", 5), make_line("B", 2))
    order.id = None
    order_repo.save(order)
    return CompleteOrderHandler(order_repo), order_repo, order.id


class TestCompleteOrder:

    def test_session_records_become_audit_trail(self):
        handler, order_repo, order_id = _setup()
        session = PickingSession.start(order_repo.get_by_id(order_id))
        session.pick("A", 5)
        session.pick("B", 1)

        dto = handler.handle(order_id, list(session.pick_records))

        assert dto.status == "Completed"
        assert [(r.line_id, r.mismatch) for r in dto.pick_records] == [("A", False), ("B", True)]
        stored = order_repo.get_by_id(order_id)
        assert stored.status == OrderStatus.COMPLETED
        assert stored.completed_at is not None

    def test_completion_with_shortage_allowed(self):
        handler, _, order_id = _setup()
        dto = handler.handle(order_id, [PickRecord("A", 5, 5)])
        assert dto.status == "Completed"

    def test_unknown_order(self):
        handler, _, _ = _setup()
        with pytest.raises(NotFoundError):
            handler.handle("ORDER-404", [])

    def test_unknown_line_leaves_order_saved(self):
        handler, order_repo, order_id = _setup()
        with pytest.raises(UnknownLineError):
            handler.handle(order_id, [PickRecord("Z", 1, 1)])
        assert order_repo.get_by_id(order_id).status == OrderStatus.SAVED

    def test_second_completion_rejected_and_state_unchanged(self):
        handler, order_repo, order_id = _setup()
        handler.handle(order_id, [PickRecord("A", 5, 5), PickRecord("B", 2, 2)])
        before = order_repo.get_by_id(order_id)

        with pytest.raises(AlreadyCompletedError):
            handler.handle(order_id, [PickRecord("A", 5, 1)])

        after = order_repo.get_by_id(order_id)
        assert after.pick_records == before.pick_records
        assert after.completed_at == before.completed_at

    def test_partial_picks_of_one_line_replay(self):
        handler, order_repo, order_id = _setup()
        dto = handler.handle(order_id, [PickRecord("A", 5, 2), PickRecord("A", 3, 3)])
        assert dto.status == "Completed"
        assert order_repo.get_by_id(order_id).picked_quantity("A") == 5

    def test_original_quantity_must_match_what_was_waiting(self):
        handler, order_repo, order_id = _setup()
        with pytest.raises(ValidationError, match="5 were waiting"):
            handler.handle(order_id, [PickRecord("A", 2, 2)])
        assert order_repo.get_by_id(order_id).status == OrderStatus.SAVED

    def test_line_picked_again_after_fully_picked(self):
        handler, order_repo, order_id = _setup()
        with pytest.raises(UnknownLineError):
            handler.handle(order_id, [PickRecord("A", 5, 5), PickRecord("A", 5, 5)])
        assert order_repo.get_by_id(order_id).pick_records == []

"""Application service: Set Order Status use case.

A supplier changes the status of an order that contains its products.
When the caller has no board of its own (e.g. the CLI), the supplier's
current views are loaded first; an order outside that board is reported
as not found.
"""

from __future__ import annotations

from fulfillment.application.list_supplier_orders import ListSupplierOrdersHandler
from fulfillment.domain.exceptions import ValidationError
from fulfillment.domain.model.order import OrderStatus
from fulfillment.domain.model.supplier_view import SupplierOrderView
from fulfillment.domain.repository.order_repository import OrderRepository
from fulfillment.domain.service.order_status_workflow import (
    OrderBoard,
    OrderStatusWorkflow,
)


class SetOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        supplier_id: str,
        order_id: int,
        new_status: str | OrderStatus,
        board: OrderBoard | None = None,
    ) -> SupplierOrderView:
        target = self._parse_status(new_status)

        if board is None:
            views = ListSupplierOrdersHandler(self._order_repo).handle(supplier_id)
            board = OrderBoard(views)

        workflow = OrderStatusWorkflow(self._order_repo)
        return workflow.set_status(order_id, target, board)

    @staticmethod
    def _parse_status(raw: str | OrderStatus) -> OrderStatus:
        if isinstance(raw, OrderStatus):
            return raw
        try:
            return OrderStatus(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status '{raw}' (expected one of: {allowed})"
            ) from None

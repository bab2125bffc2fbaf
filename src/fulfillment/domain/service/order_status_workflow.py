"""Domain service: Order Status Workflow.

Drives an order along the status table with an optimistic update:

  1. the caller's in-memory view shows the new status immediately,
  2. the write goes to the store,
  3. on failure the view is put back to the exact snapshot captured
     before step 1.

The snapshot and the desired status are captured in a ``StatusChange``
command, so rollback restores captured state instead of recomputing it.

Rollback protects only the caller that issued the failing write.  Two
writes for the same order resolve last-write-wins at the store; other
viewers may already have seen the optimistic value.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from fulfillment.domain.exceptions import EntityNotFoundError
from fulfillment.domain.model.order import OrderStatus, ensure_transition
from fulfillment.domain.model.supplier_view import SupplierOrderView
from fulfillment.domain.repository.order_repository import OrderRepository


@dataclass(frozen=True)
class StatusChange:
    """Captured ``(snapshot_before, desired)`` pair for one status write."""

    snapshot_before: SupplierOrderView
    desired: OrderStatus

    @property
    def order_id(self) -> int:
        return self.snapshot_before.order_id

    def optimistic_view(self) -> SupplierOrderView:
        return self.snapshot_before.with_status(self.desired)

    def rollback_view(self) -> SupplierOrderView:
        return self.snapshot_before


class OrderBoard:
    """The caller's in-memory list of order views (what the screen shows)."""

    def __init__(self, views: list[SupplierOrderView] | None = None) -> None:
        self._views: dict[int, SupplierOrderView] = {}
        for view in views or []:
            self._views[view.order_id] = view

    def get(self, order_id: int) -> SupplierOrderView:
        try:
            return self._views[order_id]
        except KeyError:
            raise EntityNotFoundError(f"Order #{order_id} not found") from None

    def put(self, view: SupplierOrderView) -> None:
        self._views[view.order_id] = view

    def views(self) -> list[SupplierOrderView]:
        return list(self._views.values())


class OrderStatusWorkflow:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def set_status(
        self,
        order_id: int,
        new_status: OrderStatus,
        board: OrderBoard,
    ) -> SupplierOrderView:
        """Apply *new_status* optimistically and persist it.

        An illegal transition is rejected before the board is touched.
        Any failure of the write restores the captured snapshot and is
        re-raised to the caller.
        """
        snapshot = board.get(order_id)
        ensure_transition(snapshot.status, new_status)

        change = StatusChange(snapshot_before=snapshot, desired=new_status)
        board.put(change.optimistic_view())

        try:
            self._order_repo.update_status(order_id, new_status)
        except Exception as exc:
            board.put(change.rollback_view())
            logger.warning(
                f"Status write for order #{order_id} failed, view restored to "
                f"{snapshot.status.value}: {exc}"
            )
            raise

        logger.info(
            f"Order #{order_id} status {snapshot.status.value} -> {new_status.value}"
        )
        return board.get(order_id)

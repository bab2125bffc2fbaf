"""Application service: List Supplier Orders use case (query).

Two-stage read: fetch the supplier's flat line records from the store,
then aggregate them into per-order views with SupplierOrderViewBuilder.
"""

from __future__ import annotations

from fulfillment.domain.exceptions import ValidationError
from fulfillment.domain.model.supplier_view import SupplierOrderView
from fulfillment.domain.repository.order_repository import OrderRepository
from fulfillment.domain.service.supplier_order_view_builder import (
    SupplierOrderViewBuilder,
)


class ListSupplierOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        builder: SupplierOrderViewBuilder | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._builder = builder or SupplierOrderViewBuilder()

    def handle(
        self,
        supplier_id: str,
        search: str | None = None,
    ) -> list[SupplierOrderView]:
        if not supplier_id or not supplier_id.strip():
            raise ValidationError("Supplier ID is required")
        supplier_id = supplier_id.strip()

        records = self._order_repo.list_supplier_lines(supplier_id)
        views = self._builder.build_views(supplier_id, records)

        if search:
            views = [view for view in views if view.matches(search)]
        return views

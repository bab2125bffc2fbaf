"""Domain service: Supplier Order View Builder.

The record store is row-per-line, so a supplier's order screen has to be
rebuilt client-side: filter the flat line records to the supplier, group
them by order, and total each group.  Filtering happens before
aggregation so no other supplier's lines or prices can leak into a view.

Pure and read-only; safe to re-run on every refresh.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fulfillment.domain.model.supplier_view import (
    SupplierLineRecord,
    SupplierOrderLine,
    SupplierOrderView,
)
from fulfillment.domain.model.value_objects import Money


@dataclass
class _OrderAccumulator:
    header: SupplierLineRecord
    lines: list[SupplierOrderLine] = field(default_factory=list)
    subtotal: Money = field(default_factory=Money.zero)

    def add(self, record: SupplierLineRecord) -> None:
        self.lines.append(
            SupplierOrderLine(
                item_id=record.item_id,
                product_id=record.product_id,
                product_name=record.product_name,
                quantity=record.quantity,
                unit_price=record.unit_price,
                total_price=record.total_price,
            )
        )
        self.subtotal = self.subtotal + record.total_price

    def to_view(self) -> SupplierOrderView:
        return SupplierOrderView(
            order_id=self.header.order_id,
            status=self.header.order_status,
            created_at=self.header.order_created_at,
            customer=self.header.customer,
            items=tuple(self.lines),
            supplier_subtotal=self.subtotal,
        )


class SupplierOrderViewBuilder:

    def build_views(
        self,
        supplier_id: str,
        records: list[SupplierLineRecord],
    ) -> list[SupplierOrderView]:
        """Group *records* into one view per order, newest order first.

        Orders with equal ``created_at`` keep their first-seen order.
        """
        groups: dict[int, _OrderAccumulator] = {}

        for record in records:
            if record.supplier_id != supplier_id:
                continue
            acc = groups.get(record.order_id)
            if acc is None:
                acc = groups[record.order_id] = _OrderAccumulator(header=record)
            acc.add(record)

        views = [acc.to_view() for acc in groups.values()]
        views.sort(key=lambda view: view.created_at, reverse=True)
        return views

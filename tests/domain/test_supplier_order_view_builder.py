"""Unit tests for SupplierOrderViewBuilder."""

from datetime import datetime, timedelta, timezone

from fulfillment.domain.model.order import OrderStatus
from fulfillment.domain.model.supplier_view import CustomerSummary, SupplierLineRecord
from fulfillment.domain.model.value_objects import Money
from fulfillment.domain.service.supplier_order_view_builder import (
    SupplierOrderViewBuilder,
)

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _record(
    order_id: int,
    item_id: int,
    supplier: str,
    qty: int,
    price: str,
    created_at: datetime = T0,
    order_total: str = "55.00",
    customer: str = "Acme Retail",
) -> SupplierLineRecord:
    unit = Money.of(price)
    return SupplierLineRecord(
        order_id=order_id,
        order_status=OrderStatus.PENDING,
        order_total=Money.of(order_total),
        order_created_at=created_at,
        customer=CustomerSummary(customer, "555"),
        item_id=item_id,
        product_id=f"p{item_id}",
        product_name=f"Product {item_id}",
        supplier_id=supplier,
        quantity=qty,
        unit_price=unit,
        total_price=unit * qty,
    )


class TestSupplierScoping:

    def test_mixed_order_shows_only_own_lines(self):
        # order 1: two lines from X (subtotal 40) and one from Y (15); total 55
        records = [
            _record(1, 1, "X", 2, "10.00"),
            _record(1, 2, "Y", 1, "15.00"),
            _record(1, 3, "X", 1, "20.00"),
        ]
        views = SupplierOrderViewBuilder().build_views("X", records)

        assert len(views) == 1
        view = views[0]
        assert len(view.items) == 2
        assert {item.item_id for item in view.items} == {1, 3}
        assert view.supplier_subtotal == Money.of("40.00")
        assert view.supplier_subtotal != Money.of("55.00")

    def test_other_supplier_sees_only_its_line(self):
        records = [
            _record(1, 1, "X", 2, "10.00"),
            _record(1, 2, "Y", 1, "15.00"),
            _record(1, 3, "X", 1, "20.00"),
        ]
        views = SupplierOrderViewBuilder().build_views("Y", records)
        assert [item.item_id for item in views[0].items] == [2]
        assert views[0].supplier_subtotal == Money.of("15.00")

    def test_order_with_no_own_lines_is_not_emitted(self):
        records = [_record(1, 1, "Y", 1, "15.00")]
        assert SupplierOrderViewBuilder().build_views("X", records) == []

    def test_no_records(self):
        assert SupplierOrderViewBuilder().build_views("X", []) == []


class TestGroupingAndOrdering:

    def test_one_view_per_order_newest_first(self):
        records = [
            _record(1, 1, "X", 1, "10.00", created_at=T0),
            _record(2, 2, "X", 1, "10.00", created_at=T0 + timedelta(hours=2)),
            _record(1, 3, "X", 1, "10.00", created_at=T0),
            _record(3, 4, "X", 1, "10.00", created_at=T0 + timedelta(hours=1)),
        ]
        views = SupplierOrderViewBuilder().build_views("X", records)
        assert [v.order_id for v in views] == [2, 3, 1]
        assert [i.item_id for i in views[2].items] == [1, 3]

    def test_equal_timestamps_keep_first_seen_order(self):
        records = [
            _record(7, 1, "X", 1, "10.00"),
            _record(4, 2, "X", 1, "10.00"),
            _record(9, 3, "X", 1, "10.00"),
        ]
        views = SupplierOrderViewBuilder().build_views("X", records)
        assert [v.order_id for v in views] == [7, 4, 9]

    def test_header_fields_copied_to_view(self):
        views = SupplierOrderViewBuilder().build_views("X", [_record(5, 1, "X", 1, "10.00")])
        view = views[0]
        assert view.status == OrderStatus.PENDING
        assert view.created_at == T0
        assert view.customer.customer_name == "Acme Retail"

    def test_rebuild_is_repeatable(self):
        records = [_record(1, 1, "X", 2, "10.00"), _record(1, 2, "Y", 1, "15.00")]
        builder = SupplierOrderViewBuilder()
        assert builder.build_views("X", records) == builder.build_views("X", records)


class TestViewSearch:

    def test_matches_customer_name_case_insensitive(self):
        view = SupplierOrderViewBuilder().build_views("X", [_record(1, 1, "X", 1, "10.00")])[0]
        assert view.matches("acme")
        assert not view.matches("globex")

    def test_matches_own_product_name(self):
        view = SupplierOrderViewBuilder().build_views("X", [_record(1, 1, "X", 1, "10.00")])[0]
        assert view.matches("product 1")

    def test_blank_term_matches_everything(self):
        view = SupplierOrderViewBuilder().build_views("X", [_record(1, 1, "X", 1, "10.00")])[0]
        assert view.matches("   ")

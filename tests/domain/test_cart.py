"""Unit tests for the Cart aggregate and CustomerSession."""

import pytest

from fulfillment.domain.exceptions import EntityNotFoundError, ValidationError
from fulfillment.domain.model.cart import Cart, CustomerSession
from fulfillment.domain.model.product import Product
from fulfillment.domain.model.value_objects import Money


def _product(pid: str = "A", price: str = "10.00", stock: int = 5, supplier: str = "X") -> Product:
    return Product(
        id=pid,
        name=f"Product {pid}",
        supplier_id=supplier,
        unit_price=Money.of(price),
        available_stock=stock,
    )


class TestCartAdd:

    def test_add_creates_line_with_snapshot(self):
        cart = Cart()
        line = cart.add(_product(price="10.00", stock=5), 3)
        assert line.quantity == 3
        assert line.unit_price == Money.of("10.00")
        assert line.available_stock == 5
        assert line.supplier_id == "X"
        assert len(cart) == 1

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Cart().add(_product(), 0)

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Cart().add(_product(), -2)

    def test_more_than_stock_rejected(self):
        cart = Cart()
        with pytest.raises(ValidationError, match="only 5 in stock"):
            cart.add(_product(stock=5), 6)
        assert cart.is_empty

    @pytest.mark.parametrize("qty", [2.5, 2.0, "2", True])
    def test_non_integer_quantity_rejected(self, qty):
        cart = Cart()
        with pytest.raises(ValidationError, match="must be an integer"):
            cart.add(_product(), qty)
        assert cart.is_empty
        assert cart.total() == Money.zero()

    def test_same_product_merges_instead_of_duplicating(self):
        cart = Cart()
        cart.add(_product(stock=10), 2)
        cart.add(_product(stock=10), 3)
        assert len(cart) == 1
        assert cart.items[0].quantity == 5

    def test_merge_is_clamped_to_stock(self):
        cart = Cart()
        cart.add(_product(stock=5), 4)
        cart.add(_product(stock=5), 4)
        assert cart.items[0].quantity == 5


class TestCartSetQuantity:

    def test_set_within_range(self):
        cart = Cart()
        cart.add(_product(stock=5), 1)
        assert cart.set_quantity("A", 4).quantity == 4

    def test_clamped_to_available_stock(self):
        cart = Cart()
        cart.add(_product(stock=5), 1)
        assert cart.set_quantity("A", 50).quantity == 5

    def test_zero_removes_line(self):
        cart = Cart()
        cart.add(_product(), 2)
        assert cart.set_quantity("A", 0) is None
        assert cart.is_empty

    def test_negative_rejected(self):
        cart = Cart()
        cart.add(_product(), 2)
        with pytest.raises(ValidationError, match="cannot be negative"):
            cart.set_quantity("A", -1)
        assert cart.items[0].quantity == 2

    def test_non_integer_rejected(self):
        cart = Cart()
        cart.add(_product(), 2)
        with pytest.raises(ValidationError, match="must be an integer"):
            cart.set_quantity("A", 1.5)
        assert cart.items[0].quantity == 2
        assert cart.total() == Money.of("20.00")

    def test_unknown_product_rejected(self):
        with pytest.raises(EntityNotFoundError, match="not in the cart"):
            Cart().set_quantity("nope", 1)


class TestCartRemoveAndClear:

    def test_remove(self):
        cart = Cart()
        cart.add(_product("A"), 1)
        cart.add(_product("B"), 1)
        cart.remove("A")
        assert [line.product_id for line in cart.items] == ["B"]

    def test_remove_unknown_rejected(self):
        with pytest.raises(EntityNotFoundError):
            Cart().remove("A")

    def test_clear(self):
        cart = Cart()
        cart.add(_product("A"), 1)
        cart.clear()
        assert cart.is_empty
        assert cart.total() == Money.zero()


class TestCartTotal:

    def test_total_is_sum_of_line_totals(self):
        cart = Cart()
        cart.add(_product("A", price="10.00", stock=5), 3)
        cart.add(_product("B", price="25.00", stock=1), 1)
        assert cart.total() == Money.of("55.00")

    def test_total_has_no_side_effects(self):
        cart = Cart()
        cart.add(_product(), 2)
        cart.total()
        cart.total()
        assert cart.items[0].quantity == 2

    def test_item_count_sums_quantities(self):
        cart = Cart()
        cart.add(_product("A", stock=5), 3)
        cart.add(_product("B", stock=5), 2)
        assert cart.item_count == 5


class TestCustomerSession:

    def test_open_starts_with_empty_cart(self):
        session = CustomerSession.open("c1")
        assert session.customer_id == "c1"
        assert session.cart.is_empty

    def test_blank_customer_rejected(self):
        with pytest.raises(ValidationError, match="Customer ID"):
            CustomerSession.open("  ")

    def test_close_discards_selection(self):
        with CustomerSession.open("c1") as session:
            session.cart.add(_product(), 1)
        assert session.closed
        assert session.cart.is_empty

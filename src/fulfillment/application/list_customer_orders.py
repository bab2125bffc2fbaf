"""Application service: List Customer Orders use case (query).

A customer's order history, newest first, with every line of each order.
"""

from __future__ import annotations

from fulfillment.application.dto import OrderDTO, to_order_dto
from fulfillment.domain.exceptions import ValidationError
from fulfillment.domain.repository.order_repository import OrderRepository


class ListCustomerOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, customer_id: str) -> list[OrderDTO]:
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer ID is required")
        orders = self._order_repo.list_for_customer(customer_id.strip())
        return [to_order_dto(order) for order in orders]

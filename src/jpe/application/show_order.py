"""Application service: Show Order use case (query).

Historical orders are displayed from their snapshot only; nothing here
consults the current gold rate or variations.
"""

from __future__ import annotations

from jpe.application.dto import OrderDTO, OrderItemDTO
from jpe.domain.exceptions import EntityNotFoundError
from jpe.domain.model.order import Order
from jpe.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return to_order_dto(order)


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        customer_name=order.customer_name,
        gold_rate_at_order=str(order.gold_rate_at_order),
        items=[
            OrderItemDTO(
                product_name=item.product_name,
                quantity=item.quantity.value,
                weight_grams=str(item.weight_grams),
                gold_rate_applied=str(item.gold_rate_applied),
                making_charges=str(item.making_charges),
                unit_price=str(item.unit_price),
                total_price=str(item.total_price),
                variations=[f"{s.group}: {s.label}" for s in item.selected_variations],
            )
            for item in order.items
        ],
        subtotal=str(order.subtotal),
        gst_amount=str(order.gst_amount),
        total=str(order.total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )

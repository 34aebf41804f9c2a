"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from jpe.domain.model.gold_rate import MetalType
from jpe.domain.model.order import Order, OrderItem
from jpe.domain.model.value_objects import Money, Quantity
from jpe.domain.model.variation import SelectedVariation, VariationType
from jpe.domain.repository.order_repository import OrderRepository
from jpe.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.read():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def add(self, order: Order) -> None:
        # Order and items live in one document, so they land together or not at all.
        with self._file.transaction() as orders:
            if order.id is None:
                order.id = self._next_id(orders)
            elif any(raw["id"] == order.id for raw in orders):
                raise ValueError(f"Order #{order.id} already exists")
            orders.append(self._to_raw(order))

    @staticmethod
    def _next_id(orders: list[dict]) -> int:
        return max((raw["id"] for raw in orders), default=0) + 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "customer_name": order.customer_name,
            "gold_rate_id": order.gold_rate_id,
            "gold_rate_at_order": str(order.gold_rate_at_order),
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "metal_type": item.metal_type.value,
                    "weight_grams": str(item.weight_grams),
                    "gold_rate_applied": str(item.gold_rate_applied),
                    "making_charges": str(item.making_charges.amount),
                    "diamond_cost": str(item.diamond_cost),
                    "stone_cost": str(item.stone_cost),
                    "unit_subtotal": str(item.unit_subtotal.amount),
                    "gst": str(item.gst.amount),
                    "unit_price": str(item.unit_price.amount),
                    "total_price": str(item.total_price.amount),
                    "currency": item.unit_price.currency,
                    "variation_price_adjustment": str(item.variation_price_adjustment),
                    "variation_weight_adjustment": str(item.variation_weight_adjustment),
                    "selected_variations": [
                        {
                            "id": s.id,
                            "group": s.group,
                            "variation_type": s.variation_type.value,
                            "label": s.label,
                            "price_adjustment": str(s.price_adjustment),
                            "weight_adjustment": str(s.weight_adjustment),
                        }
                        for s in item.selected_variations
                    ],
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        def money(item: dict, key: str) -> Money:
            return Money(Decimal(item[key]), item.get("currency", "INR"))

        items = tuple(
            OrderItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                metal_type=MetalType(i["metal_type"]),
                weight_grams=Decimal(i["weight_grams"]),
                gold_rate_applied=Decimal(i["gold_rate_applied"]),
                making_charges=money(i, "making_charges"),
                diamond_cost=Decimal(i["diamond_cost"]),
                stone_cost=Decimal(i["stone_cost"]),
                unit_subtotal=money(i, "unit_subtotal"),
                gst=money(i, "gst"),
                unit_price=money(i, "unit_price"),
                total_price=money(i, "total_price"),
                variation_price_adjustment=Decimal(i.get("variation_price_adjustment", "0")),
                variation_weight_adjustment=Decimal(i.get("variation_weight_adjustment", "0")),
                selected_variations=tuple(
                    SelectedVariation(
                        id=s["id"],
                        group=s["group"],
                        variation_type=VariationType(s["variation_type"]),
                        label=s["label"],
                        price_adjustment=Decimal(s["price_adjustment"]),
                        weight_adjustment=Decimal(s["weight_adjustment"]),
                    )
                    for s in i.get("selected_variations", [])
                ),
            )
            for i in raw["items"]
        )
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            customer_name=raw["customer_name"],
            gold_rate_id=raw["gold_rate_id"],
            gold_rate_at_order=Decimal(raw["gold_rate_at_order"]),
            items=items,
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

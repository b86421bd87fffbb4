"""PlaceOrder — record a customer's order from their checked-out cart.

Duplicate submissions are guarded at handler level: when the command carries
an idempotency key that the same customer already used, the existing order id
is returned and nothing new is stored.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.queries import order_for_idempotency_key

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=255)
    customer_phone = String(required=True, max_length=50)
    delivery_method = String(required=True, max_length=20)
    delivery_address = Text()
    special_instructions = Text()
    ready_by = String(max_length=10)  # ISO date string
    items = Text(required=True)  # JSON: list of item snapshots
    delivery_fee = Integer(default=0, min_value=0)  # cents
    idempotency_key = String(max_length=255)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        repo = current_domain.repository_for(Order)

        if command.idempotency_key:
            existing = order_for_idempotency_key(command.customer_id, command.idempotency_key)
            if existing is not None:
                order_id = str(existing.id)
                logger.info(
                    "duplicate_order_submission",
                    order_id=order_id,
                    customer_id=str(command.customer_id),
                )
                return order_id

        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        order = Order.place(
            customer_id=command.customer_id,
            customer_name=command.customer_name,
            customer_email=command.customer_email,
            customer_phone=command.customer_phone,
            delivery_method=command.delivery_method,
            items_data=items_data,
            delivery_fee=command.delivery_fee or 0,
            delivery_address=command.delivery_address,
            special_instructions=command.special_instructions,
            ready_by=command.ready_by,
            idempotency_key=command.idempotency_key,
        )
        repo.add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            total_amount=order.total_amount,
        )
        return str(order.id)

"""UpdateOrderStatus — back-office status change with history entry."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from shared.config import get_settings

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    changed_by = String(required=True, max_length=255)
    notes = Text()


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        order.change_status(
            command.status,
            changed_by=command.changed_by,
            notes=command.notes,
            strict=get_settings().strict_status_transitions,
        )
        repo.add(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            status=order.status,
            changed_by=command.changed_by,
        )

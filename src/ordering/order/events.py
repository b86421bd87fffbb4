"""Domain events for the Order aggregate.

Events are raised alongside the persisted state change; the status history
entity on the Order remains the record customers and admins read back.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer checked out their cart and an order was recorded."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_email = String()
    delivery_method = String(required=True)
    items = Text(required=True)  # JSON: list of item snapshots
    subtotal = Integer(required=True)
    delivery_fee = Integer(required=True)
    total_amount = Integer(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An order moved to a new status and a history entry was appended."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = String(required=True)
    notes = Text()
    changed_at = DateTime(required=True)

"""Read side of the ordering domain: customer order lists, admin search, status history.

Listings are ordered newest first in the repository query and read page by
page, so no order falls off the end of a long list.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.order.order import Order, OrderStatus
from shared.paging import fetch_all

NEWEST_FIRST = "-created_at"


def get_order(order_id) -> Order:
    return current_domain.repository_for(Order).get(order_id)


def status_history(order_id):
    """All history entries of an order, oldest first.

    Raises ``ObjectNotFoundError`` when the order does not exist.
    """
    return get_order(order_id).sorted_history()


def order_for_idempotency_key(customer_id, idempotency_key) -> Order | None:
    """The customer's order submitted under ``idempotency_key``, if any."""
    records = (
        current_domain.repository_for(Order)
        ._dao.query.filter(customer_id=str(customer_id), idempotency_key=idempotency_key)
        .all()
        .items
    )
    return records[0] if records else None


def _load(records):
    repo = current_domain.repository_for(Order)
    return [repo.get(record.id) for record in records]


def orders_for_customer(customer_id) -> list[Order]:
    query = current_domain.repository_for(Order)._dao.query.filter(customer_id=str(customer_id))
    return _load(fetch_all(query.order_by(NEWEST_FIRST)))


def _matches(order: Order, term: str) -> bool:
    haystack = (
        order.customer_name,
        order.customer_email,
        order.customer_phone,
        str(order.id),
    )
    return any(term in (value or "").lower() for value in haystack)


def all_orders(status=None, search=None) -> list[Order]:
    """Every order, newest first, optionally narrowed by status and a search term.

    The search term is matched case-insensitively against the customer's name,
    email and phone and against the order id.
    """
    query = current_domain.repository_for(Order)._dao.query
    if status:
        try:
            status = OrderStatus(status).value
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {status}"]}) from None
        query = query.filter(status=status)

    orders = _load(fetch_all(query.order_by(NEWEST_FIRST)))
    if search and search.strip():
        term = search.strip().lower()
        orders = [order for order in orders if _matches(order, term)]

    return orders

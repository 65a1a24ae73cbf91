import logging
from typing import Sequence

from app.config import settings
from app.domain import order_lifecycle
from app.errors import InvalidValue, NotFound
from app.models.common import utcnow
from app.models.core import Order, OrderStatus
from app.repositories import Repositories

logger = logging.getLogger(__name__)


def create_order(repos: Repositories, order_table_id: str | None, line_items: Sequence[tuple[str, int]]) -> Order:
    menus = repos.menus.find_all_by_id(order_lifecycle.distinct_menu_ids(line_items))
    table = repos.tables.find_by_id(order_table_id, for_update=True) if order_table_id else None

    order = order_lifecycle.create(table, line_items, len(menus))

    # bumps the table's row version so a concurrent empty/ungroup decision on it conflicts
    table.updated_at = utcnow()
    repos.orders.save(order)
    logger.info("order created id=%s table=%s lines=%d", order.id, table.id, len(order.line_items))
    return order


def list_orders(repos: Repositories) -> list[Order]:
    return repos.orders.find_all()


def change_order_status(repos: Repositories, order_id: str, new_status, *, strict: bool | None = None) -> Order:
    try:
        status = new_status if isinstance(new_status, OrderStatus) else OrderStatus(new_status)
    except ValueError:
        raise InvalidValue(f"unknown order status: {new_status!r}")

    order = repos.orders.find_by_id(order_id, for_update=True)
    if order is None:
        raise NotFound(f"order not found: {order_id}")

    previous = order.status
    order_lifecycle.change_status(
        order, status, strict=settings.ORDER_STATUS_STRICT if strict is None else strict
    )
    repos.orders.save(order)
    logger.info("order status changed id=%s %s -> %s", order.id, previous.value, status.value)
    return order

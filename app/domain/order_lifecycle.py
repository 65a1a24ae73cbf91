"""Order status machine: COOKING -> MEAL -> COMPLETION.

COMPLETION is terminal and is the one hard gate. Forward-only ordering of the
other states is a stricter policy callers switch on with ``strict=True``.
"""
from datetime import datetime, timezone
from typing import Iterable, Sequence

from app.domain.values import Quantity
from app.errors import (
    AlreadyCompleted, EmptyLineItems, InvalidStatusTransition, InvalidValue,
    LineItemMenuMismatch, TableNotFound,
)
from app.models.core import Order, OrderLineItem, OrderStatus, OrderTable

TERMINAL = OrderStatus.COMPLETION

TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.COOKING: frozenset({OrderStatus.MEAL, OrderStatus.COMPLETION}),
    OrderStatus.MEAL: frozenset({OrderStatus.COMPLETION}),
    OrderStatus.COMPLETION: frozenset(),
}


def is_active(order: Order) -> bool:
    return order.status != TERMINAL


def any_active(orders: Iterable[Order]) -> bool:
    return any(is_active(o) for o in orders)


def distinct_menu_ids(line_items: Iterable[tuple[str, int]]) -> list[str]:
    return list(dict.fromkeys(menu_id for menu_id, _ in line_items))


def create(
    table: OrderTable | None,
    line_items: Sequence[tuple[str, int]],
    found_menu_count: int,
) -> Order:
    """Build a COOKING order for ``table`` from (menu id, quantity) pairs.

    ``found_menu_count`` is how many of the distinct referenced menus the
    menu lookup actually resolved.
    """
    if not line_items:
        raise EmptyLineItems()
    if len(distinct_menu_ids(line_items)) != found_menu_count:
        raise LineItemMenuMismatch()
    if table is None:
        raise TableNotFound()

    items = []
    for seq, (menu_id, quantity) in enumerate(line_items):
        if Quantity(quantity).value < 1:
            raise InvalidValue("order line item quantity must be at least 1")
        items.append(OrderLineItem(menu_id=menu_id, quantity=quantity, seq=seq))

    return Order(
        order_table_id=table.id,
        status=OrderStatus.COOKING,
        ordered_time=datetime.now(timezone.utc),
        line_items=items,
    )


def change_status(order: Order, new_status: OrderStatus, *, strict: bool = False) -> Order:
    if order.status == TERMINAL:
        raise AlreadyCompleted()
    if strict and new_status not in TRANSITIONS[order.status]:
        raise InvalidStatusTransition(f"{order.status.value} -> {new_status.value} is not allowed")
    order.status = new_status
    return order

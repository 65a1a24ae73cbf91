from typing import Iterable

from app.domain.order_lifecycle import any_active
from app.domain.values import NumberOfGuests
from app.errors import ActiveOrderExists, TableHasGroup, TableIsEmpty
from app.models.core import Order, OrderTable


def create(empty: bool) -> OrderTable:
    return OrderTable(empty=bool(empty), number_of_guests=0, table_group_id=None)


def change_empty(table: OrderTable, related_orders: Iterable[Order]) -> OrderTable:
    """Toggle the empty flag; ``related_orders`` are all orders bound to the table."""
    if table.is_grouped:
        raise TableHasGroup()
    if any_active(related_orders):
        raise ActiveOrderExists()
    table.empty = not table.empty
    return table


def change_number_of_guests(table: OrderTable, count: int) -> OrderTable:
    guests = NumberOfGuests(count)
    if table.empty:
        raise TableIsEmpty()
    table.number_of_guests = guests.value
    return table

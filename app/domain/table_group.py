"""Forming and dissolving table groups.

Both operations validate every member before touching any of them, so a
rejection never leaves a partially grouped or partially released set.
"""
from datetime import datetime, timezone
from typing import Mapping, Sequence

from app.domain.order_lifecycle import any_active
from app.errors import ActiveOrderExists, MinimumSizeViolation, TableAlreadyGrouped, TableNotEmpty
from app.models.core import Order, OrderTable, TableGroup

MIN_TABLES = 2


def create(candidates: Sequence[OrderTable]) -> TableGroup:
    # the same table listed twice counts once
    members = list({id(table): table for table in candidates}.values())
    if len(members) < MIN_TABLES:
        raise MinimumSizeViolation()
    for table in members:
        if table.empty is not True:
            raise TableNotEmpty(f"table {table.id} is not empty")
    for table in members:
        if table.is_grouped:
            raise TableAlreadyGrouped(f"table {table.id} already belongs to a group")

    group = TableGroup(created_at=datetime.now(timezone.utc))
    for table in members:
        table.table_group = group
    return group


def ungroup(group: TableGroup, orders_by_table: Mapping[str, Sequence[Order]]) -> None:
    members = list(group.order_tables)
    for table in members:
        if any_active(orders_by_table.get(table.id, ())):
            raise ActiveOrderExists(f"table {table.id} has an active order")

    for table in members:
        table.table_group = None
        table.table_group_id = None
    group.deleted_at = datetime.now(timezone.utc)

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db import transaction
from app.deps import require_db, require_repos
from app.models.core import Order
from app.repositories import Repositories
from app.schemas.orders import OrderIn, OrderLineItemOut, OrderOut, OrderStatusIn
from app.services import orders

router = APIRouter(prefix="/orders", tags=["orders"])


def _order_out(o: Order) -> OrderOut:
    return OrderOut(
        id=o.id,
        order_table_id=o.order_table_id,
        order_status=o.status.value,
        ordered_time=o.ordered_time,
        order_line_items=[
            OrderLineItemOut(id=li.id, order_id=o.id, menu_id=li.menu_id, quantity=li.quantity)
            for li in o.line_items
        ],
    )


@router.post("/", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderIn,
    db: Session = Depends(require_db),
    repos: Repositories = Depends(require_repos),
):
    with transaction(db):
        o = orders.create_order(
            repos,
            body.order_table_id,
            [(li.menu_id, li.quantity) for li in body.order_line_items],
        )
    return _order_out(o)


@router.get("/", response_model=List[OrderOut])
def list_orders(repos: Repositories = Depends(require_repos)):
    return [_order_out(o) for o in orders.list_orders(repos)]


@router.put("/{order_id}/status", response_model=OrderOut)
def change_order_status(
    order_id: str,
    body: OrderStatusIn,
    db: Session = Depends(require_db),
    repos: Repositories = Depends(require_repos),
):
    """
    Completed orders are final: any further status change is rejected with
    code AlreadyCompleted.
    """
    with transaction(db):
        o = orders.change_order_status(repos, order_id, body.order_status)
    return _order_out(o)

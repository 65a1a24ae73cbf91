# app/routers/dining.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.db import transaction
from app.deps import require_db, require_repos
from app.models.core import OrderTable, TableGroup
from app.repositories import Repositories
from app.schemas.tables import (
    NumberOfGuestsIn,
    OrderTableIn,
    OrderTableOut,
    TableGroupIn,
    TableGroupOut,
)
from app.services import dining

router = APIRouter(prefix="/dining", tags=["dining"])


def _row_from_table(t: OrderTable) -> OrderTableOut:
    return OrderTableOut(
        id=t.id,
        table_group_id=t.table_group_id,
        number_of_guests=t.number_of_guests,
        empty=t.empty,
    )


def _row_from_group(g: TableGroup) -> TableGroupOut:
    return TableGroupOut(
        id=g.id,
        created_at=g.created_at,
        order_tables=[_row_from_table(t) for t in g.order_tables],
    )


# ------------------------------------------------------------------
# tables
# ------------------------------------------------------------------
@router.post("/tables", response_model=OrderTableOut, status_code=status.HTTP_201_CREATED)
def create_table(
    body: OrderTableIn,
    db: Session = Depends(require_db),
    repos: Repositories = Depends(require_repos),
):
    with transaction(db):
        t = dining.create_table(repos, body.empty)
    return _row_from_table(t)


@router.get("/tables", response_model=List[OrderTableOut])
def list_tables(repos: Repositories = Depends(require_repos)):
    return [_row_from_table(t) for t in dining.list_tables(repos)]


@router.put("/tables/{table_id}/empty", response_model=OrderTableOut)
def change_empty(
    table_id: str,
    db: Session = Depends(require_db),
    repos: Repositories = Depends(require_repos),
):
    """
    Toggle the table between empty and occupied.
    Rejected while the table is grouped or any of its orders is still
    COOKING or MEAL.
    """
    with transaction(db):
        t = dining.change_table_empty(repos, table_id)
    return _row_from_table(t)


@router.put("/tables/{table_id}/guests", response_model=OrderTableOut)
def change_number_of_guests(
    table_id: str,
    body: NumberOfGuestsIn,
    db: Session = Depends(require_db),
    repos: Repositories = Depends(require_repos),
):
    with transaction(db):
        t = dining.change_number_of_guests(repos, table_id, body.number_of_guests)
    return _row_from_table(t)


# ------------------------------------------------------------------
# table groups
# ------------------------------------------------------------------
@router.post("/groups", response_model=TableGroupOut, status_code=status.HTTP_201_CREATED)
def create_table_group(
    body: TableGroupIn,
    db: Session = Depends(require_db),
    repos: Repositories = Depends(require_repos),
):
    """
    body: {order_table_ids: [id, id, ...]}  (two or more empty, ungrouped tables)
    """
    with transaction(db):
        g = dining.create_table_group(repos, body.order_table_ids)
    return _row_from_group(g)


@router.get("/groups/{group_id}", response_model=TableGroupOut)
def get_table_group(group_id: str, repos: Repositories = Depends(require_repos)):
    return _row_from_group(dining.get_table_group(repos, group_id))


@router.delete("/groups/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
def ungroup(
    group_id: str,
    db: Session = Depends(require_db),
    repos: Repositories = Depends(require_repos),
):
    with transaction(db):
        dining.ungroup_table_group(repos, group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

import logging
from typing import Iterable

from app.domain import table_group, table_state
from app.errors import NotFound, TableNotFound
from app.models.core import OrderTable, TableGroup
from app.repositories import Repositories

logger = logging.getLogger(__name__)


def _table(repos: Repositories, table_id: str, *, for_update: bool = False) -> OrderTable:
    t = repos.tables.find_by_id(table_id, for_update=for_update)
    if t is None:
        raise TableNotFound(f"order table not found: {table_id}")
    return t


def _group(repos: Repositories, group_id: str, *, for_update: bool = False) -> TableGroup:
    g = repos.table_groups.find_by_id(group_id, for_update=for_update)
    if g is None:
        raise NotFound(f"table group not found: {group_id}")
    return g


# ── Tables ──────────────────────────────────────────────────────────────────
def create_table(repos: Repositories, empty: bool) -> OrderTable:
    t = repos.tables.save(table_state.create(empty))
    logger.info("table created id=%s empty=%s", t.id, t.empty)
    return t


def list_tables(repos: Repositories) -> list[OrderTable]:
    return repos.tables.find_all()


def change_table_empty(repos: Repositories, table_id: str) -> OrderTable:
    t = _table(repos, table_id, for_update=True)
    table_state.change_empty(t, repos.orders.find_all_by_table_id(t.id))
    repos.tables.save(t)
    logger.info("table empty flag changed id=%s empty=%s", t.id, t.empty)
    return t


def change_number_of_guests(repos: Repositories, table_id: str, count: int) -> OrderTable:
    t = _table(repos, table_id, for_update=True)
    table_state.change_number_of_guests(t, count)
    repos.tables.save(t)
    logger.info("table guests changed id=%s guests=%s", t.id, t.number_of_guests)
    return t


# ── Table groups ────────────────────────────────────────────────────────────
def create_table_group(repos: Repositories, table_ids: Iterable[str]) -> TableGroup:
    ids = list(dict.fromkeys(table_ids or ()))
    found = {t.id: t for t in repos.tables.find_all_by_id(ids, for_update=True)}
    missing = [tid for tid in ids if tid not in found]
    if missing:
        raise TableNotFound(f"order table not found: {', '.join(missing)}")

    g = table_group.create([found[tid] for tid in ids])
    repos.table_groups.save(g)
    logger.info("table group created id=%s tables=%s", g.id, ids)
    return g


def get_table_group(repos: Repositories, group_id: str) -> TableGroup:
    return _group(repos, group_id)


def ungroup_table_group(repos: Repositories, group_id: str) -> None:
    g = _group(repos, group_id, for_update=True)
    member_ids = [t.id for t in g.order_tables]
    repos.tables.find_all_by_id(member_ids, for_update=True)

    table_group.ungroup(g, repos.orders.find_all_by_table_ids(member_ids))
    repos.table_groups.save(g)
    logger.info("table group dissolved id=%s tables=%s", g.id, member_ids)

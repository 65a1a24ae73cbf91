import pytest

from app.db import transaction
from app.domain import table_group, table_state
from app.errors import (
    ActiveOrderExists, AlreadyCompleted, ConcurrencyConflict, InvalidStatusTransition, InvalidValue,
    LineItemMenuMismatch, MenuProductsEmpty, MinimumSizeViolation, NegativeGuestCount,
    NotFound, PriceExceedsSum, TableAlreadyGrouped, TableHasGroup, TableIsEmpty,
    TableNotEmpty, TableNotFound,
)
from app.models.core import OrderStatus, OrderTable, TableGroup
from app.repositories import Repositories
from app.services import catalog, dining, orders


def _menu(db, repos, price=1, product_price=2):
    with transaction(db):
        g = catalog.create_menu_group(repos, "a")
        p = catalog.create_product(repos, "fried chicken", product_price)
        return catalog.create_menu(repos, "half and half", price, g.id, [(p.id, 1)])


def _table(db, repos, empty=True):
    with transaction(db):
        return dining.create_table(repos, empty)


def _order(db, repos, table, menu, status=None):
    with transaction(db):
        o = orders.create_order(repos, table.id, [(menu.id, 1)])
    if status is not None:
        with transaction(db):
            orders.change_order_status(repos, o.id, status)
    return o


def _group(db, repos, *tables):
    with transaction(db):
        return dining.create_table_group(repos, [t.id for t in tables])


def _reload(db, table):
    db.expire_all()
    return db.get(OrderTable, table.id)


# ===== catalog =====

def test_menu_priced_within_products(db, repos):
    m = _menu(db, repos, price=1, product_price=2)
    assert float(m.price) == 1.0
    assert [(mp.quantity) for mp in m.menu_products] == [1]
    assert [x.id for x in catalog.list_menus(repos)] == [m.id]


def test_menu_priced_above_products_is_not_saved(db, repos):
    with pytest.raises(PriceExceedsSum):
        _menu(db, repos, price=3, product_price=2)
    assert catalog.list_menus(repos) == []
    assert catalog.list_menu_groups(repos) == []


def test_menu_requires_known_group_and_products(db, repos):
    with transaction(db):
        g = catalog.create_menu_group(repos, "a")
    with pytest.raises(NotFound):
        with transaction(db):
            catalog.create_menu(repos, "m", 1, "nope", [])
    with pytest.raises(NotFound):
        with transaction(db):
            catalog.create_menu(repos, "m", 1, g.id, [("nope", 1)])
    with pytest.raises(MenuProductsEmpty):
        with transaction(db):
            catalog.create_menu(repos, "m", 1, g.id, [])


def test_product_values_are_validated(db, repos):
    with pytest.raises(InvalidValue):
        with transaction(db):
            catalog.create_product(repos, "x", -1)
    with pytest.raises(InvalidValue):
        with transaction(db):
            catalog.create_product(repos, " ", 1)
    assert catalog.list_products(repos) == []


# ===== orders =====

def test_order_on_known_table(db, repos):
    m = _menu(db, repos)
    t = _table(db, repos, empty=False)
    o = _order(db, repos, t, m)
    assert o.status == OrderStatus.COOKING
    assert [x.id for x in orders.list_orders(repos)] == [o.id]


def test_order_rejections(db, repos):
    m = _menu(db, repos)
    t = _table(db, repos)
    with pytest.raises(TableNotFound):
        with transaction(db):
            orders.create_order(repos, "nope", [(m.id, 1)])
    with pytest.raises(LineItemMenuMismatch):
        with transaction(db):
            orders.create_order(repos, t.id, [(m.id, 1), ("nope", 1)])
    assert orders.list_orders(repos) == []


def test_completed_order_is_final(db, repos):
    m = _menu(db, repos)
    t = _table(db, repos, empty=False)
    o = _order(db, repos, t, m, status="COMPLETION")
    for target in ("COOKING", "MEAL", "COMPLETION"):
        with pytest.raises(AlreadyCompleted):
            with transaction(db):
                orders.change_order_status(repos, o.id, target)


def test_strict_status_policy(db, repos):
    m = _menu(db, repos)
    t = _table(db, repos, empty=False)
    o = _order(db, repos, t, m, status="MEAL")
    with pytest.raises(InvalidStatusTransition):
        with transaction(db):
            orders.change_order_status(repos, o.id, "COOKING", strict=True)
    with transaction(db):
        o = orders.change_order_status(repos, o.id, "COOKING")
    assert o.status == OrderStatus.COOKING


def test_status_change_for_unknown_order(db, repos):
    with pytest.raises(NotFound):
        with transaction(db):
            orders.change_order_status(repos, "nope", "MEAL")


# ===== tables =====

def test_change_empty_follows_order_status(db, repos):
    m = _menu(db, repos)
    t = _table(db, repos, empty=False)
    o = _order(db, repos, t, m, status="MEAL")
    with pytest.raises(ActiveOrderExists):
        with transaction(db):
            dining.change_table_empty(repos, t.id)
    assert _reload(db, t).empty is False

    with transaction(db):
        orders.change_order_status(repos, o.id, "COMPLETION")
    with transaction(db):
        t = dining.change_table_empty(repos, t.id)
    assert t.empty is True


def test_change_empty_on_grouped_table(db, repos):
    t1, t2 = _table(db, repos), _table(db, repos)
    _group(db, repos, t1, t2)
    with pytest.raises(TableHasGroup):
        with transaction(db):
            dining.change_table_empty(repos, t1.id)


def test_guests(db, repos):
    empty = _table(db, repos, empty=True)
    with pytest.raises(TableIsEmpty):
        with transaction(db):
            dining.change_number_of_guests(repos, empty.id, 3)

    seated = _table(db, repos, empty=False)
    with pytest.raises(NegativeGuestCount):
        with transaction(db):
            dining.change_number_of_guests(repos, seated.id, -1)
    with transaction(db):
        dining.change_number_of_guests(repos, seated.id, 3)
    assert _reload(db, seated).number_of_guests == 3

    with pytest.raises(TableNotFound):
        with transaction(db):
            dining.change_number_of_guests(repos, "nope", 1)


# ===== table groups =====

def test_group_two_empty_tables(db, repos):
    t1, t2 = _table(db, repos), _table(db, repos)
    g = _group(db, repos, t1, t2)
    assert _reload(db, t1).table_group_id == g.id
    assert _reload(db, t2).table_group_id == g.id
    assert {t.id for t in dining.get_table_group(repos, g.id).order_tables} == {t1.id, t2.id}


def test_group_failures_leave_tables_untouched(db, repos):
    t1, t2 = _table(db, repos), _table(db, repos, empty=False)
    with pytest.raises(TableNotEmpty):
        _group(db, repos, t1, t2)
    assert _reload(db, t1).table_group_id is None

    t3, t4 = _table(db, repos), _table(db, repos)
    _group(db, repos, t3, t4)
    with pytest.raises(TableAlreadyGrouped):
        _group(db, repos, t1, t3)
    assert _reload(db, t1).table_group_id is None

    with pytest.raises(MinimumSizeViolation):
        _group(db, repos, t1, t1)
    with pytest.raises(TableNotFound):
        with transaction(db):
            dining.create_table_group(repos, [t1.id, "nope"])
    assert _reload(db, t1).table_group_id is None


def test_ungroup_blocked_by_meal_order(db, repos):
    m = _menu(db, repos)
    t1, t2 = _table(db, repos), _table(db, repos)
    g = _group(db, repos, t1, t2)
    _order(db, repos, t1, m, status="MEAL")

    with pytest.raises(ActiveOrderExists):
        with transaction(db):
            dining.ungroup_table_group(repos, g.id)
    assert _reload(db, t1).table_group_id == g.id
    assert _reload(db, t2).table_group_id == g.id


def test_ungroup_releases_tables_once(db, repos):
    m = _menu(db, repos)
    t1, t2 = _table(db, repos), _table(db, repos)
    g = _group(db, repos, t1, t2)
    _order(db, repos, t1, m, status="COMPLETION")

    with transaction(db):
        dining.ungroup_table_group(repos, g.id)
    assert _reload(db, t1).table_group_id is None
    assert _reload(db, t2).table_group_id is None

    with pytest.raises(NotFound):
        with transaction(db):
            dining.ungroup_table_group(repos, g.id)
    with pytest.raises(NotFound):
        dining.get_table_group(repos, g.id)

    # released tables can be grouped again
    g2 = _group(db, repos, t1, t2)
    assert g2.id != g.id


# ===== concurrency =====

def test_new_order_during_empty_check_conflicts(file_session_factory):
    setup = file_session_factory()
    setup_repos = Repositories.from_session(setup)
    m = _menu(setup, setup_repos)
    t = _table(setup, setup_repos, empty=False)
    setup.close()

    # worker A reads the table and its (no) orders ...
    a = file_session_factory()
    a_repos = Repositories.from_session(a)
    table = a_repos.tables.find_by_id(t.id)
    seen_orders = a_repos.orders.find_all_by_table_id(t.id)
    assert seen_orders == []

    # ... worker B places an order on it and commits ...
    b = file_session_factory()
    b_repos = Repositories.from_session(b)
    with transaction(b):
        orders.create_order(b_repos, t.id, [(m.id, 1)])
    b.close()

    # ... so A's decision, taken on stale state, must not commit
    with pytest.raises(ConcurrencyConflict) as exc:
        with transaction(a):
            table_state.change_empty(table, seen_orders)
            a_repos.tables.save(table)
    assert exc.value.retryable
    a.close()

    check = file_session_factory()
    assert check.get(OrderTable, t.id).empty is False
    check.close()


def test_new_order_during_ungroup_conflicts(file_session_factory):
    setup = file_session_factory()
    setup_repos = Repositories.from_session(setup)
    m = _menu(setup, setup_repos)
    t1, t2 = _table(setup, setup_repos), _table(setup, setup_repos)
    g = _group(setup, setup_repos, t1, t2)
    setup.close()

    # worker A loads the group and sees no orders on its tables ...
    a = file_session_factory()
    a_repos = Repositories.from_session(a)
    group = a_repos.table_groups.find_by_id(g.id)
    seen_orders = a_repos.orders.find_all_by_table_ids([t.id for t in group.order_tables])
    assert not any(seen_orders.values())

    # ... worker B places an order on T1 and commits ...
    b = file_session_factory()
    b_repos = Repositories.from_session(b)
    with transaction(b):
        orders.create_order(b_repos, t1.id, [(m.id, 1)])
    b.close()

    # ... so A must not release the tables
    with pytest.raises(ConcurrencyConflict) as exc:
        with transaction(a):
            table_group.ungroup(group, seen_orders)
            a_repos.table_groups.save(group)
    assert exc.value.retryable
    a.close()

    check = file_session_factory()
    assert check.get(OrderTable, t1.id).table_group_id == g.id
    assert check.get(OrderTable, t2.id).table_group_id == g.id
    assert check.get(TableGroup, g.id).deleted_at is None
    check.close()


def test_empty_toggle_during_grouping_conflicts(file_session_factory):
    setup = file_session_factory()
    setup_repos = Repositories.from_session(setup)
    t1, t2 = _table(setup, setup_repos), _table(setup, setup_repos)
    setup.close()

    # worker A loads both tables while they are empty ...
    a = file_session_factory()
    a_repos = Repositories.from_session(a)
    candidates = a_repos.tables.find_all_by_id([t1.id, t2.id])
    assert all(t.empty for t in candidates)

    # ... worker B seats guests at T1 and commits ...
    b = file_session_factory()
    b_repos = Repositories.from_session(b)
    with transaction(b):
        dining.change_table_empty(b_repos, t1.id)
    b.close()

    # ... so A's group must not be formed
    with pytest.raises(ConcurrencyConflict):
        with transaction(a):
            a_repos.table_groups.save(table_group.create(candidates))
    a.close()

    check = file_session_factory()
    assert check.get(OrderTable, t1.id).empty is False
    assert check.get(OrderTable, t1.id).table_group_id is None
    assert check.get(OrderTable, t2.id).table_group_id is None
    check.close()

"""Session-backed CRUD collaborators handed to the application services."""
from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

from sqlalchemy.orm import Session

from app.models.core import Menu, MenuGroup, Order, OrderTable, Product, TableGroup

T = TypeVar("T")


class Repository(Generic[T]):
    model: type

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        # soft-deleted rows are invisible to every lookup
        return self.db.query(self.model).filter(self.model.deleted_at.is_(None))

    def find_by_id(self, id: str, *, for_update: bool = False) -> T | None:
        q = self._query().filter(self.model.id == id)
        if for_update:
            q = q.with_for_update()
        return q.first()

    def find_all_by_id(self, ids: Iterable[str], *, for_update: bool = False) -> list[T]:
        ids = list(ids)
        if not ids:
            return []
        q = self._query().filter(self.model.id.in_(ids))
        if for_update:
            q = q.with_for_update()
        return q.all()

    def find_all(self) -> list[T]:
        return self._query().order_by(self.model.created_at.asc(), self.model.id.asc()).all()

    def save(self, entity: T) -> T:
        self.db.add(entity)
        self.db.flush()
        return entity


class ProductRepository(Repository[Product]):
    model = Product


class MenuGroupRepository(Repository[MenuGroup]):
    model = MenuGroup


class MenuRepository(Repository[Menu]):
    model = Menu


class OrderTableRepository(Repository[OrderTable]):
    model = OrderTable


class TableGroupRepository(Repository[TableGroup]):
    model = TableGroup


class OrderRepository(Repository[Order]):
    model = Order

    def find_all_by_table_id(self, table_id: str) -> list[Order]:
        return self._query().filter(Order.order_table_id == table_id).all()

    def find_all_by_table_ids(self, table_ids: Iterable[str]) -> dict[str, list[Order]]:
        table_ids = list(table_ids)
        by_table: dict[str, list[Order]] = {tid: [] for tid in table_ids}
        if not table_ids:
            return by_table
        for o in self._query().filter(Order.order_table_id.in_(table_ids)).all():
            by_table[o.order_table_id].append(o)
        return by_table


@dataclass
class Repositories:
    products: ProductRepository
    menu_groups: MenuGroupRepository
    menus: MenuRepository
    tables: OrderTableRepository
    table_groups: TableGroupRepository
    orders: OrderRepository

    @classmethod
    def from_session(cls, db: Session) -> "Repositories":
        return cls(
            products=ProductRepository(db),
            menu_groups=MenuGroupRepository(db),
            menus=MenuRepository(db),
            tables=OrderTableRepository(db),
            table_groups=TableGroupRepository(db),
            orders=OrderRepository(db),
        )

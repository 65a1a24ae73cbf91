from decimal import Decimal
from enum import Enum as PyEnum
from datetime import datetime

from sqlalchemy import String, ForeignKey, Boolean, Numeric, Enum, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db import Base
from app.models.common import IdMixin, TSMMixin

# ── Enums ───────────────────────────────────────────────────────────────────
class OrderStatus(PyEnum):
    COOKING = "COOKING"
    MEAL = "MEAL"
    COMPLETION = "COMPLETION"

# ── Catalog ─────────────────────────────────────────────────────────────────
class Product(Base, IdMixin, TSMMixin):
    __tablename__ = "product"
    name: Mapped[str] = mapped_column(String(160))
    price: Mapped[Decimal] = mapped_column(Numeric(19, 2))

class MenuGroup(Base, IdMixin, TSMMixin):
    __tablename__ = "menu_group"
    name: Mapped[str] = mapped_column(String(160))

class Menu(Base, IdMixin, TSMMixin):
    __tablename__ = "menu"
    name: Mapped[str] = mapped_column(String(160))
    price: Mapped[Decimal] = mapped_column(Numeric(19, 2))
    menu_group_id: Mapped[str] = mapped_column(String(36), ForeignKey("menu_group.id"))
    menu_products: Mapped[list["MenuProduct"]] = relationship(
        back_populates="menu", cascade="all, delete-orphan", order_by="MenuProduct.seq"
    )

class MenuProduct(Base, IdMixin, TSMMixin):
    __tablename__ = "menu_product"
    menu_id: Mapped[str] = mapped_column(String(36), ForeignKey("menu.id"))
    product_id: Mapped[str] = mapped_column(String(36), ForeignKey("product.id"))
    quantity: Mapped[int] = mapped_column(Integer)
    seq: Mapped[int] = mapped_column(Integer, default=0)  # position within the menu
    menu: Mapped[Menu] = relationship(back_populates="menu_products")

# ── Dining ──────────────────────────────────────────────────────────────────
class TableGroup(Base, IdMixin, TSMMixin):
    __tablename__ = "table_group"
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    order_tables: Mapped[list["OrderTable"]] = relationship(back_populates="table_group")
    __mapper_args__ = {"version_id_col": version}

class OrderTable(Base, IdMixin, TSMMixin):
    __tablename__ = "order_table"
    table_group_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("table_group.id"))
    number_of_guests: Mapped[int] = mapped_column(Integer, default=0)
    empty: Mapped[bool] = mapped_column(Boolean, default=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    table_group: Mapped[TableGroup | None] = relationship(back_populates="order_tables")
    __mapper_args__ = {"version_id_col": version}

    @property
    def is_grouped(self) -> bool:
        return self.table_group_id is not None or self.table_group is not None

# ── Orders ──────────────────────────────────────────────────────────────────
class Order(Base, IdMixin, TSMMixin):
    __tablename__ = "orders"
    order_table_id: Mapped[str] = mapped_column(String(36), ForeignKey("order_table.id"), index=True)
    status: Mapped[OrderStatus] = mapped_column(Enum(OrderStatus), default=OrderStatus.COOKING)
    ordered_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    line_items: Mapped[list["OrderLineItem"]] = relationship(
        back_populates="order", cascade="all, delete-orphan", order_by="OrderLineItem.seq"
    )

class OrderLineItem(Base, IdMixin, TSMMixin):
    __tablename__ = "order_line_item"
    order_id: Mapped[str] = mapped_column(String(36), ForeignKey("orders.id"))
    menu_id: Mapped[str] = mapped_column(String(36), ForeignKey("menu.id"))
    quantity: Mapped[int] = mapped_column(Integer)
    seq: Mapped[int] = mapped_column(Integer, default=0)
    order: Mapped[Order] = relationship(back_populates="line_items")

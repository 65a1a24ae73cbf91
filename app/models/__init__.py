# Importing the module registers tables with Base for create_all()
from .core import (  # noqa: F401
    # Enums
    OrderStatus,

    # Catalog
    Product, MenuGroup, Menu, MenuProduct,

    # Dining
    OrderTable, TableGroup,

    # Orders
    Order, OrderLineItem,
)

__all__ = [
    # Enums
    "OrderStatus",

    # Catalog
    "Product", "MenuGroup", "Menu", "MenuProduct",

    # Dining
    "OrderTable", "TableGroup",

    # Orders
    "Order", "OrderLineItem",
]

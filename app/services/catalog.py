import logging
from typing import Sequence

from app.domain import menu_pricing
from app.domain.values import Name, Price, Quantity
from app.errors import NotFound
from app.models.core import Menu, MenuGroup, MenuProduct, Product
from app.repositories import Repositories

logger = logging.getLogger(__name__)


def create_product(repos: Repositories, name: str, price) -> Product:
    p = Product(name=Name(name).text, price=Price(price).amount)
    repos.products.save(p)
    logger.info("product created id=%s price=%s", p.id, p.price)
    return p


def list_products(repos: Repositories) -> list[Product]:
    return repos.products.find_all()


def create_menu_group(repos: Repositories, name: str) -> MenuGroup:
    g = MenuGroup(name=Name(name).text)
    repos.menu_groups.save(g)
    logger.info("menu group created id=%s", g.id)
    return g


def list_menu_groups(repos: Repositories) -> list[MenuGroup]:
    return repos.menu_groups.find_all()


def create_menu(
    repos: Repositories,
    name: str,
    price,
    menu_group_id: str | None,
    line_items: Sequence[tuple[str, int]],
) -> Menu:
    """Create a menu from (product id, quantity) pairs.

    Product prices are resolved here so the pricing rule itself stays free of
    lookups.
    """
    menu_name = Name(name)
    menu_price = Price(price)

    group = repos.menu_groups.find_by_id(menu_group_id) if menu_group_id else None
    if group is None:
        raise NotFound(f"menu group not found: {menu_group_id}")

    lines = [(product_id, Quantity(qty)) for product_id, qty in line_items]
    products = {p.id: p for p in repos.products.find_all_by_id({pid for pid, _ in lines})}
    missing = sorted({pid for pid, _ in lines if pid not in products})
    if missing:
        raise NotFound(f"product not found: {', '.join(map(str, missing))}")

    menu_pricing.validate(menu_price, [(Price(products[pid].price), qty) for pid, qty in lines])

    menu = Menu(
        name=menu_name.text,
        price=menu_price.amount,
        menu_group_id=group.id,
        menu_products=[
            MenuProduct(product_id=pid, quantity=qty.value, seq=seq)
            for seq, (pid, qty) in enumerate(lines)
        ],
    )
    repos.menus.save(menu)
    logger.info("menu created id=%s price=%s products=%d", menu.id, menu.price, len(lines))
    return menu


def list_menus(repos: Repositories) -> list[Menu]:
    return repos.menus.find_all()

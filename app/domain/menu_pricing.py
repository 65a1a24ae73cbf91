from typing import Iterable, Sequence

from app.domain.values import Price, Quantity
from app.errors import MenuProductsEmpty, PriceExceedsSum

PricedLine = tuple[Price, Quantity]


def total_price(line_items: Iterable[PricedLine]) -> Price:
    total = Price.zero()
    for product_price, quantity in line_items:
        total = total + product_price * quantity
    return total


def validate(price: Price, line_items: Sequence[PricedLine]) -> None:
    """Accept a menu price only if it does not exceed the sum of its products.

    ``line_items`` are (product price, quantity) pairs; product prices are
    resolved by the caller before validation.
    """
    if not line_items:
        raise MenuProductsEmpty()
    total = total_price(line_items)
    if price > total:
        raise PriceExceedsSum(f"menu price {price.amount} exceeds product total {total.amount}")

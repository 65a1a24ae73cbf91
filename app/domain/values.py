"""Immutable value types that reject malformed primitives at construction."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from app.errors import InvalidValue, NegativeGuestCount


def _to_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if amount is None or isinstance(amount, bool):
        raise InvalidValue("price is required")
    try:
        # str() keeps floats like 0.1 from dragging binary artifacts along
        return Decimal(str(amount))
    except InvalidOperation:
        raise InvalidValue(f"price is not a number: {amount!r}")


def _to_int(value, what: str) -> int:
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValue(f"{what} must be an integer")
    return value


@dataclass(frozen=True, order=True)
class Price:
    amount: Decimal

    def __post_init__(self) -> None:
        amount = _to_decimal(self.amount)
        if not amount.is_finite() or amount < 0:
            raise InvalidValue(f"price must not be negative: {amount}")
        object.__setattr__(self, "amount", amount)

    @classmethod
    def zero(cls) -> Price:
        return cls(Decimal("0"))

    def __add__(self, other: Price) -> Price:
        return Price(self.amount + other.amount)

    def __mul__(self, quantity: Quantity) -> Price:
        return Price(self.amount * quantity.value)


@dataclass(frozen=True, order=True)
class Quantity:
    value: int

    def __post_init__(self) -> None:
        value = _to_int(self.value, "quantity")
        if value < 0:
            raise InvalidValue(f"quantity must not be negative: {value}")


@dataclass(frozen=True, order=True)
class NumberOfGuests:
    value: int

    def __post_init__(self) -> None:
        value = _to_int(self.value, "number of guests")
        if value < 0:
            raise NegativeGuestCount(f"number of guests must not be negative: {value}")


@dataclass(frozen=True)
class Name:
    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise InvalidValue("name must not be blank")

    def __str__(self) -> str:
        return self.text

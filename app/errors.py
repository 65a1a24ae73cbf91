"""Domain error taxonomy.

Every rejection the engine can produce is a ``DomainError`` subclass. The
class name doubles as the stable ``code`` returned to API callers, and
``status_code`` is the HTTP status the exception handler answers with.
"""


class DomainError(Exception):
    status_code: int = 400
    retryable: bool = False
    default_message: str = "request rejected"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return type(self).__name__


# ── Values ──────────────────────────────────────────────────────────────────
class InvalidValue(DomainError):
    default_message = "invalid value"


class NotFound(DomainError):
    status_code = 404
    default_message = "not found"


class TableNotFound(NotFound):
    default_message = "order table not found"


# ── Menu pricing ────────────────────────────────────────────────────────────
class MenuProductsEmpty(DomainError):
    default_message = "menu must contain at least one product"


class PriceExceedsSum(DomainError):
    default_message = "menu price must not exceed the sum of its products"


# ── Orders ──────────────────────────────────────────────────────────────────
class EmptyLineItems(DomainError):
    default_message = "order must contain at least one line item"


class LineItemMenuMismatch(DomainError):
    default_message = "every order line item must reference an existing menu"


class AlreadyCompleted(DomainError):
    default_message = "a completed order cannot change status"


class InvalidStatusTransition(DomainError):
    default_message = "order status can only move forward"


# ── Tables ──────────────────────────────────────────────────────────────────
class TableHasGroup(DomainError):
    default_message = "table belongs to a table group"


class ActiveOrderExists(DomainError):
    default_message = "table has an order that is still cooking or being eaten"


class TableIsEmpty(DomainError):
    default_message = "guests cannot be set on an empty table"


class NegativeGuestCount(InvalidValue):
    default_message = "number of guests must not be negative"


# ── Table groups ────────────────────────────────────────────────────────────
class MinimumSizeViolation(DomainError):
    default_message = "a table group needs at least two tables"


class TableNotEmpty(DomainError):
    default_message = "only empty tables can be grouped"


class TableAlreadyGrouped(DomainError):
    default_message = "table already belongs to a table group"


# ── Concurrency ─────────────────────────────────────────────────────────────
class ConcurrencyConflict(DomainError):
    status_code = 409
    retryable = True
    default_message = "the data changed concurrently; retry the request"

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

OrderStatusLiteral = Literal["COOKING", "MEAL", "COMPLETION"]

class OrderLineItemIn(BaseModel):
    menu_id: str
    quantity: int

class OrderLineItemOut(OrderLineItemIn):
    id: str
    order_id: str

class OrderIn(BaseModel):
    order_table_id: Optional[str] = None
    order_line_items: List[OrderLineItemIn] = []

class OrderStatusIn(BaseModel):
    order_status: OrderStatusLiteral

class OrderOut(BaseModel):
    id: str
    order_table_id: str
    order_status: OrderStatusLiteral
    ordered_time: datetime
    order_line_items: List[OrderLineItemOut]

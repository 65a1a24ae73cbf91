from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

class OrderTableIn(BaseModel):
    empty: bool = True

class OrderTableOut(BaseModel):
    id: str
    table_group_id: Optional[str] = None
    number_of_guests: int
    empty: bool

class NumberOfGuestsIn(BaseModel):
    number_of_guests: int

class TableGroupIn(BaseModel):
    order_table_ids: List[str] = []

class TableGroupOut(BaseModel):
    id: str
    created_at: datetime
    order_tables: List[OrderTableOut]

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class ProductIn(BaseModel):
    name: str
    price: Decimal

class ProductOut(BaseModel):
    id: str
    name: str
    price: float

class MenuGroupIn(BaseModel):
    name: str

class MenuGroupOut(MenuGroupIn):
    id: str

class MenuProductIn(BaseModel):
    product_id: str
    quantity: int

class MenuProductOut(MenuProductIn):
    id: str

class MenuIn(BaseModel):
    name: str
    price: Decimal
    # validated by the service so a missing group answers 404 rather than 422
    menu_group_id: Optional[str] = None
    menu_products: List[MenuProductIn] = []

class MenuOut(BaseModel):
    id: str
    name: str
    price: float
    menu_group_id: str
    menu_products: List[MenuProductOut]

from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db import transaction
from app.deps import require_db, require_repos
from app.models.core import Menu, MenuGroup, Product
from app.repositories import Repositories
from app.schemas.menu import (
    MenuGroupIn,
    MenuGroupOut,
    MenuIn,
    MenuOut,
    MenuProductOut,
    ProductIn,
    ProductOut,
)
from app.services import catalog

products_router = APIRouter(prefix="/products", tags=["products"])
router = APIRouter(prefix="/menus", tags=["menu"])


# ---------- helpers ----------

def _as_float(val: Decimal | float | int | None) -> float | None:
    if val is None:
        return None
    return float(val)

def _product_out(p: Product) -> ProductOut:
    return ProductOut(id=p.id, name=p.name, price=_as_float(p.price))

def _menu_out(m: Menu) -> MenuOut:
    return MenuOut(
        id=m.id,
        name=m.name,
        price=_as_float(m.price),
        menu_group_id=m.menu_group_id,
        menu_products=[
            MenuProductOut(id=mp.id, product_id=mp.product_id, quantity=mp.quantity)
            for mp in m.menu_products
        ],
    )


# ---------- PRODUCTS ----------

@products_router.post("/", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductIn,
    db: Session = Depends(require_db),
    repos: Repositories = Depends(require_repos),
):
    with transaction(db):
        p = catalog.create_product(repos, body.name, body.price)
    return _product_out(p)


@products_router.get("/", response_model=List[ProductOut])
def list_products(repos: Repositories = Depends(require_repos)):
    return [_product_out(p) for p in catalog.list_products(repos)]


# ---------- MENU GROUPS ----------

@router.post("/groups", response_model=MenuGroupOut, status_code=status.HTTP_201_CREATED)
def create_menu_group(
    body: MenuGroupIn,
    db: Session = Depends(require_db),
    repos: Repositories = Depends(require_repos),
):
    with transaction(db):
        g = catalog.create_menu_group(repos, body.name)
    return MenuGroupOut(id=g.id, name=g.name)


@router.get("/groups", response_model=List[MenuGroupOut])
def list_menu_groups(repos: Repositories = Depends(require_repos)):
    rows: List[MenuGroup] = catalog.list_menu_groups(repos)
    return [MenuGroupOut(id=g.id, name=g.name) for g in rows]


# ---------- MENUS ----------

@router.post("/", response_model=MenuOut, status_code=status.HTTP_201_CREATED)
def create_menu(
    body: MenuIn,
    db: Session = Depends(require_db),
    repos: Repositories = Depends(require_repos),
):
    """
    body:
      name: str
      price: number, must not exceed the sum of product price x quantity
      menu_group_id: str
      menu_products: [{product_id, quantity}, ...]  (at least one)
    """
    with transaction(db):
        m = catalog.create_menu(
            repos,
            body.name,
            body.price,
            body.menu_group_id,
            [(mp.product_id, mp.quantity) for mp in body.menu_products],
        )
    return _menu_out(m)


@router.get("/", response_model=List[MenuOut])
def list_menus(repos: Repositories = Depends(require_repos)):
    return [_menu_out(m) for m in catalog.list_menus(repos)]

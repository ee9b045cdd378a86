# agrigrow/api/routers/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agrigrow.api.deps import require_admin
from agrigrow.data.database import get_db
from agrigrow.domain.enums import ProductType
from agrigrow.domain.schemas import ProductIn, ProductUpdate, ProductOut, ProductMessageOut
from agrigrow.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(
    type: Optional[ProductType] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return ProductService(db).list_products(type.value if type else None, search)


@router.post("/add", response_model=ProductMessageOut, status_code=201)
def add_product(payload: ProductIn, admin=Depends(require_admin), db: Session = Depends(get_db)):
    data = payload.model_dump()
    data["type"] = payload.type.value
    product = ProductService(db).create_product(data)
    return {"message": "Product added successfully!", "product": product}


@router.put("/update/{product_id}", response_model=ProductMessageOut)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "type" in updates:
        updates["type"] = payload.type.value
    product = ProductService(db).update_product(product_id, updates)
    return {"message": "Product updated successfully!", "product": product}


@router.delete("/delete/{product_id}", response_model=ProductMessageOut)
def delete_product(product_id: str, admin=Depends(require_admin), db: Session = Depends(get_db)):
    ProductService(db).delete_product(product_id)
    return {"message": "Product deleted successfully!"}


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, db: Session = Depends(get_db)):
    return ProductService(db).get_product(product_id)

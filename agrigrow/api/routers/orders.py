# agrigrow/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrigrow.api.deps import get_current_user_id, require_admin
from agrigrow.data.database import get_db
from agrigrow.domain.schemas import (
    OrderPlaceIn,
    OrderPlacedOut,
    OrderOut,
    OrderMessageOut,
    StatusUpdateIn,
    AddressIn,
    AddressOut,
    AddressMessageOut,
)
from agrigrow.services.address_service import AddressService
from agrigrow.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("/place", response_model=OrderPlacedOut, status_code=201)
def place_order(
    payload: OrderPlaceIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Persists an order snapshot; payment starts as 'Pending Verification'.
    With saveAddress the delivery address is kept for later checkouts.
    """
    order_id = OrderService(db).place_order(
        user_id=user_id,
        items=[i.model_dump() for i in payload.items] if payload.items else None,
        delivery_details=payload.delivery_details.model_dump() if payload.delivery_details else None,
        total_amount=payload.total_amount,
        payment=payload.payment.model_dump() if payload.payment else None,
        save_address=payload.save_address,
    )
    return {"message": "Order placed. Payment pending verification.", "order_id": order_id}


@router.get("/addresses", response_model=List[AddressOut])
def list_addresses(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return AddressService(db).list_addresses(user_id)


@router.post("/addresses", response_model=AddressMessageOut, status_code=201)
def add_address(
    payload: AddressIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    address = AddressService(db).add_address(user_id, payload.model_dump())
    return {"message": "Address successfully added.", "address": address}


@router.put("/addresses/{address_id}", response_model=AddressMessageOut)
def update_address(
    address_id: str,
    payload: AddressIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    address = AddressService(db).update_address(
        address_id, user_id, payload.model_dump(exclude_unset=True)
    )
    return {"message": "Address successfully updated.", "address": address}


@router.get("/history", response_model=List[OrderOut])
def order_history(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return OrderService(db).list_history(user_id)


@router.get("/all", response_model=List[OrderOut])
def all_orders(admin=Depends(require_admin), db: Session = Depends(get_db)):
    return OrderService(db).list_all()


@router.put("/update-status/{order_id}", response_model=OrderMessageOut)
def update_status(
    order_id: str,
    payload: StatusUpdateIn,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    order = OrderService(db).update_status(order_id, payload.status)
    return {
        "message": f"Order status successfully updated to {order['payment']['status']}.",
        "order": order,
    }

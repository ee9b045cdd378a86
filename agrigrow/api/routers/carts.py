# agrigrow/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrigrow.api.deps import get_current_user_id, ensure_same_user
from agrigrow.data.database import get_db
from agrigrow.domain.schemas import CartItemIn, CartToggleIn, CartOut, CartMessageOut
from agrigrow.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.post("/add", response_model=CartMessageOut)
def add_item(
    payload: CartItemIn,
    principal_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_same_user(principal_id, payload.user_id)
    cart = CartService(db).add_item(payload.user_id, payload.product_id, payload.quantity)
    return {"message": "Added to cart", "cart": cart}


@router.post("/toggle", response_model=CartMessageOut)
def toggle_item(
    payload: CartToggleIn,
    principal_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_same_user(principal_id, payload.user_id)
    message, cart = CartService(db).toggle_item(payload.user_id, payload.product_id)
    return {"message": message, "cart": cart}


@router.put("/quantity", response_model=CartMessageOut)
def set_quantity(
    payload: CartItemIn,
    principal_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_same_user(principal_id, payload.user_id)
    cart = CartService(db).set_quantity(payload.user_id, payload.product_id, payload.quantity)
    return {"message": "Cart quantity updated", "cart": cart}


@router.get("/{user_id}", response_model=CartOut)
def get_cart(
    user_id: str,
    principal_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_same_user(principal_id, user_id)
    return CartService(db).get_cart(user_id)

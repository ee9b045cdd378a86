# agrigrow/api/routers/wishlist.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrigrow.api.deps import get_current_user_id, ensure_same_user
from agrigrow.data.database import get_db
from agrigrow.domain.schemas import WishlistToggleIn, WishlistOut, WishlistToggleOut
from agrigrow.services.wishlist_service import WishlistService, ADDED

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.post("/toggle", response_model=WishlistToggleOut)
def toggle(
    payload: WishlistToggleIn,
    principal_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_same_user(principal_id, payload.user_id)
    action, wishlist = WishlistService(db).toggle(payload.user_id, payload.product_id)
    message = "Added to wishlist" if action == ADDED else "Removed from wishlist"
    return {"message": message, "action": action, "wishlist": wishlist}


@router.get("/{user_id}", response_model=WishlistOut)
def get_wishlist(
    user_id: str,
    principal_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_same_user(principal_id, user_id)
    return WishlistService(db).get_wishlist(user_id)

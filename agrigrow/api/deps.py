# agrigrow/api/deps.py
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from agrigrow.data.database import get_db
from agrigrow.repos.user_repo import UserRepo
from agrigrow.utils.ids import parse_id
from agrigrow.utils.security import decode_access_token


def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
):
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    token = authorization.replace("Bearer ", "").strip()
    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token")

    user = UserRepo(db).get_user(payload["sub"])
    if not user:
        raise HTTPException(status_code=401, detail="Invalid token user")
    return user


def get_current_user_id(user=Depends(get_current_user)) -> str:
    return user.id


def require_admin(user=Depends(get_current_user)):
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin only")
    return user


def ensure_same_user(principal_id: str, user_id: str):
    """Cart and wishlist routes name the user explicitly; it has to be the caller."""
    if parse_id(principal_id, "userId") != parse_id(user_id, "userId"):
        raise PermissionError("Access to another user's data is not allowed")

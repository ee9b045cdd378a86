# agrigrow/api/routers/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrigrow.api.deps import get_current_user_id
from agrigrow.data.database import get_db
from agrigrow.domain.schemas import SignupIn, LoginIn, UserRead, TokenOut
from agrigrow.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", status_code=201)
def signup(payload: SignupIn, db: Session = Depends(get_db)):
    user = AuthService(db).signup(payload.name, payload.email, payload.password)
    return {"message": "Signup successful!", "user": UserRead(**user)}


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    result = AuthService(db).login(payload.email, payload.password)
    return {"message": "Login successful!", **result}


@router.get("/me", response_model=UserRead)
def me(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return AuthService(db).get_user(user_id)

# agrigrow/services/auth_service.py
from typing import Dict, Any

from sqlalchemy.orm import Session

from agrigrow.data.models.user import UserModel
from agrigrow.domain.errors import MissingFields, InvalidInput, NotFound
from agrigrow.repos.user_repo import UserRepo
from agrigrow.utils.security import hash_password, verify_password, create_access_token
from agrigrow.utils.settings import ADMIN_EMAILS
from agrigrow.utils.logging import get_logger

logger = get_logger(__name__)

PASSWORD_MIN_LENGTH = 8


def user_to_dict(user: UserModel) -> Dict[str, Any]:
    return {"id": user.id, "name": user.name, "email": user.email, "is_admin": user.is_admin}


class AuthService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def signup(self, name: str | None, email: str | None, password: str | None) -> Dict[str, Any]:
        if not name or not email or not password:
            raise MissingFields("All fields are required")

        if len(password) < PASSWORD_MIN_LENGTH:
            raise InvalidInput(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

        email = email.lower()
        if self.repo.get_by_email(email):
            raise InvalidInput("User already exists")

        user = self.repo.create_user(
            UserModel(
                name=name,
                email=email,
                password_hash=hash_password(password),
                is_admin=email in ADMIN_EMAILS,
            )
        )
        logger.info(f"User {user.id} signed up (admin={user.is_admin})")
        return user_to_dict(user)

    def login(self, email: str | None, password: str | None) -> Dict[str, Any]:
        if not email or not password:
            raise MissingFields("All fields are required")

        user = self.repo.get_by_email(email.lower())
        if not user or not verify_password(password, user.password_hash):
            raise InvalidInput("Invalid credentials")

        return {
            "token": create_access_token(user.id, user.is_admin),
            "user": user_to_dict(user),
        }

    def get_user(self, user_id: str) -> Dict[str, Any]:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return user_to_dict(user)

import os

# configure before agrigrow reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["CART_WRITE_ATTEMPTS"] = "3"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from agrigrow.data.database import Base, engine, SessionLocal
from agrigrow.data.models.product import ProductModel
from agrigrow.data.models.user import UserModel
from agrigrow.main import app
from agrigrow.services.notification_service import NotificationService
from agrigrow.utils.security import create_access_token


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def notifications(monkeypatch):
    sent = []

    def fake_send(user_id, order_id, status):
        sent.append((user_id, order_id, status))

    monkeypatch.setattr(NotificationService, "send_order_notification", staticmethod(fake_send))
    return sent


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def make_user(name="Asha", email=None, is_admin=False) -> UserModel:
    with SessionLocal() as session:
        user = UserModel(
            name=name,
            email=email or f"{name.lower()}@example.com",
            password_hash="not-a-real-hash",
            is_admin=is_admin,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user


def make_product(name="Vermicompost 5kg", price="199.00", stock=5, **extra) -> ProductModel:
    with SessionLocal() as session:
        product = ProductModel(name=name, price=Decimal(price), stock=stock, **extra)
        session.add(product)
        session.commit()
        session.refresh(product)
        return product


def auth_headers(user: UserModel) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.is_admin)}"}


@pytest.fixture
def user():
    return make_user()


@pytest.fixture
def admin():
    return make_user(name="Admin", email="admin@example.com", is_admin=True)


@pytest.fixture
def headers(user):
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def product():
    return make_product()

# agrigrow/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from agrigrow.domain.enums import OrderStatus, ProductType


class ApiModel(BaseModel):
    """Wire models use camelCase keys; python code uses snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------- auth

class SignupIn(ApiModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class LoginIn(ApiModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserRead(ApiModel):
    id: str
    name: str
    email: str
    is_admin: bool = False


class TokenOut(ApiModel):
    message: str
    token: str
    user: UserRead


# ---------------------------------------------------------------- catalog

class ProductIn(ApiModel):
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0)
    stock: int = Field(0, ge=0)
    type: ProductType = ProductType.SOIL
    photo: Optional[str] = None
    description: Optional[str] = None
    rating: float = Field(0, ge=0, le=5)
    brand: Optional[str] = None
    sku: Optional[str] = None


class ProductUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, gt=0)
    stock: Optional[int] = Field(None, ge=0)
    type: Optional[ProductType] = None
    photo: Optional[str] = None
    description: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    brand: Optional[str] = None
    sku: Optional[str] = None


class ProductOut(ApiModel):
    id: str
    name: str
    price: Decimal
    stock: int
    in_stock: bool
    type: str
    photo: Optional[str] = None
    description: Optional[str] = None
    rating: float = 0
    brand: Optional[str] = None
    sku: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductMessageOut(ApiModel):
    message: str
    product: Optional[ProductOut] = None


# ---------------------------------------------------------------- cart

class CartItemIn(ApiModel):
    user_id: str
    product_id: str
    quantity: int = 1


class CartToggleIn(ApiModel):
    user_id: str
    product_id: str


class CartProductOut(ApiModel):
    id: str
    name: str
    price: Decimal
    type: str
    photo: Optional[str] = None
    stock: int


class CartItemOut(ApiModel):
    product_id: str
    quantity: int
    product: Optional[CartProductOut] = None


class CartOut(ApiModel):
    user_id: str
    items: List[CartItemOut]
    total: Decimal


class CartMessageOut(ApiModel):
    message: str
    cart: CartOut


# ---------------------------------------------------------------- wishlist

class WishlistToggleIn(ApiModel):
    user_id: str
    product_id: str


class WishlistOut(ApiModel):
    user_id: str
    products: List[ProductOut]


class WishlistToggleOut(ApiModel):
    message: str
    action: str
    wishlist: WishlistOut


# ---------------------------------------------------------------- orders

class OrderItemIn(ApiModel):
    product_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    photo: Optional[str] = None


class DeliveryDetailsIn(ApiModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    pincode: str = Field(..., min_length=1)
    email: Optional[str] = None


class PaymentInfoIn(ApiModel):
    txn_id: str = Field(..., min_length=1)
    utr_id: str = Field(..., min_length=1)
    status: OrderStatus = OrderStatus.PENDING_VERIFICATION


class OrderPlaceIn(ApiModel):
    items: Optional[List[OrderItemIn]] = None
    delivery_details: Optional[DeliveryDetailsIn] = None
    total_amount: Optional[Decimal] = None
    payment: Optional[PaymentInfoIn] = None
    save_address: bool = False


class OrderPlacedOut(ApiModel):
    message: str
    order_id: str


class StatusUpdateIn(ApiModel):
    status: Optional[str] = None


class OrderItemOut(ApiModel):
    product_id: Optional[str] = None
    name: str
    price: Decimal
    quantity: int
    photo: Optional[str] = None


class DeliveryDetailsOut(ApiModel):
    name: str
    phone: str
    address: str
    city: str
    pincode: str
    email: Optional[str] = None


class PaymentInfoOut(ApiModel):
    txn_id: str
    utr_id: str
    status: str


class OrderUserOut(ApiModel):
    id: str
    name: str
    email: str


class OrderOut(ApiModel):
    id: str
    user_id: str
    items: List[OrderItemOut]
    delivery_details: DeliveryDetailsOut
    total_amount: Decimal
    payment: PaymentInfoOut
    shipped_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    user: Optional[OrderUserOut] = None


class OrderMessageOut(ApiModel):
    message: str
    order: OrderOut


# ---------------------------------------------------------------- addresses

class AddressIn(ApiModel):
    label: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    is_default: Optional[bool] = None


class AddressOut(ApiModel):
    id: str
    user_id: str
    label: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: str
    city: str
    pincode: str
    is_default: bool
    created_at: datetime
    updated_at: datetime


class AddressMessageOut(ApiModel):
    message: str
    address: AddressOut


# ---------------------------------------------------------------- payment ledger

class PaymentDeliveryIn(ApiModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None


class PaymentRecordIn(ApiModel):
    delivery: Optional[PaymentDeliveryIn] = None
    products: Optional[List[Any]] = None
    total_amount: Optional[Decimal] = None
    txn_id: Optional[str] = None
    utr_id: Optional[str] = None


class PaymentStatusIn(ApiModel):
    status: Optional[str] = None


class PaymentOut(ApiModel):
    id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    txn_id: str
    utr_id: str
    amount: Decimal
    products: List[Any]
    status: str
    date: datetime


class PaymentMessageOut(ApiModel):
    message: str
    payment: PaymentOut

# import every model so SQLAlchemy registers it in Base.metadata

from agrigrow.data.models.user import UserModel
from agrigrow.data.models.product import ProductModel
from agrigrow.data.models.cart import CartModel
from agrigrow.data.models.cart_item import CartItemModel
from agrigrow.data.models.wishlist import WishlistModel, WishlistItemModel
from agrigrow.data.models.address import AddressModel
from agrigrow.data.models.order import OrderModel
from agrigrow.data.models.payment import PaymentModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "WishlistModel",
    "WishlistItemModel",
    "AddressModel",
    "OrderModel",
    "PaymentModel",
]

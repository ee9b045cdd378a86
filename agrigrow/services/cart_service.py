from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agrigrow.data.models.cart import CartModel
from agrigrow.data.models.cart_item import CartItemModel
from agrigrow.data.models.product import ProductModel
from agrigrow.domain.errors import InvalidInput, NotFound, OutOfStock, ConcurrentModification
from agrigrow.repos.cart_repo import CartRepo
from agrigrow.repos.product_repo import ProductRepo
from agrigrow.utils.ids import parse_id
from agrigrow.utils.logging import get_logger
from agrigrow.utils.retry import conflict_retry

logger = get_logger(__name__)


class CartService:
    """
    Use cases of the cart domain.
    commands (add, toggle, set quantity) change state, query (get) only reads.

    Stock is checked against the live catalog on every command and nothing is
    reserved: two users can still jointly over-commit a product. Writes to one
    cart are version-checked, a lost write is retried from a fresh read.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    # query
    def get_cart(self, user_id: str) -> Dict[str, Any]:
        user_id = parse_id(user_id, "userId")
        cart = self.repo.get_cart_by_user(user_id)

        if not cart:
            return self._empty_cart(user_id)

        items = self.repo.get_cart_items(cart.id)
        return self._resolve(user_id, items)

    # commands
    @conflict_retry()
    def add_item(self, user_id: str, product_id: str, quantity: int = 1) -> Dict[str, Any]:
        user_id = parse_id(user_id, "userId")
        product_id = parse_id(product_id, "productId")

        if quantity is None or quantity < 1:
            raise InvalidInput("Quantity must be at least 1.")

        product = self._get_product(product_id)
        cart = self.repo.get_cart_by_user(user_id)
        existing_item = self.repo.get_cart_item(cart.id, product_id) if cart else None
        current = existing_item.quantity if existing_item else 0

        if current + quantity > product.stock:
            logger.info(
                f"Cart of user {user_id}: {current} + {quantity} of product {product_id} "
                f"exceeds stock {product.stock}"
            )
            raise OutOfStock(max_quantity=product.stock)

        if not cart:
            logger.info(f"Creating cart for user {user_id} with product {product_id} x{quantity}")
            self._create_cart(user_id, product_id, quantity)
            return self.get_cart(user_id)

        if existing_item:
            logger.info(
                f"Product {product_id} already in cart of user {user_id}, increasing quantity "
                f"from {existing_item.quantity} to {existing_item.quantity + quantity}"
            )
            existing_item.quantity += quantity
        else:
            logger.info(f"Adding product {product_id} to cart of user {user_id}")
            self.repo.add_cart_item(
                CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity)
            )

        self._commit_version(cart)
        return self.get_cart(user_id)

    @conflict_retry()
    def toggle_item(self, user_id: str, product_id: str) -> tuple[str, Dict[str, Any]]:
        """Remove a whole line from the cart; a missing line is reported, not raised."""
        user_id = parse_id(user_id, "userId")
        product_id = parse_id(product_id, "productId")

        cart = self.repo.get_cart_by_user(user_id)
        item = self.repo.get_cart_item(cart.id, product_id) if cart else None

        if not item:
            return "Product not found in cart", self.get_cart(user_id)

        logger.info(f"Removing product {product_id} (x{item.quantity}) from cart of user {user_id}")
        self.repo.delete_cart_item(cart.id, product_id)

        if self.repo.count_cart_items(cart.id) == 0:
            # an empty cart is not kept
            if self.repo.delete_cart(cart.id, cart.version) == 0:
                self._conflict(cart)
            self.repo.commit()
            logger.info(f"Cart of user {user_id} is empty, deleted")
        else:
            self._commit_version(cart)

        return "Removed from cart", self.get_cart(user_id)

    @conflict_retry()
    def set_quantity(self, user_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
        user_id = parse_id(user_id, "userId")
        product_id = parse_id(product_id, "productId")

        if quantity is None or quantity < 1:
            raise InvalidInput("Quantity must be at least 1.")

        product = self._get_product(product_id)
        if quantity > product.stock:
            raise OutOfStock(max_quantity=product.stock)

        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            logger.info(f"Creating cart for user {user_id} with product {product_id} x{quantity}")
            self._create_cart(user_id, product_id, quantity)
            return self.get_cart(user_id)

        item = self.repo.get_cart_item(cart.id, product_id)
        if item:
            logger.info(
                f"Setting quantity of product {product_id} in cart of user {user_id} "
                f"from {item.quantity} to {quantity}"
            )
            item.quantity = quantity
        else:
            self.repo.add_cart_item(
                CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity)
            )

        self._commit_version(cart)
        return self.get_cart(user_id)

    # helpers
    def _get_product(self, product_id: str) -> ProductModel:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found.")
        return product

    def _create_cart(self, user_id: str, product_id: str, quantity: int):
        try:
            cart = self.repo.create_cart(CartModel(user_id=user_id, version=1))
            self.repo.add_cart_item(
                CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity)
            )
            self.repo.commit()
        except IntegrityError:
            # another request created this user's cart first
            self.repo.rollback()
            raise ConcurrentModification(
                "Cart was modified by another request, please retry."
            )

    def _commit_version(self, cart: CartModel):
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={"version": cart.version + 1},
        )
        if rowcount == 0:
            self._conflict(cart)
        self.repo.commit()

    def _conflict(self, cart: CartModel):
        logger.warning(f"Version conflict on cart {cart.id} (read version {cart.version})")
        self.repo.rollback()
        raise ConcurrentModification("Cart was modified by another request, please retry.")

    @staticmethod
    def _empty_cart(user_id: str) -> Dict[str, Any]:
        return {"user_id": user_id, "items": [], "total": Decimal("0.00")}

    @staticmethod
    def _resolve(user_id: str, items: list[CartItemModel]) -> Dict[str, Any]:
        resolved = []
        total = Decimal("0.00")
        for i in items:
            product = i.product
            if product is not None:
                total += Decimal(product.price) * i.quantity
            resolved.append(
                {
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "product": {
                        "id": product.id,
                        "name": product.name,
                        "price": product.price,
                        "type": product.type,
                        "photo": product.photo,
                        "stock": product.stock,
                    }
                    if product is not None
                    else None,
                }
            )
        return {"user_id": user_id, "items": resolved, "total": total}

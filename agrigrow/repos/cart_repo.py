# agrigrow/repos/cart_repo.py
from sqlalchemy import select, update, delete, exists

from agrigrow.data.models.cart import CartModel
from agrigrow.data.models.cart_item import CartItemModel
from agrigrow.repos.base import BaseRepo


class CartRepo(BaseRepo):
    def get_cart_by_user(self, user_id: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_cart_items(self, cart_id: str) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
            ).scalars().all()
        )

    def get_cart_item(self, cart_id: str, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, cart_id: str, product_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        )
        return result.rowcount

    def count_cart_items(self, cart_id: str) -> int:
        return len(self.get_cart_items(cart_id))

    def delete_cart(self, cart_id: str, old_version: int) -> int:
        # only the version we read may be removed
        result = self.db.execute(
            delete(CartModel).where(
                CartModel.id == cart_id,
                CartModel.version == old_version,
            )
        )
        return result.rowcount

    def update_cart_version(self, cart_id: str, old_version: int, new_data: dict) -> int:
        # e.g. UPDATE carts SET version = 2 WHERE id = :id AND version = 1
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(**new_data)
        )
        return result.rowcount

    def remove_product_everywhere(self, product_id: str) -> list[str]:
        """Drop every line of a product; returns the ids of the carts that held it."""
        cart_ids = list(
            self.db.execute(
                select(CartItemModel.cart_id).where(CartItemModel.product_id == product_id)
            ).scalars().all()
        )
        if not cart_ids:
            return []
        self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.product_id == product_id)
            .execution_options(synchronize_session="fetch")
        )
        # carts changed underneath any in-flight write, so their version moves too
        self.db.execute(
            update(CartModel)
            .where(CartModel.id.in_(cart_ids))
            .values(version=CartModel.version + 1)
            .execution_options(synchronize_session="fetch")
        )
        return cart_ids

    def delete_empty_carts(self, cart_ids: list[str]) -> int:
        if not cart_ids:
            return 0
        result = self.db.execute(
            delete(CartModel)
            .where(
                CartModel.id.in_(cart_ids),
                ~exists().where(CartItemModel.cart_id == CartModel.id),
            )
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

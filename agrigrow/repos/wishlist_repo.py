from sqlalchemy import select, delete, exists

from agrigrow.data.models.wishlist import WishlistModel, WishlistItemModel
from agrigrow.repos.base import BaseRepo


class WishlistRepo(BaseRepo):
    def get_wishlist_by_user(self, user_id: str) -> WishlistModel | None:
        return self.db.execute(
            select(WishlistModel).where(WishlistModel.user_id == user_id)
        ).scalar_one_or_none()

    def create_wishlist(self, wishlist: WishlistModel) -> WishlistModel:
        self.db.add(wishlist)
        self.db.flush()
        return wishlist

    def delete_wishlist(self, wishlist: WishlistModel):
        self.db.delete(wishlist)
        self.db.flush()

    def remove_product_everywhere(self, product_id: str) -> list[str]:
        wishlist_ids = list(
            self.db.execute(
                select(WishlistItemModel.wishlist_id).where(WishlistItemModel.product_id == product_id)
            ).scalars().all()
        )
        if wishlist_ids:
            self.db.execute(
                delete(WishlistItemModel)
                .where(WishlistItemModel.product_id == product_id)
                .execution_options(synchronize_session="fetch")
            )
        return wishlist_ids

    def delete_empty_wishlists(self, wishlist_ids: list[str]) -> int:
        if not wishlist_ids:
            return 0
        result = self.db.execute(
            delete(WishlistModel)
            .where(
                WishlistModel.id.in_(wishlist_ids),
                ~exists().where(WishlistItemModel.wishlist_id == WishlistModel.id),
            )
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

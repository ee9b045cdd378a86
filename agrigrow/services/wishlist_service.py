# agrigrow/services/wishlist_service.py
from typing import Dict, Any

from sqlalchemy.orm import Session

from agrigrow.data.models.wishlist import WishlistModel, WishlistItemModel
from agrigrow.domain.errors import NotFound
from agrigrow.repos.product_repo import ProductRepo
from agrigrow.repos.wishlist_repo import WishlistRepo
from agrigrow.services.product_service import product_to_dict
from agrigrow.utils.ids import parse_id
from agrigrow.utils.logging import get_logger

logger = get_logger(__name__)

ADDED = "added"
REMOVED = "removed"


class WishlistService:
    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.products = ProductRepo(db)

    def get_wishlist(self, user_id: str) -> Dict[str, Any]:
        user_id = parse_id(user_id, "userId")
        wishlist = self.repo.get_wishlist_by_user(user_id)
        if not wishlist:
            return {"user_id": user_id, "products": []}
        return {
            "user_id": user_id,
            "products": [product_to_dict(i.product) for i in wishlist.items if i.product is not None],
        }

    def toggle(self, user_id: str, product_id: str) -> tuple[str, Dict[str, Any]]:
        """
        Flip containment of a product: add when absent, remove when present.
        The wishlist row only exists while it holds at least one product.
        """
        user_id = parse_id(user_id, "userId")
        product_id = parse_id(product_id, "productId")

        wishlist = self.repo.get_wishlist_by_user(user_id)
        item = next((i for i in wishlist.items if i.product_id == product_id), None) if wishlist else None

        # a present line can always be removed, even when its product is gone
        if not item and not self.products.get_product(product_id):
            raise NotFound("Product not found.")

        if not wishlist:
            self.repo.create_wishlist(
                WishlistModel(user_id=user_id, items=[WishlistItemModel(product_id=product_id)])
            )
            action = ADDED
            logger.info(f"Created wishlist for user {user_id} with product {product_id}")
        elif item:
            wishlist.items.remove(item)
            action = REMOVED
            logger.info(f"Removed product {product_id} from wishlist of user {user_id}")
            if not wishlist.items:
                self.repo.delete_wishlist(wishlist)
                logger.info(f"Wishlist of user {user_id} is empty, deleted")
        else:
            wishlist.items.append(WishlistItemModel(product_id=product_id))
            action = ADDED
            logger.info(f"Added product {product_id} to wishlist of user {user_id}")

        self.repo.commit()
        return action, self.get_wishlist(user_id)

# agrigrow/services/product_service.py
from typing import Dict, Any

from sqlalchemy.orm import Session

from agrigrow.data.models.product import ProductModel
from agrigrow.domain.errors import NotFound
from agrigrow.repos.cart_repo import CartRepo
from agrigrow.repos.product_repo import ProductRepo
from agrigrow.repos.wishlist_repo import WishlistRepo
from agrigrow.utils.ids import parse_id
from agrigrow.utils.logging import get_logger

logger = get_logger(__name__)


def product_to_dict(p: ProductModel) -> Dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "price": p.price,
        "stock": p.stock,
        "in_stock": p.stock > 0,
        "type": p.type,
        "photo": p.photo,
        "description": p.description,
        "rating": p.rating,
        "brand": p.brand,
        "sku": p.sku,
        "created_at": p.created_at,
        "updated_at": p.updated_at,
    }


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.carts = CartRepo(db)
        self.wishlists = WishlistRepo(db)

    def list_products(self, product_type: str | None = None, search: str | None = None):
        return [product_to_dict(p) for p in self.repo.list_products(product_type, search)]

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return product_to_dict(self._get(product_id))

    def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        created = self.repo.create_product(ProductModel(**data))
        logger.info(f"Product {created.id} ({created.name}) added with stock {created.stock}")
        return product_to_dict(created)

    def update_product(self, product_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        product = self._get(product_id)
        for field, value in updates.items():
            setattr(product, field, value)
        saved = self.repo.save(product)
        logger.info(f"Product {product_id} updated: {sorted(updates)}")
        return product_to_dict(saved)

    def delete_product(self, product_id: str):
        """Remove a product together with its cart and wishlist lines, in one transaction."""
        product = self._get(product_id)

        cart_ids = self.carts.remove_product_everywhere(product.id)
        wishlist_ids = self.wishlists.remove_product_everywhere(product.id)
        # a cart or wishlist never outlives its last line
        dropped_carts = self.carts.delete_empty_carts(cart_ids)
        dropped_wishlists = self.wishlists.delete_empty_wishlists(wishlist_ids)

        self.repo.delete_product(product)
        logger.info(
            f"Product {product_id} deleted, removed from {len(cart_ids)} cart(s) and "
            f"{len(wishlist_ids)} wishlist(s); {dropped_carts} cart(s) and "
            f"{dropped_wishlists} wishlist(s) left empty were deleted"
        )

    def _get(self, product_id: str) -> ProductModel:
        product = self.repo.get_product(parse_id(product_id, "productId"))
        if not product:
            raise NotFound("Product not found")
        return product

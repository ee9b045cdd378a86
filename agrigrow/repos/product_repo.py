# agrigrow/repos/product_repo.py
from sqlalchemy import select, or_, func

from agrigrow.data.models.product import ProductModel
from agrigrow.repos.base import BaseRepo


class ProductRepo(BaseRepo):
    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products_by_ids(self, product_ids) -> dict[str, ProductModel]:
        ids = list(set(product_ids))
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(ids))
        ).scalars().all()
        return {p.id: p for p in rows}

    def list_products(self, product_type: str | None = None, search: str | None = None) -> list[ProductModel]:
        stmt = select(ProductModel)
        if product_type:
            stmt = stmt.where(ProductModel.type == product_type)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(ProductModel.name).like(pattern),
                    func.lower(ProductModel.brand).like(pattern),
                )
            )
        stmt = stmt.order_by(ProductModel.created_at, ProductModel.name)
        return list(self.db.execute(stmt).scalars().all())

    def count_products(self) -> int:
        return self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def save(self, product: ProductModel) -> ProductModel:
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel):
        self.db.delete(product)
        self.db.commit()

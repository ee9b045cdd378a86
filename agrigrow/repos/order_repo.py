# agrigrow/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import joinedload

from agrigrow.data.models.order import OrderModel
from agrigrow.repos.base import BaseRepo


class OrderRepo(BaseRepo):
    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_for_user(self, user_id: str) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars().all()
        )

    def list_all(self) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .options(joinedload(OrderModel.user))
                .order_by(OrderModel.created_at.desc())
            ).scalars().all()
        )

    def save(self, order: OrderModel) -> OrderModel:
        self.db.commit()
        self.db.refresh(order)
        return order

from sqlalchemy import select

from agrigrow.data.models.payment import PaymentModel
from agrigrow.repos.base import BaseRepo


class PaymentRepo(BaseRepo):
    def create_payment(self, payment: PaymentModel) -> PaymentModel:
        self.db.add(payment)
        self.db.commit()
        self.db.refresh(payment)
        return payment

    def get_payment(self, payment_id: str) -> PaymentModel | None:
        return self.db.get(PaymentModel, payment_id)

    def list_payments(self) -> list[PaymentModel]:
        return list(
            self.db.execute(select(PaymentModel).order_by(PaymentModel.date.desc())).scalars().all()
        )

    def save(self, payment: PaymentModel) -> PaymentModel:
        self.db.commit()
        self.db.refresh(payment)
        return payment

# agrigrow/services/payment_service.py
from decimal import Decimal
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from agrigrow.data.models.payment import PaymentModel
from agrigrow.domain.errors import MissingFields, NotFound
from agrigrow.repos.payment_repo import PaymentRepo
from agrigrow.utils.ids import parse_id
from agrigrow.utils.logging import get_logger

logger = get_logger(__name__)

INITIAL_STATUS = "Pending"


def payment_to_dict(p: PaymentModel) -> Dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "phone": p.phone,
        "email": p.email,
        "address": p.address,
        "city": p.city,
        "pincode": p.pincode,
        "txn_id": p.txn_id,
        "utr_id": p.utr_id,
        "amount": p.amount,
        "products": list(p.products or []),
        "status": p.status,
        "date": p.date,
    }


class PaymentService:
    """
    Ledger of submitted payment proofs, reviewed by an admin.
    Entries are not linked to orders.
    """

    def __init__(self, db: Session):
        self.repo = PaymentRepo(db)

    def record_payment(
        self,
        delivery: Dict[str, Any] | None,
        products: List[Any] | None,
        total_amount,
        txn_id: str | None,
        utr_id: str | None,
    ) -> Dict[str, Any]:
        if not delivery or not products or not total_amount or not txn_id or not utr_id:
            raise MissingFields("All fields are required")
        if not delivery.get("name"):
            raise MissingFields("Delivery name is required")

        payment = PaymentModel(
            name=delivery["name"],
            phone=delivery.get("phone"),
            email=delivery.get("email"),
            address=delivery.get("address"),
            city=delivery.get("city"),
            pincode=delivery.get("pincode"),
            txn_id=txn_id,
            utr_id=utr_id,
            amount=Decimal(str(total_amount)),
            products=list(products),
            status=INITIAL_STATUS,
        )
        created = self.repo.create_payment(payment)
        logger.info(f"Payment {created.id} recorded (txn {txn_id}, amount {created.amount})")
        return payment_to_dict(created)

    def list_payments(self) -> List[Dict[str, Any]]:
        return [payment_to_dict(p) for p in self.repo.list_payments()]

    def update_status(self, payment_id: str, status: str | None) -> Dict[str, Any]:
        if not status:
            raise MissingFields("Status is required")

        payment = self.repo.get_payment(parse_id(payment_id, "paymentId"))
        if not payment:
            raise NotFound("Payment not found")

        previous = payment.status
        payment.status = status
        saved = self.repo.save(payment)
        logger.info(f"Payment {payment_id} status {previous} -> {status}")
        return payment_to_dict(saved)

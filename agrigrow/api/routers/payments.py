# agrigrow/api/routers/payments.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrigrow.api.deps import require_admin
from agrigrow.data.database import get_db
from agrigrow.domain.schemas import PaymentRecordIn, PaymentStatusIn, PaymentOut, PaymentMessageOut
from agrigrow.services.payment_service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("", response_model=PaymentMessageOut, status_code=201)
def record_payment(payload: PaymentRecordIn, db: Session = Depends(get_db)):
    payment = PaymentService(db).record_payment(
        delivery=payload.delivery.model_dump() if payload.delivery else None,
        products=payload.products,
        total_amount=payload.total_amount,
        txn_id=payload.txn_id,
        utr_id=payload.utr_id,
    )
    return {"message": "Payment saved successfully!", "payment": payment}


@router.get("", response_model=List[PaymentOut])
def list_payments(admin=Depends(require_admin), db: Session = Depends(get_db)):
    return PaymentService(db).list_payments()


@router.put("/{payment_id}/status", response_model=PaymentMessageOut)
def update_payment_status(
    payment_id: str,
    payload: PaymentStatusIn,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    payment = PaymentService(db).update_status(payment_id, payload.status)
    return {"message": "Payment status updated", "payment": payment}

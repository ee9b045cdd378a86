# agrigrow/data/models/payment.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Numeric, JSON

from agrigrow.data.database import Base
from agrigrow.utils.ids import new_id


class PaymentModel(Base):
    """Standalone record of a submitted payment; not linked to any order."""

    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=new_id)

    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    pincode = Column(String, nullable=True)

    txn_id = Column(String, nullable=False)
    utr_id = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    products = Column(JSON, nullable=False, default=list)
    status = Column(String, nullable=False, default="Pending")
    date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

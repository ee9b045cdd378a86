from datetime import datetime, timezone

from sqlalchemy import Column, ForeignKey, String, DateTime, Numeric, JSON
from sqlalchemy.orm import relationship

from agrigrow.data.database import Base
from agrigrow.domain.enums import OrderStatus
from agrigrow.utils.ids import new_id


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # snapshots, never edited after placement
    items = Column(JSON, nullable=False)
    delivery_details = Column(JSON, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)

    payment_txn_id = Column(String, nullable=False)
    payment_utr_id = Column(String, nullable=False)
    payment_status = Column(String, nullable=False, default=OrderStatus.PENDING_VERIFICATION.value)

    shipped_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user = relationship("UserModel")

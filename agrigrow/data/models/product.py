# agrigrow/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Numeric, Float, Text, DateTime

from agrigrow.data.database import Base
from agrigrow.domain.enums import ProductType
from agrigrow.utils.ids import new_id


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    type = Column(String(20), nullable=False, default=ProductType.SOIL.value)

    photo = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    rating = Column(Float, nullable=False, default=0)
    brand = Column(String, nullable=True)
    sku = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

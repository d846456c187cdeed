"""
Product model

Products are hard-deleted; enquiries keep their own price snapshot so
history survives the delete.
"""
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text, JSON, Numeric, ForeignKey, CheckConstraint,
)
from sqlalchemy.orm import relationship

from partsdesk.core.database import Base
from partsdesk.core.utils import utcnow


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False, index=True)
    slug = Column(String(300), unique=True, index=True, nullable=False)
    # No ondelete cascade: CategoryService refuses to delete a category in use
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    price = Column(Numeric(12, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)

    description = Column(Text)
    images = Column(JSON, nullable=False, default=list)  # First entry is the main image

    # Parts metadata
    brand = Column(String(200))
    oem_number = Column(String(100), index=True)
    compatible_models = Column(JSON)

    featured = Column(Boolean, nullable=False, default=False, index=True)
    views = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    category = relationship("Category", back_populates="products")

    __table_args__ = (
        CheckConstraint("stock >= 0", name="check_stock_non_negative"),
        CheckConstraint("price >= 0", name="check_price_non_negative"),
    )

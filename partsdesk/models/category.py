"""
Category model

Deletion is guarded in CategoryService: a category cannot be removed while
any product still references it.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from partsdesk.core.database import Base
from partsdesk.core.utils import utcnow


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(200), unique=True, index=True, nullable=False)
    image = Column(String(2048))
    description = Column(Text)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    products = relationship("Product", back_populates="category")

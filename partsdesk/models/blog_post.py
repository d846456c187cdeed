"""
Blog post model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text

from partsdesk.core.database import Base
from partsdesk.core.utils import utcnow


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    slug = Column(String(300), unique=True, index=True, nullable=False)
    excerpt = Column(Text)
    content = Column(Text, nullable=False)
    image = Column(String(2048))
    author = Column(String(200))

    published = Column(Boolean, nullable=False, default=False, index=True)
    # Set the first time the post is published, never overwritten
    published_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

"""
Blog post schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class BlogPostBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    slug: str = Field(..., min_length=1, max_length=300)
    excerpt: Optional[str] = None
    content: str = Field(..., min_length=1)
    image: Optional[str] = None
    author: Optional[str] = None
    published: bool = False


class BlogPostCreate(BlogPostBase):
    pass


class BlogPostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    slug: Optional[str] = Field(None, min_length=1, max_length=300)
    excerpt: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = None
    author: Optional[str] = None
    published: Optional[bool] = None


class BlogPostResponse(BlogPostBase):
    id: int
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

"""
Blog routes (public)
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.database import get_db
from partsdesk.schemas.blog_post import BlogPostResponse
from partsdesk.services.blog_service import BlogPostService

router = APIRouter()


@router.get("", response_model=List[BlogPostResponse])
async def list_published_posts(db: AsyncSession = Depends(get_db)):
    return await BlogPostService(db).list_published()


@router.get("/{slug}", response_model=BlogPostResponse)
async def get_post(slug: str, db: AsyncSession = Depends(get_db)):
    """Published post by slug; drafts are reported as not found"""
    post = await BlogPostService(db).get_by_slug(slug)
    if post is None or not post.published:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found"
        )
    return post

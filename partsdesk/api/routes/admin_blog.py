"""
Admin blog routes
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.api.deps import AdminIdentity, get_current_admin
from partsdesk.core.database import get_db
from partsdesk.schemas.blog_post import BlogPostCreate, BlogPostUpdate, BlogPostResponse
from partsdesk.services.blog_service import BlogPostService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[BlogPostResponse])
async def list_posts(
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    """All posts including drafts"""
    return await BlogPostService(db).list()


@router.get("/{post_id}", response_model=BlogPostResponse)
async def get_post(
    post_id: int,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    post = await BlogPostService(db).get(post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found"
        )
    return post


@router.post("", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: BlogPostCreate,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    post = await BlogPostService(db).create(post_data)
    logger.info(f"Admin {admin.email} created blog post {post.id}")
    return post


@router.patch("/{post_id}", response_model=BlogPostResponse)
async def update_post(
    post_id: int,
    update_data: BlogPostUpdate,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    post = await BlogPostService(db).update(post_id, update_data)
    logger.info(f"Admin {admin.email} updated blog post {post_id}")
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    await BlogPostService(db).delete(post_id)
    logger.info(f"Admin {admin.email} deleted blog post {post_id}")

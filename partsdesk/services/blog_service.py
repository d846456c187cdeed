"""
Blog Post Service

published_at is stamped the first time a post goes live and is kept even if
the post is later unpublished and republished.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.exceptions import DuplicateSlugError, NotFoundError
from partsdesk.core.utils import utcnow
from partsdesk.models.blog_post import BlogPost
from partsdesk.schemas.blog_post import BlogPostCreate, BlogPostUpdate
from partsdesk.services.catalog_service import commit_unique_slug

logger = logging.getLogger(__name__)


class BlogPostService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_published(self) -> List[BlogPost]:
        result = await self.db.execute(
            select(BlogPost)
            .where(BlogPost.published.is_(True))
            .order_by(BlogPost.id.desc())
        )
        return list(result.scalars().all())

    async def list(self) -> List[BlogPost]:
        result = await self.db.execute(select(BlogPost).order_by(BlogPost.id.desc()))
        return list(result.scalars().all())

    async def get(self, post_id: int) -> Optional[BlogPost]:
        result = await self.db.execute(select(BlogPost).where(BlogPost.id == post_id))
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[BlogPost]:
        result = await self.db.execute(select(BlogPost).where(BlogPost.slug == slug))
        return result.scalar_one_or_none()

    async def _ensure_slug_free(self, slug: str, exclude_id: Optional[int] = None) -> None:
        existing = await self.get_by_slug(slug)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateSlugError(f"Blog post slug '{slug}' already exists", slug=slug)

    async def create(self, data: BlogPostCreate) -> BlogPost:
        await self._ensure_slug_free(data.slug)

        now = utcnow()
        post = BlogPost(
            **data.model_dump(),
            published_at=now if data.published else None,
            created_at=now,
            updated_at=now,
        )
        self.db.add(post)
        await commit_unique_slug(self.db, post.slug, "Blog post")
        await self.db.refresh(post)

        logger.info(f"Blog post created: id={post.id} slug={post.slug} published={post.published}")
        return post

    async def update(self, post_id: int, data: BlogPostUpdate) -> BlogPost:
        post = await self.get(post_id)
        if post is None:
            raise NotFoundError("Blog post not found", resource_type="blog_post", resource_id=post_id)

        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if "slug" in updates:
            await self._ensure_slug_free(updates["slug"], exclude_id=post_id)

        now = utcnow()
        if updates.get("published") and not post.published and post.published_at is None:
            post.published_at = now

        for field, value in updates.items():
            setattr(post, field, value)
        post.updated_at = now

        await commit_unique_slug(self.db, post.slug, "Blog post")
        await self.db.refresh(post)

        logger.info(f"Blog post updated: id={post_id} fields={list(updates.keys())}")
        return post

    async def delete(self, post_id: int) -> None:
        post = await self.get(post_id)
        if post is None:
            raise NotFoundError("Blog post not found", resource_type="blog_post", resource_id=post_id)

        await self.db.delete(post)
        await self.db.commit()
        logger.info(f"Blog post deleted: id={post_id}")

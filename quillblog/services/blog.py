"""
Blog lifecycle service.

Orchestrates every post mutation: authorization, payload validation, image
upload, category resolution and persistence, with a single commit point per
operation. Storage exceptions are translated here; nothing from the
repository or the asset store leaves this module untranslated.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, cast

from starlette.datastructures import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from quillblog.configs.settings import settings
from quillblog.errors.blog import NotFoundError, UnauthenticatedError, translate_storage_errors
from quillblog.errors.upload import AssetError, AssetUploadError
from quillblog.models.blog import BlogDB
from quillblog.monitoring.logging import get_logger
from quillblog.repositories.blog import BlogRepository
from quillblog.repositories.user import UserRepository
from quillblog.schemas.blog import BlogFilters, BlogRecord
from quillblog.schemas.user import CallerIdentity
from quillblog.services.authorization import Action, authorize
from quillblog.services.categories import CategoryRegistry
from quillblog.services.media import MediaService
from quillblog.services.storage import StoredAsset
from quillblog.services.validation import validate_create, validate_update

logger = get_logger(__name__)

UPLOAD_DEGRADED_WARNING = "Featured image could not be uploaded; the post was saved without it"


@dataclass(frozen=True, slots=True)
class VisibilityPolicy:
    """
    Which drafts anonymous and non-owning callers may see.

    Both switches default off: drafts appear in public listings and can be
    read by anyone holding the slug. The author always sees their own drafts.
    """

    public_list_published_only: bool = False
    hide_drafts_by_slug: bool = False

    @classmethod
    def from_settings(cls) -> "VisibilityPolicy":
        return cls(
            public_list_published_only=settings.PUBLIC_LIST_PUBLISHED_ONLY,
            hide_drafts_by_slug=settings.HIDE_DRAFTS_BY_SLUG,
        )


@dataclass(slots=True)
class BlogResult:
    """A post plus any non-fatal problems met while producing it."""

    post: BlogDB
    warnings: list[str] = field(default_factory=list)


def _is_owner(post: BlogDB, caller: CallerIdentity | None) -> bool:
    return caller is not None and post.author_id == caller.user_id


class BlogService:
    """Blog post lifecycle: create, update, delete, list and read."""

    def __init__(
        self,
        session: AsyncSession,
        media: MediaService | None = None,
        policy: VisibilityPolicy | None = None,
        *,
        strict_uploads: bool | None = None,
        delete_assets_with_post: bool | None = None,
    ) -> None:
        """
        Initialize the service for one request.

        Args:
            session: Request-scoped database session
            media: Featured image service (configured asset store by default)
            policy: Draft visibility rules (from settings by default)
            strict_uploads: Fail the request when the asset store fails
            delete_assets_with_post: Remove the featured image asset on delete
        """
        self.session = session
        self.media = media or MediaService()
        self.policy = policy or VisibilityPolicy.from_settings()
        self.strict_uploads = (
            settings.STRICT_IMAGE_UPLOAD if strict_uploads is None else strict_uploads
        )
        self.delete_assets_with_post = (
            settings.DELETE_ASSET_ON_POST_DELETE
            if delete_assets_with_post is None
            else delete_assets_with_post
        )
        self.blogs = BlogRepository(session)
        self.users = UserRepository(session)
        self.categories = CategoryRegistry(session)

    async def create(
        self,
        caller: CallerIdentity | None,
        raw: Mapping[str, Any],
        image: UploadFile | None = None,
    ) -> BlogResult:
        """
        Create a post owned by the caller.

        Args:
            caller: Verified identity, or None for anonymous requests
            raw: Title, content, status, category name and optional image URL
            image: Optional featured image file

        Returns:
            BlogResult: The new post (with category and author) and warnings

        Raises:
            UnauthenticatedError: No caller identity
            ValidationError: Payload breaks a field rule
            UploadError: Image rejected or, in strict mode, store failure
            ConflictError: Title produces an existing slug
            StorageError: Any other persistence failure
        """
        caller = authorize(Action.CREATE, None, caller)
        payload = validate_create(raw)

        asset, warnings = await self._upload(image)
        featured_image = asset.url if asset else payload.featured_image

        try:
            with translate_storage_errors("create_blog", author_id=caller.user_id):
                await self.users.ensure(caller.user_id, caller.email, caller.username)
                resolution = await self.categories.resolve(payload.category_name)
                post = await self.blogs.create(
                    BlogRecord(
                        title=payload.title,
                        content=payload.content,
                        status=payload.status,
                        category_id=resolution.category.id,
                        featured_image=featured_image,
                        image_id=asset.asset_id if asset else None,
                    ),
                    author_id=caller.user_id,
                )
                await self.session.commit()
        except Exception:
            await self.session.rollback()
            if asset:
                await self._discard_asset(asset.asset_id, reason="create_failed")
            raise

        logger.info(
            "Blog created",
            slug=post.slug,
            author_id=caller.user_id,
            category=resolution.category.name,
            category_outcome=resolution.outcome.value,
        )
        return BlogResult(post, warnings)

    async def update(
        self,
        caller: CallerIdentity | None,
        slug: str,
        raw: Mapping[str, Any],
        image: UploadFile | None = None,
    ) -> BlogResult:
        """
        Apply a partial update to a post owned by the caller.

        Omitted fields keep their stored values. The slug follows the
        resulting title. When the post's uploaded image is replaced, the old
        asset is deleted after the commit, best effort.

        Raises:
            UnauthenticatedError: No caller identity
            NotFoundError: No post has this slug
            ForbiddenError: Caller does not own the post
            ValidationError: A provided field breaks a rule
            ConflictError: New title collides with another post's slug
            StorageError: Any other persistence failure
        """
        post = await self._owned_post(Action.UPDATE, slug, caller)
        payload = validate_update(raw)

        previous_image, previous_image_id = post.featured_image, post.image_id
        featured_image, image_id = previous_image, previous_image_id

        asset, warnings = await self._upload(image)
        if asset:
            featured_image, image_id = asset.url, asset.asset_id
        elif payload.featured_image and payload.featured_image != previous_image:
            featured_image, image_id = payload.featured_image, None

        try:
            with translate_storage_errors("update_blog", slug=slug):
                category_id = post.category_id
                if payload.category_name is not None:
                    resolution = await self.categories.resolve(payload.category_name)
                    category_id = resolution.category.id

                updated = await self.blogs.update(
                    slug,
                    BlogRecord(
                        title=payload.title if payload.title is not None else post.title,
                        content=payload.content if payload.content is not None else post.content,
                        status=payload.status if payload.status is not None else post.status,
                        category_id=category_id,
                        featured_image=featured_image,
                        image_id=image_id,
                    ),
                )
                await self.session.commit()
        except Exception:
            await self.session.rollback()
            if asset:
                await self._discard_asset(asset.asset_id, reason="update_failed")
            raise

        if previous_image and previous_image_id and updated.featured_image != previous_image:
            await self._discard_asset(previous_image_id, reason="superseded")

        logger.info("Blog updated", slug=updated.slug, previous_slug=slug)
        return BlogResult(updated, warnings)

    async def delete(self, caller: CallerIdentity | None, slug: str) -> bool:
        """
        Hard-delete a post owned by the caller.

        Raises:
            UnauthenticatedError: No caller identity
            NotFoundError: No post has this slug
            ForbiddenError: Caller does not own the post
            StorageError: Any other persistence failure
        """
        post = await self._owned_post(Action.DELETE, slug, caller)
        image_id = post.image_id

        try:
            with translate_storage_errors("delete_blog", slug=slug):
                deleted = await self.blogs.delete(slug)
                await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        if self.delete_assets_with_post and image_id:
            await self._discard_asset(image_id, reason="post_deleted")

        logger.info("Blog deleted", slug=slug)
        return deleted

    async def list_posts(
        self,
        filters: BlogFilters | None = None,
        caller: CallerIdentity | None = None,
    ) -> list[BlogDB]:
        """
        List posts, most recently updated first, at most `BLOG_LIST_MAX_LIMIT`.

        With `public_list_published_only`, drafts are only listed when the
        caller filters on their own author id.
        """
        filters = filters or BlogFilters()
        own_listing = caller is not None and filters.author_id == caller.user_id
        if self.policy.public_list_published_only and not own_listing:
            if filters.status is False:
                return []
            filters = filters.model_copy(update={"status": True})

        with translate_storage_errors("list_blogs"):
            return await self.blogs.get_all(filters)

    async def list_mine(
        self,
        caller: CallerIdentity | None,
        filters: BlogFilters | None = None,
    ) -> list[BlogDB]:
        """List the caller's own posts, drafts included."""
        if caller is None:
            raise UnauthenticatedError
        filters = (filters or BlogFilters()).model_copy(update={"author_id": caller.user_id})
        with translate_storage_errors("list_my_blogs", author_id=caller.user_id):
            return await self.blogs.get_all(filters)

    async def get_post(self, slug: str, caller: CallerIdentity | None = None) -> BlogDB:
        """
        Read one post by slug.

        Raises:
            NotFoundError: No post has this slug, or it is a draft hidden from
                this caller by the visibility policy
        """
        post = await self._fetch(slug)
        if post is None:
            raise NotFoundError
        if self.policy.hide_drafts_by_slug and not post.status and not _is_owner(post, caller):
            raise NotFoundError
        return post

    async def _fetch(self, slug: str) -> BlogDB | None:
        with translate_storage_errors("get_blog", slug=slug):
            return await self.blogs.get_by_slug(slug)

    async def _owned_post(
        self,
        action: Action,
        slug: str,
        caller: CallerIdentity | None,
    ) -> BlogDB:
        """Fetch a post for mutation, checking identity, existence then ownership."""
        post = await self._fetch(slug) if caller else None
        authorize(action, post, caller)
        return cast("BlogDB", post)

    async def _upload(self, image: UploadFile | None) -> tuple[StoredAsset | None, list[str]]:
        """Upload a featured image, degrading to no image when the store fails."""
        if image is None:
            return None, []
        try:
            return await self.media.upload_featured_image(image), []
        except AssetUploadError:
            if self.strict_uploads:
                raise
            logger.warning("Featured image upload failed, continuing without it", filename=image.filename)
            return None, [UPLOAD_DEGRADED_WARNING]

    async def _discard_asset(self, asset_id: str, *, reason: str) -> None:
        """Delete an asset, logging instead of raising on failure."""
        try:
            removed = await self.media.delete_asset(asset_id)
        except AssetError as e:
            logger.warning("Asset deletion failed", asset_id=asset_id, reason=reason, error=e.detail)
            return
        if not removed:
            logger.info("Asset already absent", asset_id=asset_id, reason=reason)

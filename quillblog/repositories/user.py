"""Author repository for database operations."""

from quillblog.errors.database import DuplicateEntryError
from quillblog.models.user import UserDB
from quillblog.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserDB]):
    """
    Repository for author rows keyed by caller identity.

    Authors are never created twice: `ensure` is an idempotent upsert.
    """

    model = UserDB

    async def ensure(
        self,
        user_id: str,
        email: str | None = None,
        username: str | None = None,
    ) -> tuple[UserDB, bool]:
        """
        Return the author for an identity, provisioning it on first sight.

        A concurrent provisioning of the same identity is absorbed by
        re-reading after the unique violation.

        Args:
            user_id: Caller identity
            email: Optional email claim
            username: Optional username claim

        Returns:
            tuple[UserDB, bool]: The author and whether it was created now
        """
        if existing := await self.get_by_id(user_id):
            return existing, False

        try:
            created = await self._add_and_refresh(
                UserDB(id=user_id, email=email, username=username),
            )
        except DuplicateEntryError:
            existing = await self.get_by_id(user_id)
            if existing is None:
                raise
            return existing, False

        return created, True

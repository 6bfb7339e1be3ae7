"""Repository for failed import records."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from statement_import.models.failed_import import FailedImport
from statement_import.repositories.base import BaseRepository


class FailedImportRepository(BaseRepository[FailedImport]):
    """Repository for FailedImport records (support review queue)."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, FailedImport)

    async def get_by_file_path(self, file_path: str) -> FailedImport | None:
        result = await self.db.execute(
            select(FailedImport).where(FailedImport.file_path == file_path)
        )
        return result.scalar_one_or_none()

    async def list_pending(self, skip: int = 0, limit: int = 100) -> list[FailedImport]:
        """Get records support hasn't reviewed yet, newest first."""
        result = await self.db.execute(
            select(FailedImport)
            .where(FailedImport.reviewed.is_(False))
            .order_by(FailedImport.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def mark_reviewed(self, id: UUID) -> FailedImport | None:
        return await self.update(id, {"reviewed": True})

"""Comment repository (ICommentStore)."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import ValidationException
from app.infrastructure.persistence.models.project import Comment
from app.infrastructure.persistence.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Comment repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Comment)

    async def create_system_comment(
        self, project_id: str, text: str | None, author_id: str | None
    ) -> Comment:
        """Create a system-generated comment on project_id."""
        if not text:
            raise ValidationException("Comment text is required", field="text")
        return await self.create(
            Comment(
                project_id=project_id,
                author_id=author_id,
                text=text,
                is_system_generated=True,
            )
        )

    async def list_by_project(self, project_id: str) -> list[Comment]:
        """Return comments for a project, oldest first."""
        result = await self.db.execute(
            select(Comment)
            .where(Comment.project_id == project_id)
            .order_by(Comment.created_at.asc())
        )
        return list(result.scalars().all())

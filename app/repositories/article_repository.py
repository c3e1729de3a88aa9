from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Article, utcnow
from app.repositories.base import AffectedRows, BaseRepository
from app.schemas import ArticleCreate, ArticleUpdate


class ArticleRepository(BaseRepository[Article]):
    """Persistence operations for blog articles."""

    model = Article

    async def list_articles(self, session: AsyncSession | None = None) -> list[Article]:
        """Return every article in the store's natural scan order."""
        db = self.get_session(session)
        async with self._storage_errors("list"):
            result = await db.execute(
                select(Article).execution_options(populate_existing=True)
            )
            return list(result.scalars().all())

    async def get_article(
        self, article_id: int, session: AsyncSession | None = None
    ) -> Article | None:
        """Return the article with *article_id*, or None when it does not exist."""
        db = self.get_session(session)
        if not self.is_storable_id(article_id):
            return None
        async with self._storage_errors("get"):
            result = await db.execute(
                select(Article)
                .where(Article.id == article_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()

    async def create_article(
        self, data: ArticleCreate, session: AsyncSession | None = None
    ) -> Article:
        """
        Insert a new article and return it with its generated id and
        timestamps loaded.

        ``created_at`` and ``updated_at`` share one clock reading so a fresh
        record always has them equal.
        """
        db = self.get_session(session)
        now = utcnow()
        article = Article(**data.model_dump(), created_at=now, updated_at=now)
        async with self._storage_errors("create"):
            db.add(article)
            await db.flush()
            await db.refresh(article)
        return article

    async def delete_article(
        self, article_id: int, session: AsyncSession | None = None
    ) -> int:
        """Hard-delete the article; return the number of rows removed (0 or 1)."""
        db = self.get_session(session)
        if not self.is_storable_id(article_id):
            return 0
        async with self._storage_errors("delete"):
            result = await db.execute(delete(Article).where(Article.id == article_id))
        return result.rowcount

    async def update_article(
        self, article_id: int, data: ArticleUpdate, session: AsyncSession | None = None
    ) -> AffectedRows:
        """
        Apply the fields explicitly set on *data* to the article and refresh
        ``updated_at``.

        Only the affected-row count is returned; callers that need the new
        state read it back with ``get_article``.
        """
        db = self.get_session(session)
        values = data.model_dump(exclude_unset=True)
        if not self.is_storable_id(article_id):
            return AffectedRows(0)
        async with self._storage_errors("update"):
            result = await db.execute(
                update(Article)
                .where(Article.id == article_id)
                .values(**values, updated_at=utcnow())
            )
        return AffectedRows(result.rowcount)

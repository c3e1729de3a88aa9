"""
Article service: the seam between the /blog router and ArticleRepository.

Every method forwards to the repository and returns its result as-is.
Business rules for articles belong here once there are any; today the
only translation is turning a delete's affected-row count into a
``{"success": ...}`` envelope.
"""
import logging

from app.models import Article
from app.repositories import AffectedRows, ArticleRepository
from app.schemas import ArticleCreate, ArticleUpdate

logger = logging.getLogger(__name__)


class ArticleService:
    def __init__(self, repository: ArticleRepository) -> None:
        self.repository = repository

    async def get_articles(self) -> list[Article]:
        return await self.repository.list_articles()

    async def get_article_by_id(self, article_id: int) -> Article | None:
        return await self.repository.get_article(article_id)

    async def create_article(self, data: ArticleCreate) -> Article:
        article = await self.repository.create_article(data)
        logger.info("Created article id=%s", article.id)
        return article

    async def delete_article_by_id(self, article_id: int) -> dict:
        """
        Delete the article and report whether anything was removed.

        Returns ``{"success": True}`` when a row was deleted and
        ``{"success": False}`` when no article had *article_id*.
        """
        deleted = await self.repository.delete_article(article_id)
        if deleted > 0:
            logger.info("Deleted article id=%s", article_id)
            return {"success": True}
        return {"success": False}

    async def update_article_by_id(
        self, article_id: int, data: ArticleUpdate
    ) -> AffectedRows:
        return await self.repository.update_article(article_id, data)

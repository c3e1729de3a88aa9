"""
Composition root for the request path.

FastAPI resolves these providers per request, building the object graph
in dependency order::

    get_db -> ArticleRepository -> ArticleService -> router handler

The components are stateless apart from the session they carry, so a
fresh instance per request is equivalent to a process-wide singleton
bound to the request's unit of work.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.repositories import ArticleRepository
from app.services.article_service import ArticleService


def get_article_repository(db: AsyncSession = Depends(get_db)) -> ArticleRepository:
    return ArticleRepository(db)


def get_article_service(
    repository: ArticleRepository = Depends(get_article_repository),
) -> ArticleService:
    return ArticleService(repository)

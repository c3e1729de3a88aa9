# Repositories package.
#
# The only layer allowed to issue SQL. Every repository extends
# ``BaseRepository``, which resolves the AsyncSession an operation runs on:
# the caller's session when one is passed explicitly (so several calls can
# share one transaction), otherwise the request-scoped session the
# repository was constructed with.
from app.repositories.article_repository import ArticleRepository
from app.repositories.base import AffectedRows, BaseRepository

__all__ = ["AffectedRows", "ArticleRepository", "BaseRepository"]

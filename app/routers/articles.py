from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_article_service
from app.schemas import (
    ArticleCreate,
    ArticleCreatedEnvelope,
    ArticleEnvelope,
    ArticleListEnvelope,
    ArticleResponse,
    ArticleUpdate,
    SuccessEnvelope,
)
from app.services.article_service import ArticleService

router = APIRouter(prefix="/blog", tags=["blog"])

@router.get("", response_model=ArticleListEnvelope)
async def get_articles(service: ArticleService = Depends(get_article_service)):
    articles = await service.get_articles()
    return ArticleListEnvelope(
        success=True,
        articles=[ArticleResponse.model_validate(a) for a in articles],
    )

@router.get("/{article_id}", response_model=ArticleEnvelope)
async def get_article(article_id: int, service: ArticleService = Depends(get_article_service)):
    # An unknown id is reported as article=null, not as a 404.
    article = await service.get_article_by_id(article_id)
    return ArticleEnvelope(
        success=True,
        article=ArticleResponse.model_validate(article) if article is not None else None,
    )

@router.post("", status_code=201, response_model=ArticleCreatedEnvelope)
async def create_article(data: ArticleCreate, service: ArticleService = Depends(get_article_service)):
    article = await service.create_article(data)
    return ArticleCreatedEnvelope(success=True, response=ArticleResponse.model_validate(article))

@router.patch("/{article_id}", response_model=SuccessEnvelope)
async def update_article(
    article_id: int,
    data: ArticleUpdate,
    service: ArticleService = Depends(get_article_service),
):
    result = await service.update_article_by_id(article_id, data)
    if not result:
        raise HTTPException(status_code=404, detail="Article not found")
    return SuccessEnvelope(success=True)

@router.delete("/{article_id}", response_model=SuccessEnvelope)
async def delete_article(article_id: int, service: ArticleService = Depends(get_article_service)):
    result = await service.delete_article_by_id(article_id)
    if not result["success"]:
        raise HTTPException(status_code=404, detail="Article not found")
    return result

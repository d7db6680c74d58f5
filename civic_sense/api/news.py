from fastapi import APIRouter

from civic_sense.models.news import NewsArticle, NewsArticleCreate
from civic_sense.schemas.responses import NewsAddedResponseSchema
from civic_sense.services.news import NewsService

router = APIRouter(prefix="/api/news", tags=["news"])


@router.get("", response_model=list[NewsArticle])
async def get_headlines() -> list[NewsArticle]:
    """Get the current headlines.

    Returns:
        Upstream headlines, or a fallback article if the provider is down
    """
    return await NewsService().get_headlines()


@router.get("/local", response_model=list[NewsArticle])
async def get_local_news() -> list[NewsArticle]:
    return await NewsService().get_local_news()


@router.post("/local", response_model=NewsAddedResponseSchema)
async def add_local_news(article: NewsArticleCreate) -> NewsAddedResponseSchema:
    created = await NewsService().add_local_news(article)
    return NewsAddedResponseSchema(message="News added successfully", article=created)

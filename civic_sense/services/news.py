import asyncio
import logging
from datetime import UTC, datetime
from uuid import uuid4

import httpx

from civic_sense.config import Settings, get_settings
from civic_sense.models.news import (
    PLACEHOLDER_IMAGE_URL,
    NewsArticle,
    NewsArticleCreate,
    NewsSource,
)
from civic_sense.store import JsonStore

logger = logging.getLogger(__name__)

NEWS = "news"
FALLBACK_IMAGE_URL = "https://via.placeholder.com/300x200?text=Community+News"


def fallback_articles() -> list[NewsArticle]:
    """Articles served when the upstream provider is unavailable."""
    return [
        NewsArticle(
            id=str(uuid4()),
            title="Local Community Updates",
            description="Stay informed with the latest community news and updates.",
            url="#",
            url_to_image=FALLBACK_IMAGE_URL,
            published_at=datetime.now(UTC).isoformat(),
            source=NewsSource(name="Civic Sense"),
        )
    ]


class NewsService:
    """Service for headline news and the local news board.

    Headlines are passed through from an upstream provider. Any upstream
    failure degrades to a fixed fallback list instead of an error. Local
    articles are contributed by users and kept newest first.

    Attributes:
        api_url: Upstream top-headlines endpoint
        api_key: Upstream API key
        country: Country code for the headlines
        timeout: Upstream request timeout in seconds
    """

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.api_url: str = settings.news_api_url
        self.api_key: str = settings.news_api_key
        self.country: str = settings.news_country
        self.timeout: float = settings.news_timeout

    async def get_headlines(self) -> list[NewsArticle]:
        """Fetch the current headlines from the upstream provider.

        Returns:
            The upstream articles, or the fallback articles if the request
            fails or the provider answers with an error status
        """
        params = {"country": self.country, "apiKey": self.api_key}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.api_url, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Falling back to default news: %s", str(e))
            return fallback_articles()

        articles = data.get("articles") if isinstance(data, dict) else None
        return [NewsArticle(**article) for article in articles or []]

    async def get_local_news(self) -> list[NewsArticle]:
        return [NewsArticle(**record) for record in JsonStore(NEWS).load_all()]

    async def add_local_news(self, article: NewsArticleCreate) -> NewsArticle:
        """Publish a locally contributed article at the top of the board.

        Args:
            article: The contributed article

        Returns:
            The stored article

        Raises:
            StoreError: If the article could not be stored
            LockTimeoutError: If the news collection stayed locked too long
        """
        return await asyncio.to_thread(self._add_local_news, article)

    def _add_local_news(self, article: NewsArticleCreate) -> NewsArticle:
        created = NewsArticle(
            id=str(uuid4()),
            title=article.title,
            description=article.description,
            url=article.url or "#",
            url_to_image=article.image_url or PLACEHOLDER_IMAGE_URL,
            published_at=datetime.now(UTC).isoformat(),
            source=NewsSource(name="Local Contributor"),
        )
        JsonStore(NEWS).prepend(created.model_dump(mode="json", by_alias=True))
        logger.info("Local news added: %s", created.title)
        return created

from pydantic import ConfigDict, Field

from civic_sense.models.base import RecordModel

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/300x200?text=News"


class NewsSource(RecordModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None


class NewsArticle(RecordModel):
    """Model representing a news article.

    Upstream articles carry extra fields (author, content, ...) which are
    passed through unchanged.

    Attributes:
        id: Identifier of locally contributed articles; upstream ones have none
        title: Headline of the article
        description: Summary of the article
        url: Link to the full article
        url_to_image: Link to the article's image
        published_at: ISO 8601 publication time
        source: Where the article came from
    """

    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    title: str | None = None
    description: str | None = None
    url: str | None = None
    url_to_image: str | None = None
    published_at: str | None = None
    source: NewsSource | None = None


class NewsArticleCreate(RecordModel):
    """Model for contributing a local news article.

    Attributes:
        title: Headline of the article
        description: Body of the article
        url: Optional link to more details
        image_url: Optional link to an image
    """

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    url: str | None = None
    image_url: str | None = None

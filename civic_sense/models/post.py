from pydantic import Field

from civic_sense.models.base import RecordModel


class PostBase(RecordModel):
    """Base model for post data.

    Attributes:
        title: Headline of the post
        excerpt: Body text shown in the feed
        author: Display name of the author
        date: Publication date as entered by the author
    """

    title: str = Field(min_length=1)
    excerpt: str = Field(min_length=1)
    author: str = Field(min_length=1)
    date: str = Field(min_length=1)


class PostCreate(PostBase):
    """Model for creating a new post.

    Attributes:
        image_url: Optional URL of an image shown with the post
    """

    image_url: str | None = None


class Post(PostBase):
    """Model representing a post in the feed.

    Attributes:
        id: Unique identifier for the post
        image_url: URL of the post's image, if any
        likes: Number of active likes
        liked_by: Identifiers of the users whose like is active
    """

    id: str
    image_url: str | None = None
    likes: int = Field(default=0, ge=0)
    liked_by: list[str] = Field(default_factory=list)

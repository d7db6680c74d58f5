from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ContentType(str, Enum):
    """Types of content that can be liked.

    Attributes:
        POST: An article-style post
        REEL: A short video reel
        COMMENT: A comment on a post or reel
    """

    POST = "post"
    REEL = "reel"
    COMMENT = "comment"

    @property
    def collection(self) -> str:
        return f"{self.value}s"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class LikeToggleResult(BaseModel):
    """Outcome of toggling a like.

    Attributes:
        likes: Number of active likes after the toggle
        liked: True if the user's like is now active, False if it was removed
    """

    model_config = ConfigDict(frozen=True)

    likes: int = Field(ge=0)
    liked: bool


class LikeStatus(BaseModel):
    """Current like count of an item and whether a user likes it."""

    model_config = ConfigDict(frozen=True)

    likes: int = Field(ge=0)
    liked: bool

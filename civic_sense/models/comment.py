from datetime import datetime

from pydantic import Field, field_validator

from civic_sense.models.base import RecordModel
from civic_sense.models.like import ContentType


class CommentCreate(RecordModel):
    """Model for creating a new comment.

    Attributes:
        content: The text content of the comment
        author: Display name of the commenter
        content_type: Type of the item being commented on
        content_id: ID of the item being commented on
    """

    content: str = Field(min_length=1)
    author: str = Field(min_length=1)
    content_type: ContentType
    content_id: str = Field(min_length=1)

    @field_validator("content", "author")
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be blank")
        return v

    @field_validator("content_type")
    def validate_content_type(cls, v: ContentType) -> ContentType:
        if v == ContentType.COMMENT:
            raise ValueError("Comments can only be added to posts and reels")
        return v


class Comment(CommentCreate):
    """Model representing a comment on a post or reel.

    Attributes:
        id: Unique identifier for the comment
        timestamp: When the comment was created
        likes: Number of active likes on the comment
        liked_by: Identifiers of the users whose like is active
    """

    id: str
    timestamp: datetime
    likes: int = Field(default=0, ge=0)
    liked_by: list[str] = Field(default_factory=list)

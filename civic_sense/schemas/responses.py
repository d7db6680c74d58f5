from pydantic import BaseModel, ConfigDict

from civic_sense.models.comment import Comment
from civic_sense.models.news import NewsArticle
from civic_sense.models.post import Post
from civic_sense.models.reel import Reel
from civic_sense.models.report import Report
from civic_sense.models.share import Share
from civic_sense.models.user import User


class ResponseSchema(BaseModel):
    model_config = ConfigDict(frozen=True)


class HealthCheckResponseSchema(ResponseSchema):
    success: bool


class UserSubmittedResponseSchema(ResponseSchema):
    """Response to a registration form submission.

    Attributes:
        message: Human-readable outcome
        user: The stored registration
        token: Access token for the registered e-mail address
    """

    message: str
    user: User
    token: str


class PostCreatedResponseSchema(ResponseSchema):
    message: str
    post: Post


class ReelCreatedResponseSchema(ResponseSchema):
    message: str
    reel: Reel


class ReportSubmittedResponseSchema(ResponseSchema):
    message: str
    report: Report


class CommentCreatedResponseSchema(ResponseSchema):
    message: str
    comment: Comment


class ShareRecordedResponseSchema(ResponseSchema):
    message: str
    share: Share


class ShareCountResponseSchema(ResponseSchema):
    count: int
    shares: list[Share]


class NewsAddedResponseSchema(ResponseSchema):
    message: str
    article: NewsArticle


class LikeToggleResponseSchema(ResponseSchema):
    """Response to a like toggle.

    Attributes:
        message: ``"<Type> liked"`` or ``"<Type> unliked"``
        likes: Number of active likes after the toggle
        liked: Whether the caller's like is now active
    """

    message: str
    likes: int
    liked: bool

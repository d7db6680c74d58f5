from pydantic import Field

from civic_sense.models.base import RecordModel


class ReelBase(RecordModel):
    """Base model for reel data.

    Attributes:
        title: Title of the reel
        author: Display name of the author
        date: Publication date as entered by the author
        description: Caption shown under the reel
    """

    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    date: str = Field(min_length=1)
    description: str = Field(min_length=1)


class ReelCreate(ReelBase):
    video_url: str | None = None


class Reel(ReelBase):
    """Model representing a short video reel.

    Attributes:
        id: Unique identifier for the reel
        video_url: URL of the video, if any
        likes: Number of active likes
        liked_by: Identifiers of the users whose like is active
    """

    id: str
    video_url: str | None = None
    likes: int = Field(default=0, ge=0)
    liked_by: list[str] = Field(default_factory=list)

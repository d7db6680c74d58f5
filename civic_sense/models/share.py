from datetime import datetime

from pydantic import Field, field_validator

from civic_sense.models.base import RecordModel
from civic_sense.models.like import ContentType


class ShareCreate(RecordModel):
    """Model for recording a share of a post or reel.

    Attributes:
        user_id: Identifier of the sharing user, ``guest`` for anonymous shares
        content_type: Type of the shared item
        content_id: ID of the shared item
        platform: Platform the item was shared to, e.g. ``whatsapp``
    """

    user_id: str = Field(min_length=1)
    content_type: ContentType
    content_id: str = Field(min_length=1)
    platform: str = Field(min_length=1)

    @field_validator("content_type")
    def validate_content_type(cls, v: ContentType) -> ContentType:
        if v == ContentType.COMMENT:
            raise ValueError("Only posts and reels can be shared")
        return v


class Share(ShareCreate):
    id: str
    timestamp: datetime

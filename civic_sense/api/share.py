from fastapi import APIRouter

from civic_sense.models.like import ContentType
from civic_sense.models.share import ShareCreate
from civic_sense.schemas.responses import (
    ShareCountResponseSchema,
    ShareRecordedResponseSchema,
)
from civic_sense.services.share import ShareService

router = APIRouter(prefix="/shares", tags=["share"])
share_service = ShareService()


@router.get("/{content_type}/{content_id}", response_model=ShareCountResponseSchema)
async def get_share_count(
    content_type: ContentType, content_id: str
) -> ShareCountResponseSchema:
    """Get how often a post or reel was shared.

    Args:
        content_type: Type of the shared item
        content_id: ID of the shared item

    Returns:
        The number of shares and the shares themselves
    """
    shares = await share_service.get_shares(content_type, content_id)
    return ShareCountResponseSchema(count=len(shares), shares=shares)


@router.post("", response_model=ShareRecordedResponseSchema)
async def record_share(share: ShareCreate) -> ShareRecordedResponseSchema:
    recorded = await share_service.record_share(share)
    return ShareRecordedResponseSchema(
        message="Share recorded successfully", share=recorded
    )

import asyncio
import logging
from datetime import UTC, datetime
from uuid import uuid4

from civic_sense.models.like import ContentType
from civic_sense.models.share import Share, ShareCreate
from civic_sense.store import JsonStore

logger = logging.getLogger(__name__)

SHARES = "shares"


class ShareService:
    """Service for tracking shares of posts and reels to other platforms."""

    async def record_share(self, share: ShareCreate) -> Share:
        """Record a new share.

        Args:
            share: The share data

        Returns:
            The recorded share

        Raises:
            StoreError: If the share could not be stored
            LockTimeoutError: If the shares collection stayed locked too long
        """
        return await asyncio.to_thread(self._record_share, share)

    def _record_share(self, share: ShareCreate) -> Share:
        recorded = Share(
            **share.model_dump(), id=str(uuid4()), timestamp=datetime.now(UTC)
        )
        JsonStore(SHARES).append(recorded.model_dump(mode="json", by_alias=True))
        logger.info(
            "New share recorded: %s %s to %s",
            recorded.content_type.value,
            recorded.content_id,
            recorded.platform,
        )
        return recorded

    async def get_shares(self, content_type: ContentType, content_id: str) -> list[Share]:
        return [
            Share(**record)
            for record in JsonStore(SHARES).load_all()
            if record.get("contentType") == content_type.value
            and record.get("contentId") == content_id
        ]

import asyncio
import logging
from uuid import uuid4

from civic_sense.models.reel import Reel, ReelCreate
from civic_sense.store import JsonStore

logger = logging.getLogger(__name__)

REELS = "reels"


class ReelService:
    """Service for the reels feed."""

    async def create_reel(self, reel: ReelCreate) -> Reel:
        """Create a new reel.

        Args:
            reel: The reel data

        Returns:
            The created reel

        Raises:
            StoreError: If the reel could not be stored
            LockTimeoutError: If the reels collection stayed locked too long
        """
        return await asyncio.to_thread(self._create_reel, reel)

    def _create_reel(self, reel: ReelCreate) -> Reel:
        created = Reel(**reel.model_dump(), id=str(uuid4()))
        JsonStore(REELS).append(created.model_dump(mode="json", by_alias=True))
        logger.info("New reel added: %s by %s", created.id, created.author)
        return created

    async def get_reels(self) -> list[Reel]:
        return [Reel(**record) for record in JsonStore(REELS).load_all()]

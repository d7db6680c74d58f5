import asyncio
import logging

from civic_sense.models.like import ContentType, LikeStatus, LikeToggleResult
from civic_sense.services.user import UserService
from civic_sense.store import JsonStore, Record, find_record

logger = logging.getLogger(__name__)


class LikeError(Exception):
    """Base exception for like-related errors."""

    pass


class ContentNotFoundError(LikeError):
    """Exception raised when the liked item does not exist."""

    pass


class UnregisteredUserError(LikeError):
    """Exception raised when the liking user is not in the registry."""

    pass


class LikeService:
    """Service for liking and unliking posts, reels and comments.

    Each item keeps its active likes in two fields, ``likes`` and
    ``likedBy``, and ``likes == len(likedBy)`` holds after every toggle.
    Toggles on one collection are serialized through the collection's
    lock, so concurrent requests from any thread or process never lose an
    update. Reads take no lock and may see a slightly stale count.
    """

    def __init__(self) -> None:
        self.user_service = UserService()

    async def toggle_like(
        self, content_type: ContentType, item_id: str, user_id: str
    ) -> LikeToggleResult:
        """Like an item, or unlike it if the user already likes it.

        Args:
            content_type: Type of the item
            item_id: ID of the item
            user_id: Identifier of the user toggling the like

        Returns:
            The new like count and whether the like is now active

        Raises:
            UnregisteredUserError: If the user is not registered
            ContentNotFoundError: If the item does not exist
            LockTimeoutError: If exclusive access was not granted in time
            StoreError: If the collection cannot be read or written
        """
        return await asyncio.to_thread(
            self._toggle_like, content_type, item_id, user_id
        )

    def _toggle_like(
        self, content_type: ContentType, item_id: str, user_id: str
    ) -> LikeToggleResult:
        """Toggle a like while holding the collection's lock.

        The registry check happens before the lock is requested. Raising
        inside ``mutate`` leaves the collection unwritten.
        """
        if not self.user_service.is_registered(user_id):
            raise UnregisteredUserError("Invalid or unauthorized userId")

        def toggle(records: list[Record]) -> LikeToggleResult:
            item = _find_item(records, item_id, content_type)
            # Duplicates can only come from hand-edited data.
            liked_by = list(dict.fromkeys(item.get("likedBy") or []))
            if user_id in liked_by:
                liked_by.remove(user_id)
                liked = False
            else:
                liked_by.append(user_id)
                liked = True
            item["likedBy"] = liked_by
            item["likes"] = len(liked_by)
            return LikeToggleResult(likes=item["likes"], liked=liked)

        result = JsonStore(content_type.collection).mutate(toggle)
        logger.info(
            "%s %s %s by %s (likes=%d)",
            content_type.label,
            item_id,
            "liked" if result.liked else "unliked",
            user_id,
            result.likes,
        )
        return result

    async def get_like_status(
        self, content_type: ContentType, item_id: str, user_id: str | None
    ) -> LikeStatus:
        """Get the like count of an item and whether a user likes it.

        Args:
            content_type: Type of the item
            item_id: ID of the item
            user_id: Identifier of the user to check, if any

        Returns:
            The current like status

        Raises:
            ContentNotFoundError: If the item does not exist
            StoreError: If the collection cannot be read
        """
        records = JsonStore(content_type.collection).load_all()
        item = _find_item(records, item_id, content_type)
        liked_by = item.get("likedBy") or []
        return LikeStatus(
            likes=item.get("likes") or 0,
            liked=user_id is not None and user_id in liked_by,
        )


def _find_item(
    records: list[Record], item_id: str, content_type: ContentType
) -> Record:
    if (item := find_record(records, item_id)) is not None:
        return item
    raise ContentNotFoundError(f"{content_type.label} not found")

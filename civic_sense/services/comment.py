import asyncio
import logging
from datetime import UTC, datetime
from uuid import uuid4

from civic_sense.models.comment import Comment, CommentCreate
from civic_sense.models.like import ContentType
from civic_sense.store import JsonStore

logger = logging.getLogger(__name__)

COMMENTS = "comments"


class CommentError(Exception):
    """Base exception for comment-related errors."""

    pass


class CommentTargetNotFoundError(CommentError):
    """Exception raised when the commented item does not exist."""

    pass


class CommentService:
    """Service for comments on posts and reels.

    Comments carry their own ``likes``/``likedBy`` pair, toggled through the
    like service like any other content item.
    """

    async def create_comment(self, comment: CommentCreate) -> Comment:
        """Create a new comment on a post or reel.

        Args:
            comment: The comment data

        Returns:
            The created comment

        Raises:
            CommentTargetNotFoundError: If the post or reel doesn't exist
            StoreError: If the comment could not be stored
            LockTimeoutError: If the comments collection stayed locked too long
        """
        return await asyncio.to_thread(self._create_comment, comment)

    def _create_comment(self, comment: CommentCreate) -> Comment:
        target = JsonStore(comment.content_type.collection).find(comment.content_id)
        if target is None:
            raise CommentTargetNotFoundError(
                f"{comment.content_type.label} not found"
            )

        created = Comment(
            **comment.model_dump(), id=str(uuid4()), timestamp=datetime.now(UTC)
        )
        JsonStore(COMMENTS).append(created.model_dump(mode="json", by_alias=True))
        logger.info(
            "New comment %s on %s %s",
            created.id,
            created.content_type.value,
            created.content_id,
        )
        return created

    async def get_comments(
        self, content_type: ContentType, content_id: str
    ) -> list[Comment]:
        """Get the comments on a post or reel, oldest first.

        Args:
            content_type: Type of the commented item
            content_id: ID of the commented item

        Returns:
            The item's comments
        """
        comments = [
            Comment(**record)
            for record in JsonStore(COMMENTS).load_all()
            if record.get("contentType") == content_type.value
            and record.get("contentId") == content_id
        ]
        return sorted(comments, key=lambda comment: comment.timestamp)

import asyncio
import logging
from uuid import uuid4

from civic_sense.models.post import Post, PostCreate
from civic_sense.store import JsonStore

logger = logging.getLogger(__name__)

POSTS = "posts"


class PostError(Exception):
    """Base exception for post-related errors."""

    pass


class PostNotFoundError(PostError):
    """Exception raised when a post is not found."""

    pass


class PostService:
    """Service for the posts feed.

    Posts are created with no likes; ``likes`` and ``likedBy`` are only
    changed afterwards by the like service.
    """

    async def create_post(self, post: PostCreate) -> Post:
        """Create a new post.

        Args:
            post: The post data

        Returns:
            The created post

        Raises:
            StoreError: If the post could not be stored
            LockTimeoutError: If the posts collection stayed locked too long
        """
        return await asyncio.to_thread(self._create_post, post)

    def _create_post(self, post: PostCreate) -> Post:
        created = Post(**post.model_dump(), id=str(uuid4()))
        JsonStore(POSTS).append(created.model_dump(mode="json", by_alias=True))
        logger.info("New post added: %s by %s", created.id, created.author)
        return created

    async def get_posts(self) -> list[Post]:
        return [Post(**record) for record in JsonStore(POSTS).load_all()]

    async def get_post(self, post_id: str) -> Post:
        """Get a post by ID.

        Args:
            post_id: ID of the post

        Returns:
            The post

        Raises:
            PostNotFoundError: If the post doesn't exist
        """
        if record := JsonStore(POSTS).find(post_id):
            return Post(**record)
        raise PostNotFoundError("Post not found")

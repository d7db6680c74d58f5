from fastapi import APIRouter, HTTPException, status

from civic_sense.models.post import Post, PostCreate
from civic_sense.schemas.responses import PostCreatedResponseSchema
from civic_sense.services.post import PostNotFoundError, PostService

router = APIRouter(prefix="/posts", tags=["post"])
post_service = PostService()


@router.get("", response_model=list[Post])
async def get_posts() -> list[Post]:
    return await post_service.get_posts()


@router.post("", response_model=PostCreatedResponseSchema)
async def create_post(post: PostCreate) -> PostCreatedResponseSchema:
    """Create a new post.

    Args:
        post: The post data

    Returns:
        The created post
    """
    created = await post_service.create_post(post)
    return PostCreatedResponseSchema(message="Post added successfully", post=created)


@router.get("/{post_id}", response_model=Post)
async def get_post(post_id: str) -> Post:
    """Get a post by ID.

    Args:
        post_id: ID of the post to get

    Returns:
        The requested post

    Raises:
        HTTPException: If post not found
    """
    try:
        return await post_service.get_post(post_id)
    except PostNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

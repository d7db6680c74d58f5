from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from civic_sense.dependencies import get_current_user_id
from civic_sense.models.like import ContentType, LikeStatus
from civic_sense.schemas.responses import LikeToggleResponseSchema
from civic_sense.services.like import (
    ContentNotFoundError,
    LikeService,
    UnregisteredUserError,
)
from civic_sense.store import StoreError
from civic_sense.utils.lock import LockTimeoutError

router = APIRouter(tags=["like"])
like_service = LikeService()


async def _toggle_like(
    content_type: ContentType, item_id: str, user_id: str
) -> LikeToggleResponseSchema:
    try:
        result = await like_service.toggle_like(content_type, item_id, user_id)
    except UnregisteredUserError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except ContentNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except (LockTimeoutError, StoreError):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not process like/unlike. Try again.",
        )

    action = "liked" if result.liked else "unliked"
    return LikeToggleResponseSchema(
        message=f"{content_type.label} {action}",
        likes=result.likes,
        liked=result.liked,
    )


async def _get_like_status(
    content_type: ContentType, item_id: str, user_id: str | None
) -> LikeStatus:
    try:
        return await like_service.get_like_status(content_type, item_id, user_id)
    except ContentNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.put("/posts/{post_id}/like", response_model=LikeToggleResponseSchema)
async def toggle_post_like(
    post_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> LikeToggleResponseSchema:
    """Like a post, or unlike it if the caller already likes it.

    Args:
        post_id: ID of the post
        user_id: The authenticated caller

    Returns:
        The new like count and whether the caller's like is active

    Raises:
        HTTPException: 403 for unregistered callers, 404 for unknown posts,
            500 if the posts could not be locked or stored
    """
    return await _toggle_like(ContentType.POST, post_id, user_id)


@router.get("/posts/{post_id}/like-status", response_model=LikeStatus)
async def get_post_like_status(
    post_id: str,
    user_id: Annotated[str | None, Query(alias="userId")] = None,
) -> LikeStatus:
    """Get a post's like count and whether a user likes it.

    Args:
        post_id: ID of the post
        user_id: Identifier of the user to check

    Returns:
        The like status

    Raises:
        HTTPException: If post not found
    """
    return await _get_like_status(ContentType.POST, post_id, user_id)


@router.put("/reels/{reel_id}/like", response_model=LikeToggleResponseSchema)
async def toggle_reel_like(
    reel_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> LikeToggleResponseSchema:
    return await _toggle_like(ContentType.REEL, reel_id, user_id)


@router.get("/reels/{reel_id}/like-status", response_model=LikeStatus)
async def get_reel_like_status(
    reel_id: str,
    user_id: Annotated[str | None, Query(alias="userId")] = None,
) -> LikeStatus:
    return await _get_like_status(ContentType.REEL, reel_id, user_id)


@router.put("/comments/{comment_id}/like", response_model=LikeToggleResponseSchema)
async def toggle_comment_like(
    comment_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> LikeToggleResponseSchema:
    return await _toggle_like(ContentType.COMMENT, comment_id, user_id)


@router.get("/comments/{comment_id}/like-status", response_model=LikeStatus)
async def get_comment_like_status(
    comment_id: str,
    user_id: Annotated[str | None, Query(alias="userId")] = None,
) -> LikeStatus:
    return await _get_like_status(ContentType.COMMENT, comment_id, user_id)

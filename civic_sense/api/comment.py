from fastapi import APIRouter, HTTPException, status

from civic_sense.models.comment import Comment, CommentCreate
from civic_sense.models.like import ContentType
from civic_sense.schemas.responses import CommentCreatedResponseSchema
from civic_sense.services.comment import CommentService, CommentTargetNotFoundError

router = APIRouter(prefix="/comments", tags=["comment"])
comment_service = CommentService()


@router.get("/{content_type}/{content_id}", response_model=list[Comment])
async def get_comments(content_type: ContentType, content_id: str) -> list[Comment]:
    """Get the comments on a post or reel.

    Args:
        content_type: Type of the commented item
        content_id: ID of the commented item

    Returns:
        The comments, oldest first
    """
    return await comment_service.get_comments(content_type, content_id)


@router.post("", response_model=CommentCreatedResponseSchema)
async def create_comment(comment: CommentCreate) -> CommentCreatedResponseSchema:
    """Create a new comment on a post or reel.

    Args:
        comment: The comment data

    Returns:
        The created comment

    Raises:
        HTTPException: If the commented item doesn't exist
    """
    try:
        created = await comment_service.create_comment(comment)
    except CommentTargetNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    return CommentCreatedResponseSchema(
        message="Comment added successfully", comment=created
    )

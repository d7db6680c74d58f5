from fastapi import APIRouter

from civic_sense.models.user import UserCreate
from civic_sense.schemas.responses import UserSubmittedResponseSchema
from civic_sense.services.auth import AuthService
from civic_sense.services.user import UserService

router = APIRouter(tags=["user"])
user_service = UserService()


@router.post("/submit-form", response_model=UserSubmittedResponseSchema)
async def submit_form(user: UserCreate) -> UserSubmittedResponseSchema:
    """Register a citizen from the sign-up form.

    Args:
        user: The submitted form fields

    Returns:
        The stored registration and an access token for its e-mail address
    """
    registered = await user_service.register(user)
    token = AuthService().create_access_token(str(registered.email))
    return UserSubmittedResponseSchema(
        message="Form submitted successfully", user=registered, token=token
    )

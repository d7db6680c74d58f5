import asyncio
import logging
from datetime import UTC, datetime

from civic_sense.models.user import User, UserCreate
from civic_sense.store import JsonStore

logger = logging.getLogger(__name__)

USERS = "users"


class UserService:
    """Service for the citizen registry.

    Registrations are stored in the ``users`` collection. The registry is
    also the authority on whether an identifier from a token belongs to a
    known citizen.
    """

    async def register(self, user: UserCreate) -> User:
        """Store a registration form submission.

        Args:
            user: The submitted form

        Returns:
            The stored user

        Raises:
            StoreError: If the registry cannot be written
            LockTimeoutError: If the registry is locked for too long
        """
        return await asyncio.to_thread(self._register, user)

    def _register(self, user: UserCreate) -> User:
        registered = User(**user.model_dump(), submitted_at=datetime.now(UTC))
        JsonStore(USERS).append(registered.model_dump(mode="json", by_alias=True))
        logger.info("Registered user %s", registered.email)
        return registered

    def is_registered(self, user_id: str) -> bool:
        """Check whether an identifier belongs to a registered user.

        An identifier matches a user's e-mail, phone or name.

        Args:
            user_id: The identifier to check

        Returns:
            True if some registered user carries the identifier
        """
        for record in JsonStore(USERS).load_all():
            if user_id in (record.get("email"), record.get("phone"), record.get("name")):
                return True
        return False

from datetime import datetime

from pydantic import EmailStr, Field

from civic_sense.models.base import RecordModel


class UserCreate(RecordModel):
    """Model for the citizen registration form.

    Attributes:
        name: Full name of the citizen
        email: Contact e-mail address
        pincode: Postal code of the citizen's area
        phone: Contact phone number
        gender: Self-described gender
    """

    name: str = Field(min_length=1)
    email: EmailStr
    pincode: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    gender: str = Field(min_length=1)


class User(UserCreate):
    """Model representing a registered citizen.

    A citizen is identified by any of their e-mail, phone or name.

    Attributes:
        submitted_at: When the registration form was submitted
    """

    submitted_at: datetime

from datetime import datetime

from pydantic import EmailStr, Field

from civic_sense.models.base import RecordModel

MAX_REPORT_PHOTOS = 10


class ReportCreate(RecordModel):
    """Model for submitting a civic issue report.

    Attributes:
        title: Short summary of the issue
        description: Details of the issue
        contact_name: Name of the reporting citizen
        contact_email: E-mail address to follow up with
        photos: URLs of photos documenting the issue
    """

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    contact_name: str = Field(min_length=1)
    contact_email: EmailStr
    photos: list[str] = Field(default_factory=list, max_length=MAX_REPORT_PHOTOS)


class Report(ReportCreate):
    id: str
    submitted_at: datetime

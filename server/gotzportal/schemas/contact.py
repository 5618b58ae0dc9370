"""Contact message Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, Field

# Length ceilings enforced on public submissions
MAX_NAME_LENGTH = 120
MAX_EMAIL_LENGTH = 160
MAX_PHONE_LENGTH = 40
MAX_MESSAGE_LENGTH = 2000


class ContactFields(BaseModel):
    """Validated contact form submission."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    email: str = Field(..., min_length=1, max_length=MAX_EMAIL_LENGTH)
    phone: Optional[str] = Field(None, max_length=MAX_PHONE_LENGTH)
    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)


class ContactReceived(BaseModel):
    """Acknowledgement for ``POST /api/contact``."""

    status: str = "received"
    message_id: int


class AdminContactMessage(BaseModel):
    """Contact message as shown in the admin console."""

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    resolved_at: Optional[str] = None


class ContactMessageStats(BaseModel):
    total: int
    new: int
    closed: int


class ContactMessageStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, max_length=20)

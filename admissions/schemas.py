from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, field_validator, model_validator

from .shared.validators import validate_email, validate_required_text, validate_slot_time


class CounsellingSession(BaseModel):
    """A booked counselling slot, as handed over by the booking system"""

    parent_email: Optional[str] = None  # only the parent invite needs it
    parent_name: str
    student_name: str
    token_id: str
    slot_date: date
    slot_start_time: str
    slot_end_time: str
    location: str

    @field_validator("parent_email")
    @classmethod
    def validate_parent_email(cls, v):
        if v is None:
            return v
        return validate_email(v)

    @field_validator("parent_name", "student_name", "token_id", "location")
    @classmethod
    def validate_text(cls, v, info):
        return validate_required_text(v, info.field_name)

    @field_validator("slot_date", mode="before")
    @classmethod
    def drop_time_of_day(cls, v):
        # Only the calendar date matters, the slot times carry the time of day
        if isinstance(v, datetime):
            return v.date()
        return v

    @field_validator("slot_start_time", "slot_end_time")
    @classmethod
    def validate_time(cls, v):
        return validate_slot_time(v)

    @model_validator(mode="after")
    def check_slot_order(self):
        # Zero-padded HH:MM strings compare in chronological order
        if self.slot_start_time >= self.slot_end_time:
            raise ValueError(
                f"slot_start_time {self.slot_start_time} must be before slot_end_time {self.slot_end_time}"
            )
        return self


class CalendarAttendee(BaseModel):
    email: str
    name: Optional[str] = None
    partstat: str = "NEEDS-ACTION"


class CalendarEvent(BaseModel):
    """Transient event built per dispatch, ready for .ics encoding"""

    uid: str
    title: str
    description: str
    location: str
    start: datetime
    end: datetime
    attendees: List[CalendarAttendee]
    organizer: Optional[CalendarAttendee] = None


class EmailAttachment(BaseModel):
    filename: str
    content: str  # base64


class OutgoingEmail(BaseModel):
    from_address: str
    to: List[str]
    subject: str
    text: str
    attachments: List[EmailAttachment] = []


class ProviderError(BaseModel):
    message: str
    code: Optional[str] = None
    retryable: bool = False


class DeliveryReceipt(BaseModel):
    email_id: Optional[str] = None
    error: Optional[ProviderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DispatchStatus(str, Enum):
    SENT = "sent"
    LOGGED = "logged"
    PROVIDER_REJECTED = "provider_rejected"
    TRANSPORT_FAULT = "transport_fault"
    ENCODING_FAILED = "encoding_failed"
    INVALID_SESSION = "invalid_session"


class DispatchResult(BaseModel):
    success: bool
    message: str
    status: DispatchStatus
    retryable: bool = False
    email_id: Optional[str] = None

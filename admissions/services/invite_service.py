"""
Counselling Invite Service
Composes calendar invites for a booked counselling slot and hands them to the
configured email backend (console in development, Resend in production)
"""

import logging
from typing import Callable, Optional

from pydantic import ValidationError

from ..config import InviteSettings, load_invite_settings
from ..email_service import EmailBackend, encode_attachment, get_email_backend
from ..email_templates import (
    ICS_ATTACHMENT_FILENAME,
    parent_event_description,
    parent_event_title,
    parent_invite_subject,
    parent_invite_template,
    principal_event_description,
    principal_event_title,
    principal_invite_subject,
    principal_invite_template,
)
from ..schemas import (
    CalendarAttendee,
    CalendarEvent,
    CounsellingSession,
    DispatchResult,
    DispatchStatus,
    EmailAttachment,
    OutgoingEmail,
)
from .ics_service import build_slot_window, create_ics_event

logger = logging.getLogger(__name__)

IcsEncoder = Callable[[CalendarEvent], tuple[Optional[str], Optional[str]]]

ROLE_LABELS = {"parent": "Parent", "principal": "Principal"}


def _event_uid(session: CounsellingSession, role: str, school_email: str) -> str:
    domain = school_email.split("@")[-1]
    return f"counselling-{session.token_id.lower()}-{role}@{domain}"


class InviteDispatcher:
    """
    Builds and delivers counselling invites for one of two recipients.

    Every call is independent: no retries, no queue, and no exception ever
    reaches the caller. Failures come back as DispatchResult(success=False).
    """

    def __init__(
        self,
        settings: InviteSettings,
        backend: EmailBackend,
        ics_encoder: IcsEncoder = create_ics_event,
    ):
        self.settings = settings
        self.backend = backend
        self.ics_encoder = ics_encoder

    # ============================================
    # Composition
    # ============================================

    def build_parent_event(self, session: CounsellingSession) -> CalendarEvent:
        start, end = build_slot_window(session, self.settings.school_timezone)
        return CalendarEvent(
            uid=_event_uid(session, "parent", self.settings.school_email),
            title=parent_event_title(self.settings.school_name),
            description=parent_event_description(session),
            location=session.location,
            start=start,
            end=end,
            attendees=[CalendarAttendee(email=session.parent_email, name=session.parent_name)],
            organizer=CalendarAttendee(
                email=self.settings.school_email, name=self.settings.school_name
            ),
        )

    def build_principal_event(self, session: CounsellingSession) -> CalendarEvent:
        start, end = build_slot_window(session, self.settings.school_timezone)
        return CalendarEvent(
            uid=_event_uid(session, "principal", self.settings.school_email),
            title=principal_event_title(session),
            description=principal_event_description(session),
            location=session.location,
            start=start,
            end=end,
            attendees=[
                CalendarAttendee(
                    email=self.settings.principal_email, name=self.settings.principal_name
                )
            ],
            organizer=CalendarAttendee(
                email=self.settings.school_email, name=self.settings.school_name
            ),
        )

    def _encode(self, event: CalendarEvent) -> tuple[str, bool]:
        """Returns (ics_text, failed); failures are logged, never raised"""
        try:
            value, error = self.ics_encoder(event)
        except Exception as e:
            value, error = None, str(e)

        if error:
            logger.error(f"❌ ICS generation error for {event.uid}: {error}")
            return "", True
        return value or "", False

    # ============================================
    # Dispatch
    # ============================================

    async def dispatch_parent_invite(self, session: CounsellingSession) -> DispatchResult:
        """Send (or log) the counselling invite to the parent"""
        if not session.parent_email:
            logger.warning(f"⚠️ No parent email for {session.token_id}, parent invite not sent")
            return DispatchResult(
                success=False,
                message="Invalid counselling session: parent_email is required for the parent invite",
                status=DispatchStatus.INVALID_SESSION,
            )
        try:
            event = self.build_parent_event(session)
            email_kwargs = {
                "to": session.parent_email,
                "subject": parent_invite_subject(session),
                "text": parent_invite_template(session, self.settings.school_name),
            }
        except Exception as e:
            return self._composition_failed("parent", e)
        return await self._dispatch("parent", event, **email_kwargs)

    async def dispatch_principal_invite(self, session: CounsellingSession) -> DispatchResult:
        """Send (or log) the counselling invite to the principal"""
        try:
            event = self.build_principal_event(session)
            email_kwargs = {
                "to": self.settings.principal_email,
                "subject": principal_invite_subject(session),
                "text": principal_invite_template(session),
            }
        except Exception as e:
            return self._composition_failed("principal", e)
        return await self._dispatch("principal", event, **email_kwargs)

    def _composition_failed(self, role: str, error: Exception) -> DispatchResult:
        logger.error(f"❌ Could not compose {role} invite: {error}")
        return DispatchResult(
            success=False,
            message=f"Failed to send email: {error}",
            status=DispatchStatus.INVALID_SESSION,
        )

    async def _dispatch(self, role: str, event: CalendarEvent, to: str, subject: str, text: str) -> DispatchResult:
        label = ROLE_LABELS[role]
        policy = self.settings.encode_failure_policy

        ics_content, encode_failed = self._encode(event)
        if encode_failed and policy == "fail_dispatch":
            return DispatchResult(
                success=False,
                message="Failed to send email: calendar invite could not be generated",
                status=DispatchStatus.ENCODING_FAILED,
            )

        attachments = []
        if not (encode_failed and policy == "omit_attachment"):
            attachments.append(
                EmailAttachment(
                    filename=ICS_ATTACHMENT_FILENAME, content=encode_attachment(ics_content)
                )
            )
        elif encode_failed:
            logger.warning(f"⚠️ Sending {role} invite for {event.uid} without calendar attachment")

        email = OutgoingEmail(
            from_address=self.settings.sender,
            to=[to],
            subject=subject,
            text=text,
            attachments=attachments,
        )

        try:
            receipt = await self.backend.send(email)
        except Exception as e:
            logger.error(f"❌ Email sending error for {role} invite to {to}: {e}")
            return DispatchResult(
                success=False,
                message=f"Failed to send email: {e}",
                status=DispatchStatus.TRANSPORT_FAULT,
                retryable=True,
            )

        if receipt.error:
            logger.error(f"❌ {label} invite rejected by email provider: {receipt.error.message}")
            return DispatchResult(
                success=False,
                message=f"Failed to send email: {receipt.error.message}",
                status=DispatchStatus.PROVIDER_REJECTED,
                retryable=receipt.error.retryable,
            )

        if not self.backend.delivers:
            return DispatchResult(
                success=True,
                message=f"{label} invite logged (dev mode)",
                status=DispatchStatus.LOGGED,
                email_id=receipt.email_id,
            )

        logger.info(f"✅ {label} invite sent successfully via {self.backend.name}: {receipt.email_id}")
        return DispatchResult(
            success=True,
            message=f"{label} invite sent",
            status=DispatchStatus.SENT,
            email_id=receipt.email_id,
        )


# ============================================
# Process-wide dispatcher
# ============================================

_dispatcher: Optional[InviteDispatcher] = None


def get_invite_dispatcher() -> InviteDispatcher:
    """Get the invite dispatcher singleton, built from the environment on first use"""
    global _dispatcher
    if _dispatcher is None:
        settings = load_invite_settings()
        _dispatcher = InviteDispatcher(settings=settings, backend=get_email_backend(settings))
    return _dispatcher


def _describe_error(err: dict) -> str:
    field = ".".join(str(part) for part in err.get("loc", ()))
    return f"{field}: {err['msg']}" if field else err["msg"]


def _invalid_session(role: str, error: ValidationError) -> DispatchResult:
    details = "; ".join(_describe_error(err) for err in error.errors())
    logger.warning(f"⚠️ Invalid counselling session for {role} invite: {details}")
    return DispatchResult(
        success=False,
        message=f"Invalid counselling session: {details}",
        status=DispatchStatus.INVALID_SESSION,
    )


async def send_parent_calendar_invite(**session_fields) -> DispatchResult:
    """Validate raw session fields and send the parent invite"""
    try:
        session = CounsellingSession(**session_fields)
    except ValidationError as e:
        return _invalid_session("parent", e)
    return await get_invite_dispatcher().dispatch_parent_invite(session)


async def send_principal_calendar_invite(**session_fields) -> DispatchResult:
    """Validate raw session fields and send the principal invite"""
    try:
        session = CounsellingSession(**session_fields)
    except ValidationError as e:
        return _invalid_session("principal", e)
    return await get_invite_dispatcher().dispatch_principal_invite(session)

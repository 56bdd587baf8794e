"""
Email Delivery Service using Resend (production) or the console (development)
The backend is chosen once at startup; callers only ever see EmailBackend.send
"""

import base64
import binascii
import logging
from datetime import datetime, timezone

import resend
from resend.exceptions import ResendError

from .config import InviteSettings
from .schemas import DeliveryReceipt, OutgoingEmail, ProviderError

logger = logging.getLogger(__name__)


def encode_attachment(text: str) -> str:
    """Base64-encode text content for an email attachment"""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_attachment(content: str) -> str:
    try:
        return base64.b64decode(content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return "<undecodable attachment>"


def is_retryable_code(code) -> bool:
    """Rate limiting and server-side failures may succeed on a later attempt"""
    code = str(code or "")
    return code == "429" or (len(code) == 3 and code.startswith("5"))


class EmailBackend:
    """Delivery backend interface"""

    name = "base"
    # False for backends that only log, so callers can tell "logged" from "sent"
    delivers = True

    async def send(self, email: OutgoingEmail) -> DeliveryReceipt:
        raise NotImplementedError


class ConsoleEmailBackend(EmailBackend):
    """Writes emails to the log instead of sending them"""

    name = "console"
    delivers = False

    async def send(self, email: OutgoingEmail) -> DeliveryReceipt:
        logger.info("========================================")
        logger.info("📧 EMAIL SERVICE (MOCK)")
        logger.info("----------------------------------------")
        logger.info(f"From: {email.from_address}")
        logger.info(f"To: {', '.join(email.to)}")
        logger.info(f"Subject: {email.subject}")
        logger.info(f"Body:\n{email.text}")
        for attachment in email.attachments:
            logger.info("----------------------------------------")
            logger.info(f"Attachment {attachment.filename}:\n{decode_attachment(attachment.content)}")
        logger.info("========================================")
        return DeliveryReceipt(email_id=f"console-{datetime.now(timezone.utc).timestamp()}")


class ResendEmailBackend(EmailBackend):
    """Sends emails through the Resend API"""

    name = "resend"

    def __init__(self, api_key: str):
        if not api_key:
            logger.warning("⚠️ RESEND_API_KEY missing - Resend will reject every send")
        resend.api_key = api_key

    async def send(self, email: OutgoingEmail) -> DeliveryReceipt:
        params = {
            "from": email.from_address,
            "to": email.to,
            "subject": email.subject,
            "text": email.text,
        }
        if email.attachments:
            params["attachments"] = [
                {"filename": attachment.filename, "content": attachment.content}
                for attachment in email.attachments
            ]

        logger.info(f"📧 Sending email via Resend to: {email.to}")
        try:
            response = resend.Emails.send(params)
        except ResendError as e:
            code = getattr(e, "code", None)
            message = getattr(e, "message", None) or str(e)
            logger.error(f"❌ Resend rejected email to {email.to}: {message}")
            return DeliveryReceipt(
                error=ProviderError(
                    message=message,
                    code=str(code) if code is not None else None,
                    retryable=is_retryable_code(code),
                )
            )

        email_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        return DeliveryReceipt(email_id=email_id)


def get_email_backend(settings: InviteSettings) -> EmailBackend:
    """Pick the delivery backend for this process"""
    if settings.is_production:
        logger.info("📧 Email backend: Resend")
        return ResendEmailBackend(api_key=settings.resend_api_key)
    logger.info(f"📧 Email backend: console ({settings.environment} mode)")
    return ConsoleEmailBackend()

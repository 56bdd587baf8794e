"""Shared fixtures for the counselling invite tests.

Backends are replaced with RecordingBackend so no test ever reaches Resend.
"""

from datetime import date
from typing import Optional

import pytest

from admissions.config import InviteSettings
from admissions.schemas import CounsellingSession, DeliveryReceipt, OutgoingEmail, ProviderError


class RecordingBackend:
    """Email backend double that records every email it is asked to send"""

    name = "recording"

    def __init__(
        self,
        email_id: str = "em_123",
        error: Optional[ProviderError] = None,
        raises: Optional[Exception] = None,
        delivers: bool = True,
    ):
        self.email_id = email_id
        self.error = error
        self.raises = raises
        self.delivers = delivers
        self.sent: list[OutgoingEmail] = []

    async def send(self, email: OutgoingEmail) -> DeliveryReceipt:
        self.sent.append(email)
        if self.raises:
            raise self.raises
        if self.error:
            return DeliveryReceipt(error=self.error)
        return DeliveryReceipt(email_id=self.email_id)


# ─────────────────────────────────────────────────────────────────────────────
# Session / settings fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def session_fields() -> dict:
    return {
        "parent_email": "asha@example.com",
        "parent_name": "Asha Rao",
        "student_name": "Kiran Rao",
        "token_id": "TKN-1001",
        "slot_date": date(2024, 3, 10),
        "slot_start_time": "10:00",
        "slot_end_time": "10:30",
        "location": "Room A",
    }


@pytest.fixture
def session(session_fields) -> CounsellingSession:
    return CounsellingSession(**session_fields)


@pytest.fixture
def dev_settings() -> InviteSettings:
    return InviteSettings(environment="development")


@pytest.fixture
def prod_settings() -> InviteSettings:
    return InviteSettings(environment="production", resend_api_key="re_test_key")


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()

import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# School identity used as the sender and inside every invite
SCHOOL_NAME = os.getenv("SCHOOL_NAME", "ABC International School")
SCHOOL_EMAIL = os.getenv("SCHOOL_EMAIL", "info@school.com")
# Wall-clock slot times are interpreted in this IANA zone
SCHOOL_TIMEZONE = os.getenv("SCHOOL_TIMEZONE", "Asia/Kolkata")

# Principal receives a copy of every booked counselling slot
PRINCIPAL_EMAIL = os.getenv("PRINCIPAL_EMAIL", "principal@school.com")
PRINCIPAL_NAME = os.getenv("PRINCIPAL_NAME", "Principal")

# "production" sends through Resend, anything else logs emails to the console
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Resend Email Configuration
RESEND_API_KEY = os.getenv("RESEND_API_KEY")

# What to do when the .ics attachment cannot be generated:
# send_empty (attach a zero-length file), omit_attachment or fail_dispatch
ICS_ENCODE_FAILURE_POLICY = os.getenv("ICS_ENCODE_FAILURE_POLICY", "send_empty")

ENCODE_FAILURE_POLICIES = ("send_empty", "omit_attachment", "fail_dispatch")


class InviteSettings(BaseModel):
    """Immutable snapshot of everything the invite dispatcher needs from the environment"""

    model_config = ConfigDict(frozen=True)

    school_name: str = "ABC International School"
    school_email: str = "info@school.com"
    school_timezone: str = "Asia/Kolkata"
    principal_email: str = "principal@school.com"
    principal_name: str = "Principal"
    environment: str = "development"
    resend_api_key: Optional[str] = None
    encode_failure_policy: str = "send_empty"

    @field_validator("school_name", "school_email", "principal_email", "principal_name", "school_timezone")
    @classmethod
    def fallback_when_blank(cls, value: str, info) -> str:
        # Blank env values fall back to the field default
        if value is None or not value.strip():
            return cls.model_fields[info.field_name].default
        return value.strip()

    @field_validator("school_timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown school timezone: {value}") from e
        return value

    @field_validator("encode_failure_policy")
    @classmethod
    def check_policy(cls, value: str) -> str:
        value = (value or "send_empty").strip().lower()
        if value not in ENCODE_FAILURE_POLICIES:
            raise ValueError(
                f"encode_failure_policy must be one of {', '.join(ENCODE_FAILURE_POLICIES)}"
            )
        return value

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def sender(self) -> str:
        return f"{self.school_name} <{self.school_email}>"


def load_invite_settings() -> InviteSettings:
    """Build InviteSettings from the module-level configuration"""
    return InviteSettings(
        school_name=SCHOOL_NAME,
        school_email=SCHOOL_EMAIL,
        school_timezone=SCHOOL_TIMEZONE,
        principal_email=PRINCIPAL_EMAIL,
        principal_name=PRINCIPAL_NAME,
        environment=ENVIRONMENT,
        resend_api_key=RESEND_API_KEY,
        encode_failure_policy=ICS_ENCODE_FAILURE_POLICY,
    )

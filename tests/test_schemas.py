"""Tests for session validation, settings and the plain-text templates."""

from datetime import date

import pytest
from pydantic import ValidationError

from admissions.config import InviteSettings
from admissions.email_templates import (
    format_long_date,
    format_short_date,
    parent_invite_template,
    principal_invite_template,
)
from admissions.schemas import CounsellingSession


class TestCounsellingSession:
    def test_email_is_normalised(self, session_fields):
        session_fields["parent_email"] = "  Asha@Example.COM "
        assert CounsellingSession(**session_fields).parent_email == "asha@example.com"

    @pytest.mark.parametrize("start,end", [("10:30", "10:00"), ("10:00", "10:00")])
    def test_rejects_inverted_or_empty_slot(self, session_fields, start, end):
        session_fields.update(slot_start_time=start, slot_end_time=end)
        with pytest.raises(ValidationError, match="must be before"):
            CounsellingSession(**session_fields)

    def test_rejects_bad_time_format(self, session_fields):
        session_fields["slot_start_time"] = "10am"
        with pytest.raises(ValidationError, match="HH:MM"):
            CounsellingSession(**session_fields)

    def test_rejects_blank_token(self, session_fields):
        session_fields["token_id"] = "   "
        with pytest.raises(ValidationError, match="token_id is required"):
            CounsellingSession(**session_fields)

    def test_rejects_invalid_email(self, session_fields):
        session_fields["parent_email"] = "not-an-email"
        with pytest.raises(ValidationError, match="Invalid email format"):
            CounsellingSession(**session_fields)


class TestInviteSettings:
    def test_defaults(self):
        settings = InviteSettings()
        assert settings.sender == "ABC International School <info@school.com>"
        assert settings.principal_email == "principal@school.com"
        assert settings.is_production is False

    def test_blank_values_fall_back_to_defaults(self):
        settings = InviteSettings(school_name="  ", principal_email="")
        assert settings.school_name == "ABC International School"
        assert settings.principal_email == "principal@school.com"

    def test_production_flag_is_case_insensitive(self):
        assert InviteSettings(environment="Production").is_production is True

    def test_settings_are_frozen(self):
        settings = InviteSettings()
        with pytest.raises(ValidationError):
            settings.school_name = "Other School"

    def test_rejects_unknown_policy(self):
        with pytest.raises(ValidationError, match="encode_failure_policy"):
            InviteSettings(encode_failure_policy="retry")

    def test_rejects_unknown_timezone(self):
        with pytest.raises(ValidationError, match="Unknown school timezone"):
            InviteSettings(school_timezone="Mars/Olympus_Mons")


class TestTemplates:
    def test_date_formats(self):
        assert format_long_date(date(2024, 3, 10)) == "Sunday, 10 March 2024"
        assert format_short_date(date(2024, 3, 10)) == "10/3/2024"

    def test_parent_body(self, session):
        body = parent_invite_template(session, "ABC International School")

        assert body.startswith("Dear Asha Rao,")
        assert "Kiran Rao's admission has been scheduled" in body
        assert "- Date: Sunday, 10 March 2024" in body
        assert "- Time: 10:00 - 10:30" in body
        assert body.endswith("ABC International School Admissions Team")

    def test_principal_body(self, session):
        body = principal_invite_template(session)

        assert body.splitlines() == [
            "Counselling Session Scheduled",
            "",
            "Student: Kiran Rao",
            "Parent: Asha Rao",
            "Token ID: TKN-1001",
            "Date: 10/3/2024",
            "Time: 10:00 - 10:30",
            "Location: Room A",
        ]

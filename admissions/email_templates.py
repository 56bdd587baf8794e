"""
Counselling Invite Email Templates
Plain-text bodies, subjects and calendar event wording for parent and principal invites
"""

from datetime import date

from .schemas import CounsellingSession

ICS_ATTACHMENT_FILENAME = "counselling-session.ics"


def format_long_date(value: date) -> str:
    """Sunday, 10 March 2024 (independent of the process locale)"""
    weekday = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")[
        value.weekday()
    ]
    month = (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    )[value.month - 1]
    return f"{weekday}, {value.day} {month} {value.year}"


def format_short_date(value: date) -> str:
    """10/3/2024"""
    return f"{value.day}/{value.month}/{value.year}"


def format_time_range(session: CounsellingSession) -> str:
    return f"{session.slot_start_time} - {session.slot_end_time}"


# ============================================
# Parent invite
# ============================================


def parent_invite_subject(session: CounsellingSession) -> str:
    return f"Counselling Slot Confirmation - {session.token_id}"


def parent_event_title(school_name: str) -> str:
    return f"Counselling Session - {school_name}"


def parent_event_description(session: CounsellingSession) -> str:
    return (
        f"Student: {session.student_name}\n"
        f"Token ID: {session.token_id}\n"
        "\n"
        "Please bring all required documents."
    )


def parent_invite_template(session: CounsellingSession, school_name: str) -> str:
    """Letter-style body sent to the parent"""
    lines = [
        f"Dear {session.parent_name},",
        "",
        f"Your counselling session for {session.student_name}'s admission has been scheduled.",
        "",
        "Details:",
        f"- Token ID: {session.token_id}",
        f"- Date: {format_long_date(session.slot_date)}",
        f"- Time: {format_time_range(session)}",
        f"- Location: {session.location}",
        "",
        "Please bring all required documents for verification.",
        "",
        "Best regards,",
        f"{school_name} Admissions Team",
    ]
    return "\n".join(lines)


# ============================================
# Principal invite
# ============================================


def principal_invite_subject(session: CounsellingSession) -> str:
    return f"Counselling Session - {session.slot_start_time} - {session.student_name}"


def principal_event_title(session: CounsellingSession) -> str:
    return f"Counselling: {session.student_name} - {session.token_id}"


def principal_event_description(session: CounsellingSession) -> str:
    return (
        f"Student: {session.student_name}\n"
        f"Parent: {session.parent_name}\n"
        f"Token ID: {session.token_id}"
    )


def principal_invite_template(session: CounsellingSession) -> str:
    """Compact summary sent to the principal"""
    lines = [
        "Counselling Session Scheduled",
        "",
        f"Student: {session.student_name}",
        f"Parent: {session.parent_name}",
        f"Token ID: {session.token_id}",
        f"Date: {format_short_date(session.slot_date)}",
        f"Time: {format_time_range(session)}",
        f"Location: {session.location}",
    ]
    return "\n".join(lines)

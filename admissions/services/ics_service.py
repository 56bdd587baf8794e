"""
Calendar Invite (.ics) Service
Builds counselling slot times and encodes calendar events as iCalendar documents
"""

import logging
from datetime import datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event, vCalAddress, vText

from ..schemas import CalendarAttendee, CalendarEvent, CounsellingSession
from ..shared.validators import validate_slot_time

logger = logging.getLogger(__name__)

PRODID = "-//Admissions//Counselling Invites//EN"


def parse_slot_time(value: str) -> tuple[int, int]:
    """Split an "HH:MM" slot time into (hour, minute)"""
    hour, minute = validate_slot_time(value).split(":")
    return int(hour), int(minute)


def build_slot_window(session: CounsellingSession, tz_name: str) -> tuple[datetime, datetime]:
    """
    Combine the slot date with its start/end times in the school timezone.
    Seconds and microseconds are always zero.
    """
    tz = ZoneInfo(tz_name)
    start_hour, start_min = parse_slot_time(session.slot_start_time)
    end_hour, end_min = parse_slot_time(session.slot_end_time)

    start = datetime.combine(session.slot_date, time(start_hour, start_min), tzinfo=tz)
    end = datetime.combine(session.slot_date, time(end_hour, end_min), tzinfo=tz)
    return start, end


def _calendar_address(person: CalendarAttendee) -> vCalAddress:
    address = vCalAddress(f"mailto:{person.email}")
    if person.name:
        address.params["cn"] = vText(person.name)
    return address


def create_ics_event(event: CalendarEvent) -> tuple[Optional[str], Optional[str]]:
    """
    Encode a calendar event as an iCalendar document

    Returns:
        Tuple of (ics_text: Optional[str], error_message: Optional[str])
    """
    if event.end <= event.start:
        return None, f"Event end {event.end.isoformat()} must be after start {event.start.isoformat()}"

    try:
        cal = Calendar()
        cal.add("prodid", PRODID)
        cal.add("version", "2.0")
        cal.add("calscale", "GREGORIAN")
        cal.add("method", "REQUEST")

        vevent = Event()
        vevent.add("uid", event.uid)
        vevent.add("dtstamp", datetime.now(timezone.utc))
        # UTC times need no VTIMEZONE block
        vevent.add("dtstart", event.start.astimezone(timezone.utc))
        vevent.add("dtend", event.end.astimezone(timezone.utc))
        vevent.add("summary", event.title)
        vevent.add("description", event.description)
        vevent.add("location", event.location)

        if event.organizer:
            vevent.add("organizer", _calendar_address(event.organizer), encode=0)

        for attendee in event.attendees:
            address = _calendar_address(attendee)
            address.params["partstat"] = vText(attendee.partstat)
            address.params["rsvp"] = vText("TRUE")
            vevent.add("attendee", address, encode=0)

        cal.add_component(vevent)
        return cal.to_ical().decode("utf-8"), None
    except Exception as e:
        return None, str(e)


def generate_ics_content(event: CalendarEvent) -> str:
    """Encode an event, falling back to an empty string when encoding fails"""
    value, error = create_ics_event(event)
    if error:
        logger.error(f"❌ ICS generation error for {event.uid}: {error}")
        return ""
    return value or ""

"""
Counselling Invite Runner
Send (or, outside production, log) one counselling invite from the command line:

    python run_invite_dispatch.py --role parent --parent-email asha@example.com \
        --parent-name "Asha Rao" --student-name "Kiran Rao" --token-id TKN-1001 \
        --date 2024-03-10 --start 10:00 --end 10:30 --location "Room A"
"""

import argparse
import asyncio
import logging
import sys
from datetime import date

from admissions.services.invite_service import (
    send_parent_calendar_invite,
    send_principal_calendar_invite,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send a counselling session calendar invite")
    parser.add_argument("--role", choices=["parent", "principal"], default="parent")
    parser.add_argument("--parent-email", required=True)
    parser.add_argument("--parent-name", required=True)
    parser.add_argument("--student-name", required=True)
    parser.add_argument("--token-id", required=True)
    parser.add_argument("--date", required=True, type=date.fromisoformat, help="YYYY-MM-DD")
    parser.add_argument("--start", required=True, help="HH:MM (24h)")
    parser.add_argument("--end", required=True, help="HH:MM (24h)")
    parser.add_argument("--location", required=True)
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    session_fields = {
        "parent_email": args.parent_email,
        "parent_name": args.parent_name,
        "student_name": args.student_name,
        "token_id": args.token_id,
        "slot_date": args.date,
        "slot_start_time": args.start,
        "slot_end_time": args.end,
        "location": args.location,
    }

    if args.role == "parent":
        result = await send_parent_calendar_invite(**session_fields)
    else:
        result = await send_principal_calendar_invite(**session_fields)

    if result.success:
        logger.info(f"✅ {result.message}")
        return 0
    logger.error(f"❌ {result.message} (status={result.status.value}, retryable={result.retryable})")
    return 1


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("👋 Invite dispatch cancelled by user")
        sys.exit(130)

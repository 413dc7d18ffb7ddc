import os
from datetime import date, datetime

import pytz
from dateutil.relativedelta import relativedelta
from dotenv import load_dotenv

load_dotenv()

APP_TIMEZONE = pytz.timezone(os.getenv("APP_TIMEZONE", "Africa/Nairobi"))

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def now() -> datetime:
    """Timezone-aware current time in the configured application timezone."""
    return datetime.now(APP_TIMEZONE)


def today() -> date:
    return now().date()


def month_label(value: date) -> str:
    return MONTH_NAMES[value.month - 1]


def year_label(value: date) -> str:
    return f"{value.year:04d}"


def rollover_target_date(reference: date = None) -> date:
    """
    Due date for carried-over payments: one calendar month after the reference
    day (today by default). relativedelta clamps to the last day of a shorter
    month, so the result is always inside the next calendar month.
    """
    reference = reference or today()
    return reference + relativedelta(months=1)


def normalize_month(value: str) -> str:
    """
    Accepts "March", "march", "Mar", "3" or "03" and returns "March".
    Raises ValueError for anything else.
    """
    cleaned = (value or "").strip()
    if cleaned.isdigit():
        number = int(cleaned)
        if 1 <= number <= 12:
            return MONTH_NAMES[number - 1]
        raise ValueError(f"Invalid month number: {value}")

    lowered = cleaned.lower()
    for name in MONTH_NAMES:
        if lowered == name.lower() or (len(lowered) == 3 and name.lower().startswith(lowered)):
            return name
    raise ValueError(f"Invalid month: {value}")


def normalize_year(value: str) -> str:
    cleaned = (value or "").strip()
    if len(cleaned) != 4 or not cleaned.isdigit():
        raise ValueError(f"Invalid year: {value}")
    return cleaned

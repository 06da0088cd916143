from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()


def years_before(day: date, years: int) -> date:
    """Return the same calendar day ``years`` years earlier.

    29 February maps to 28 February when the target year is not a leap year.
    Years outside the representable range clamp to date.min / date.max.
    """
    target = day.year - years
    if target < date.min.year:
        return date.min
    if target > date.max.year:
        return date.max
    try:
        return day.replace(year=target)
    except ValueError:
        return day.replace(year=target, day=28)


def age_on(birthday: date, day: date) -> int:
    """Whole years completed between ``birthday`` and ``day``."""
    age = day.year - birthday.year
    if (day.month, day.day) < (birthday.month, birthday.day):
        age -= 1
    return age


def parse_iso_date(value):
    """Accept a date, a datetime or a YYYY-MM-DD string; anything empty is None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])

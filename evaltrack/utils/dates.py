# evaltrack/utils/dates.py
from datetime import datetime, timezone
from zoneinfo import ZoneInfo
from evaltrack.core.config import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Mongo devuelve datetimes naive (UTC); los normaliza a aware."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_date(value) -> datetime | None:
    """Acepta datetime o string ISO (dateNeeded llega como string desde el front)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    try:
        return as_utc(datetime.fromisoformat(str(value).replace("Z", "+00:00")))
    except ValueError:
        return None


def format_display(value: datetime, tz: str | None = None) -> str:
    """Formato MM/DD/YYYY, h:mm:ss AM en la zona de visualización."""
    local = as_utc(value).astimezone(ZoneInfo(tz or settings.display_timezone))
    hour = local.hour % 12 or 12
    return f"{local:%m/%d/%Y}, {hour}:{local:%M:%S} {local:%p}"

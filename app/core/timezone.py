# app/core/timezone.py
from datetime import datetime
from zoneinfo import ZoneInfo

from app.config.settings import settings


def get_reference_tz() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def now_local() -> datetime:
    """Hora actual en la zona de referencia, sin tzinfo (así se guarda en BD)"""
    return datetime.now(get_reference_tz()).replace(tzinfo=None)

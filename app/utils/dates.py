from datetime import date, datetime
from typing import Any, Optional

import pytz


def as_utc(value: Any) -> Optional[datetime]:
    """
    Normaliza timestamps vindos dos dois bancos para datetime com fuso UTC.
    Aceita datetime (naive é tratado como UTC), Timestamp do Firestore e
    strings ISO 8601. Qualquer outra coisa vira None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    elif not isinstance(value, datetime) and hasattr(value, "to_datetime"):
        value = value.to_datetime()
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def utc_date(value: Any) -> Optional[date]:
    moment = as_utc(value)
    return moment.date() if moment else None

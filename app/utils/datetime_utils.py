"""
Datetime Utilities für konsistentes Zeit-Handling

- Timestamps (created_at, updated_at, completion_date): UTC
- Deadlines: als naive UTC gespeichert (aware Werte werden umgerechnet)

SQLite speichert DateTime ohne Zeitzone, gelesene Werte sind daher naive UTC.
"""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """
    Gibt die aktuelle UTC-Zeit zurück (timezone-aware).

    Ersetzt datetime.utcnow() (deprecated in Python 3.12)
    mit datetime.now(timezone.utc).
    """
    return datetime.now(timezone.utc)


def to_naive_utc(dt: datetime) -> datetime:
    """
    Rechnet ein timezone-aware datetime in naive UTC um.

    Naive Werte gelten bereits als UTC und bleiben unverändert. So bleibt
    die Sortierung nach Frist korrekt, auch wenn die Spalte keine Zeitzone kennt.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


# Für SQLAlchemy default Funktionen
def get_utc_timestamp() -> datetime:
    """
    Wrapper für utcnow() zur Verwendung in SQLAlchemy Column defaults.

    Verwendung:
        created_at = Column(DateTime, default=get_utc_timestamp)
    """
    return utcnow()

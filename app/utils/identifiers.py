"""Kanonische Benutzer- und Task-IDs

Benutzer-IDs kommen von außen (Session-Schicht) und können als int, str
oder beliebiges Objekt mit sinnvollem str() vorliegen. Verglichen wird
immer über die String-Form.
"""
from typing import Any, Iterable, Optional


def canonical_id(value: Any) -> str:
    """
    Liefert die kanonische String-Form einer Benutzer-ID.

    Raises:
        ValueError: Wenn die ID fehlt oder leer ist
    """
    if value is None:
        raise ValueError("Benutzer-ID darf nicht leer sein")
    text = str(value).strip()
    if not text:
        raise ValueError("Benutzer-ID darf nicht leer sein")
    return text


def same_id(a: Any, b: Any) -> bool:
    """Vergleicht zwei IDs über ihre String-Form (None ist nie gleich)."""
    if a is None or b is None:
        return False
    return str(a).strip() == str(b).strip()


def contains_id(ids: Optional[Iterable[Any]], value: Any) -> bool:
    """Prüft, ob `value` (kanonisch verglichen) in `ids` enthalten ist."""
    return any(same_id(existing, value) for existing in ids or [])


def unique_ids(ids: Iterable[Any]) -> list[str]:
    """
    Kanonisiert eine ID-Liste und entfernt Duplikate.
    Die Reihenfolge des ersten Auftretens bleibt erhalten.
    """
    seen: dict[str, None] = {}
    for value in ids:
        seen.setdefault(canonical_id(value), None)
    return list(seen)


def parse_task_id(value: Any) -> Optional[int]:
    """
    Wandelt eine Task-ID (int oder numerischer String) in einen int um.

    Returns:
        Die ID oder None, wenn der Wert keine gültige Task-ID ist
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None

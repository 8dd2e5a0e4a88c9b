"""Fehlerarten der Task-Verwaltung

Die Fehler tragen eine Nachrichten-Vorlage plus Parameter statt eines fertig
formatierten Textes. So kann die Ausgabeschicht (siehe error_handler) rohe
IDs später durch lesbare Namen ersetzen.
"""
from typing import Any


class TaskError(Exception):
    """
    Basisklasse für alle Fehler der Task-Verwaltung.

    Args:
        template: Nachricht mit Platzhaltern {0}, {1}, ...
        *params: Werte für die Platzhalter (rohe IDs)
    """

    def __init__(self, template: str, *params: Any):
        self.template = template
        self.params = params
        super().__init__(self.format_with(*params))

    def format_with(self, *values: Any) -> str:
        """Setzt `values` in die Nachrichten-Vorlage ein."""
        return self.template.format(*values)


class NotFoundError(TaskError):
    """Die referenzierte Task existiert nicht."""


class NotAllowedError(TaskError):
    """Eine Beziehungs- oder Berechtigungsregel wurde verletzt."""


class TaskRequesterNotMatchError(NotAllowedError):
    """Der handelnde Benutzer ist nicht der Ersteller der Task."""

    def __init__(self, requester: Any, task_id: Any):
        self.requester = requester
        self.task_id = task_id
        super().__init__("{0} ist nicht der Ersteller von Task {1}!", requester, task_id)


class ConcurrentUpdateError(TaskError):
    """Die Task wurde zwischen Lesen und Schreiben von jemand anderem geändert."""

    def __init__(self, task_id: Any):
        self.task_id = task_id
        super().__init__(
            "Task {0} wurde gleichzeitig geändert. Bitte erneut versuchen.", task_id
        )

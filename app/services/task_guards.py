"""Guard-Prädikate für Tasks

Reine Funktionen über (Benutzer, Task-Snapshot). Sie lesen nichts aus der
Datenbank und ändern nichts, sondern liefern ein GuardResult. Der Router kann
sie direkt kombinieren, der TaskService nutzt sie als Vorbedingung.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from app.models import Task
from app.utils.errors import NotAllowedError, NotFoundError, TaskRequesterNotMatchError
from app.utils.identifiers import contains_id, same_id


class GuardStatus(str, Enum):
    OK = "ok"
    DENIED = "denied"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class GuardResult:
    """Ergebnis eines Guard-Prädikats"""
    status: GuardStatus
    reason: Optional[str] = None
    # Fehlerklasse für DENIED (Standard: NotAllowedError)
    error: Optional[type] = None

    @property
    def ok(self) -> bool:
        return self.status == GuardStatus.OK

    def raise_for_status(self, actor: Any, task_id: Any) -> None:
        """
        Wirft den passenden Fehler, falls das Prädikat nicht erfüllt ist.

        Raises:
            NotFoundError: Task existiert nicht
            NotAllowedError: Regel verletzt (ggf. TaskRequesterNotMatchError)
        """
        if self.status == GuardStatus.NOT_FOUND:
            raise NotFoundError("Task {0} existiert nicht!", task_id)
        if self.status == GuardStatus.DENIED:
            if self.error is TaskRequesterNotMatchError:
                raise TaskRequesterNotMatchError(actor, task_id)
            raise NotAllowedError(self.reason or "Nicht erlaubt.")


ALLOWED = GuardResult(GuardStatus.OK)
MISSING = GuardResult(GuardStatus.NOT_FOUND)


def is_requester(actor: Any, task: Optional[Task]) -> GuardResult:
    if task is None:
        return MISSING
    if not same_id(task.requester, actor):
        return GuardResult(
            GuardStatus.DENIED,
            "Person ist nicht der Ersteller.",
            TaskRequesterNotMatchError,
        )
    return ALLOWED


def is_not_requester(actor: Any, task: Optional[Task]) -> GuardResult:
    if task is None:
        return MISSING
    if same_id(task.requester, actor):
        return GuardResult(GuardStatus.DENIED, "Person ist der Ersteller.")
    return ALLOWED


def is_assister(actor: Any, task: Optional[Task]) -> GuardResult:
    if task is None:
        return MISSING
    if not contains_id(task.assisters, actor):
        return GuardResult(GuardStatus.DENIED, "Person ist kein Helfer.")
    return ALLOWED


def is_not_assister(actor: Any, task: Optional[Task]) -> GuardResult:
    if task is None:
        return MISSING
    if contains_id(task.assisters, actor):
        return GuardResult(GuardStatus.DENIED, "Person ist bereits Helfer.")
    return ALLOWED

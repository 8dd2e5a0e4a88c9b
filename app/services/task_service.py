"""Task Service - Business-Logik für Hilfegesuche"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.database import transaction
from app.models import Task
from app.services import task_guards
from app.utils.datetime_utils import to_naive_utc, utcnow
from app.utils.errors import ConcurrentUpdateError, NotAllowedError, NotFoundError
from app.utils.identifiers import canonical_id, contains_id, parse_task_id, same_id, unique_ids

logger = logging.getLogger(__name__)


class TaskService:
    """
    Service für Task-Business-Logik (Task-Verwaltung).

    Alle Methoden, die eine bestimmte Task betreffen, lesen sie zuerst neu
    und werfen NotFoundError, falls sie nicht existiert. Listen wie
    `assisters` und `viewed` werden gelesen, im Speicher geändert und als
    Ganzes zurückgeschrieben. Das Version-Feld der Task sorgt dafür, dass
    ein paralleles Update nicht still überschrieben wird.
    """

    # Felder, die über update() nie geändert werden dürfen
    PROHIBITED_UPDATES = frozenset({"requester"})

    # Felder, die update() überschreiben darf
    UPDATABLE_FIELDS = frozenset({
        "title",
        "description",
        "deadline",
        "files",
        "assisters",
        "viewed",
        "completed",
        "completion_date",
        "completer",
    })

    # Pflichtfelder, die nicht auf None gesetzt werden dürfen
    NON_NULLABLE_FIELDS = frozenset({"title", "description", "deadline", "completed"})

    # JSON-Spalten lassen sich nicht per Gleichheit filtern
    UNFILTERABLE_FIELDS = frozenset({"files", "assisters", "viewed"})

    # ---- interne Helfer ----

    @staticmethod
    def _read(db: Session, task_id: Any) -> Optional[Task]:
        parsed = parse_task_id(task_id)
        if parsed is None:
            return None
        return db.query(Task).filter(Task.id == parsed).first()

    @staticmethod
    def _write(db: Session, task: Task, task_id: Any, values: Dict[str, Any]) -> None:
        """Schreibt `values` in genau einem UPDATE (mit Versionsprüfung)."""
        try:
            with transaction(db):
                for field, value in values.items():
                    setattr(task, field, value)
        except StaleDataError as e:
            logger.warning(f"Konkurrierende Änderung an Task {task_id} erkannt")
            raise ConcurrentUpdateError(task_id) from e

    @staticmethod
    def _sanitize_update(update: Dict[str, Any]) -> None:
        """
        Prüft die Feldnamen eines Updates.

        Raises:
            NotAllowedError: Wenn ein gesperrtes Feld (requester) geändert werden soll
            ValueError: Wenn ein unbekanntes oder internes Feld enthalten ist
                oder ein Pflichtfeld auf None gesetzt wird
        """
        for key in update:
            if key in TaskService.PROHIBITED_UPDATES:
                raise NotAllowedError(f"Feld '{key}' darf nicht geändert werden!")
            if key not in TaskService.UPDATABLE_FIELDS:
                raise ValueError(f"Unbekanntes Feld '{key}'")
            if key in TaskService.NON_NULLABLE_FIELDS and update[key] is None:
                raise ValueError(f"Feld '{key}' darf nicht leer sein")

    # ---- Anlegen, Lesen, Ändern, Löschen ----

    @staticmethod
    def create(
        db: Session,
        requester: Any,
        title: str,
        description: str,
        deadline: datetime,
        files: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Legt eine neue Task an.

        Args:
            db: Datenbank-Session
            requester: ID des Erstellers
            title: Titel
            description: Beschreibung
            deadline: Frist (nur für die Sortierung relevant)
            files: Optionale Liste von Datei-Referenzen

        Returns:
            Dict mit Nachricht, neuer ID und der frisch gelesenen Task
        """
        task = Task(
            requester=canonical_id(requester),
            title=title,
            description=description,
            deadline=to_naive_utc(deadline),
            files=list(files or []),
            assisters=[],
            viewed=[],
            completed=False,
            completion_date=None,
            completer=None,
        )
        with transaction(db):
            db.add(task)
        db.refresh(task)

        logger.info(f"Task {task.id} erstellt von {task.requester}")
        return {"msg": "Task erfolgreich erstellt!", "id": task.id, "task": task}

    @staticmethod
    def get_tasks(db: Session, query: Optional[Dict[str, Any]] = None) -> List[Task]:
        """
        Liefert alle Tasks, deren Felder den Werten in `query` entsprechen,
        aufsteigend nach Frist sortiert.

        Raises:
            ValueError: Wenn nach einem unbekannten oder JSON-Feld gefiltert wird
        """
        columns = Task.__table__.columns
        q = db.query(Task)
        for key, value in (query or {}).items():
            if key not in columns.keys() or key in TaskService.UNFILTERABLE_FIELDS:
                raise ValueError(f"Nach Feld '{key}' kann nicht gefiltert werden")
            if key in ("requester", "completer") and value is not None:
                value = canonical_id(value)
            if key == "deadline" and isinstance(value, datetime):
                value = to_naive_utc(value)
            q = q.filter(columns[key] == value)
        return q.order_by(Task.deadline.asc(), Task.id.asc()).all()

    @staticmethod
    def get_task_by_id(db: Session, task_id: Any) -> Task:
        """
        Raises:
            NotFoundError: Wenn die Task nicht existiert
        """
        task = TaskService._read(db, task_id)
        if task is None:
            raise NotFoundError("Task nicht gefunden!")
        return task

    @staticmethod
    def get_tasks_by_requester(db: Session, requester: Any) -> List[Task]:
        """Offene Tasks, die `requester` erstellt hat."""
        return TaskService.get_tasks(db, {"requester": requester, "completed": False})

    @staticmethod
    def get_tasks_by_assister(db: Session, assister: Any) -> List[Task]:
        """Offene Tasks, bei denen `assister` Hilfe angeboten hat."""
        open_tasks = TaskService.get_tasks(db, {"completed": False})
        return [task for task in open_tasks if contains_id(task.assisters, assister)]

    @staticmethod
    def update(db: Session, task_id: Any, update: Dict[str, Any]) -> Dict[str, str]:
        """
        Überschreibt die übergebenen Felder (kein Merge von Listen).

        `assisters` und `viewed` werden kanonisiert und dedupliziert.
        Eine abgeschlossene Task kann nicht wieder geöffnet werden.

        Raises:
            NotAllowedError: requester im Update, Ersteller in assisters,
                completed=False für eine abgeschlossene Task, oder
                completer/completion_date für eine offene Task
            ValueError: Unbekanntes Feld oder Pflichtfeld auf None
            NotFoundError: Task existiert nicht
        """
        TaskService._sanitize_update(update)

        task = TaskService._read(db, task_id)
        if task is None:
            raise NotFoundError("Task {0} existiert nicht!", task_id)

        values = dict(update)
        if "assisters" in values:
            assisters = unique_ids(values["assisters"] or [])
            if contains_id(assisters, task.requester):
                raise NotAllowedError("Der Ersteller kann nicht Helfer seiner eigenen Task sein.")
            values["assisters"] = assisters
        if "viewed" in values:
            values["viewed"] = unique_ids(values["viewed"] or [])
        if "files" in values:
            values["files"] = list(values["files"] or [])
        if "deadline" in values:
            values["deadline"] = to_naive_utc(values["deadline"])
        if values.get("completion_date") is not None:
            values["completion_date"] = to_naive_utc(values["completion_date"])
        if values.get("completer") is not None:
            values["completer"] = canonical_id(values["completer"])

        # completer und completion_date gibt es nur für abgeschlossene Tasks
        will_be_completed = task.completed or bool(values.get("completed"))
        for field in ("completer", "completion_date"):
            if values.get(field) is not None and not will_be_completed:
                raise NotAllowedError(f"Feld '{field}' ist nur für abgeschlossene Tasks erlaubt.")

        if "completed" in values:
            if task.completed and not values["completed"]:
                raise NotAllowedError("Eine abgeschlossene Task kann nicht wieder geöffnet werden.")
            if values["completed"] and not task.completed and values.get("completion_date") is None:
                values["completion_date"] = utcnow()

        TaskService._write(db, task, task_id, values)
        logger.debug(f"Task {task_id} aktualisiert: {sorted(values)}")
        return {"msg": "Task erfolgreich aktualisiert!"}

    @staticmethod
    def delete(db: Session, task_id: Any) -> Dict[str, str]:
        """
        Löscht die Task endgültig.

        Prüft keine Berechtigung (Aufgabe des Aufrufers, siehe is_requester).
        Eine nicht existierende ID ist kein Fehler.
        """
        parsed = parse_task_id(task_id)
        deleted = 0
        if parsed is not None:
            with transaction(db):
                deleted = db.query(Task).filter(Task.id == parsed).delete(synchronize_session="fetch")

        if deleted:
            logger.info(f"Task {parsed} gelöscht")
        else:
            logger.debug(f"Task {task_id} zum Löschen nicht gefunden")
        return {"msg": "Task erfolgreich gelöscht!"}

    # ---- Hilfe anbieten / zurückziehen ----

    @staticmethod
    def offer_help(db: Session, assister: Any, task_id: Any) -> Dict[str, str]:
        """
        Helfer bietet Hilfe für die Task an.

        Raises:
            NotFoundError: Task existiert nicht
            NotAllowedError: Helfer ist der Ersteller oder bereits Helfer
        """
        task = TaskService._read(db, task_id)
        task_guards.is_not_requester(assister, task).raise_for_status(assister, task_id)
        task_guards.is_not_assister(assister, task).raise_for_status(assister, task_id)

        assisters = list(task.assisters or [])
        assisters.append(canonical_id(assister))
        TaskService._write(db, task, task_id, {"assisters": assisters})

        logger.debug(f"{assister} bietet Hilfe für Task {task_id} an")
        return {"msg": "Hilfe erfolgreich angeboten."}

    @staticmethod
    def retract_help(db: Session, assister: Any, task_id: Any) -> Dict[str, str]:
        """
        Helfer zieht sein Hilfsangebot zurück.

        Die Reihenfolge der übrigen Helfer bleibt erhalten.

        Raises:
            NotFoundError: Task existiert nicht
            NotAllowedError: Helfer ist der Ersteller oder kein Helfer
        """
        task = TaskService._read(db, task_id)
        task_guards.is_not_requester(assister, task).raise_for_status(assister, task_id)
        task_guards.is_assister(assister, task).raise_for_status(assister, task_id)

        assisters = list(task.assisters or [])
        index = next(i for i, existing in enumerate(assisters) if same_id(existing, assister))
        del assisters[index]
        TaskService._write(db, task, task_id, {"assisters": assisters})

        logger.debug(f"{assister} zieht Hilfe für Task {task_id} zurück")
        return {"msg": "Hilfsangebot erfolgreich zurückgezogen."}

    # ---- Abschließen / Ansehen ----

    @staticmethod
    def complete(db: Session, task_id: Any, assister: Any = None) -> Dict[str, str]:
        """
        Markiert die Task als abgeschlossen.

        Es gibt absichtlich keine weitere Prüfung: erneutes Abschließen ist
        erlaubt und überschreibt completion_date und completer, und der
        completer muss kein Helfer sein. Wer abschließen darf, entscheidet
        der Aufrufer.

        Raises:
            NotFoundError: Task existiert nicht
        """
        task = TaskService._read(db, task_id)
        if task is None:
            raise NotFoundError("Task {0} existiert nicht!", task_id)

        completer = canonical_id(assister) if assister is not None else None
        TaskService._write(db, task, task_id, {
            "completed": True,
            "completion_date": utcnow(),
            "completer": completer,
        })

        logger.info(f"Task {task_id} abgeschlossen (completer={completer})")
        return {"msg": "Task erfolgreich abgeschlossen."}

    @staticmethod
    def view(db: Session, viewer: Any, task_id: Any) -> Dict[str, str]:
        """
        Trägt `viewer` in die Menge der Betrachter ein (idempotent).

        Raises:
            NotFoundError: Task existiert nicht
        """
        task = TaskService._read(db, task_id)
        if task is None:
            raise NotFoundError("Task {0} existiert nicht!", task_id)

        if not contains_id(task.viewed, viewer):
            viewed = list(task.viewed or [])
            viewed.append(canonical_id(viewer))
            TaskService._write(db, task, task_id, {"viewed": viewed})
            logger.debug(f"{viewer} hat Task {task_id} angesehen")

        return {"msg": "Task erfolgreich angesehen."}

    # ---- Guards (werfen bei Verletzung) ----

    @staticmethod
    def is_requester(db: Session, requester: Any, task_id: Any) -> None:
        """
        Raises:
            NotFoundError: Task existiert nicht
            TaskRequesterNotMatchError: `requester` ist nicht der Ersteller
        """
        task = TaskService._read(db, task_id)
        task_guards.is_requester(requester, task).raise_for_status(requester, task_id)

    @staticmethod
    def is_not_requester(db: Session, requester: Any, task_id: Any) -> None:
        task = TaskService._read(db, task_id)
        task_guards.is_not_requester(requester, task).raise_for_status(requester, task_id)

    @staticmethod
    def is_assister(db: Session, assister: Any, task_id: Any) -> None:
        task = TaskService._read(db, task_id)
        task_guards.is_assister(assister, task).raise_for_status(assister, task_id)

    @staticmethod
    def is_not_assister(db: Session, assister: Any, task_id: Any) -> None:
        task = TaskService._read(db, task_id)
        task_guards.is_not_assister(assister, task).raise_for_status(assister, task_id)

"""Tasks Router - Hilfegesuche

Dünne Schicht über dem TaskService: holt die Benutzer-ID aus der Session,
ruft die nötigen Guards auf und übergibt an die Service-Operation.
Fehler werden zentral in app.utils.error_handler übersetzt.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.schemas import (
    MessageResponse,
    TaskComplete,
    TaskCreate,
    TaskCreatedResponse,
    TaskResponse,
    TaskUpdate,
)
from app.services import task_guards
from app.services.task_service import TaskService
from app.utils.errors import NotAllowedError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/", response_model=List[TaskResponse])
async def list_tasks(
    requester: Optional[str] = None,
    completed: Optional[bool] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """Liste aller Tasks (optional gefiltert), nach Frist sortiert"""
    query = {}
    if requester is not None:
        query["requester"] = requester
    if completed is not None:
        query["completed"] = completed
    return TaskService.get_tasks(db, query)


@router.get("/mine", response_model=List[TaskResponse])
async def list_my_tasks(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    """Offene Tasks des angemeldeten Benutzers"""
    return TaskService.get_tasks_by_requester(db, user_id)


@router.get("/offers", response_model=List[TaskResponse])
async def list_my_offers(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    """Offene Tasks, bei denen der Benutzer Hilfe angeboten hat"""
    return TaskService.get_tasks_by_assister(db, user_id)


@router.post("/", response_model=TaskCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """Neue Task anlegen (Ersteller = angemeldeter Benutzer)"""
    result = TaskService.create(
        db,
        requester=user_id,
        title=payload.title,
        description=payload.description,
        deadline=payload.deadline,
        files=payload.files,
    )
    return {
        "msg": result["msg"],
        "id": result["id"],
        "task": TaskResponse.model_validate(result["task"]),
    }


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    """Einzelne Task"""
    return TaskService.get_task_by_id(db, task_id)


@router.patch("/{task_id}", response_model=MessageResponse)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """Task ändern (nur Ersteller)"""
    TaskService.is_requester(db, user_id, task_id)
    return TaskService.update(db, task_id, payload.to_update())


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(task_id: int, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    """Task löschen (nur Ersteller)"""
    TaskService.is_requester(db, user_id, task_id)
    return TaskService.delete(db, task_id)


@router.post("/{task_id}/offer", response_model=MessageResponse)
async def offer_help(task_id: int, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    """Hilfe anbieten"""
    return TaskService.offer_help(db, user_id, task_id)


@router.delete("/{task_id}/offer", response_model=MessageResponse)
async def retract_help(task_id: int, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    """Hilfsangebot zurückziehen"""
    return TaskService.retract_help(db, user_id, task_id)


@router.post("/{task_id}/view", response_model=MessageResponse)
async def view_task(task_id: int, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    """Task als angesehen markieren"""
    return TaskService.view(db, user_id, task_id)


@router.post("/{task_id}/complete", response_model=MessageResponse)
async def complete_task(
    task_id: int,
    payload: Optional[TaskComplete] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Task abschließen.

    - Ersteller: completer aus dem Body (oder leer)
    - Helfer: completer = der Helfer selbst
    - alle anderen: NotAllowedError
    """
    task = TaskService.get_task_by_id(db, task_id)

    if task_guards.is_requester(user_id, task).ok:
        completer = payload.completer if payload else None
    elif task_guards.is_assister(user_id, task).ok:
        completer = user_id
    else:
        raise NotAllowedError("Nur Ersteller oder Helfer dürfen die Task abschließen.")

    return TaskService.complete(db, task_id, completer)

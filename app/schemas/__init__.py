"""Pydantic Schemas für Validierung"""
from app.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskComplete,
    TaskResponse,
    MessageResponse,
    TaskCreatedResponse,
)

__all__ = [
    "TaskCreate",
    "TaskUpdate",
    "TaskComplete",
    "TaskResponse",
    "MessageResponse",
    "TaskCreatedResponse",
]

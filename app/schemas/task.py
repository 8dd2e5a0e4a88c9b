"""Pydantic Schemas für Task"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime


class TaskCreate(BaseModel):
    """Schema für das Erstellen einer Task (Ersteller kommt aus der Session)"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    deadline: datetime
    files: List[str] = Field(default_factory=list)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validiert den Titel"""
        if not v or not v.strip():
            raise ValueError("Titel darf nicht leer sein")
        return v.strip()


class TaskUpdate(BaseModel):
    """
    Schema für das Aktualisieren einer Task.

    `requester` ist absichtlich enthalten: der Service lehnt das Feld mit
    NotAllowedError ab, statt es hier still zu verwerfen.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    files: Optional[List[str]] = None
    assisters: Optional[List[str]] = None
    viewed: Optional[List[str]] = None
    completed: Optional[bool] = None
    completer: Optional[str] = None
    requester: Optional[str] = None

    def to_update(self) -> dict:
        """Nur die tatsächlich gesetzten Felder"""
        return self.model_dump(exclude_unset=True)


class TaskComplete(BaseModel):
    """Schema für das Abschließen (completer nur für den Ersteller relevant)"""
    completer: Optional[str] = None


class TaskResponse(BaseModel):
    """Schema für die Antwort (rohe Benutzer-IDs)"""
    id: int
    requester: str
    title: str
    description: str
    deadline: datetime
    files: List[str]
    assisters: List[str]
    viewed: List[str]
    completed: bool
    completion_date: Optional[datetime]
    completer: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """Bestätigung einer Operation"""
    msg: str


class TaskCreatedResponse(MessageResponse):
    """Bestätigung für das Anlegen inkl. neuer Task"""
    id: int
    task: TaskResponse

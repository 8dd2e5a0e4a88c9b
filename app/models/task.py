"""Task (Hilfegesuch) Model"""
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, JSON

from app.database import Base
from app.utils.datetime_utils import get_utc_timestamp


class Task(Base):
    """
    Repräsentiert ein Hilfegesuch.

    Ein Ersteller (requester) stellt die Task ein, andere Benutzer bieten
    Hilfe an (assisters). Wer die Task angesehen hat, steht in `viewed`.
    Benutzer-IDs werden in kanonischer String-Form gespeichert.
    """
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)

    # Ersteller, nach dem Anlegen unveränderlich
    requester = Column(String(64), nullable=False, index=True)

    # Inhalt
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    deadline = Column(DateTime, nullable=False, index=True)  # Nur für die Sortierung
    files = Column(JSON, nullable=False, default=list)  # Datei-Referenzen

    # Geordnete Mengen von Benutzer-IDs (keine Duplikate)
    assisters = Column(JSON, nullable=False, default=list)
    viewed = Column(JSON, nullable=False, default=list)

    # Status
    completed = Column(Boolean, default=False, nullable=False, index=True)
    completion_date = Column(DateTime, nullable=True)
    completer = Column(String(64), nullable=True)

    # Optimistic Locking: jedes UPDATE prüft die gelesene Version
    version = Column(Integer, nullable=False, default=1)

    # Timestamps
    created_at = Column(DateTime, default=get_utc_timestamp, nullable=False)
    updated_at = Column(DateTime, default=get_utc_timestamp, onupdate=get_utc_timestamp, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Task {self.id} '{self.title}' von {self.requester}>"

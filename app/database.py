"""Datenbank-Setup und Session-Management"""
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from app.config import settings

engine_kwargs = {
    "echo": settings.debug,
    "pool_pre_ping": True,  # Teste Connection vor Verwendung
}

# SQLite-spezifische Konfiguration
if "sqlite" in settings.database_url:
    engine_kwargs["connect_args"] = {
        "check_same_thread": False,  # Erlaube Thread-Sharing (notwendig für FastAPI)
        "timeout": 30,  # Warte bis zu 30 Sekunden auf DB-Lock
    }

# PostgreSQL-spezifische Konfiguration
else:
    engine_kwargs["pool_size"] = 20
    engine_kwargs["max_overflow"] = 40
    engine_kwargs["pool_recycle"] = 3600

engine = create_engine(settings.database_url, **engine_kwargs)

# Session-Factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Basis-Klasse für alle Models
Base = declarative_base()


def get_db():
    """
    Dependency für FastAPI-Routen.
    Stellt eine Datenbank-Session bereit und schließt sie nach der Anfrage.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """
    Context Manager für eine einzelne Schreib-Operation.

    Verwendung:
        with transaction(db):
            task.assisters = assisters
        # commit bei Erfolg, rollback bei Exception

    Jede Task-Mutation ist genau ein Dokument-Update, mehr als
    commit/rollback ist nicht nötig.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def init_db(bind=None):
    """
    Erstellt alle Tabellen (idempotent).

    Args:
        bind: Optionale Engine (Standard: die konfigurierte Engine)
    """
    from app.models import task  # noqa: F401  Registriert das Model bei Base
    Base.metadata.create_all(bind=bind or engine)

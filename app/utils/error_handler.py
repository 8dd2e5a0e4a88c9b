"""Error Handler Utility - Zentralisierte Fehlerbehandlung für die JSON-API"""
import inspect
import logging
from typing import Awaitable, Callable, Dict, Type, Union

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

from app.utils.errors import (
    ConcurrentUpdateError,
    NotAllowedError,
    NotFoundError,
    TaskError,
)

logger = logging.getLogger(__name__)

Formatter = Callable[[TaskError], Union[str, Awaitable[str]]]

# Fehlerklasse -> Funktion, die die Nachricht für den Aufrufer erzeugt
_formatters: Dict[Type[TaskError], Formatter] = {}


def register_error_formatter(error_cls: Type[TaskError], formatter: Formatter) -> None:
    """
    Registriert eine Formatierungsfunktion für eine Fehlerklasse.

    Damit kann z.B. eine Benutzerverwaltung rohe IDs durch Anzeigenamen ersetzen:

        register_error_formatter(
            TaskRequesterNotMatchError,
            lambda e: e.format_with(lookup_name(e.requester), e.task_id),
        )

    Unterklassen ohne eigenen Eintrag nutzen den Eintrag der nächsten Basisklasse.
    """
    _formatters[error_cls] = formatter


async def render_error(error: TaskError) -> str:
    """Erzeugt die Nachricht für den Aufrufer (Standard: rohe Parameter)."""
    for cls in type(error).__mro__:
        formatter = _formatters.get(cls)
        if formatter is not None:
            result = formatter(error)
            if inspect.isawaitable(result):
                result = await result
            return result
    return error.format_with(*error.params)


def _status_for(error: TaskError) -> tuple[int, str]:
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND, "not_found"
    if isinstance(error, NotAllowedError):
        return status.HTTP_403_FORBIDDEN, "not_allowed"
    if isinstance(error, ConcurrentUpdateError):
        return status.HTTP_409_CONFLICT, "conflict"
    return status.HTTP_400_BAD_REQUEST, "invalid"


async def handle_task_error(request: Request, exc: TaskError) -> JSONResponse:
    """Übersetzt Fehler der Task-Verwaltung in eine JSON-Antwort."""
    status_code, error_code = _status_for(exc)
    message = await render_error(exc)
    logger.warning(f"{request.method} {request.url.path}: {type(exc).__name__} - {message}")
    return JSONResponse(status_code=status_code, content={"msg": message, "error": error_code})


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: Invalid input - {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"msg": f"Ungültige Eingabe: {exc}", "error": "invalid_input"},
    )


async def handle_db_exception(request: Request, exc: Exception) -> JSONResponse:
    """Datenbankfehler mit Logging und benutzerfreundlicher Meldung"""
    operation = f"{request.method} {request.url.path}"

    if isinstance(exc, IntegrityError):
        logger.error(f"{operation}: Database integrity error - {exc}", exc_info=True)
        status_code = status.HTTP_409_CONFLICT
        message = "Datenbankfehler: Diese Daten verletzen eine Integritätsbedingung."
        error_code = "db_integrity"
    elif isinstance(exc, DataError):
        logger.error(f"{operation}: Invalid data - {exc}", exc_info=True)
        status_code = status.HTTP_400_BAD_REQUEST
        message = "Ungültige Daten. Bitte überprüfen Sie Ihre Eingaben."
        error_code = "invalid_data"
    else:
        logger.error(f"{operation}: Database operational error - {exc}", exc_info=True)
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        message = "Datenbankverbindungsfehler. Bitte versuchen Sie es später erneut."
        error_code = "db_error"

    return JSONResponse(status_code=status_code, content={"msg": message, "error": error_code})


def register_exception_handlers(app: FastAPI) -> None:
    """Registriert alle Fehler-Handler an der App."""
    app.add_exception_handler(TaskError, handle_task_error)
    app.add_exception_handler(ValueError, handle_value_error)
    for exc_cls in (IntegrityError, DataError, OperationalError):
        app.add_exception_handler(exc_cls, handle_db_exception)

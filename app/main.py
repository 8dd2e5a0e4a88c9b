"""Hauptanwendung für die Helferbörse"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
import logging

from app.config import settings
from app.logging_config import setup_logging
from app.database import init_db
from app.routers import auth, tasks
from app.utils.error_handler import register_exception_handlers

# Logging konfigurieren (Console + rotierende Datei)
setup_logging(debug=settings.debug, log_file=settings.log_file)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan Context Manager für Startup und Shutdown.
    """
    # ===== STARTUP =====
    logger.info(f"Starte {settings.app_name} v{settings.app_version}")

    if not settings.is_secret_key_from_env():
        logger.warning("SECRET_KEY ist nicht in .env gesetzt! Sessions gehen bei jedem Neustart verloren.")

    logger.info("Initialisiere Datenbank...")
    init_db()
    logger.info("Datenbank erfolgreich initialisiert!")

    yield

    # ===== SHUTDOWN =====
    logger.info(f"Beende {settings.app_name}")


# FastAPI App erstellen
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan
)

# Rate Limiter zur App hinzufügen
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Session Middleware hinzufügen
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key
)

register_exception_handlers(app)

# Router registrieren
app.include_router(auth.router)
app.include_router(tasks.router)


@app.get("/health")
async def health_check():
    """Health-Check-Endpunkt"""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

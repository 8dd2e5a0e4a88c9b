"""Auth Router - Benutzer-ID in der Session hinterlegen"""
import logging
from fastapi import APIRouter, Request, Form

from app.schemas import MessageResponse
from app.utils.identifiers import canonical_id

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=MessageResponse)
async def login(request: Request, user_id: str = Form(...)):
    """
    Login - Übernimmt die (bereits extern authentifizierte) Benutzer-ID in die Session
    """
    user_id = canonical_id(user_id)
    request.session.clear()
    request.session["user_id"] = user_id
    logger.info(f"User {user_id} logged in")
    return {"msg": f"Angemeldet als {user_id}."}


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request):
    """Logout - Entfernt Benutzer aus Session"""
    user_id = request.session.get("user_id")
    request.session.clear()
    logger.info(f"User {user_id} logged out")
    return {"msg": "Erfolgreich abgemeldet."}

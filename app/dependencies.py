"""Dependencies for FastAPI - Session Management"""
from fastapi import Request, HTTPException, status


def get_current_user_id(request: Request) -> str:
    """
    Holt die ID des angemeldeten Benutzers aus der Session.

    Die Anmeldung selbst (Passwort, Konten) liegt außerhalb dieser App,
    die ID wird hier ungeprüft übernommen.

    Raises:
        HTTPException (401): Wenn niemand angemeldet ist
    """
    user_id = request.session.get("user_id")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Nicht angemeldet. Bitte melden Sie sich an."
        )
    return user_id

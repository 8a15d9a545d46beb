"""
Dépendances d'authentification / Authentication dependencies.
Injectées dans les routes via Depends().
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fuel_tracker.database import get_db
from fuel_tracker.models.user import User
from fuel_tracker.services.record_store import RecordStore
from fuel_tracker.utils.auth import decode_token

security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Extraire et valider l'utilisateur depuis le JWT / Extract and validate user from JWT."""
    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    user_id = int(payload["sub"])
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")

    return user


def record_store(model: type):
    """Factory de dépendance : record store du propriétaire / Dependency factory for the owner's record store."""

    async def _store(
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user),
    ) -> RecordStore:
        return RecordStore(db, model, user.id)

    return _store

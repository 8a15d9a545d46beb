"""
Schémas d'authentification / Authentication schemas.
Inscription, login, tokens, refresh.
"""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Requête d'inscription / Registration request."""
    email: str = Field(min_length=3, max_length=150, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6, max_length=200)
    full_name: str | None = Field(None, max_length=150)


class LoginRequest(BaseModel):
    """Requête de connexion / Login request."""
    email: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1, max_length=200)


class TokenResponse(BaseModel):
    """Réponse avec tokens / Token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    """Requête de rafraîchissement / Refresh request."""
    refresh_token: str


class UserMe(BaseModel):
    """Profil courant / Current user profile."""
    model_config = ConfigDict(from_attributes=True)
    id: int
    email: str
    full_name: str | None = None

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Union
import logging

import pytz
from fastapi import Request
from jose import jwt, JWTError

from app.core.config import settings

logger = logging.getLogger(__name__)

ALGORITHM = settings.JWT_ALGORITHM


@dataclass
class Identity:
    user_id: str
    email: Optional[str] = None
    app_metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> Optional["Identity"]:
        subject = claims.get("sub")
        if not subject:
            return None
        return cls(
            user_id=str(subject),
            email=claims.get("email"),
            app_metadata=claims.get("app_metadata") or {},
        )


def create_access_token(
    subject: Union[str, Any],
    expires_delta: Optional[timedelta] = None,
    email: Optional[str] = None,
    app_metadata: Optional[Dict[str, Any]] = None,
) -> str:
    """Gera um token no mesmo formato do provedor de identidade (útil em dev e testes)."""
    expire = datetime.now(pytz.utc) + (expires_delta or timedelta(minutes=60))
    to_encode: Dict[str, Any] = {"exp": expire, "sub": str(subject)}
    if email:
        to_encode["email"] = email
    if app_metadata:
        to_encode["app_metadata"] = app_metadata
    if settings.JWT_AUDIENCE:
        to_encode["aud"] = settings.JWT_AUDIENCE
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_bearer_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Valida assinatura e expiração do token e devolve as claims.
    Retorna None para qualquer token inválido.
    """
    options = {"verify_aud": bool(settings.JWT_AUDIENCE), "require_exp": True}
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options=options,
        )
    except JWTError as e:
        logger.debug(f"Token rejeitado: {e}")
        return None


def resolve_identity(request: Request) -> Optional[Identity]:
    """
    Resolve quem está chamando.
    1. Claims já anexadas pela plataforma (request.state.user).
    2. Header "Authorization: Bearer <jwt>".
    """
    platform_user = getattr(request.state, "user", None)
    if isinstance(platform_user, dict):
        identity = Identity.from_claims(platform_user)
        if identity:
            return identity

    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    try:
        scheme, token = auth_header.split()
    except ValueError:
        return None
    if scheme.lower() != "bearer":
        return None

    claims = decode_bearer_token(token)
    if claims is None:
        return None
    return Identity.from_claims(claims)


def is_admin(identity: Optional[Identity]) -> bool:
    """Checagem de papel: role de admin no app_metadata ou email na lista ADMIN_EMAILS."""
    if identity is None:
        return False

    metadata = identity.app_metadata or {}
    roles = metadata.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    if settings.ADMIN_ROLE in roles or metadata.get("role") == settings.ADMIN_ROLE:
        return True

    admin_emails = {e.lower() for e in settings.ADMIN_EMAILS}
    return bool(identity.email) and identity.email.lower() in admin_emails

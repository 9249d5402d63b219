"""
Portão de autorização.

Decide allow/deny antes de qualquer acesso ao banco. A checagem de posse
(registro pertence à equipe do usuário) fica nos services.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.core.errors import Forbidden, Unauthenticated
from app.core.security import Identity


class Operation(str, Enum):
    TEAM_READ = "team:read"
    TEAM_CREATE = "team:create"
    TEAM_UPDATE = "team:update"

    STAFF_READ = "staff:read"
    STAFF_CREATE = "staff:create"
    STAFF_UPDATE = "staff:update"
    STAFF_DELETE = "staff:delete"

    PILOT_READ = "pilot:read"
    PILOT_CREATE = "pilot:create"
    PILOT_UPDATE = "pilot:update"
    PILOT_DELETE = "pilot:delete"

    ADMIN_TEAMS_LIST = "admin:teams:list"
    ADMIN_TEAM_REVIEW = "admin:teams:review"
    ADMIN_TEAM_DELETE = "admin:teams:delete"

    @property
    def requires_admin(self) -> bool:
        return self.value.startswith("admin:")


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    identity: Optional[Identity] = None
    reason: Optional[DenyReason] = None

    def raise_for_deny(self) -> Identity:
        """Retorna a identidade liberada ou levanta o erro correspondente."""
        if self.allowed:
            return self.identity
        if self.reason == DenyReason.UNAUTHENTICATED:
            raise Unauthenticated()
        raise Forbidden()


def authorize(identity: Optional[Identity], is_admin: bool, operation: Operation) -> Decision:
    if identity is None:
        return Decision(allowed=False, reason=DenyReason.UNAUTHENTICATED)
    if operation.requires_admin and not is_admin:
        return Decision(allowed=False, identity=identity, reason=DenyReason.FORBIDDEN)
    return Decision(allowed=True, identity=identity)

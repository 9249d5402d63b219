from typing import AsyncGenerator, Optional
import logging

from fastapi import Depends, Request

from app.core.config import settings
from app.core.permissions import Operation, authorize
from app.core.security import Identity, is_admin, resolve_identity
from app.db.session import get_firestore_client, new_session
from app.db.store import RecordStore

logger = logging.getLogger(__name__)

async def get_store() -> AsyncGenerator[RecordStore, None]:
    if settings.STORE_BACKEND == "firestore":
        from app.db.firestore_store import FirestoreRecordStore
        yield FirestoreRecordStore(get_firestore_client())
        return

    from app.db.sql_store import SqlRecordStore
    store = SqlRecordStore(new_session())
    try:
        yield store
    finally:
        await store.close()

def get_identity(request: Request) -> Optional[Identity]:
    return resolve_identity(request)

def require(operation: Operation):
    """
    Dependência que aplica o portão de autorização para a operação.
    Roda antes de qualquer acesso ao banco; devolve a identidade liberada.
    """
    def dependency(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
        admin = is_admin(identity) if identity else False
        decision = authorize(identity, admin, operation)
        if not decision.allowed:
            logger.info(f"Acesso negado ({decision.reason.value}) para {operation.value}")
        else:
            logger.debug(f"{operation.value} liberado para {identity.user_id}")
        return decision.raise_for_deny()
    return dependency

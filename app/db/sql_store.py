from typing import Any, Callable, Dict, List, Optional
import logging
import threading

from sqlalchemy import asc, desc, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.core.errors import BackendFailure
from app.db.store import (
    PILOTS, REGISTRATION_SETTINGS, STAFF, TEAMS,
    Filters, Order, Record, RecordStore, new_id, utcnow,
)
from app.models.pilot import Pilot
from app.models.registration_settings import RegistrationSettings
from app.models.staff import TeamStaff
from app.models.team import Team

logger = logging.getLogger(__name__)

MODELS = {
    TEAMS: Team,
    PILOTS: Pilot,
    STAFF: TeamStaff,
    REGISTRATION_SETTINGS: RegistrationSettings,
}


def to_record(obj) -> Record:
    return {c.key: getattr(obj, c.key) for c in obj.__table__.columns}


class SqlRecordStore(RecordStore):
    """
    Adaptador relacional: uma tabela por coleção, filhos ligados por team_id.
    As chamadas à Session rodam no threadpool, uma por vez (a Session não é thread-safe).
    """

    def __init__(self, db: Session):
        self.db = db
        self._lock = threading.Lock()

    def _model(self, collection: str):
        try:
            return MODELS[collection]
        except KeyError:
            raise BackendFailure(f"Unknown collection: {collection}")

    def _query(self, collection: str, filters: Optional[Filters]):
        model = self._model(collection)
        query = self.db.query(model)
        for key, value in (filters or {}).items():
            query = query.filter(getattr(model, key) == value)
        return model, query

    async def _run(self, action: str, fn: Callable[[], Any]) -> Any:
        def locked():
            with self._lock:
                try:
                    return fn()
                except SQLAlchemyError as e:
                    logger.error(f"Erro SQL ({action}): {e}")
                    self.db.rollback()
                    raise BackendFailure() from e
        return await run_in_threadpool(locked)

    async def get(self, collection: str, filters: Filters) -> Optional[Record]:
        def op():
            _, query = self._query(collection, filters)
            obj = query.first()
            return to_record(obj) if obj else None
        return await self._run(f"get {collection}", op)

    async def list(self, collection: str, filters: Optional[Filters] = None, order: Optional[Order] = None) -> List[Record]:
        def op():
            model, query = self._query(collection, filters)
            if order:
                field, descending = order
                column = getattr(model, field)
                query = query.order_by(desc(column) if descending else asc(column))
            return [to_record(r) for r in query.all()]
        return await self._run(f"list {collection}", op)

    async def insert(self, collection: str, record: Record) -> Record:
        model = self._model(collection)
        now = utcnow()
        values: Dict[str, Any] = {k: v for k, v in record.items() if hasattr(model, k)}
        values.setdefault("id", new_id())
        values["created_at"] = now
        values["updated_at"] = now

        def op():
            obj = model(**values)
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
            return to_record(obj)
        return await self._run(f"insert {collection}", op)

    async def update(self, collection: str, id: str, patch: Record) -> Optional[Record]:
        def op():
            _, query = self._query(collection, {"id": id})
            obj = query.first()
            if not obj:
                return None
            for key, value in patch.items():
                if hasattr(obj, key) and key not in ("id", "created_at"):
                    setattr(obj, key, value)
            obj.updated_at = utcnow()
            self.db.commit()
            self.db.refresh(obj)
            return to_record(obj)
        return await self._run(f"update {collection}", op)

    async def delete(self, collection: str, id: str) -> bool:
        def op():
            _, query = self._query(collection, {"id": id})
            obj = query.first()
            if not obj:
                return False
            self.db.delete(obj)
            self.db.commit()
            return True
        return await self._run(f"delete {collection}", op)

    async def count(self, collection: str, filters: Optional[Filters] = None) -> int:
        def op():
            model, query = self._query(collection, filters)
            return query.with_entities(func.count(model.id)).scalar() or 0
        return await self._run(f"count {collection}", op)

    async def close(self) -> None:
        await run_in_threadpool(self.db.close)

from typing import List, Optional
import logging

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from app.core.errors import BackendFailure
from app.db.store import (
    CHILD_COLLECTIONS, TEAMS,
    Filters, Order, Record, RecordStore, new_id, utcnow,
)

logger = logging.getLogger(__name__)


class FirestoreRecordStore(RecordStore):
    """
    Adaptador de documentos.
    teams/{team_id}, teams/{team_id}/pilots/{id}, teams/{team_id}/staff/{id}.
    Filhos sem team_id no filtro são buscados via collection group pelo campo "id".
    """

    def __init__(self, client: firestore.AsyncClient):
        self.client = client

    # --- Resolução de caminhos ---

    def _collection(self, collection: str, filters: Optional[Filters]):
        filters = dict(filters or {})
        if collection in CHILD_COLLECTIONS:
            team_id = filters.pop("team_id", None)
            if team_id is not None:
                ref = self.client.collection(TEAMS).document(str(team_id)).collection(collection)
            else:
                ref = self.client.collection_group(collection)
            return ref, filters, team_id
        return self.client.collection(collection), filters, None

    def _apply(self, query, filters: Filters):
        for key, value in filters.items():
            query = query.where(filter=FieldFilter(key, "==", value))
        return query

    async def _find_ref(self, collection: str, id: str):
        if collection in CHILD_COLLECTIONS:
            query = self.client.collection_group(collection).where(filter=FieldFilter("id", "==", id)).limit(1)
            async for doc in query.stream():
                return doc.reference
            return None
        ref = self.client.collection(collection).document(id)
        snapshot = await ref.get()
        return ref if snapshot.exists else None

    @staticmethod
    def _to_record(doc) -> Record:
        data = doc.to_dict() or {}
        data["id"] = doc.id
        return data

    # --- Operações ---

    async def get(self, collection: str, filters: Filters) -> Optional[Record]:
        try:
            filters = dict(filters or {})
            doc_id = filters.pop("id", None)
            ref, rest, team_id = self._collection(collection, filters)
            if doc_id is not None and (collection not in CHILD_COLLECTIONS or team_id is not None):
                snapshot = await ref.document(str(doc_id)).get()
                if not snapshot.exists:
                    return None
                record = self._to_record(snapshot)
                if any(record.get(k) != v for k, v in rest.items()):
                    return None
                return record
            if doc_id is not None:
                rest["id"] = doc_id
            async for doc in self._apply(ref, rest).limit(1).stream():
                return self._to_record(doc)
            return None
        except GoogleAPIError as e:
            self._fail(e, f"get {collection}")

    async def list(self, collection: str, filters: Optional[Filters] = None, order: Optional[Order] = None) -> List[Record]:
        try:
            ref, rest, _ = self._collection(collection, filters)
            query = self._apply(ref, rest)
            if order:
                field, descending = order
                direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
                query = query.order_by(field, direction=direction)
            return [self._to_record(doc) async for doc in query.stream()]
        except GoogleAPIError as e:
            self._fail(e, f"list {collection}")

    async def insert(self, collection: str, record: Record) -> Record:
        now = utcnow()
        data = dict(record)
        data.setdefault("id", new_id())
        data["created_at"] = now
        data["updated_at"] = now
        if collection in CHILD_COLLECTIONS and not data.get("team_id"):
            raise BackendFailure(f"{collection} requires team_id")
        try:
            ref, _, _ = self._collection(collection, {"team_id": data.get("team_id")})
            await ref.document(data["id"]).set(data)
        except GoogleAPIError as e:
            self._fail(e, f"insert {collection}")
        return data

    async def update(self, collection: str, id: str, patch: Record) -> Optional[Record]:
        data = {k: v for k, v in patch.items() if k not in ("id", "created_at")}
        data["updated_at"] = utcnow()
        try:
            ref = await self._find_ref(collection, id)
            if ref is None:
                return None
            await ref.update(data)
            return self._to_record(await ref.get())
        except GoogleAPIError as e:
            self._fail(e, f"update {collection}")

    async def delete(self, collection: str, id: str) -> bool:
        try:
            ref = await self._find_ref(collection, id)
            if ref is None:
                return False
            await ref.delete()
            return True
        except GoogleAPIError as e:
            self._fail(e, f"delete {collection}")

    async def count(self, collection: str, filters: Optional[Filters] = None) -> int:
        try:
            ref, rest, _ = self._collection(collection, filters)
            results = await self._apply(ref, rest).count().get()
            return int(results[0][0].value) if results else 0
        except GoogleAPIError as e:
            self._fail(e, f"count {collection}")

    def _fail(self, e: GoogleAPIError, action: str):
        logger.error(f"Erro Firestore ({action}): {e}")
        raise BackendFailure() from e

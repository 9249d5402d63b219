from typing import List, Optional

from app.core.errors import NotFound, ValidationFailed
from app.db.store import RecordStore
from app.services.teams import require_own_team


class TeamMemberService:
    """
    Base para registros filhos da equipe do usuário (pilotos e staff).
    Registro de outra equipe é tratado exatamente como inexistente.
    """
    collection: str
    label: str
    not_found_message: str

    def __init__(self, store: RecordStore):
        self.store = store

    async def list(self, user_id: str) -> List[dict]:
        team = await require_own_team(self.store, user_id)
        return await self.store.list(self.collection, {"team_id": team["id"]}, ("created_at", False))

    def _require_id(self, record_id: Optional[str]) -> str:
        if not record_id:
            raise ValidationFailed(f"{self.label} ID required")
        return record_id

    async def _get_owned(self, team: dict, record_id: str) -> dict:
        record = await self.store.get(self.collection, {"id": record_id, "team_id": team["id"]})
        if not record:
            raise NotFound(self.not_found_message)
        return record

    async def remove(self, user_id: str, record_id: Optional[str]) -> None:
        team = await require_own_team(self.store, user_id)
        record_id = self._require_id(record_id)
        await self._before_change(team)
        await self._get_owned(team, record_id)
        await self.store.delete(self.collection, record_id)

    async def _before_change(self, team: dict) -> None:
        """Gancho para regras extras antes de qualquer alteração."""

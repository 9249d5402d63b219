from typing import List, Optional, Tuple
import logging

from app.core.errors import NotFound, ValidationFailed
from app.db.store import PILOTS, STAFF, TEAMS, RecordStore
from app.models.team import PhotoStatus, RegistrationStatus
from app.schemas.stats import TeamStats
from app.schemas.team import TeamReview
from app.services.stats import aggregate
from app.services.teams import with_members
from app.utils.fanout import gather_all

logger = logging.getLogger(__name__)

STATUSES = [s.value for s in RegistrationStatus]
PHOTO_STATUSES = [p.value for p in PhotoStatus]


class AdminTeamService:

    def __init__(self, store: RecordStore):
        self.store = store

    async def list_teams(self) -> Tuple[List[dict], TeamStats]:
        """Todas as equipes (mais recentes primeiro) com pilotos, staff e contagens, mais o resumo."""
        teams = await self.store.list(TEAMS, order=("created_at", True))
        logger.info(f"Admin: {len(teams)} equipes encontradas")

        teams = await gather_all(*[with_members(self.store, t) for t in teams])
        for team in teams:
            team["pilots_count"] = len(team["pilots"])
            team["staff_count"] = len(team["staff"])

        return teams, aggregate(teams)

    async def review_team(self, team_id: Optional[str], review: TeamReview) -> dict:
        """Admin só altera status e motorcycle_photo_status; o resto é ignorado."""
        if not team_id:
            raise ValidationFailed("Team ID is required")

        allowed = {}
        if review.status in STATUSES:
            allowed["status"] = review.status
        if review.motorcycle_photo_status in PHOTO_STATUSES:
            allowed["motorcycle_photo_status"] = review.motorcycle_photo_status

        if not allowed:
            raise ValidationFailed("No valid fields to update")

        team = await self.store.update(TEAMS, team_id, allowed)
        if not team:
            raise NotFound("Equipo no encontrado / Team not found")
        logger.info(f"Admin: equipe {team_id} atualizada {allowed}")
        return team

    async def delete_team(self, team_id: Optional[str]) -> None:
        """
        Remove pilotos e staff (em paralelo) e depois a equipe.
        Se algum filho falhar a operação falha, sem desfazer o que já foi apagado.
        """
        if not team_id:
            raise ValidationFailed("Team ID is required")

        team = await self.store.get(TEAMS, {"id": team_id})
        if not team:
            raise NotFound("Equipo no encontrado / Team not found")

        pilots, staff = await gather_all(
            self.store.list(PILOTS, {"team_id": team_id}),
            self.store.list(STAFF, {"team_id": team_id}),
        )
        await gather_all(
            *[self.store.delete(PILOTS, p["id"]) for p in pilots],
            *[self.store.delete(STAFF, s["id"]) for s in staff],
        )
        await self.store.delete(TEAMS, team_id)
        logger.info(f"Admin: equipe {team_id} removida ({len(pilots)} pilotos, {len(staff)} staff)")

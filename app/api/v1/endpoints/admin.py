from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.core.permissions import Operation
from app.core.security import Identity
from app.db.store import RecordStore
from app.schemas.team import TeamReview
from app.services.admin import AdminTeamService

router = APIRouter()

# --- DASHBOARD: EQUIPES + ESTATÍSTICAS ---
@router.get("/teams")
async def list_teams(
    current_admin: Identity = Depends(deps.require(Operation.ADMIN_TEAMS_LIST)),
    store: RecordStore = Depends(deps.get_store),
):
    """
    Todas as equipes com pilotos e staff, mais as métricas consolidadas do painel.
    """
    teams, stats = await AdminTeamService(store).list_teams()
    return {"teams": teams, "stats": stats.model_dump(by_alias=True)}

# --- REVISÃO (STATUS / FOTO) ---
@router.put("/teams")
async def review_team(
    review: TeamReview,
    team_id: Optional[str] = Query(None, alias="id"),
    current_admin: Identity = Depends(deps.require(Operation.ADMIN_TEAM_REVIEW)),
    store: RecordStore = Depends(deps.get_store),
):
    team = await AdminTeamService(store).review_team(team_id, review)
    return {"team": team}

@router.delete("/teams")
async def delete_team(
    team_id: Optional[str] = Query(None, alias="id"),
    current_admin: Identity = Depends(deps.require(Operation.ADMIN_TEAM_DELETE)),
    store: RecordStore = Depends(deps.get_store),
):
    await AdminTeamService(store).delete_team(team_id)
    return {"message": "Team deleted successfully"}

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.core.permissions import Operation
from app.core.security import Identity
from app.db.store import RecordStore
from app.schemas.team import TeamCreate, TeamUpdate
from app.services.teams import TeamService

router = APIRouter()

@router.get("")
async def read_my_team(
    identity: Identity = Depends(deps.require(Operation.TEAM_READ)),
    store: RecordStore = Depends(deps.get_store),
):
    """
    Equipe do usuário logado com pilotos e staff, ou null se ainda não criou.
    """
    team = await TeamService(store).get_own_team(identity.user_id)
    return {"team": team}

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_team(
    team_in: TeamCreate,
    identity: Identity = Depends(deps.require(Operation.TEAM_CREATE)),
    store: RecordStore = Depends(deps.get_store),
):
    team = await TeamService(store).create_team(identity, team_in)
    return {"team": team}

@router.put("")
async def update_my_team(
    team_in: TeamUpdate,
    identity: Identity = Depends(deps.require(Operation.TEAM_UPDATE)),
    store: RecordStore = Depends(deps.get_store),
):
    # status e campos de vínculo não podem ser alterados por aqui (ver /admin/teams)
    team = await TeamService(store).update_own_team(identity.user_id, team_in)
    return {"team": team}

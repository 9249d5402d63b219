from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.core.permissions import Operation
from app.core.security import Identity
from app.db.store import RecordStore
from app.schemas.pilot import PilotCreate, PilotUpdate
from app.services.pilots import PilotService

router = APIRouter()

@router.get("")
async def list_pilots(
    identity: Identity = Depends(deps.require(Operation.PILOT_READ)),
    store: RecordStore = Depends(deps.get_store),
):
    pilots = await PilotService(store).list(identity.user_id)
    return {"pilots": pilots}

@router.post("", status_code=status.HTTP_201_CREATED)
async def add_pilot(
    pilot_in: PilotCreate,
    identity: Identity = Depends(deps.require(Operation.PILOT_CREATE)),
    store: RecordStore = Depends(deps.get_store),
):
    pilot = await PilotService(store).add(identity.user_id, pilot_in)
    return {"pilot": pilot}

@router.put("")
async def update_pilot(
    pilot_in: PilotUpdate,
    pilot_id: Optional[str] = Query(None, alias="id"),
    identity: Identity = Depends(deps.require(Operation.PILOT_UPDATE)),
    store: RecordStore = Depends(deps.get_store),
):
    pilot = await PilotService(store).update(identity.user_id, pilot_id, pilot_in)
    return {"pilot": pilot}

@router.delete("")
async def delete_pilot(
    pilot_id: Optional[str] = Query(None, alias="id"),
    identity: Identity = Depends(deps.require(Operation.PILOT_DELETE)),
    store: RecordStore = Depends(deps.get_store),
):
    await PilotService(store).remove(identity.user_id, pilot_id)
    return {"success": True}

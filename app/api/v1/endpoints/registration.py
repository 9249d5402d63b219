from fastapi import APIRouter, Depends

from app.api import deps
from app.db.store import RecordStore
from app.services.teams import TeamService

router = APIRouter()

@router.get("")
async def read_registration_settings(store: RecordStore = Depends(deps.get_store)):
    """Público: o front usa para mostrar se as inscrições estão abertas."""
    reg = await TeamService(store).get_registration_settings()
    return {"settings": reg}

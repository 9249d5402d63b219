from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.core.permissions import Operation
from app.core.security import Identity
from app.db.store import RecordStore
from app.schemas.staff import StaffCreate, StaffUpdate
from app.services.staff import StaffService

router = APIRouter()

@router.get("")
async def list_staff(
    identity: Identity = Depends(deps.require(Operation.STAFF_READ)),
    store: RecordStore = Depends(deps.get_store),
):
    staff = await StaffService(store).list(identity.user_id)
    return {"staff": staff}

@router.post("", status_code=status.HTTP_201_CREATED)
async def add_staff(
    staff_in: StaffCreate,
    identity: Identity = Depends(deps.require(Operation.STAFF_CREATE)),
    store: RecordStore = Depends(deps.get_store),
):
    staff = await StaffService(store).add(identity.user_id, staff_in)
    return {"staff": staff}

@router.put("")
async def update_staff(
    staff_in: StaffUpdate,
    staff_id: Optional[str] = Query(None, alias="id"),
    identity: Identity = Depends(deps.require(Operation.STAFF_UPDATE)),
    store: RecordStore = Depends(deps.get_store),
):
    staff = await StaffService(store).update(identity.user_id, staff_id, staff_in)
    return {"staff": staff}

@router.delete("")
async def delete_staff(
    staff_id: Optional[str] = Query(None, alias="id"),
    identity: Identity = Depends(deps.require(Operation.STAFF_DELETE)),
    store: RecordStore = Depends(deps.get_store),
):
    await StaffService(store).remove(identity.user_id, staff_id)
    return {"success": True}

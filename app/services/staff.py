from typing import Optional
import logging

from app.core.config import settings
from app.core.errors import CapacityExceeded, NotFound, ValidationFailed
from app.db.store import STAFF
from app.models.staff import StaffRole
from app.schemas.staff import StaffCreate, StaffUpdate
from app.services.members import TeamMemberService
from app.services.teams import require_own_team

logger = logging.getLogger(__name__)

VALID_ROLES = [r.value for r in StaffRole]


def _validate_role(role) -> None:
    if role not in VALID_ROLES:
        raise ValidationFailed("Rol inválido / Invalid role")


class StaffService(TeamMemberService):
    collection = STAFF
    label = "Staff"
    not_found_message = "Staff no encontrado / Staff not found"

    async def add(self, user_id: str, staff_in: StaffCreate) -> dict:
        team = await require_own_team(self.store, user_id)

        # Sem trava entre requisições: duas inclusões simultâneas podem passar do limite
        count = await self.store.count(STAFF, {"team_id": team["id"]})
        if count >= settings.MAX_STAFF:
            raise CapacityExceeded(
                f"El equipo ya tiene el máximo de staff ({settings.MAX_STAFF}) / "
                f"Team already has maximum staff ({settings.MAX_STAFF})"
            )

        if not staff_in.name or not staff_in.role:
            raise ValidationFailed("Nombre y rol son obligatorios / Name and role are required")
        _validate_role(staff_in.role)

        staff = await self.store.insert(STAFF, {
            "team_id": team["id"],
            "name": staff_in.name,
            "dni": staff_in.dni,
            "phone": staff_in.phone,
            "role": staff_in.role,
        })
        logger.info(f"Staff {staff['id']} ({staff['role']}) adicionado à equipe {team['id']}")
        return staff

    async def update(self, user_id: str, staff_id: Optional[str], staff_in: StaffUpdate) -> dict:
        team = await require_own_team(self.store, user_id)
        staff_id = self._require_id(staff_id)
        await self._get_owned(team, staff_id)

        patch = staff_in.patch()
        if "role" in patch:
            _validate_role(patch["role"])
        if "name" in patch and not patch["name"]:
            raise ValidationFailed("Nombre y rol son obligatorios / Name and role are required")

        updated = await self.store.update(STAFF, staff_id, patch)
        if not updated:
            raise NotFound(self.not_found_message)
        return updated

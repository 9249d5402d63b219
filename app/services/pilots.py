from typing import Optional
import logging

from app.core.errors import CapacityExceeded, NotFound, ValidationFailed
from app.db.store import PILOTS, REGISTRATION_SETTINGS, utcnow
from app.models.pilot import DrivingLevel, MotorcycleExperience
from app.schemas.pilot import PilotCreate, PilotUpdate
from app.services.members import TeamMemberService
from app.services.teams import require_own_team
from app.utils.dates import as_utc

logger = logging.getLogger(__name__)

EXPERIENCE_LEVELS = [e.value for e in MotorcycleExperience]
DRIVING_LEVELS = [d.value for d in DrivingLevel]
REQUIRED_FIELDS = ("name", "surname", "dni", "motorcycle_experience")


def _validate_levels(data: dict) -> None:
    if "motorcycle_experience" in data and data["motorcycle_experience"] not in EXPERIENCE_LEVELS:
        raise ValidationFailed("Experiencia en moto inválida / Invalid motorcycle experience")
    if data.get("driving_level") is not None and data["driving_level"] not in DRIVING_LEVELS:
        raise ValidationFailed("Nivel de pilotaje inválido / Invalid driving level")


class PilotService(TeamMemberService):
    collection = PILOTS
    label = "Pilot"
    not_found_message = "Piloto no encontrado / Pilot not found"

    async def _before_change(self, team: dict) -> None:
        reg = await self.store.get(REGISTRATION_SETTINGS, {})
        deadline = as_utc(reg.get("pilot_modification_deadline")) if reg else None
        if deadline and deadline < utcnow():
            raise ValidationFailed(
                "El plazo para modificar pilotos ha terminado / Pilot modification deadline has passed"
            )

    async def add(self, user_id: str, pilot_in: PilotCreate) -> dict:
        team = await require_own_team(self.store, user_id)
        await self._before_change(team)

        # O limite é o número de pilotos declarado na inscrição da equipe
        count = await self.store.count(PILOTS, {"team_id": team["id"]})
        limit = team.get("number_of_pilots") or 0
        if count >= limit:
            raise CapacityExceeded(
                f"El equipo ya tiene todos sus pilotos ({limit}) / Team already has all its pilots ({limit})"
            )

        data = pilot_in.patch()
        missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
        if missing:
            raise ValidationFailed(
                f"Faltan campos obligatorios / Missing required fields: {', '.join(missing)}"
            )
        _validate_levels(data)

        data["team_id"] = team["id"]
        data["is_representative"] = bool(data.get("is_representative"))
        if not data.get("pilot_number"):
            data["pilot_number"] = count + 1

        pilot = await self.store.insert(PILOTS, data)
        logger.info(f"Piloto {pilot['id']} adicionado à equipe {team['id']}")
        return pilot

    async def update(self, user_id: str, pilot_id: Optional[str], pilot_in: PilotUpdate) -> dict:
        team = await require_own_team(self.store, user_id)
        pilot_id = self._require_id(pilot_id)
        await self._before_change(team)
        await self._get_owned(team, pilot_id)

        patch = pilot_in.patch()
        empty = [f for f in REQUIRED_FIELDS if f in patch and not patch[f]]
        if empty:
            raise ValidationFailed(
                f"Faltan campos obligatorios / Missing required fields: {', '.join(empty)}"
            )
        _validate_levels(patch)

        updated = await self.store.update(PILOTS, pilot_id, patch)
        if not updated:
            raise NotFound(self.not_found_message)
        return updated

from typing import Optional
import logging

from app.core.config import settings
from app.core.errors import CapacityExceeded, NotFound, ValidationFailed
from app.core.security import Identity
from app.db.store import PILOTS, REGISTRATION_SETTINGS, STAFF, TEAMS, RecordStore, utcnow
from app.models.team import EngineCapacity, PhotoStatus, RegistrationStatus
from app.schemas.team import TeamCreate, TeamUpdate
from app.utils.dates import as_utc
from app.utils.fanout import gather_all

logger = logging.getLogger(__name__)

ENGINE_CAPACITIES = [e.value for e in EngineCapacity]


async def find_own_team(store: RecordStore, user_id: str) -> Optional[dict]:
    return await store.get(TEAMS, {"representative_user_id": user_id})


async def require_own_team(store: RecordStore, user_id: str) -> dict:
    """Equipe do usuário, pré-requisito das rotas de pilotos e staff."""
    team = await find_own_team(store, user_id)
    if not team:
        raise ValidationFailed("Primero debes crear un equipo / You must create a team first")
    return team


async def with_members(store: RecordStore, team: dict) -> dict:
    """Anexa pilotos e staff da equipe (buscados em paralelo)."""
    pilots, staff = await gather_all(
        store.list(PILOTS, {"team_id": team["id"]}, ("created_at", False)),
        store.list(STAFF, {"team_id": team["id"]}, ("created_at", False)),
    )
    return {**team, "pilots": pilots, "staff": staff}


def _validate_number_of_pilots(value) -> None:
    if value is None or not (settings.MIN_PILOTS <= value <= settings.MAX_PILOTS):
        raise ValidationFailed(
            f"El número de pilotos debe ser entre {settings.MIN_PILOTS} y {settings.MAX_PILOTS} / "
            f"Number of pilots must be between {settings.MIN_PILOTS} and {settings.MAX_PILOTS}"
        )


def _validate_engine_capacity(value) -> None:
    if value not in ENGINE_CAPACITIES:
        raise ValidationFailed("Cilindrada inválida / Invalid engine capacity")


class TeamService:

    def __init__(self, store: RecordStore):
        self.store = store

    async def get_own_team(self, user_id: str) -> Optional[dict]:
        team = await find_own_team(self.store, user_id)
        if not team:
            return None
        return await with_members(self.store, team)

    async def get_registration_settings(self) -> Optional[dict]:
        return await self.store.get(REGISTRATION_SETTINGS, {})

    async def create_team(self, identity: Identity, team_in: TeamCreate) -> dict:
        """
        Regras na ordem: equipe duplicada, inscrições fechadas, prazo vencido,
        limite de equipes, campos obrigatórios, faixa de pilotos.
        """
        if await find_own_team(self.store, identity.user_id):
            raise ValidationFailed("Ya tienes un equipo registrado / You already have a registered team")

        reg = await self.get_registration_settings()
        if not reg or not reg.get("registration_open"):
            raise ValidationFailed("Las inscripciones están cerradas / Registrations are closed")

        now = utcnow()
        deadline = as_utc(reg.get("registration_deadline"))
        if deadline and deadline < now:
            raise ValidationFailed("El plazo de inscripción ha terminado / Registration deadline has passed")

        max_teams = reg.get("max_teams")
        if max_teams:
            count = await self.store.count(TEAMS)
            if count >= max_teams:
                raise CapacityExceeded("Se ha alcanzado el número máximo de equipos / Maximum number of teams reached")

        if not team_in.name or not team_in.number_of_pilots:
            raise ValidationFailed(
                "Nombre de equipo y número de pilotos son obligatorios / Team name and number of pilots are required"
            )
        _validate_number_of_pilots(team_in.number_of_pilots)

        record = team_in.patch()
        record["engine_capacity"] = team_in.engine_capacity or EngineCapacity.CC125_4T.value
        _validate_engine_capacity(record["engine_capacity"])

        gdpr_consent = bool(team_in.gdpr_consent)
        record.update(
            representative_user_id=identity.user_id,
            representative_email=team_in.representative_email or identity.email,
            gdpr_consent=gdpr_consent,
            gdpr_consent_date=now if gdpr_consent else None,
            status=RegistrationStatus.DRAFT.value,
            motorcycle_photo_status=PhotoStatus.PENDING.value,
        )

        team = await self.store.insert(TEAMS, record)
        logger.info(f"Equipe criada: {team['name']} ({team['id']}) por {identity.user_id}")
        return team

    async def update_own_team(self, user_id: str, team_in: TeamUpdate) -> dict:
        team = await find_own_team(self.store, user_id)
        if not team:
            raise NotFound("Equipo no encontrado / Team not found")

        patch = team_in.patch()
        if "name" in patch and not patch["name"]:
            raise ValidationFailed("El nombre del equipo es obligatorio / Team name is required")
        if "number_of_pilots" in patch:
            _validate_number_of_pilots(patch["number_of_pilots"])
        if "engine_capacity" in patch:
            _validate_engine_capacity(patch["engine_capacity"])

        if "gdpr_consent" in patch:
            patch["gdpr_consent"] = bool(patch["gdpr_consent"])
            if not patch["gdpr_consent"]:
                patch["gdpr_consent_date"] = None
            elif not team.get("gdpr_consent"):
                patch["gdpr_consent_date"] = utcnow()

        updated = await self.store.update(TEAMS, team["id"], patch)
        if not updated:
            raise NotFound("Equipo no encontrado / Team not found")
        return updated

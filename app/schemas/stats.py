from typing import Dict
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class TeamStats(BaseModel):
    """Resumo do painel admin. Serializado em camelCase (model_dump(by_alias=True))."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int
    draft: int
    pending: int
    confirmed: int
    cancelled: int
    totals_by_status: Dict[str, int]
    total_pilots: int
    total_staff: int
    experience_levels: Dict[str, int]
    engine_types: Dict[str, int]
    staff_roles: Dict[str, int]
    registrations_by_date: Dict[str, int]
    teams_without_gdpr: int
    conversion_rate: int
    avg_pilots_per_team: str
    pending_photo_reviews: int

from collections import Counter
from typing import Any, Dict, Iterable, List

from app.models.pilot import MotorcycleExperience
from app.models.staff import StaffRole
from app.models.team import EngineCapacity, PhotoStatus, RegistrationStatus
from app.schemas.stats import TeamStats
from app.utils.dates import utc_date


def _buckets(values: Iterable[Any], keys: List[str]) -> Dict[str, int]:
    """Conta por valor do enum; todos os baldes aparecem, inclusive os zerados."""
    counter = Counter(values)
    return {key: counter.get(key, 0) for key in keys}


def _registrations_by_date(teams: List[dict]) -> Dict[str, int]:
    # Equipes sem created_at legível ficam de fora (não existe balde "desconhecido")
    counter = Counter()
    for team in teams:
        day = utc_date(team.get("created_at"))
        if day:
            counter[day.isoformat()] += 1
    return dict(sorted(counter.items()))


def aggregate(teams: List[dict]) -> TeamStats:
    """
    Estatísticas do painel admin.
    Recebe as equipes já com as listas "pilots" e "staff" preenchidas. Sem I/O.
    """
    total = len(teams)
    all_pilots = [p for t in teams for p in (t.get("pilots") or [])]
    all_staff = [s for t in teams for s in (t.get("staff") or [])]

    by_status = _buckets((t.get("status") for t in teams), [s.value for s in RegistrationStatus])
    confirmed = by_status[RegistrationStatus.CONFIRMED.value]

    # Arredondamento "half up" (12.5% -> 13%)
    conversion_rate = int(100 * confirmed / total + 0.5) if total > 0 else 0

    # Mantido como string ("4.5", "0") por compatibilidade com o painel
    avg_pilots = f"{len(all_pilots) / total:.1f}" if total > 0 else "0"

    return TeamStats(
        total=total,
        draft=by_status[RegistrationStatus.DRAFT.value],
        pending=by_status[RegistrationStatus.PENDING.value],
        confirmed=confirmed,
        cancelled=by_status[RegistrationStatus.CANCELLED.value],
        totals_by_status=by_status,
        total_pilots=len(all_pilots),
        total_staff=len(all_staff),
        experience_levels=_buckets(
            (p.get("motorcycle_experience") or p.get("driving_level") for p in all_pilots),
            [e.value for e in MotorcycleExperience],
        ),
        engine_types=_buckets((t.get("engine_capacity") for t in teams), [e.value for e in EngineCapacity]),
        staff_roles=_buckets((s.get("role") for s in all_staff), [r.value for r in StaffRole]),
        registrations_by_date=_registrations_by_date(teams),
        teams_without_gdpr=sum(1 for t in teams if not t.get("gdpr_consent")),
        conversion_rate=conversion_rate,
        avg_pilots_per_team=avg_pilots,
        pending_photo_reviews=sum(1 for t in teams if t.get("motorcycle_photo_status") == PhotoStatus.PENDING.value),
    )

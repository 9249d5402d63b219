from datetime import datetime, timedelta, timezone

from app.services.stats import aggregate


def make_team(status="draft", pilots=(), staff=(), **fields):
    team = {
        "id": fields.pop("id", f"team-{status}"),
        "status": status,
        "engine_capacity": "125cc_4t",
        "gdpr_consent": True,
        "motorcycle_photo_status": "approved",
        "created_at": datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc),
        "pilots": [{"motorcycle_experience": level} for level in pilots],
        "staff": [{"role": role} for role in staff],
    }
    team.update(fields)
    return team


def test_empty_input():
    stats = aggregate([]).model_dump(by_alias=True)

    assert stats["total"] == 0
    assert stats["conversionRate"] == 0
    assert stats["avgPilotsPerTeam"] == "0"
    assert stats["registrationsByDate"] == {}
    assert stats["totalsByStatus"] == {"draft": 0, "pending": 0, "confirmed": 0, "cancelled": 0}
    assert stats["staffRoles"] == {"mechanic": 0, "coordinator": 0, "support": 0}
    assert len(stats["experienceLevels"]) == 6


def test_conversion_rate_example():
    teams = [make_team("draft"), make_team("confirmed"), make_team("confirmed"), make_team("cancelled")]

    stats = aggregate(teams)

    assert stats.conversion_rate == 50
    assert stats.confirmed == 2
    assert stats.totals_by_status == {"draft": 1, "pending": 0, "confirmed": 2, "cancelled": 1}


def test_conversion_rate_rounds_half_up():
    teams = [make_team("confirmed")] + [make_team("pending") for _ in range(7)]

    assert aggregate(teams).conversion_rate == 13


def test_bucket_sums_match_totals():
    teams = [
        make_team("confirmed", pilots=["principiante", "rutero", "semi_pro"], staff=["mechanic", "support"]),
        make_team("pending", pilots=["tandero_medio", "tandero_medio"], staff=["coordinator"],
                  engine_capacity="50cc_2t"),
        make_team("draft"),
    ]

    stats = aggregate(teams)

    assert stats.total_pilots == 5
    assert stats.total_staff == 3
    assert sum(stats.experience_levels.values()) == stats.total_pilots
    assert sum(stats.staff_roles.values()) == stats.total_staff
    assert sum(stats.totals_by_status.values()) == stats.total
    assert stats.experience_levels["tandero_medio"] == 2
    assert stats.engine_types == {"125cc_4t": 2, "50cc_2t": 1}
    assert stats.avg_pilots_per_team == "1.7"


def test_gdpr_and_photo_counters():
    teams = [
        make_team(gdpr_consent=False, motorcycle_photo_status="pending"),
        make_team(gdpr_consent=None),
        make_team(motorcycle_photo_status="pending"),
        make_team(motorcycle_photo_status="rejected"),
    ]

    stats = aggregate(teams)

    assert stats.teams_without_gdpr == 2
    assert stats.pending_photo_reviews == 2


def test_registrations_by_date_uses_utc_and_skips_bad_timestamps():
    madrid = timezone(timedelta(hours=2))
    teams = [
        make_team(created_at=datetime(2026, 3, 1, 23, 30, tzinfo=timezone.utc)),
        # 01:00 em Madrid ainda é dia 1 em UTC
        make_team(created_at=datetime(2026, 3, 2, 1, 0, tzinfo=madrid)),
        make_team(created_at="2026-03-05T08:00:00Z"),
        make_team(created_at="não é uma data"),
        make_team(created_at=None),
    ]

    stats = aggregate(teams)

    assert stats.registrations_by_date == {"2026-03-01": 2, "2026-03-05": 1}
    assert sum(stats.registrations_by_date.values()) <= stats.total


def test_serialized_keys_are_camel_case():
    stats = aggregate([make_team("confirmed", pilots=["rutero"])]).model_dump(by_alias=True)

    for key in ("totalPilots", "totalStaff", "experienceLevels", "engineTypes", "staffRoles",
                "registrationsByDate", "teamsWithoutGdpr", "conversionRate", "avgPilotsPerTeam",
                "pendingPhotoReviews", "totalsByStatus"):
        assert key in stats
    assert stats["conversionRate"] == 100
    assert stats["avgPilotsPerTeam"] == "1.0"

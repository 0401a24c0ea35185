import pytest
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from rescue_api.core.exceptions import AggregateSaveError, ErrorKind, NotFoundError, ValidationError
from rescue_api.models import Company, Location, Member, Resource, Shift, Team, TeamType, Vehicle


def _count(db: Session, model) -> int:
    return db.query(model).count()

# ==== save ====

def test_save_team_with_new_shift_computes_duration(orchestrator, team_data_factory, db: Session):
    team = orchestrator.save(team_data_factory())

    assert team.id is not None
    assert team.active is True
    assert team.shift.id is not None
    assert team.shift.duration_hours == 8
    assert db.get(Team, team.id).shift_id == team.shift.id

def test_save_ignores_client_duration(orchestrator, team_data_factory, shift_data_factory):
    team = orchestrator.save(team_data_factory(shift=shift_data_factory(duration_hours=3)))
    assert team.shift.duration_hours == 8

def test_save_with_company_and_team_type(orchestrator, team_data_factory, company_data_factory, db: Session):
    team = orchestrator.save(team_data_factory(
        company=company_data_factory(name="Primera"),
        team_type={"name": "Rescate"},
    ))
    assert team.company.name == "Primera"
    assert team.company.location.street == "Av. Libertador"
    assert team.team_type.name == "Rescate"
    assert _count(db, Location) == 1

def test_save_with_existing_shift_by_id(orchestrator, team_data_factory, db: Session):
    first = orchestrator.save(team_data_factory())
    second = orchestrator.save(team_data_factory(name="Bravo", shift={"id": first.shift.id}))

    assert second.shift.id == first.shift.id
    assert _count(db, Shift) == 1

def test_save_resolves_owned_collections(orchestrator, team_data_factory, make_member, make_vehicle, make_resource):
    m1, m2 = make_member(), make_member()
    vehicle, resource = make_vehicle(), make_resource()

    team = orchestrator.save(team_data_factory(
        members=[{"id": m1.id, "first_name": "stale"}, {"id": m2.id}],
        vehicles=[{"id": vehicle.id}],
        resources=[{"id": resource.id}],
    ))

    assert [m.id for m in team.members] == [m1.id, m2.id]
    assert team.members[0].first_name == "Juan"
    assert team.vehicles[0].team_id == team.id
    assert team.resources[0].team_id == team.id

def test_save_missing_member_aborts_whole_save(orchestrator, team_data_factory, make_member, db: Session):
    member = make_member()

    with pytest.raises(AggregateSaveError) as exc_info:
        orchestrator.save(team_data_factory(members=[{"id": member.id}, {"id": 999}]))

    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert isinstance(exc_info.value.cause, NotFoundError)
    assert exc_info.value.message.startswith("Error saving team:")
    assert _count(db, Team) == 0
    assert _count(db, Shift) == 0
    assert db.get(Member, member.id).team_id is None

def test_save_invalid_name(orchestrator, team_data_factory, db: Session):
    with pytest.raises(AggregateSaveError) as exc_info:
        orchestrator.save(team_data_factory(name="A" * 51))
    assert exc_info.value.kind is ErrorKind.VALIDATION
    assert exc_info.value.details == [{"field": "name", "reason": "exceeds max length 50"}]
    assert _count(db, Team) == 0

def test_save_without_leader_fails_aggregate_check(orchestrator, team_data_factory):
    with pytest.raises(AggregateSaveError) as exc_info:
        orchestrator.save(team_data_factory(leader=None))
    assert exc_info.value.details == [{"field": "leader", "reason": "must not be null"}]

def test_save_invalid_nested_shift_is_prefixed(orchestrator, team_data_factory, shift_data_factory):
    bad_shift = shift_data_factory(end_at=shift_data_factory()["start_at"])
    with pytest.raises(AggregateSaveError) as exc_info:
        orchestrator.save(team_data_factory(shift=bad_shift))
    assert exc_info.value.kind is ErrorKind.VALIDATION
    assert exc_info.value.cause.field == "shift.dates"

def test_save_with_unknown_shift_id(orchestrator, team_data_factory):
    with pytest.raises(AggregateSaveError) as exc_info:
        orchestrator.save(team_data_factory(shift={"id": 999}))
    assert exc_info.value.kind is ErrorKind.NOT_FOUND

def test_save_duplicate_company_name_is_conflict(orchestrator, team_data_factory, company_data_factory):
    orchestrator.save(team_data_factory(company=company_data_factory(name="Primera")))
    with pytest.raises(AggregateSaveError) as exc_info:
        orchestrator.save(team_data_factory(name="Bravo", company=company_data_factory(name="Primera")))
    assert exc_info.value.kind is ErrorKind.CONFLICT

# ==== update ====

def test_update_only_touches_present_fields(orchestrator, saved_team, db: Session):
    orchestrator.update({"member_count": 7}, saved_team.id)

    stored = db.get(Team, saved_team.id)
    assert stored.member_count == 7
    assert stored.name == "Alpha"
    assert stored.leader == "J. Smith"
    assert stored.shift.duration_hours == 8

def test_update_explicit_null_keeps_value(orchestrator, saved_team, db: Session):
    orchestrator.update({"leader": None, "name": "Bravo"}, saved_team.id)
    stored = db.get(Team, saved_team.id)
    assert stored.leader == "J. Smith"
    assert stored.name == "Bravo"

def test_update_invalid_name_leaves_team_unchanged(orchestrator, saved_team, db: Session):
    with pytest.raises(ValidationError) as exc_info:
        orchestrator.update({"name": "A" * 51, "member_count": 9}, saved_team.id)

    assert exc_info.value.field == "name"
    stored = db.get(Team, saved_team.id)
    assert stored.name == "Alpha"
    assert stored.member_count == 5

def test_update_missing_team(orchestrator):
    with pytest.raises(NotFoundError):
        orchestrator.update({"name": "Ghost"}, 999)

def test_update_merges_shift_by_id(orchestrator, saved_team, db: Session):
    shift_id = saved_team.shift.id
    orchestrator.update({"shift": {"id": shift_id, "name": "Night shift"}}, saved_team.id)

    stored = db.get(Shift, shift_id)
    assert stored.name == "Night shift"
    assert stored.duration_hours == 8
    assert _count(db, Shift) == 1

def test_update_replaces_members_and_deletes_removed(orchestrator, team_data_factory, make_member, db: Session):
    m1, m2, m3 = make_member(), make_member(), make_member()
    team = orchestrator.save(team_data_factory(members=[{"id": m1.id}, {"id": m2.id}]))

    orchestrator.update({"members": [{"id": m2.id}, {"id": m3.id}]}, team.id)

    stored = db.get(Team, team.id)
    assert [m.id for m in stored.members] == [m2.id, m3.id]
    assert db.get(Member, m1.id) is None

def test_update_with_missing_member_leaves_collection_unchanged(orchestrator, team_data_factory, make_member, db: Session):
    m1 = make_member()
    team = orchestrator.save(team_data_factory(members=[{"id": m1.id}]))

    with pytest.raises(NotFoundError):
        orchestrator.update({"members": [{"id": m1.id}, {"id": 999}], "name": "Bravo"}, team.id)

    stored = db.get(Team, team.id)
    assert [m.id for m in stored.members] == [m1.id]
    assert stored.name == "Alpha"

def test_update_with_empty_collection_clears_it(orchestrator, team_data_factory, make_vehicle, db: Session):
    vehicle = make_vehicle()
    team = orchestrator.save(team_data_factory(vehicles=[{"id": vehicle.id}]))

    orchestrator.update({"vehicles": []}, team.id)

    assert db.get(Team, team.id).vehicles == []
    assert _count(db, Vehicle) == 0

# ==== delete ====

def test_delete_removes_owned_rows_but_keeps_references(
    orchestrator, team_data_factory, company_data_factory, make_member, make_vehicle, make_resource, db: Session
):
    team = orchestrator.save(team_data_factory(
        company=company_data_factory(),
        team_type={"name": "Rescate"},
        members=[{"id": make_member().id}],
        vehicles=[{"id": make_vehicle().id}],
        resources=[{"id": make_resource().id}],
    ))

    orchestrator.delete(team.id)

    assert db.get(Team, team.id) is None
    assert _count(db, Member) == 0
    assert _count(db, Vehicle) == 0
    assert _count(db, Resource) == 0
    assert _count(db, Shift) == 1
    assert _count(db, Company) == 1
    assert _count(db, TeamType) == 1

def test_delete_missing_team(orchestrator):
    with pytest.raises(NotFoundError) as exc_info:
        orchestrator.delete(999)
    assert exc_info.value.entity == "team"

def test_get_and_list(orchestrator, saved_team):
    assert orchestrator.get(saved_team.id).name == "Alpha"
    assert [t.id for t in orchestrator.list()] == [saved_team.id]

def test_update_nested_shift_with_aware_end(orchestrator, saved_team, db: Session):
    shift_id = saved_team.shift.id
    end = datetime(2025, 1, 1, 18, 0, tzinfo=timezone.utc)

    orchestrator.update({"shift": {"id": shift_id, "end_at": end}}, saved_team.id)

    assert db.get(Shift, shift_id).duration_hours == 10

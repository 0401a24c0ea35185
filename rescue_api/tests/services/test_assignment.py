import pytest
from sqlalchemy.orm import Session

from rescue_api.core.exceptions import NotFoundError, ValidationError
from rescue_api.crud.company import create_company
from rescue_api.crud.shift import create_shift
from rescue_api.crud.team_type import create_team_type
from rescue_api.models import Member, Team


def test_assign_shift(assignments, saved_team, shift_data_factory, db: Session):
    night = create_shift(db, shift_data_factory(name="Night shift"))

    team = assignments.assign_shift(saved_team.id, night.id)

    assert team.shift.id == night.id
    assert db.get(Team, saved_team.id).shift_id == night.id

def test_assign_shift_twice_is_idempotent(assignments, saved_team, shift_data_factory, db: Session):
    night = create_shift(db, shift_data_factory(name="Night shift"))
    assignments.assign_shift(saved_team.id, night.id)
    assignments.assign_shift(saved_team.id, night.id)
    assert db.get(Team, saved_team.id).shift_id == night.id

def test_assign_company(assignments, saved_team, company_data_factory, db: Session):
    company = create_company(db, company_data_factory())
    assignments.assign_company(saved_team.id, company.id)
    assert db.get(Team, saved_team.id).company_id == company.id

def test_assign_missing_company_leaves_reference_unchanged(assignments, saved_team, company_data_factory, db: Session):
    company = create_company(db, company_data_factory())
    assignments.assign_company(saved_team.id, company.id)

    with pytest.raises(NotFoundError) as exc_info:
        assignments.assign_company(saved_team.id, 999)

    assert exc_info.value.entity == "company"
    assert db.get(Team, saved_team.id).company_id == company.id

def test_assign_team_type(assignments, saved_team, db: Session):
    team_type = create_team_type(db, {"name": "Hazmat"})
    team = assignments.assign_team_type(saved_team.id, team_type.id)
    assert team.team_type.name == "Hazmat"

def test_assign_to_missing_team(assignments, db: Session):
    team_type = create_team_type(db, {"name": "Hazmat"})
    with pytest.raises(NotFoundError) as exc_info:
        assignments.assign_team_type(999, team_type.id)
    assert exc_info.value.entity == "team"

def test_assign_members_replaces_collection(assignments, orchestrator, team_data_factory, make_member, db: Session):
    m1, m2, m3 = make_member(), make_member(), make_member()
    team = orchestrator.save(team_data_factory(members=[{"id": m1.id}]))

    assignments.assign_members(team.id, [m2.id, m3.id])

    stored = db.get(Team, team.id)
    assert [m.id for m in stored.members] == [m2.id, m3.id]
    assert db.get(Member, m1.id) is None

@pytest.mark.parametrize("member_ids", [[], None])
def test_assign_members_requires_non_empty_list(assignments, saved_team, member_ids):
    with pytest.raises(ValidationError) as exc_info:
        assignments.assign_members(saved_team.id, member_ids)
    assert exc_info.value.field == "member_ids"
    assert exc_info.value.reason == "list must not be empty"

def test_assign_members_with_missing_id_changes_nothing(assignments, orchestrator, team_data_factory, make_member, db: Session):
    m1, m2 = make_member(), make_member()
    team = orchestrator.save(team_data_factory(members=[{"id": m1.id}]))

    with pytest.raises(NotFoundError):
        assignments.assign_members(team.id, [m2.id, 999])

    stored = db.get(Team, team.id)
    assert [m.id for m in stored.members] == [m1.id]
    assert db.get(Member, m2.id).team_id is None

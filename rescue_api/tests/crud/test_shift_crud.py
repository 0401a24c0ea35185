import pytest
from sqlalchemy.orm import Session
from datetime import datetime, timedelta, timezone

from rescue_api.core.exceptions import ConflictError, NotFoundError, ValidationError
from rescue_api.crud.shift import create_shift, delete_shift, get_all_shifts, get_shift, update_shift
from rescue_api.models.shift import Shift


def test_create_shift(db: Session, shift_data_factory):
    shift = create_shift(db, shift_data_factory(duration_hours=40, id=77))

    assert shift.id is not None
    assert db.get(Shift, 77) is None
    assert shift.duration_hours == 8
    assert get_shift(db, shift.id).name == "Morning shift"

def test_create_shift_invalid_dates(db: Session, shift_data_factory):
    with pytest.raises(ValidationError) as exc_info:
        create_shift(db, shift_data_factory(end_at=datetime(2025, 1, 1, 7, 0)))
    assert exc_info.value.field == "dates"
    assert db.query(Shift).count() == 0

def test_create_shift_too_long(db: Session, shift_data_factory):
    with pytest.raises(ValidationError) as exc_info:
        create_shift(db, shift_data_factory(end_at=datetime(2025, 1, 5, 13, 0)))
    assert exc_info.value.field == "duration_hours"

def test_get_shift_not_found(db: Session):
    with pytest.raises(NotFoundError):
        get_shift(db, 999)

def test_get_all_shifts_ordered(db: Session, shift_data_factory):
    first = create_shift(db, shift_data_factory(name="First"))
    second = create_shift(db, shift_data_factory(name="Second"))
    assert [s.id for s in get_all_shifts(db)] == [first.id, second.id]

def test_update_shift_recomputes_duration(db: Session, shift_data_factory):
    shift = create_shift(db, shift_data_factory())

    updated = update_shift(db, shift.id, {"end_at": datetime(2025, 1, 1, 20, 0)})

    assert updated.duration_hours == 12
    assert updated.name == "Morning shift"

def test_update_shift_invalid_keeps_stored(db: Session, shift_data_factory):
    shift = create_shift(db, shift_data_factory())

    with pytest.raises(ValidationError):
        update_shift(db, shift.id, {"name": "Late", "end_at": datetime(2025, 1, 1, 6, 0)})

    stored = get_shift(db, shift.id)
    assert stored.name == "Morning shift"
    assert stored.end_at == datetime(2025, 1, 1, 16, 0)

def test_delete_shift(db: Session, shift_data_factory):
    shift = create_shift(db, shift_data_factory())
    delete_shift(db, shift.id)
    with pytest.raises(NotFoundError):
        get_shift(db, shift.id)

def test_delete_shift_in_use(db: Session, saved_team):
    with pytest.raises(ConflictError) as exc_info:
        delete_shift(db, saved_team.shift.id)
    assert exc_info.value.field == "shift_id"
    assert get_shift(db, saved_team.shift.id) is not None

def test_create_shift_with_timezone_then_partial_update(db: Session, shift_data_factory):
    santiago = timezone(timedelta(hours=-3))
    shift = create_shift(db, shift_data_factory(
        start_at=datetime(2025, 1, 1, 8, 0, tzinfo=santiago),
        end_at=datetime(2025, 1, 1, 16, 0, tzinfo=santiago),
    ))
    assert shift.start_at == datetime(2025, 1, 1, 11, 0)

    updated = update_shift(db, shift.id, {"end_at": datetime(2025, 1, 1, 18, 0, tzinfo=santiago)})

    assert updated.end_at == datetime(2025, 1, 1, 21, 0)
    assert updated.duration_hours == 10

def test_update_naive_shift_with_aware_timestamp(db: Session, shift_data_factory):
    shift = create_shift(db, shift_data_factory())
    updated = update_shift(db, shift.id, {"end_at": datetime(2025, 1, 1, 20, 0, tzinfo=timezone.utc)})
    assert updated.duration_hours == 12

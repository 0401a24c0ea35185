#rescue_api/crud/shift.py
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping
import logging

from rescue_api.core.exceptions import ConflictError
from rescue_api.crud.base import EntityKind, Repository
from rescue_api.database import transaction
from rescue_api.models.shift import Shift
from rescue_api.models.team import Team
from rescue_api.services.patching import apply_patch
from rescue_api.services.validation import (
    SHIFT_RULES,
    ensure_valid,
    shift_duration_hours,
    validate_shift,
)

logger = logging.getLogger("Rescue.Shifts")

SHIFT_FIELDS = ("name", "start_at", "end_at")
SHIFT_TIMESTAMPS = ("start_at", "end_at")

def to_naive_utc(value: Any) -> Any:
    """Время с часовым поясом переводится в UTC и хранится без пояса."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

def _normalized(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: to_naive_utc(v) if k in SHIFT_TIMESTAMPS else v for k, v in data.items()}

def _repo(db: Session) -> Repository[Shift]:
    return Repository(db, Shift, EntityKind.SHIFT)

def _finalize(shift: Shift) -> None:
    """Полная проверка смены и пересчёт длительности; значение клиента не используется."""
    ensure_valid(validate_shift(shift))
    shift.duration_hours = shift_duration_hours(shift.start_at, shift.end_at)

def persist_shift(db: Session, data: Mapping[str, Any]) -> Shift:
    """
    Сохранить смену внутри текущей транзакции (только flush).
    С `id` — слить присланные поля в существующую смену, без `id` — создать новую.
    """
    data = _normalized(data)
    shift_id = data.get("id")
    if shift_id is not None:
        shift = _repo(db).get(shift_id)
        apply_patch(shift, data, SHIFT_RULES, fields=SHIFT_FIELDS)
    else:
        shift = Shift(**{field: data.get(field) for field in SHIFT_FIELDS})
    _finalize(shift)
    return _repo(db).save(shift)

def create_shift(db: Session, data: Dict[str, Any]) -> Shift:
    with transaction(db):
        shift = persist_shift(db, {k: v for k, v in data.items() if k != "id"})
    logger.info(f"Created shift '{shift.name}' (ID: {shift.id}, {shift.duration_hours}h)")
    return shift

def get_shift(db: Session, shift_id: int) -> Shift:
    return _repo(db).get(shift_id)

def get_all_shifts(db: Session) -> List[Shift]:
    return _repo(db).list()

def update_shift(db: Session, shift_id: int, changes: Dict[str, Any]) -> Shift:
    """
    Частичное обновление: присланные поля проверяются и копируются,
    затем даты проверяются целиком и длительность пересчитывается.
    """
    with transaction(db):
        shift = _repo(db).get(shift_id, for_update=True)
        apply_patch(shift, _normalized(changes), SHIFT_RULES, fields=SHIFT_FIELDS)
        _finalize(shift)
        _repo(db).save(shift)
    logger.info(f"Updated shift {shift_id}")
    return shift

def delete_shift(db: Session, shift_id: int) -> None:
    with transaction(db):
        repo = _repo(db)
        repo.get(shift_id)
        if db.query(Team.id).filter(Team.shift_id == shift_id).first():
            raise ConflictError(f"Shift {shift_id} is still assigned to a team.", field="shift_id")
        repo.delete(shift_id)
    logger.info(f"Deleted shift {shift_id}")

#rescue_api/crud/team_type.py
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Mapping
import logging

from rescue_api.core.exceptions import ConflictError
from rescue_api.crud.base import EntityKind, Repository
from rescue_api.database import transaction
from rescue_api.models.team import Team
from rescue_api.models.team_type import TeamType
from rescue_api.services.patching import apply_patch
from rescue_api.services.validation import TEAM_TYPE_RULES, ensure_valid, validate_fields

logger = logging.getLogger("Rescue.TeamTypes")

def _repo(db: Session) -> Repository[TeamType]:
    return Repository(db, TeamType, EntityKind.TEAM_TYPE)

def persist_team_type(db: Session, data: Mapping[str, Any]) -> TeamType:
    team_type_id = data.get("id")
    if team_type_id is not None:
        team_type = _repo(db).get(team_type_id)
        apply_patch(team_type, data, TEAM_TYPE_RULES)
    else:
        team_type = TeamType(name=data.get("name"))
    ensure_valid(validate_fields(TEAM_TYPE_RULES, team_type))
    return _repo(db).save(team_type)

def create_team_type(db: Session, data: Dict[str, Any]) -> TeamType:
    with transaction(db):
        team_type = persist_team_type(db, {k: v for k, v in data.items() if k != "id"})
    logger.info(f"Created team type '{team_type.name}' (ID: {team_type.id})")
    return team_type

def get_team_type(db: Session, team_type_id: int) -> TeamType:
    return _repo(db).get(team_type_id)

def get_all_team_types(db: Session) -> List[TeamType]:
    return _repo(db).list()

def update_team_type(db: Session, team_type_id: int, changes: Dict[str, Any]) -> TeamType:
    with transaction(db):
        team_type = persist_team_type(db, {**changes, "id": team_type_id})
    logger.info(f"Updated team type {team_type_id}")
    return team_type

def delete_team_type(db: Session, team_type_id: int) -> None:
    with transaction(db):
        repo = _repo(db)
        repo.get(team_type_id)
        if db.query(Team.id).filter(Team.team_type_id == team_type_id).first():
            raise ConflictError(f"Team type {team_type_id} is still assigned to a team.", field="team_type_id")
        repo.delete(team_type_id)
    logger.info(f"Deleted team type {team_type_id}")

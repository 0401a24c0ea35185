#rescue_api/crud/roster.py
"""
Бойцы, машины и ресурсы: создание и чтение.

Команда получает эти записи только через разрешение по id, поэтому здесь
они создаются без привязки к команде.
"""
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Mapping, Sequence, Type
import logging

from rescue_api.core.exceptions import ConflictError
from rescue_api.crud.base import EntityKind, Repository
from rescue_api.database import transaction
from rescue_api.models.roster import Member, Resource, Vehicle
from rescue_api.services.validation import (
    MEMBER_RULES,
    RESOURCE_RULES,
    VEHICLE_RULES,
    Rule,
    ensure_valid,
    validate_fields,
)

logger = logging.getLogger("Rescue.Roster")

def _create(db: Session, model: Type, kind: EntityKind, rules: Mapping[str, Sequence[Rule]], data: Mapping[str, Any]):
    entity = model(**{field: data.get(field) for field in rules})
    ensure_valid(validate_fields(rules, entity))
    with transaction(db):
        if model is Member and db.query(Member.id).filter(Member.phone == entity.phone).first():
            raise ConflictError(f"Member with phone {entity.phone} already exists.", field="phone")
        Repository(db, model, kind).save(entity)
    logger.info(f"Created {kind.value} (ID: {entity.id})")
    return entity

def create_member(db: Session, data: Dict[str, Any]) -> Member:
    return _create(db, Member, EntityKind.MEMBER, MEMBER_RULES, data)

def create_vehicle(db: Session, data: Dict[str, Any]) -> Vehicle:
    return _create(db, Vehicle, EntityKind.VEHICLE, VEHICLE_RULES, data)

def create_resource(db: Session, data: Dict[str, Any]) -> Resource:
    return _create(db, Resource, EntityKind.RESOURCE, RESOURCE_RULES, data)

def get_member(db: Session, member_id: int) -> Member:
    return Repository(db, Member, EntityKind.MEMBER).get(member_id)

def get_vehicle(db: Session, vehicle_id: int) -> Vehicle:
    return Repository(db, Vehicle, EntityKind.VEHICLE).get(vehicle_id)

def get_resource(db: Session, resource_id: int) -> Resource:
    return Repository(db, Resource, EntityKind.RESOURCE).get(resource_id)

def get_all_members(db: Session) -> List[Member]:
    return Repository(db, Member, EntityKind.MEMBER).list()

def get_all_vehicles(db: Session) -> List[Vehicle]:
    return Repository(db, Vehicle, EntityKind.VEHICLE).list()

def get_all_resources(db: Session) -> List[Resource]:
    return Repository(db, Resource, EntityKind.RESOURCE).list()

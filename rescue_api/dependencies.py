# rescue_api/dependencies.py
"""
Сборка компонентов команды. Все зависимости передаются явно;
FastAPI поставляет только сессию запроса.
"""
from typing import Dict

from fastapi import Depends
from sqlalchemy.orm import Session

from rescue_api.crud.base import EntityKind, ReferenceLookup, Repository
from rescue_api.database import get_db
from rescue_api.models import Company, Member, Resource, Shift, Team, TeamType, Vehicle
from rescue_api.services.assignment import AssignmentService
from rescue_api.services.resolver import RelationshipResolver
from rescue_api.services.team_orchestrator import TeamOrchestrator, owned_store_map

RESOLVABLE_MODELS = {
    EntityKind.SHIFT: Shift,
    EntityKind.COMPANY: Company,
    EntityKind.TEAM_TYPE: TeamType,
    EntityKind.MEMBER: Member,
    EntityKind.VEHICLE: Vehicle,
    EntityKind.RESOURCE: Resource,
}

def build_resolver(db: Session) -> RelationshipResolver:
    lookups: Dict[EntityKind, ReferenceLookup] = {
        kind: ReferenceLookup(Repository(db, model, kind)) for kind, model in RESOLVABLE_MODELS.items()
    }
    return RelationshipResolver(lookups)

def build_team_orchestrator(db: Session) -> TeamOrchestrator:
    return TeamOrchestrator(
        db=db,
        teams=Repository(db, Team, EntityKind.TEAM),
        resolver=build_resolver(db),
        owned_stores=owned_store_map(db),
    )

def build_assignment_service(db: Session) -> AssignmentService:
    return AssignmentService(
        db=db,
        teams=Repository(db, Team, EntityKind.TEAM),
        resolver=build_resolver(db),
        members_store=owned_store_map(db)["members"],
    )

def get_team_orchestrator(db: Session = Depends(get_db)) -> TeamOrchestrator:
    return build_team_orchestrator(db)

def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    return build_assignment_service(db)

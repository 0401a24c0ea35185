#rescue_api/crud/company.py
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Mapping
import logging

from rescue_api.core.exceptions import ConflictError, ValidationError
from rescue_api.crud.base import EntityKind, Repository
from rescue_api.database import transaction
from rescue_api.models.company import Company
from rescue_api.models.location import Location
from rescue_api.models.team import Team
from rescue_api.services.patching import apply_patch
from rescue_api.services.validation import (
    COMPANY_RULES,
    LOCATION_RULES,
    ensure_valid,
    validate_company,
    validate_fields,
    validate_location,
)

logger = logging.getLogger("Rescue.Companies")

LOCATION_FIELDS = ("street", "house_number", "district", "region")

def _companies(db: Session) -> Repository[Company]:
    return Repository(db, Company, EntityKind.COMPANY)

def _locations(db: Session) -> Repository[Location]:
    return Repository(db, Location, EntityKind.LOCATION)

def persist_location(db: Session, data: Mapping[str, Any]) -> Location:
    """
    Сохранить адрес (flush). С `id` — обновить существующий, без `id` — создать.
    Ошибки полей возвращаются без префикса; его добавляет вызывающий код.
    """
    location_id = data.get("id")
    if location_id is not None:
        location = _locations(db).get(location_id)
        apply_patch(location, data, LOCATION_RULES, fields=LOCATION_FIELDS)
    else:
        location = Location(**{field: data.get(field) for field in LOCATION_FIELDS})
    ensure_valid(validate_fields(LOCATION_RULES, location))
    return _locations(db).save(location)

def _ensure_unique_name(db: Session, company: Company) -> None:
    query = db.query(Company.id).filter(Company.name == company.name)
    if company.id is not None:
        query = query.filter(Company.id != company.id)
    if query.first():
        raise ConflictError(f"Company with name '{company.name}' already exists.", field="name")

def _ensure_location_free(db: Session, company: Company, location: Location) -> None:
    """Адрес принадлежит только одной роте."""
    if location.id is None:
        return
    query = db.query(Company.id).filter(Company.location_id == location.id)
    if company.id is not None:
        query = query.filter(Company.id != company.id)
    if query.first():
        raise ConflictError(f"Location {location.id} is already used by another company.", field="location_id")

def persist_company(db: Session, data: Mapping[str, Any]) -> Company:
    """
    Сохранить роту вместе с вложенным адресом (flush).
    С `id` — слить присланные поля в существующую роту.
    """
    company_id = data.get("id")
    if company_id is not None:
        company = _companies(db).get(company_id)
        apply_patch(company, data, COMPANY_RULES, fields=("name",))
    else:
        company = Company(name=data.get("name"))
        ensure_valid(validate_fields(COMPANY_RULES, company))

    location_data = data.get("location")
    if location_data is not None:
        try:
            location = persist_location(db, location_data)
        except ValidationError as e:
            raise e.under("location") from e
        _ensure_location_free(db, company, location)
        company.location = location

    ensure_valid(validate_company(company))
    _ensure_unique_name(db, company)
    return _companies(db).save(company)

def create_company(db: Session, data: Dict[str, Any]) -> Company:
    with transaction(db):
        company = persist_company(db, {k: v for k, v in data.items() if k != "id"})
    logger.info(f"Created company '{company.name}' (ID: {company.id})")
    return company

def get_company(db: Session, company_id: int) -> Company:
    return _companies(db).get(company_id)

def get_all_companies(db: Session) -> List[Company]:
    return _companies(db).list()

def update_company(db: Session, company_id: int, changes: Dict[str, Any]) -> Company:
    with transaction(db):
        company = persist_company(db, {**changes, "id": company_id})
    logger.info(f"Updated company {company_id}")
    return company

def delete_company(db: Session, company_id: int) -> None:
    with transaction(db):
        repo = _companies(db)
        repo.get(company_id)
        if db.query(Team.id).filter(Team.company_id == company_id).first():
            raise ConflictError(f"Company {company_id} is still assigned to a team.", field="company_id")
        repo.delete(company_id)
    logger.info(f"Deleted company {company_id}")

def assign_location(db: Session, company_id: int, location_id: int) -> Company:
    """
    Назначить роте существующий адрес.
    """
    with transaction(db):
        company = _companies(db).get(company_id, for_update=True)
        location = _locations(db).get(location_id)
        ensure_valid(validate_location(location))
        _ensure_location_free(db, company, location)
        company.location = location
        _companies(db).save(company)
    logger.info(f"Assigned location {location_id} to company {company_id}")
    return company

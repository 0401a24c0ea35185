#rescue_api/crud/base.py
"""
Общий слой хранения для оркестратора.

Repository         get / find / exists / save / delete / list по целочисленному id.
ReferenceLookup    только чтение поверх Repository: команда лишь ссылается на эти строки.
OwnedCollectionStore
                   заменяет или очищает коллекцию, которой владеет команда, и удаляет
                   каждую строку, покинувшую коллекцию.

Ничего здесь не делает commit: транзакцией владеет вызывающий код (см. database.transaction).
"""
from enum import Enum
from typing import Generic, List, Optional, Sequence, Type, TypeVar
import logging

from sqlalchemy.orm import Session

from rescue_api.core.exceptions import NotFoundError
from rescue_api.models.base import Base

logger = logging.getLogger("Rescue.Repository")

ModelT = TypeVar("ModelT", bound=Base)


class EntityKind(str, Enum):
    TEAM = "team"
    SHIFT = "shift"
    COMPANY = "company"
    LOCATION = "location"
    TEAM_TYPE = "team_type"
    MEMBER = "member"
    VEHICLE = "vehicle"
    RESOURCE = "resource"


class Repository(Generic[ModelT]):
    def __init__(self, db: Session, model: Type[ModelT], kind: EntityKind):
        self.db = db
        self.model = model
        self.kind = kind

    def find(self, entity_id: int, for_update: bool = False) -> Optional[ModelT]:
        query = self.db.query(self.model).filter(self.model.id == entity_id)
        if for_update:
            # Диалекты без FOR UPDATE (SQLite) просто его опускают
            query = query.with_for_update()
        return query.first()

    def get(self, entity_id: int, for_update: bool = False) -> ModelT:
        entity = self.find(entity_id, for_update=for_update)
        if entity is None:
            raise NotFoundError(self.kind.value, entity_id)
        return entity

    def exists(self, entity_id: int) -> bool:
        return self.db.query(self.model.id).filter(self.model.id == entity_id).first() is not None

    def list(self) -> List[ModelT]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def save(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()
        return entity

    def delete(self, entity_id: int) -> None:
        entity = self.get(entity_id)
        self.db.delete(entity)
        self.db.flush()


class ReferenceLookup(Generic[ModelT]):
    """Разрешение ссылок только на чтение; целевую строку не изменяет."""

    def __init__(self, repository: Repository[ModelT]):
        self._repository = repository

    @property
    def kind(self) -> EntityKind:
        return self._repository.kind

    def get(self, entity_id: int) -> ModelT:
        return self._repository.get(entity_id)

    def exists(self, entity_id: int) -> bool:
        return self._repository.exists(entity_id)


class OwnedCollectionStore:
    """
    Удаление при исключении для одной коллекции команды
    (`members`, `vehicles` или `resources`).
    """

    def __init__(self, db: Session, attribute: str):
        self.db = db
        self.attribute = attribute

    def replace(self, owner: Base, items: Sequence[Base]) -> None:
        current = list(getattr(owner, self.attribute))
        keep = {id(item) for item in items}
        removed = [item for item in current if id(item) not in keep]
        setattr(owner, self.attribute, list(items))
        for item in removed:
            self.db.delete(item)
        if removed:
            logger.info(f"Removed {len(removed)} {self.attribute} from {owner!r}")

    def clear(self, owner: Base) -> None:
        self.replace(owner, [])

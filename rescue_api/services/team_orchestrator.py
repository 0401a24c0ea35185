# rescue_api/services/team_orchestrator.py
"""
Единственный, кто записывает агрегат команды целиком.

Порядок сохранения: сначала ссылки (смена, рота и тип сохраняются через свои
crud-модули, с их правилами и сгенерированными id), затем коллекции заново
разрешаются по id, затем проверяются поля самой команды и пишется строка.
Каждый вызов выполняется в одной транзакции.
"""
from typing import Any, Callable, Dict, List, Mapping
import logging

from sqlalchemy.orm import Session

from rescue_api.core.exceptions import (
    AggregateSaveError,
    BaseAppException,
    NotFoundError,
    ValidationError,
)
from rescue_api.crud.base import EntityKind, OwnedCollectionStore, Repository
from rescue_api.crud.company import persist_company
from rescue_api.crud.shift import persist_shift
from rescue_api.crud.team_type import persist_team_type
from rescue_api.database import transaction
from rescue_api.models.team import Team
from rescue_api.services.patching import apply_patch
from rescue_api.services.resolver import RelationshipResolver
from rescue_api.services.validation import (
    TEAM_RULES,
    ensure_valid,
    validate_team,
    validate_team_aggregate,
)

logger = logging.getLogger("Rescue.Teams")

TEAM_SCALAR_FIELDS = ("name", "member_count", "active", "leader")

# attribute -> (persist function for the sub-entity)
REFERENCE_PERSISTERS: Dict[str, Callable[[Session, Mapping[str, Any]], Any]] = {
    "shift": persist_shift,
    "company": persist_company,
    "team_type": persist_team_type,
}

# attribute -> kind of the rows it owns
OWNED_COLLECTIONS: Dict[str, EntityKind] = {
    "members": EntityKind.MEMBER,
    "vehicles": EntityKind.VEHICLE,
    "resources": EntityKind.RESOURCE,
}


class TeamOrchestrator:
    def __init__(
        self,
        db: Session,
        teams: Repository[Team],
        resolver: RelationshipResolver,
        owned_stores: Mapping[str, OwnedCollectionStore],
    ):
        self.db = db
        self.teams = teams
        self.resolver = resolver
        self.owned_stores = dict(owned_stores)

    # ---- чтение ----

    def get(self, team_id: int) -> Team:
        return self.teams.get(team_id)

    def list(self) -> List[Team]:
        return self.teams.list()

    # ---- шаги агрегата ----

    def _persist_reference(self, attribute: str, data: Mapping[str, Any]) -> Any:
        try:
            return REFERENCE_PERSISTERS[attribute](self.db, data)
        except ValidationError as e:
            raise e.under(attribute) from e

    def _resolve_collection(self, attribute: str, items: Any) -> List[Any]:
        ids = self.resolver.extract_ids(items, field=attribute)
        return self.resolver.resolve_many(OWNED_COLLECTIONS[attribute], ids)

    def _validate_whole(self, team: Team) -> None:
        ensure_valid(validate_team(team))
        ensure_valid(validate_team_aggregate(team))

    # ---- операции ----

    def save(self, data: Mapping[str, Any]) -> Team:
        """
        Создать команду вместе со ссылками и коллекциями.

        Любой сбой пробрасывается как AggregateSaveError с исходной ошибкой
        внутри; её `kind` сохраняется.
        """
        try:
            with transaction(self.db):
                team = Team(**{f: data.get(f) for f in TEAM_SCALAR_FIELDS if data.get(f) is not None})

                for attribute in REFERENCE_PERSISTERS:
                    if data.get(attribute) is not None:
                        setattr(team, attribute, self._persist_reference(attribute, data[attribute]))

                for attribute in OWNED_COLLECTIONS:
                    if data.get(attribute):
                        setattr(team, attribute, self._resolve_collection(attribute, data[attribute]))

                self._validate_whole(team)
                self.teams.save(team)
        except BaseAppException as e:
            logger.warning(f"Team save failed ({e.kind.value}): {e}")
            raise AggregateSaveError(e) from e
        logger.info(f"Created team '{team.name}' (ID: {team.id})")
        return team

    def update(self, changes: Mapping[str, Any], team_id: int) -> Team:
        """
        Слить присланные поля `changes` в сохранённую команду.

        Скалярные поля проверяются до копирования, ссылки идут через свои
        crud-модули, коллекции разрешаются заново и заменяются целиком.
        Итоговая команда проверяется ещё раз перед записью; при любом сбое
        транзакция откатывается и строка в базе не меняется.
        """
        with transaction(self.db):
            team = self.teams.get(team_id, for_update=True)
            applied = apply_patch(team, changes, TEAM_RULES, fields=TEAM_SCALAR_FIELDS)

            for attribute in REFERENCE_PERSISTERS:
                if changes.get(attribute) is not None:
                    setattr(team, attribute, self._persist_reference(attribute, changes[attribute]))
                    applied.append(attribute)

            for attribute, store in self.owned_stores.items():
                if changes.get(attribute) is not None:
                    store.replace(team, self._resolve_collection(attribute, changes[attribute]))
                    applied.append(attribute)

            self._validate_whole(team)
            self.teams.save(team)
        logger.info(f"Updated team {team_id}: {', '.join(applied) or 'no fields'}")
        return team

    def delete(self, team_id: int) -> None:
        """
        Удалить команду и принадлежащие ей строки. Смена, рота и тип,
        на которые она ссылается, остаются.
        """
        with transaction(self.db):
            if not self.teams.exists(team_id):
                raise NotFoundError(EntityKind.TEAM.value, team_id)
            team = self.teams.get(team_id, for_update=True)
            for store in self.owned_stores.values():
                store.clear(team)
            self.teams.delete(team_id)
        logger.info(f"Deleted team {team_id} with its members, vehicles and resources")


def owned_store_map(db: Session) -> Dict[str, OwnedCollectionStore]:
    return {attribute: OwnedCollectionStore(db, attribute) for attribute in OWNED_COLLECTIONS}


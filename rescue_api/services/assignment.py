# rescue_api/services/assignment.py
from typing import Optional, Sequence
import logging

from sqlalchemy.orm import Session

from rescue_api.core.exceptions import ValidationError
from rescue_api.crud.base import EntityKind, OwnedCollectionStore, Repository
from rescue_api.database import transaction
from rescue_api.models.team import Team
from rescue_api.services.resolver import RelationshipResolver

logger = logging.getLogger("Rescue.Assignments")


class AssignmentService:
    """
    Изменение одной связи команды без пересылки всего агрегата.
    Остальные поля команды повторно не проверяются.
    """

    def __init__(
        self,
        db: Session,
        teams: Repository[Team],
        resolver: RelationshipResolver,
        members_store: OwnedCollectionStore,
    ):
        self.db = db
        self.teams = teams
        self.resolver = resolver
        self.members_store = members_store

    def _assign_reference(self, team_id: int, attribute: str, kind: EntityKind, related_id: int) -> Team:
        with transaction(self.db):
            team = self.teams.get(team_id, for_update=True)
            setattr(team, attribute, self.resolver.resolve(kind, related_id))
            self.teams.save(team)
        logger.info(f"Assigned {kind.value} {related_id} to team {team_id}")
        return team

    def assign_shift(self, team_id: int, shift_id: int) -> Team:
        return self._assign_reference(team_id, "shift", EntityKind.SHIFT, shift_id)

    def assign_company(self, team_id: int, company_id: int) -> Team:
        return self._assign_reference(team_id, "company", EntityKind.COMPANY, company_id)

    def assign_team_type(self, team_id: int, team_type_id: int) -> Team:
        return self._assign_reference(team_id, "team_type", EntityKind.TEAM_TYPE, team_type_id)

    def assign_members(self, team_id: int, member_ids: Optional[Sequence[int]]) -> Team:
        """
        Заменить состав команды ровно на `member_ids`.
        Пустой или отсутствующий список отклоняется до обращения к базе.
        """
        if not member_ids:
            raise ValidationError.single("member_ids", "list must not be empty")
        with transaction(self.db):
            team = self.teams.get(team_id, for_update=True)
            members = self.resolver.resolve_many(EntityKind.MEMBER, member_ids)
            self.members_store.replace(team, members)
            self.teams.save(team)
        logger.info(f"Assigned {len(members)} members to team {team_id}")
        return team

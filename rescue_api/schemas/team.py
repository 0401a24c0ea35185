#rescue_api/schemas/team.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from rescue_api.schemas.company import CompanyCreate, CompanyRead
from rescue_api.schemas.roster import EntityRef, MemberRead, ResourceRead, VehicleRead
from rescue_api.schemas.shift import ShiftCreate, ShiftRead
from rescue_api.schemas.team_type import TeamTypeCreate, TeamTypeRead

class TeamBase(BaseModel):
    """
    TeamBase — скалярные поля команды.
    """
    name: Optional[str] = Field(None, examples=["Alpha"], description="Название команды")
    member_count: Optional[int] = Field(None, examples=[5], description="Количество бойцов (0-99)")
    active: Optional[bool] = Field(None, description="Команда активна")
    leader: Optional[str] = Field(None, examples=["J. Smith"], description="Командир")

class TeamCreate(TeamBase):
    """
    TeamCreate — создание команды вместе со ссылками и коллекциями.
    Элементы коллекций перечитываются из базы по `id`.
    """
    shift: Optional[ShiftCreate] = None
    company: Optional[CompanyCreate] = None
    team_type: Optional[TeamTypeCreate] = None
    members: List[EntityRef] = Field(default_factory=list)
    vehicles: List[EntityRef] = Field(default_factory=list)
    resources: List[EntityRef] = Field(default_factory=list)

class TeamPatch(TeamBase):
    """
    TeamPatch — частичное обновление. Отсутствующее поле и явный null
    различимы (см. services.patching); присланная коллекция заменяет старую целиком.
    """
    shift: Optional[ShiftCreate] = None
    company: Optional[CompanyCreate] = None
    team_type: Optional[TeamTypeCreate] = None
    members: Optional[List[EntityRef]] = None
    vehicles: Optional[List[EntityRef]] = None
    resources: Optional[List[EntityRef]] = None

class TeamRead(BaseModel):
    """
    TeamRead — команда целиком для ответа API.
    """
    id: int
    name: str
    member_count: Optional[int] = None
    active: bool
    leader: Optional[str] = None
    shift: Optional[ShiftRead] = None
    company: Optional[CompanyRead] = None
    team_type: Optional[TeamTypeRead] = None
    members: List[MemberRead] = Field(default_factory=list)
    vehicles: List[VehicleRead] = Field(default_factory=list)
    resources: List[ResourceRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

#rescue_api/schemas/roster.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class EntityRef(BaseModel):
    """
    EntityRef — элемент коллекции команды. Значение имеет только `id`:
    запись всё равно перечитывается из базы, остальные поля игнорируются.
    """
    id: Optional[int] = None

    model_config = ConfigDict(extra="allow")

class MemberCreate(BaseModel):
    first_name: Optional[str] = Field(None, examples=["Juan"])
    paternal_surname: Optional[str] = Field(None, examples=["Pérez"])
    maternal_surname: Optional[str] = Field(None, examples=["Soto"])
    phone: Optional[int] = Field(None, examples=[912345678], description="До 9 цифр, уникальный")

class MemberRead(BaseModel):
    id: int
    first_name: str
    paternal_surname: str
    maternal_surname: str
    phone: int
    team_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

class VehicleCreate(BaseModel):
    brand: Optional[str] = Field(None, examples=["Mercedes-Benz"])
    model: Optional[str] = Field(None, examples=["Atego"])
    plate: Optional[str] = Field(None, examples=["AB1234"])
    driver: Optional[str] = Field(None, examples=["Pedro Rojas"])
    status: Optional[str] = Field(None, examples=["available"])

class VehicleRead(BaseModel):
    id: int
    brand: str
    model: str
    plate: str
    driver: str
    status: str
    team_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

class ResourceCreate(BaseModel):
    name: Optional[str] = Field(None, examples=["Hydraulic cutter"])
    resource_type: Optional[str] = Field(None, examples=["TOOL"])
    quantity: Optional[int] = Field(None, examples=[2])

class ResourceRead(BaseModel):
    id: int
    name: str
    resource_type: str
    quantity: int
    team_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

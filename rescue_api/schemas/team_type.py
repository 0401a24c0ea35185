#rescue_api/schemas/team_type.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class TeamTypeCreate(BaseModel):
    id: Optional[int] = Field(None, description="ID существующего типа (во вложенном виде)")
    name: Optional[str] = Field(None, examples=["Rescue"], description="Название типа команды")

class TeamTypeUpdate(BaseModel):
    name: Optional[str] = None

class TeamTypeRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)

#rescue_api/schemas/company.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class LocationIn(BaseModel):
    """
    LocationIn — адрес роты. С `id` ссылается на существующий адрес.
    """
    id: Optional[int] = None
    street: Optional[str] = Field(None, examples=["Av. Libertador"], description="Улица")
    house_number: Optional[int] = Field(None, examples=[1234], description="Номер дома")
    district: Optional[str] = Field(None, examples=["Santiago Centro"], description="Район")
    region: Optional[str] = Field(None, examples=["Región Metropolitana"], description="Регион")

class LocationRead(BaseModel):
    id: int
    street: str
    house_number: int
    district: str
    region: str

    model_config = ConfigDict(from_attributes=True)

class CompanyCreate(BaseModel):
    """
    CompanyCreate — создание роты вместе с адресом.
    """
    id: Optional[int] = Field(None, description="ID существующей роты (во вложенном виде)")
    name: Optional[str] = Field(None, examples=["Primera Compañía"], description="Уникальное имя роты")
    location: Optional[LocationIn] = None

class CompanyUpdate(BaseModel):
    """
    CompanyUpdate — частичное обновление роты.
    """
    name: Optional[str] = None
    location: Optional[LocationIn] = None

class CompanyRead(BaseModel):
    id: int
    name: str
    location: Optional[LocationRead] = None

    model_config = ConfigDict(from_attributes=True)

#rescue_api/schemas/shift.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class ShiftBase(BaseModel):
    """
    ShiftBase — поля смены, которые задаёт клиент.
    Длины и порядок дат проверяет слой валидации, а не схема.
    """
    name: Optional[str] = Field(None, examples=["Morning shift"], description="Название смены")
    start_at: Optional[datetime] = Field(None, examples=["2025-07-01T08:00:00"], description="Начало смены")
    end_at: Optional[datetime] = Field(None, examples=["2025-07-01T16:00:00"], description="Конец смены")

class ShiftCreate(ShiftBase):
    """
    ShiftCreate — создание смены. Во вложенном виде (внутри команды) `id`
    указывает на существующую смену. `duration_hours` принимается, но игнорируется.
    """
    id: Optional[int] = Field(None, description="ID существующей смены")
    duration_hours: Optional[int] = Field(None, description="Игнорируется: длительность считает сервер")

class ShiftUpdate(ShiftBase):
    """
    ShiftUpdate — частичное обновление (все поля опциональны).
    """
    duration_hours: Optional[int] = Field(None, description="Игнорируется: длительность считает сервер")

class ShiftRead(BaseModel):
    id: int
    name: str
    start_at: datetime
    end_at: datetime
    duration_hours: int

    model_config = ConfigDict(from_attributes=True)

#rescue_api/models/shift.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from rescue_api.models.base import Base

class Shift(Base):
    """
    Shift — смена. Длительность всегда считается сервером из start_at/end_at.
    """
    __tablename__ = "shifts"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(50), nullable=False, doc="Название смены")
    start_at: datetime = Column(DateTime, nullable=False, doc="Начало смены")
    end_at: datetime = Column(DateTime, nullable=False, doc="Конец смены")
    duration_hours: int = Column(Integer, nullable=False, doc="Длительность в часах (вычисляется)")

    def __repr__(self):
        return f"<Shift(id={self.id}, name='{self.name}', duration_hours={self.duration_hours})>"

#rescue_api/models/team_type.py
from sqlalchemy import Column, Integer, String
from rescue_api.models.base import Base

class TeamType(Base):
    """
    TeamType — классификация команды (спасательная, медицинская, ...).
    """
    __tablename__ = "team_types"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(50), nullable=False, doc="Название типа")

    def __repr__(self):
        return f"<TeamType(id={self.id}, name='{self.name}')>"

#rescue_api/models/team.py
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from rescue_api.models.base import Base

class Team(Base):
    """
    Team — корень агрегата. Владеет бойцами, машинами и ресурсами,
    ссылается на смену, роту и тип команды.
    """
    __tablename__ = "teams"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(50), nullable=False, doc="Название команды")
    member_count: int = Column(Integer, nullable=True, doc="Количество бойцов (0-99)")
    active: bool = Column(Boolean, default=True, nullable=False, doc="Команда активна")
    leader: str = Column(String(50), nullable=True, doc="Имя командира")
    shift_id: int = Column(Integer, ForeignKey("shifts.id"), nullable=True, index=True, doc="ID смены")
    company_id: int = Column(Integer, ForeignKey("companies.id"), nullable=True, index=True, doc="ID роты")
    team_type_id: int = Column(Integer, ForeignKey("team_types.id"), nullable=True, index=True, doc="ID типа")

    # Ссылки: независимый жизненный цикл
    shift = relationship("Shift")
    company = relationship("Company")
    team_type = relationship("TeamType")

    # Владение: строки удаляются OwnedCollectionStore
    members = relationship("Member", back_populates="team", order_by="Member.id")
    vehicles = relationship("Vehicle", back_populates="team", order_by="Vehicle.id")
    resources = relationship("Resource", back_populates="team", order_by="Resource.id")

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}', active={self.active})>"

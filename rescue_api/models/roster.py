#rescue_api/models/roster.py
"""
Записи, которыми владеет команда: бойцы, машины, ресурсы.

Каждая строка ссылается на команду через team_id. Удаление строки при
исключении из коллекции делает OwnedCollectionStore, а не каскад ORM.
"""
from sqlalchemy import Column, Integer, BigInteger, String, ForeignKey
from sqlalchemy.orm import relationship
from rescue_api.models.base import Base

class Member(Base):
    __tablename__ = "members"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    first_name: str = Column(String(50), nullable=False, doc="Имя")
    paternal_surname: str = Column(String(50), nullable=False, doc="Фамилия по отцу")
    maternal_surname: str = Column(String(50), nullable=False, doc="Фамилия по матери")
    phone: int = Column(BigInteger, nullable=False, unique=True, doc="Телефон (до 9 цифр)")
    team_id: int = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=True, index=True)

    team = relationship("Team", back_populates="members")

    def __repr__(self):
        return f"<Member(id={self.id}, first_name='{self.first_name}', team_id={self.team_id})>"

class Vehicle(Base):
    __tablename__ = "vehicles"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    brand: str = Column(String(50), nullable=False, doc="Марка")
    model: str = Column(String(50), nullable=False, doc="Модель")
    plate: str = Column(String(6), nullable=False, doc="Госномер")
    driver: str = Column(String(50), nullable=False, doc="Водитель")
    status: str = Column(String(50), nullable=False, doc="Состояние")
    team_id: int = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=True, index=True)

    team = relationship("Team", back_populates="vehicles")

    def __repr__(self):
        return f"<Vehicle(id={self.id}, plate='{self.plate}', team_id={self.team_id})>"

class Resource(Base):
    __tablename__ = "resources"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(100), nullable=False, doc="Название ресурса")
    resource_type: str = Column(String(50), nullable=False, doc="Категория")
    quantity: int = Column(Integer, nullable=False, default=0, doc="Количество (>= 0)")
    team_id: int = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=True, index=True)

    team = relationship("Team", back_populates="resources")

    def __repr__(self):
        return f"<Resource(id={self.id}, name='{self.name}', quantity={self.quantity})>"

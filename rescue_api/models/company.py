#rescue_api/models/company.py
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from rescue_api.models.base import Base

class Company(Base):
    """
    Company — пожарная рота. Уникальное имя и собственный Location (один к одному).
    """
    __tablename__ = "companies"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(50), nullable=False, unique=True, index=True, doc="Уникальное имя роты")
    location_id: int = Column(Integer, ForeignKey("locations.id"), nullable=True, unique=True, doc="ID адреса (один адрес на роту)")

    location = relationship("Location")

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}')>"

#rescue_api/models/location.py
from sqlalchemy import Column, Integer, String
from rescue_api.models.base import Base

class Location(Base):
    """
    Location — адрес компании (улица, номер, район, регион).
    """
    __tablename__ = "locations"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    street: str = Column(String(50), nullable=False, doc="Улица")
    house_number: int = Column(Integer, nullable=False, doc="Номер дома (до 5 цифр)")
    district: str = Column(String(50), nullable=False, doc="Район / коммуна")
    region: str = Column(String(50), nullable=False, doc="Регион")

    def __repr__(self):
        return f"<Location(id={self.id}, street='{self.street}', house_number={self.house_number})>"

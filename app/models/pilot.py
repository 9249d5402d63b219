from sqlalchemy import Boolean, Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.db.base import Base
import enum

class MotorcycleExperience(str, enum.Enum):
    PRINCIPIANTE = "principiante"
    RUTERO = "rutero"
    TANDERO_INICIADO = "tandero_iniciado"
    TANDERO_MEDIO = "tandero_medio"
    TANDERO_RAPIDO = "tandero_rapido"
    SEMI_PRO = "semi_pro"

class DrivingLevel(str, enum.Enum):
    AMATEUR = "amateur"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

class Pilot(Base):
    __tablename__ = "pilots"

    id = Column(String(36), primary_key=True, index=True)
    team_id = Column(String(36), ForeignKey("teams.id"), index=True, nullable=False)

    name = Column(String(100), nullable=False)
    surname = Column(String(150), nullable=False)
    dni = Column(String(20), nullable=False)
    email = Column(String(255))
    phone = Column(String(30))
    emergency_contact_name = Column(String(150))
    emergency_contact_phone = Column(String(30))

    motorcycle_experience = Column(String(20), nullable=False)
    driving_level = Column(String(20))
    track_experience = Column(Text)
    is_representative = Column(Boolean, default=False)
    pilot_number = Column(Integer)

    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))

    team = relationship("Team", back_populates="pilots")

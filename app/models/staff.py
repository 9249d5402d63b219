from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import Base
import enum

class StaffRole(str, enum.Enum):
    MECHANIC = "mechanic"
    COORDINATOR = "coordinator"
    SUPPORT = "support"

class TeamStaff(Base):
    """Equipe de apoio (mecânico, coordenador, suporte). Máximo de MAX_STAFF por equipe."""
    __tablename__ = "team_staff"

    id = Column(String(36), primary_key=True, index=True)
    team_id = Column(String(36), ForeignKey("teams.id"), index=True, nullable=False)
    name = Column(String(150), nullable=False)
    dni = Column(String(20), nullable=True)
    phone = Column(String(30), nullable=True)
    role = Column(String(20), nullable=False)

    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))

    team = relationship("Team", back_populates="staff")

from sqlalchemy import Boolean, Column, Integer, String, DateTime
from app.db.base import Base

class RegistrationSettings(Base):
    """Configuração global (linha única) que controla a abertura das inscrições."""
    __tablename__ = "registration_settings"

    id = Column(String(36), primary_key=True, index=True)
    registration_open = Column(Boolean, default=False)
    registration_deadline = Column(DateTime(timezone=True), nullable=True)
    pilot_modification_deadline = Column(DateTime(timezone=True), nullable=True)
    max_teams = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))

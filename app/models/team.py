from sqlalchemy import Boolean, Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from app.db.base import Base
import enum

class RegistrationStatus(str, enum.Enum):
    DRAFT = "draft"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

class PhotoStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class EngineCapacity(str, enum.Enum):
    CC125_4T = "125cc_4t"
    CC50_2T = "50cc_2t"

class Team(Base):
    """Equipe inscrita. Uma por usuário representante."""
    __tablename__ = "teams"

    id = Column(String(36), primary_key=True, index=True)
    representative_user_id = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(150), nullable=False)
    number_of_pilots = Column(Integer, nullable=False)

    # Representante
    representative_name = Column(String(100))
    representative_surname = Column(String(150))
    representative_dni = Column(String(20))
    representative_phone = Column(String(30))
    representative_email = Column(String(255))

    # Endereço
    address = Column(String(255))
    municipality = Column(String(100))
    postal_code = Column(String(10))
    province = Column(String(100))

    # Moto
    motorcycle_brand = Column(String(100))
    motorcycle_model = Column(String(100))
    engine_capacity = Column(String(10), default=EngineCapacity.CC125_4T.value)
    registration_date = Column(String(10))
    modifications = Column(Text)
    motorcycle_photo_url = Column(String(500))
    motorcycle_photo_status = Column(String(10), default=PhotoStatus.PENDING.value)

    # Meta
    comments = Column(Text)
    gdpr_consent = Column(Boolean, default=False)
    gdpr_consent_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(10), default=RegistrationStatus.DRAFT.value)
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))

    pilots = relationship("Pilot", back_populates="team")
    staff = relationship("TeamStaff", back_populates="team")

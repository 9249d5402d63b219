from typing import Optional
from pydantic import EmailStr

from app.schemas.base import PayloadModel

class TeamBase(PayloadModel):
    name: Optional[str] = None
    number_of_pilots: Optional[int] = None

    representative_name: Optional[str] = None
    representative_surname: Optional[str] = None
    representative_dni: Optional[str] = None
    representative_phone: Optional[str] = None
    representative_email: Optional[EmailStr] = None

    address: Optional[str] = None
    municipality: Optional[str] = None
    postal_code: Optional[str] = None
    province: Optional[str] = None

    motorcycle_brand: Optional[str] = None
    motorcycle_model: Optional[str] = None
    engine_capacity: Optional[str] = None
    registration_date: Optional[str] = None
    modifications: Optional[str] = None
    motorcycle_photo_url: Optional[str] = None

    comments: Optional[str] = None
    gdpr_consent: Optional[bool] = None

# Obrigatórios (name, number_of_pilots) são checados no service, depois das regras de inscrição
class TeamCreate(TeamBase):
    pass

# id, representative_user_id, created_at, status e motorcycle_photo_status não existem aqui:
# se vierem no corpo são descartados
class TeamUpdate(TeamBase):
    pass

class TeamReview(PayloadModel):
    """Campos que o admin pode alterar. Valores inválidos são descartados no service."""
    status: Optional[str] = None
    motorcycle_photo_status: Optional[str] = None

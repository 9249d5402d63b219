from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # --- GERAL ---
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Endurance Registration API"
    LOG_LEVEL: str = "INFO"

    # --- URLs ---
    FRONTEND_URL: str = "http://localhost:4321"

    # --- ARMAZENAMENTO ---
    # "sql" usa o SQLAlchemy, "firestore" usa o Firestore (subcoleções por equipe)
    STORE_BACKEND: str = "sql"
    SQLALCHEMY_DATABASE_URI: str = "sqlite:///./registrations.db"
    FIRESTORE_PROJECT_ID: Optional[str] = None

    # --- AUTENTICAÇÃO ---
    # Segredo do provedor de identidade (Supabase / Netlify Identity)
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None
    ADMIN_ROLE: str = "admin"
    ADMIN_EMAILS: List[str] = []

    # --- REGRAS DE INSCRIÇÃO ---
    MAX_STAFF: int = 4
    MIN_PILOTS: int = 4
    MAX_PILOTS: int = 8

    # Valores usados pelo init_db.py ao criar a linha de configuração
    DEFAULT_REGISTRATION_OPEN: bool = True
    DEFAULT_MAX_TEAMS: Optional[int] = None

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()

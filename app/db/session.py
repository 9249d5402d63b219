from functools import lru_cache

from google.cloud import firestore
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.core.config import settings

# Sessões ligadas ao engine sob demanda (o engine só é criado no primeiro uso)
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

@lru_cache
def get_engine():
    connect_args = {}
    if settings.SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        settings.SQLALCHEMY_DATABASE_URI,
        pool_pre_ping=True, # Verifica se a conexão está viva antes de usar
        echo=False,
        connect_args=connect_args,
    )

def new_session():
    return SessionLocal(bind=get_engine())

@lru_cache
def get_firestore_client() -> firestore.AsyncClient:
    # Sem FIRESTORE_PROJECT_ID usa as credenciais padrão (GOOGLE_APPLICATION_CREDENTIALS / ADC)
    return firestore.AsyncClient(project=settings.FIRESTORE_PROJECT_ID)

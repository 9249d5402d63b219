# init_db.py
from app.core.config import settings
from app.db.session import get_engine, new_session
from app.db.base import Base
from app.db.store import new_id, utcnow

# IMPORTANTE: Importar todos os modelos aqui para que o SQLAlchemy
# saiba que eles existem antes de criar as tabelas
from app.models.team import Team
from app.models.pilot import Pilot
from app.models.staff import TeamStaff
from app.models.registration_settings import RegistrationSettings


def init_db():
    print("Conectando ao banco de dados...")
    print("Criando tabelas...")

    Base.metadata.create_all(bind=get_engine())

    # Linha única de configuração das inscrições
    db = new_session()
    try:
        if not db.query(RegistrationSettings).first():
            now = utcnow()
            db.add(RegistrationSettings(
                id=new_id(),
                registration_open=settings.DEFAULT_REGISTRATION_OPEN,
                max_teams=settings.DEFAULT_MAX_TEAMS,
                created_at=now,
                updated_at=now,
            ))
            db.commit()
            print("Configuração de inscrições criada.")
    finally:
        db.close()

    print("Tabelas criadas com sucesso!")

if __name__ == "__main__":
    init_db()

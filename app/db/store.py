"""
Interface única de acesso aos dados.

Os services só enxergam coleções lógicas e registros (dicts). Se os filhos
de uma equipe estão em tabelas com chave estrangeira (SQL) ou em
subcoleções (Firestore) é detalhe do adaptador.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import uuid

import pytz

TEAMS = "teams"
PILOTS = "pilots"
STAFF = "staff"
REGISTRATION_SETTINGS = "registration_settings"

# Coleções filhas de uma equipe (chave "team_id")
CHILD_COLLECTIONS = (PILOTS, STAFF)

Record = Dict[str, Any]
Filters = Dict[str, Any]
Order = Tuple[str, bool]  # (campo, decrescente)


def utcnow() -> datetime:
    return datetime.now(pytz.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class RecordStore(ABC):

    @abstractmethod
    async def get(self, collection: str, filters: Filters) -> Optional[Record]:
        """Primeiro registro que casa com todos os filtros, ou None."""

    @abstractmethod
    async def list(self, collection: str, filters: Optional[Filters] = None, order: Optional[Order] = None) -> List[Record]:
        ...

    @abstractmethod
    async def insert(self, collection: str, record: Record) -> Record:
        """Grava o registro atribuindo id, created_at e updated_at. Retorna o registro salvo."""

    @abstractmethod
    async def update(self, collection: str, id: str, patch: Record) -> Optional[Record]:
        """Aplica o patch e retorna o registro atualizado (None se não existir)."""

    @abstractmethod
    async def delete(self, collection: str, id: str) -> bool:
        ...

    @abstractmethod
    async def count(self, collection: str, filters: Optional[Filters] = None) -> int:
        ...

    async def close(self) -> None:
        pass

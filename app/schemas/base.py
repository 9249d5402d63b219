from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class PayloadModel(BaseModel):
    """
    Aceita tanto snake_case (colunas) quanto camelCase (front antigo) e ignora campos extras.
    Os campos declarados em cada schema são a lista do que o cliente pode gravar:
    id, team_id e created_at nunca chegam ao store por aqui.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def patch(self) -> dict:
        """Somente os campos enviados pelo cliente."""
        return self.model_dump(exclude_unset=True)

class RegistrationError(Exception):
    """Erro de domínio com status HTTP associado. Renderizado como {"error": message}."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(RegistrationError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(RegistrationError):
    status_code = 403
    default_message = "Forbidden: admin access required"


class ValidationFailed(RegistrationError):
    """Entrada inválida ou regra de negócio violada (prazo, vagas, duplicidade)."""
    status_code = 400
    default_message = "Bad request"


class CapacityExceeded(ValidationFailed):
    default_message = "Maximum capacity reached"


class NotFound(RegistrationError):
    """Recurso inexistente OU pertencente a outra equipe (mesma resposta)."""
    status_code = 404
    default_message = "Not found"


class BackendFailure(RegistrationError):
    status_code = 500
    default_message = "Internal server error"
